"""HTTP client for the Task Manager API."""

from typing import Any, Optional

import httpx

from taskman_cli.api.errors import NetworkError, error_for_status
from taskman_cli.config import get_config_manager
from taskman_cli.utils.logger import get_logger


class APIClient:
    """HTTP client for the Task Manager API.

    Every failure leaves this class as a NetworkError (or one of its
    subclasses). Requests are never retried.
    """

    def __init__(
        self,
        profile: str = "default",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config_manager = get_config_manager(profile)
        self.config = self.config_manager.config
        self.base_url = self.config_manager.endpoint
        self.timeout = self.config.api.timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "APIClient":
        """Enter the async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the async context manager and ensure the client is closed."""
        await self.close()

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers."""
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an HTTP request to the API."""
        logger = get_logger()
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        logger.debug("%s %s%s", method, self.base_url, url)
        try:
            response = await client.request(
                method=method,
                url=url,
                json=json,
                params=params,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise error_for_status(
                e.response.status_code,
                f"{method} {url} failed",
                url=f"{self.base_url}{url}",
            ) from e
        except httpx.RequestError as e:
            raise NetworkError(
                f"{method} {url} failed: {e.__class__.__name__}",
                url=f"{self.base_url}{url}",
            ) from e
        return response

    async def get(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json)

    async def put(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a PUT request."""
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", path)


def get_client(profile: str = "default") -> APIClient:
    """Get an API client instance."""
    return APIClient(profile)
