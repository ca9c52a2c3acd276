"""Failures raised by the task API layer."""

from typing import Optional


class NetworkError(Exception):
    """A request that did not produce a successful response.

    ``status_code`` is None when the request never got an answer
    (connection refused, timeout, DNS failure).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


class NotFoundError(NetworkError):
    """The server answered 404."""


class ValidationError(NetworkError):
    """The server rejected the request body (400 or 422)."""


def error_for_status(
    status_code: int, message: str, url: Optional[str] = None
) -> NetworkError:
    """Pick the most specific error class for an HTTP status."""
    if status_code == 404:
        cls = NotFoundError
    elif status_code in (400, 422):
        cls = ValidationError
    else:
        cls = NetworkError
    return cls(message, status_code=status_code, url=url)
