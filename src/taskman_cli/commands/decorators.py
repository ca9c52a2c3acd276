"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer

from taskman_cli.api.errors import NetworkError, NotFoundError, ValidationError
from taskman_cli.ui.formatters import format_error
from taskman_cli.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NETWORK,
    ERROR_NOT_FOUND,
    get_exit_code_name,
)
from taskman_cli.utils.logger import get_logger


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _exit_code_for(error: NetworkError) -> int:
    if isinstance(error, NotFoundError):
        return ERROR_NOT_FOUND
    if isinstance(error, ValidationError):
        return ERROR_INVALID_ARGS
    return ERROR_NETWORK


def command_wrapper(func: Callable):
    """Run a (possibly async) command with logging and error-to-exit-code mapping."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()

        def fail(code: int, message: str) -> typer.Exit:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                cmd,
                elapsed,
                get_exit_code_name(code),
                message,
            )
            return typer.Exit(code=code)

        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except AppError as e:
            format_error(str(e))
            raise fail(e.exit_code, str(e)) from e

        except NetworkError as e:
            format_error(str(e))
            raise fail(_exit_code_for(e), str(e)) from e

        except typer.Exit:
            raise

        except Exception as e:
            format_error(f"An unexpected error occurred: {str(e)}")
            raise fail(ERROR_GENERAL, f"{e}\n{traceback.format_exc()}") from e

    return wrapper
