"""Centralized error definitions for weatherbar."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from weatherbar.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class WeatherBarError(Exception):
    """Base exception for all weatherbar errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class ConfigError(WeatherBarError):
    """Configuration error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, details)

class StorageError(WeatherBarError):
    """Base class for cache file errors. Never recovered from."""

class StorageReadError(StorageError):
    """Persisted state is unreadable or corrupt."""
    def __init__(self, message: str, path: str, details: dict[str, Any] | None = None):
        details = details or {}
        details["path"] = path
        super().__init__(message, ErrorCode.STORAGE_READ_ERROR, details)

class StorageWriteError(StorageError):
    """Persisted state could not be written."""
    def __init__(self, message: str, path: str):
        super().__init__(message, ErrorCode.STORAGE_WRITE_ERROR, {"path": path})

class FetchError(WeatherBarError):
    """Base class for upstream fetch failures.

    These are recoverable: the reconciler records them in the cache and
    replays them during the error cool-down window.
    """
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.REQUEST_FAILED,
        details: dict[str, Any] | None = None
    ):
        super().__init__(message, code, details)

class NetworkError(FetchError):
    """Connection level failure."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.REQUEST_FAILED, details)

class FetchTimeoutError(FetchError):
    """The fetch deadline elapsed before the response was complete."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.TIMEOUT, details)

class HTTPStatusError(FetchError):
    """Upstream answered with a non-success status code."""
    def __init__(self, message: str, status_code: int):
        super().__init__(message, ErrorCode.HTTP_STATUS, {"status_code": status_code})
        self.status_code = status_code

class ParseError(FetchError):
    """Upstream payload is malformed or semantically empty."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.INVALID_RESPONSE, details)

class CachedFetchError(WeatherBarError):
    """A stored fetch failure replayed during its cool-down window."""
    def __init__(self, message: str, error_timestamp: int):
        super().__init__(message, ErrorCode.CACHED_ERROR, {"error_timestamp": error_timestamp})
        self.error_timestamp = error_timestamp

@contextmanager
def handle_errors(
    error_type: type[WeatherBarError],
    service: str,
    operation: str
) -> Iterator[None]:
    """Log errors raised inside the block and re-raise them.
    
    Errors of any ``WeatherBarError`` type pass through unchanged. Anything
    else is logged with its traceback and wrapped in ``error_type``, which
    must accept a single message argument.
    
    Args:
        error_type: The error type to wrap unexpected exceptions in
        service: The service name
        operation: The operation name
    """
    try:
        yield
    except WeatherBarError as e:
        logger.debug(f"{service}.{operation} failed: {e}")
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        raise error_type(f"Unexpected error in {operation}: {e!s}") from e
