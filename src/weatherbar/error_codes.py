"""Error codes for the weatherbar application."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Configuration Errors
    CONFIG_INVALID = "config_invalid"

    # Storage Errors
    STORAGE_READ_ERROR = "storage_read_error"
    STORAGE_WRITE_ERROR = "storage_write_error"

    # Fetch Errors
    REQUEST_FAILED = "request_failed"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    INVALID_RESPONSE = "invalid_response"

    # Cache Errors
    CACHED_ERROR = "cached_error"
