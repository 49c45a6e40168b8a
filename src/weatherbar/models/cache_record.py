"""Persisted cache record."""

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheRecord:
    """The single persisted entity.
    
    ``success_timestamp`` and ``error_timestamp`` are whole epoch seconds,
    with 0 meaning "never" and "no error" respectively. ``payload`` is the
    last successful upstream response and survives failed fetches.
    """
    payload: dict[str, Any] | None = None
    success_timestamp: int = 0
    error_timestamp: int = 0
    error_message: str = ""

    @classmethod
    def empty(cls) -> "CacheRecord":
        """Zero-value record used when nothing has been persisted yet."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return (
            self.payload is None
            and not self.success_timestamp
            and not self.error_timestamp
            and not self.error_message
        )

    @property
    def has_error(self) -> bool:
        return self.error_timestamp > 0

    def record_success(self, payload: dict[str, Any], now: int) -> None:
        """Store a fresh payload and clear any recorded failure."""
        self.payload = payload
        self.success_timestamp = now
        self.error_timestamp = 0
        self.error_message = ""

    def record_failure(self, message: str, now: int) -> None:
        """Record a failed fetch, leaving the last good payload in place."""
        self.error_timestamp = now
        self.error_message = message

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the on-disk key names."""
        return {
            'payload': self.payload,
            'successTimestamp': self.success_timestamp,
            'errorTimestamp': self.error_timestamp,
            'errorMessage': self.error_message,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CacheRecord":
        """Create a record from its serialized form.
        
        Absent keys and explicit nulls take their zero values.
        
        Raises:
            ValueError: If a field has the wrong type
        """
        payload = data.get('payload')
        if payload is not None and not isinstance(payload, dict):
            raise ValueError(f"payload must be an object, got {type(payload).__name__}")
        
        return cls(
            payload=payload,
            success_timestamp=_timestamp(data.get('successTimestamp'), 'successTimestamp'),
            error_timestamp=_timestamp(data.get('errorTimestamp'), 'errorTimestamp'),
            error_message=_message(data.get('errorMessage')),
        )


def _timestamp(value: Any, name: str) -> int:
    if value is None:
        return 0
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _message(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"errorMessage must be a string, got {value!r}")
    return value
