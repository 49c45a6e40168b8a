"""Decide whether the cached record can be served or must be refreshed."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from weatherbar.models.cache_record import CacheRecord


class FetchAction(Enum):
    """What the reconciler should do with the loaded record."""
    FETCH = "fetch"
    SERVE_CACHED_SUCCESS = "serve_cached_success"
    SERVE_CACHED_ERROR = "serve_cached_error"


@dataclass(frozen=True)
class FetchDecision:
    """Tagged result of a staleness evaluation."""
    action: FetchAction
    reason: str
    terminal_error: str | None = None

    @property
    def should_fetch(self) -> bool:
        return self.action is FetchAction.FETCH


def _seconds(ttl: timedelta | float) -> float:
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


def needs_fetch(
    record: CacheRecord,
    now: int,
    success_ttl: timedelta | float,
    error_ttl: timedelta | float
) -> FetchDecision:
    """Classify the record against the current time.
    
    The error regime is checked first: a recorded failure is replayed
    verbatim until ``error_ttl`` has elapsed, and only then is a new fetch
    attempted. Without a recorded failure the payload is reused until
    ``success_ttl`` has elapsed. A record that was never refreshed is
    always stale.
    
    Args:
        record: Loaded cache record
        now: Current time in epoch seconds
        success_ttl: How long a successful payload stays fresh
        error_ttl: How long a failure is replayed before retrying
        
    Returns:
        FetchDecision: The action to take
    """
    if record.has_error:
        age = now - record.error_timestamp
        if age > _seconds(error_ttl):
            return FetchDecision(FetchAction.FETCH, f"error cool-down expired {age}s ago")
        return FetchDecision(
            FetchAction.SERVE_CACHED_ERROR,
            f"error recorded {age}s ago is still cooling down",
            terminal_error=record.error_message
        )
    
    if not record.success_timestamp:
        return FetchDecision(FetchAction.FETCH, "no successful fetch recorded")
    
    age = now - record.success_timestamp
    if age > _seconds(success_ttl):
        return FetchDecision(FetchAction.FETCH, f"payload is {age}s old")
    return FetchDecision(FetchAction.SERVE_CACHED_SUCCESS, f"payload is {age}s old and still fresh")
