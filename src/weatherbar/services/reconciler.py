"""Orchestrates load, staleness check, fetch, merge, persist and render."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import replace
from enum import Enum
from typing import Any
from typing import Protocol

from weatherbar.config.settings import WeatherBarSettings
from weatherbar.exceptions import CachedFetchError
from weatherbar.exceptions import FetchError
from weatherbar.models.cache_record import CacheRecord
from weatherbar.services.cache_store import CacheStore
from weatherbar.services.staleness import FetchAction
from weatherbar.services.staleness import FetchDecision
from weatherbar.services.staleness import needs_fetch
from weatherbar.services.weather_formatter import WeatherFormatter
from weatherbar.utils.logging_utils import EnhancedLoggerMixin
from weatherbar.utils.logging_utils import log_execution


class Fetcher(Protocol):
    """Anything that can fetch an upstream payload for a location."""
    def fetch(self, location: str, timeout: float) -> dict[str, Any]:
        ...


class ReconcileState(Enum):
    """States of a single invocation."""
    START = "start"
    LOADED = "loaded"
    SERVING_CACHED_SUCCESS = "serving_cached_success"
    SERVING_CACHED_ERROR = "serving_cached_error"
    FETCHING = "fetching"
    MERGED_SUCCESS = "merged_success"
    MERGED_ERROR = "merged_error"
    PERSISTED = "persisted"
    RENDERED = "rendered"


_DECISION_STATES = {
    FetchAction.FETCH: ReconcileState.FETCHING,
    FetchAction.SERVE_CACHED_SUCCESS: ReconcileState.SERVING_CACHED_SUCCESS,
    FetchAction.SERVE_CACHED_ERROR: ReconcileState.SERVING_CACHED_ERROR,
}


@dataclass(frozen=True)
class Transition:
    """Tagged result of one state machine step."""
    state: ReconcileState
    record: CacheRecord
    now: int
    decision: FetchDecision | None = None
    error: FetchError | None = None
    output: str | None = None


class WeatherReconciler(EnhancedLoggerMixin):
    """Single-shot cache/fetch state machine.
    
    One ``run`` performs one load, at most one fetch and at most one save.
    Fetch failures are recorded in the cache and re-raised; storage
    failures are never caught.
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: Fetcher,
        settings: WeatherBarSettings,
        formatter: WeatherFormatter | None = None,
        clock: Callable[[], float] = time.time
    ):
        super().__init__()
        self.store = store
        self.fetcher = fetcher
        self.settings = settings
        self.formatter = formatter or WeatherFormatter(settings.language)
        self._clock = clock
        self.history: list[ReconcileState] = []
        self._handlers: dict[ReconcileState, Callable[[Transition], Transition]] = {
            ReconcileState.START: self._load,
            ReconcileState.LOADED: self._evaluate,
            ReconcileState.SERVING_CACHED_ERROR: self._replay_error,
            ReconcileState.SERVING_CACHED_SUCCESS: self._persist,
            ReconcileState.FETCHING: self._fetch,
            ReconcileState.MERGED_SUCCESS: self._persist,
            ReconcileState.MERGED_ERROR: self._persist,
            ReconcileState.PERSISTED: self._render,
        }
        self.set_log_context(service="reconciler", location=settings.location)

    @log_execution()
    def run(self) -> str:
        """Produce the status line for the configured location.
        
        Returns:
            str: Rendered weather, e.g. ``"晴天 23°C"``
            
        Raises:
            CachedFetchError: A recent failure is still cooling down
            FetchError: The fetch made by this run failed (already persisted)
            StorageError: The cache file could not be read or written
            ParseError: The cached payload cannot be rendered
        """
        transition = Transition(ReconcileState.START, CacheRecord.empty(), int(self._clock()))
        self.history = [transition.state]
        while transition.state is not ReconcileState.RENDERED:
            transition = self._handlers[transition.state](transition)
            self.history.append(transition.state)
        return transition.output or ""

    def inspect(self) -> tuple[CacheRecord, FetchDecision]:
        """Load the record and classify it without fetching or saving."""
        record = self.store.load()
        return record, self._decide(record, int(self._clock()))

    def _decide(self, record: CacheRecord, now: int) -> FetchDecision:
        return needs_fetch(
            record,
            now,
            self.settings.success_ttl_delta,
            self.settings.error_ttl_delta
        )

    def _load(self, transition: Transition) -> Transition:
        record = self.store.load()
        return replace(transition, state=ReconcileState.LOADED, record=record)

    def _evaluate(self, transition: Transition) -> Transition:
        decision = self._decide(transition.record, transition.now)
        self.debug("Evaluated cache", action=decision.action.value, reason=decision.reason)
        return replace(transition, state=_DECISION_STATES[decision.action], decision=decision)

    def _replay_error(self, transition: Transition) -> Transition:
        record = transition.record
        self.info("Replaying cached error", error_timestamp=record.error_timestamp)
        raise CachedFetchError(record.error_message, record.error_timestamp)

    def _fetch(self, transition: Transition) -> Transition:
        record = transition.record
        try:
            payload = self.fetcher.fetch(self.settings.location, self.settings.timeout)
        except FetchError as e:
            self.warning("Fetch failed", error=e.message, code=e.code.value)
            record.record_failure(e.message, transition.now)
            return replace(transition, state=ReconcileState.MERGED_ERROR, error=e)
        
        record.record_success(payload, transition.now)
        return replace(transition, state=ReconcileState.MERGED_SUCCESS)

    def _persist(self, transition: Transition) -> Transition:
        self.store.save(transition.record)
        return replace(transition, state=ReconcileState.PERSISTED)

    def _render(self, transition: Transition) -> Transition:
        if transition.error is not None:
            raise transition.error
        output = self.formatter.format_current(transition.record.payload)
        return replace(transition, state=ReconcileState.RENDERED, output=output)
