"""Tests for the staleness evaluator."""

from datetime import timedelta

import pytest

from weatherbar.models.cache_record import CacheRecord
from weatherbar.services.staleness import FetchAction
from weatherbar.services.staleness import needs_fetch
from tests.fakes import NOW
from tests.fakes import make_payload

SUCCESS_TTL = timedelta(minutes=10)
ERROR_TTL = timedelta(seconds=15)


def evaluate(record, now=NOW):
    return needs_fetch(record, now, SUCCESS_TTL, ERROR_TTL)


def test_empty_record_is_stale():
    decision = evaluate(CacheRecord.empty())
    assert decision.should_fetch
    assert decision.terminal_error is None


@pytest.mark.parametrize("age,action", [
    (0, FetchAction.SERVE_CACHED_SUCCESS),
    (599, FetchAction.SERVE_CACHED_SUCCESS),
    (600, FetchAction.SERVE_CACHED_SUCCESS),
    (601, FetchAction.FETCH),
])
def test_success_ttl(age, action):
    record = CacheRecord(payload=make_payload(), success_timestamp=NOW - age)
    assert evaluate(record).action is action


@pytest.mark.parametrize("age,action", [
    (1, FetchAction.SERVE_CACHED_ERROR),
    (15, FetchAction.SERVE_CACHED_ERROR),
    (16, FetchAction.FETCH),
])
def test_error_ttl(age, action):
    record = CacheRecord(error_timestamp=NOW - age, error_message="boom")
    assert evaluate(record).action is action


def test_cached_error_carries_message():
    record = CacheRecord(error_timestamp=NOW - 1, error_message="response status code invalid, code:500")
    
    decision = evaluate(record)
    
    assert not decision.should_fetch
    assert decision.terminal_error == "response status code invalid, code:500"


def test_error_checked_before_success():
    record = CacheRecord(
        payload=make_payload(),
        success_timestamp=NOW,
        error_timestamp=NOW - 1,
        error_message="boom"
    )
    assert evaluate(record).action is FetchAction.SERVE_CACHED_ERROR


def test_expired_error_ignores_fresh_payload():
    record = CacheRecord(
        payload=make_payload(),
        success_timestamp=NOW - 1,
        error_timestamp=NOW - 20,
        error_message="boom"
    )
    assert evaluate(record).should_fetch


def test_accepts_plain_seconds():
    record = CacheRecord(error_timestamp=NOW - 10, error_message="boom")
    assert needs_fetch(record, NOW, 600, 5).should_fetch
    assert not needs_fetch(record, NOW, 600, 15.0).should_fetch
