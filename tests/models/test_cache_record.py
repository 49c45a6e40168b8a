"""Tests for the persisted cache record."""

import pytest

from weatherbar.models.cache_record import CacheRecord
from tests.fakes import make_payload


def test_empty_record():
    record = CacheRecord.empty()
    assert record.is_empty
    assert not record.has_error
    assert record.to_dict() == {
        "payload": None,
        "successTimestamp": 0,
        "errorTimestamp": 0,
        "errorMessage": ""
    }


def test_record_success_clears_error():
    record = CacheRecord(error_timestamp=100, error_message="boom")
    
    record.record_success(make_payload(), 200)
    
    assert record.payload == make_payload()
    assert record.success_timestamp == 200
    assert record.error_timestamp == 0
    assert record.error_message == ""
    assert not record.has_error


def test_record_failure_keeps_payload():
    record = CacheRecord(payload=make_payload(), success_timestamp=100)
    
    record.record_failure("request timed out after 5s", 150)
    
    assert record.payload == make_payload()
    assert record.success_timestamp == 100
    assert record.error_timestamp == 150
    assert record.error_message == "request timed out after 5s"
    assert record.has_error


def test_from_dict_defaults_missing_keys():
    assert CacheRecord.from_dict({}) == CacheRecord.empty()


def test_from_dict_truncates_float_timestamps():
    assert CacheRecord.from_dict({"successTimestamp": 12.9}).success_timestamp == 12


@pytest.mark.parametrize("data", [
    {"payload": "text"},
    {"successTimestamp": True},
    {"errorTimestamp": "12"},
    {"errorMessage": ["boom"]},
])
def test_from_dict_rejects_wrong_types(data):
    with pytest.raises(ValueError):
        CacheRecord.from_dict(data)
