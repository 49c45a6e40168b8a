"""Tests for the logging helpers."""

import logging

import pytest

from weatherbar.utils.logging_utils import EnhancedLoggerMixin
from weatherbar.utils.logging_utils import log_execution


class Component(EnhancedLoggerMixin):
    def __init__(self):
        super().__init__()
        self.set_log_context(service="component")


def test_context_is_appended(caplog):
    component = Component()
    
    with caplog.at_level(logging.DEBUG, logger=__name__):
        component.info("Loaded", path="/tmp/x")
    
    assert caplog.messages == ["Loaded | Context: service=component | path=/tmp/x"]


def test_clear_context(caplog):
    component = Component()
    component.clear_log_context()
    
    with caplog.at_level(logging.DEBUG, logger=__name__):
        component.warning("Plain")
    
    assert caplog.messages == ["Plain"]


def test_error_with_exception(caplog):
    component = Component()
    try:
        raise ValueError("bad value")
    except ValueError as e:
        with caplog.at_level(logging.ERROR, logger=__name__):
            component.error("Failed", exc_info=e)
    
    assert "error=bad value" in caplog.messages[0]
    assert "traceback=" in caplog.messages[0]


def test_log_execution(caplog):
    @log_execution(level='INFO')
    def add(a, b):
        return a + b
    
    with caplog.at_level(logging.INFO, logger=__name__):
        assert add(1, 2) == 3
    
    assert caplog.messages[0].startswith("Calling ")
    assert "completed in" in caplog.messages[1]


def test_log_execution_reraises(caplog):
    @log_execution()
    def fail():
        raise RuntimeError("nope")
    
    with caplog.at_level(logging.DEBUG, logger=__name__):
        with pytest.raises(RuntimeError):
            fail()
    
    assert "failed after" in caplog.messages[-1]
