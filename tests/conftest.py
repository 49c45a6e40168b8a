"""Pytest configuration and shared fixtures."""

import logging

import pytest

from weatherbar.config.env import EnvConfig
from weatherbar.config.logging import ColoredFormatter
from weatherbar.config.logging import JsonFormatter
from weatherbar.config.settings import WeatherBarSettings
from weatherbar.services.cache_store import CacheStore
from tests.fakes import make_payload


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's WEATHERBAR_* variables out of the tests."""
    for env_var in EnvConfig.ENV_MAPPING:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv(EnvConfig.CONFIG_FILE_VAR, raising=False)
    yield


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (ColoredFormatter, JsonFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def cache_path(tmp_path):
    """Cache file location inside a per-test directory."""
    return tmp_path / "weatherbar.json"


@pytest.fixture
def store(cache_path):
    return CacheStore(cache_path)


@pytest.fixture
def settings(cache_path):
    return WeatherBarSettings(
        location="Shenzhen",
        success_ttl=600,
        error_ttl=15,
        timeout=5,
        cache_file=cache_path
    )


@pytest.fixture
def payload():
    return make_payload()
