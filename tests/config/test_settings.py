"""Tests for settings loading."""

import tempfile
from datetime import timedelta
from pathlib import Path

import pytest

from weatherbar.config.settings import WeatherBarSettings
from weatherbar.config.settings import load_settings
from weatherbar.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "weatherbar.yaml"
    path.write_text(
        "location: Beijing\n"
        "success_ttl: 300\n"
        "error_ttl: 30\n"
        "logging:\n"
        "  level: info\n",
        encoding="utf-8"
    )
    return path


def test_defaults():
    settings = load_settings()
    
    assert settings == WeatherBarSettings()
    assert settings.location == "Shenzhen"
    assert settings.success_ttl_delta == timedelta(minutes=10)
    assert settings.error_ttl_delta == timedelta(seconds=15)
    assert settings.timeout == 5
    assert settings.cache_file == Path(tempfile.gettempdir()) / "weatherbar.json"
    assert settings.language == "zh-cn"
    assert settings.log_level == "WARNING"


def test_yaml_file(config_file):
    settings = load_settings(config_file)
    
    assert settings.location == "Beijing"
    assert settings.success_ttl == 300
    assert settings.error_ttl == 30
    assert settings.timeout == 5
    assert settings.log_level == "INFO"


def test_config_file_from_environment(monkeypatch, config_file):
    monkeypatch.setenv("WEATHERBAR_CONFIG", str(config_file))
    assert load_settings().location == "Beijing"


def test_environment_overrides_file(monkeypatch, config_file):
    monkeypatch.setenv("WEATHERBAR_LOCATION", "Hangzhou")
    monkeypatch.setenv("WEATHERBAR_ERROR_TTL", "45")
    monkeypatch.setenv("WEATHERBAR_LOG_FILE", "/tmp/weatherbar.log")
    
    settings = load_settings(config_file)
    
    assert settings.location == "Hangzhou"
    assert settings.error_ttl == 45
    assert settings.success_ttl == 300
    assert settings.log_level == "INFO"
    assert settings.log_file == "/tmp/weatherbar.log"


def test_overrides_win(monkeypatch, config_file, tmp_path):
    monkeypatch.setenv("WEATHERBAR_LOCATION", "Hangzhou")
    
    settings = load_settings(config_file, {
        "location": "Chengdu",
        "timeout": 2.5,
        "cache_file": str(tmp_path / "cache.json"),
        "error_ttl": None
    })
    
    assert settings.location == "Chengdu"
    assert settings.timeout == 2.5
    assert settings.cache_file == tmp_path / "cache.json"
    assert settings.error_ttl == 30


def test_empty_yaml_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == WeatherBarSettings()


@pytest.mark.parametrize("overrides", [
    {"location": "   "},
    {"success_ttl": 0},
    {"error_ttl": -1},
    {"timeout": "soon"},
    {"timeout": True},
    {"success_ttl": "nan"},
    {"success_ttl": float("inf")},
    {"success_ttl": 1e14},
    {"error_ttl": "nan"},
    {"error_ttl": "-inf"},
    {"timeout": float("nan")},
    {"logging": {"level": "LOUD"}},
    {"language": ""},
])
def test_invalid_values(overrides):
    with pytest.raises(ConfigError):
        load_settings(overrides=overrides)


@pytest.mark.parametrize("name,value", [
    ("WEATHERBAR_SUCCESS_TTL", "1e14"),
    ("WEATHERBAR_ERROR_TTL", "nan"),
    ("WEATHERBAR_TIMEOUT", "inf"),
])
def test_non_finite_or_huge_durations_from_env(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    
    with pytest.raises(ConfigError) as exc_info:
        load_settings()
    assert value in exc_info.value.message


def test_longest_duration_is_usable():
    settings = load_settings(overrides={"success_ttl": 365 * 24 * 60 * 60})
    assert settings.success_ttl_delta == timedelta(days=365)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError) as exc_info:
        load_settings(tmp_path / "nope.yaml")
    assert "not found" in exc_info.value.message


@pytest.mark.parametrize("content", ["location: [unclosed\n", "- just\n- a list\n"])
def test_invalid_config_file(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    
    with pytest.raises(ConfigError):
        load_settings(path)
