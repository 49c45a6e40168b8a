"""Tests for the status line formatter."""

import pytest

from weatherbar.exceptions import ParseError
from weatherbar.services.weather_formatter import WeatherFormatter
from tests.fakes import make_payload


def test_description_and_temperature():
    assert WeatherFormatter().format_current(make_payload("23", "晴天")) == "晴天 23°C"


def test_missing_description_shows_temperature_only():
    assert WeatherFormatter().format_current(make_payload("-3", "")) == "-3°C"


def test_uses_configured_language():
    payload = make_payload("12")
    payload["current_condition"][0]["lang_fr"] = [{"value": "Ensoleillé"}]
    
    assert WeatherFormatter("fr").format_current(payload) == "Ensoleillé 12°C"


def test_unknown_language_falls_back_to_temperature():
    assert WeatherFormatter("de").format_current(make_payload("7")) == "7°C"


@pytest.mark.parametrize("payload", [None, {}, make_payload(temp_c="  ")])
def test_unusable_payload(payload):
    with pytest.raises(ParseError):
        WeatherFormatter().format_current(payload)
