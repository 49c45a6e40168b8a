"""Test doubles and sample data shared across the test suite."""

from typing import Any

NOW = 1_700_000_000


def make_payload(temp_c: str = "23", description: str = "晴天") -> dict[str, Any]:
    """Minimal wttr.in format=j1 response."""
    return {
        "current_condition": [
            {
                "FeelsLikeC": "25",
                "humidity": "60",
                "temp_C": temp_c,
                "lang_zh-cn": [{"value": description}],
                "weatherDesc": [{"value": "Sunny"}]
            }
        ],
        "nearest_area": [{"areaName": [{"value": "Shenzhen"}]}]
    }


class FakeFetcher:
    """Fetcher double that counts calls and returns or raises a preset outcome."""

    def __init__(self, payload: dict[str, Any] | None = None, error: Exception | None = None):
        self.payload = payload if payload is not None else make_payload()
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def fetch(self, location: str, timeout: float) -> dict[str, Any]:
        self.calls.append((location, timeout))
        if self.error is not None:
            raise self.error
        return self.payload
