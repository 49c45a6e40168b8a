from typing import Any

from weatherbar.models.current_condition import CurrentCondition


class WeatherFormatter:
    """Renders a cached payload as a one-line status string."""

    def __init__(self, language: str = "zh-cn"):
        self.language = language

    def format_current(self, payload: dict[str, Any] | None) -> str:
        """Format the current condition, e.g. ``"晴天 23°C"``.
        
        The description is omitted when the payload has none for the
        configured language.
        
        Raises:
            ParseError: If the payload lacks a usable current condition
        """
        current = CurrentCondition.from_payload(payload, self.language)
        message = f"{current.temp_c}°C"
        if current.description:
            message = f"{current.description} {message}"
        return message
