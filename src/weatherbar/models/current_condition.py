"""Typed view over the current condition block of a wttr.in j1 payload."""

from dataclasses import dataclass
from typing import Any

from weatherbar.exceptions import ParseError


@dataclass(frozen=True)
class CurrentCondition:
    """Current weather at the requested location."""
    temp_c: str
    description: str = ""

    @classmethod
    def from_payload(cls, payload: Any, language: str = "zh-cn") -> "CurrentCondition":
        """Extract the current condition from a wttr.in ``format=j1`` response.
        
        Args:
            payload: Decoded JSON response
            language: Language whose ``lang_<language>`` description to use
            
        Raises:
            ParseError: Unless the payload holds exactly one current
                condition with a non-empty ``temp_C``
        """
        if not isinstance(payload, dict):
            raise ParseError(f"Expected object payload, got {type(payload).__name__}")
        
        conditions = payload.get('current_condition')
        if not isinstance(conditions, list) or len(conditions) != 1:
            count = len(conditions) if isinstance(conditions, list) else 0
            raise ParseError(f"invalid current condition length: {count}")
        
        current = conditions[0]
        if not isinstance(current, dict):
            raise ParseError("current condition is not an object")
        
        temp_c = current.get('temp_C')
        if not isinstance(temp_c, str) or not temp_c.strip():
            raise ParseError("current temp_C is empty")
        
        return cls(
            temp_c=temp_c.strip(),
            description=_first_value(current.get(f'lang_{language}'))
        )


def _first_value(entries: Any) -> str:
    """First ``value`` of a wttr.in ``[{"value": ...}]`` list, or ""."""
    if not isinstance(entries, list) or not entries:
        return ""
    first = entries[0]
    if not isinstance(first, dict):
        return ""
    value = first.get('value')
    return value.strip() if isinstance(value, str) else ""
