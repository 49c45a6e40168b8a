"""Configuration utility functions."""

import math
from copy import deepcopy
from pathlib import Path
from typing import Any
from typing import TypeVar


T = TypeVar('T', bound=dict[str, Any])

# One year, well inside the range of datetime.timedelta
MAX_SECONDS: float = 365 * 24 * 60 * 60.0

def deep_merge(base: T, override: T) -> T:
    """Deep merge two dictionaries.
    
    Args:
        base: Base dictionary
        override: Dictionary to override base values
        
    Returns:
        Merged dictionary
    """
    result = deepcopy(base)
    
    for key, value in override.items():
        if (
            key in result and
            isinstance(result[key], dict) and
            isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)
    
    return result

def resolve_path(path: str | Path, base_dir: str | Path | None = None) -> Path:
    """Expand ``~`` and resolve ``path`` relative to ``base_dir``."""
    path = Path(path).expanduser()
    if not path.is_absolute() and base_dir is not None:
        path = Path(base_dir) / path
    return path

def parse_seconds(value: Any, name: str) -> float:
    """Parse a positive number of seconds.
    
    Raises:
        ValueError: If value is not a finite positive number of at most
            ``MAX_SECONDS``
    """
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number of seconds, got {value!r}")
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from None
    if not math.isfinite(seconds):
        raise ValueError(f"{name} must be a finite number of seconds, got {value!r}")
    if seconds <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    if seconds > MAX_SECONDS:
        raise ValueError(f"{name} must be at most {MAX_SECONDS:g} seconds, got {value!r}")
    return seconds
