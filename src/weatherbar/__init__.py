"""
Cached current-weather line for terminal and desktop status bars.
"""

__version__ = '0.1.0'

from .exceptions import (
    CachedFetchError,
    ConfigError,
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
    NetworkError,
    ParseError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    WeatherBarError,
)

__all__ = [
    'CachedFetchError',
    'ConfigError',
    'FetchError',
    'FetchTimeoutError',
    'HTTPStatusError',
    'NetworkError',
    'ParseError',
    'StorageError',
    'StorageReadError',
    'StorageWriteError',
    'WeatherBarError',
]
