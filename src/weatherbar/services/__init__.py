"""Service implementations."""

from .cache_store import CacheStore
from .reconciler import WeatherReconciler
from .staleness import needs_fetch
from .weather_formatter import WeatherFormatter
from .wttr_service import WttrService


__all__ = [
    'CacheStore',
    'WeatherFormatter',
    'WeatherReconciler',
    'WttrService',
    'needs_fetch',
]
