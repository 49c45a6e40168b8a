"""Configuration package for weatherbar."""

from .settings import WeatherBarSettings
from .settings import load_settings

__all__ = ['WeatherBarSettings', 'load_settings']
