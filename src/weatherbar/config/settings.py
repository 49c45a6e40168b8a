"""Configuration settings for weatherbar."""

import tempfile
from dataclasses import dataclass
from dataclasses import field
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from weatherbar.config.env import EnvConfig
from weatherbar.config.utils import deep_merge
from weatherbar.config.utils import parse_seconds
from weatherbar.config.utils import resolve_path
from weatherbar.exceptions import ConfigError
from weatherbar.exceptions import handle_errors


CACHE_FILENAME = "weatherbar.json"

DEFAULTS: dict[str, Any] = {
    'location': 'Shenzhen',
    'success_ttl': 600,
    'error_ttl': 15,
    'timeout': 5,
    'cache_file': None,
    'language': 'zh-cn',
    'base_url': 'https://wttr.in',
    'logging': {
        'level': 'WARNING',
        'file': None,
    },
}

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def default_cache_file() -> Path:
    """Fixed cache location inside the system temp directory."""
    return Path(tempfile.gettempdir()) / CACHE_FILENAME


@dataclass(frozen=True)
class WeatherBarSettings:
    """Resolved settings for a single invocation."""
    location: str = DEFAULTS['location']
    success_ttl: float = DEFAULTS['success_ttl']
    error_ttl: float = DEFAULTS['error_ttl']
    timeout: float = DEFAULTS['timeout']
    cache_file: Path = field(default_factory=default_cache_file)
    language: str = DEFAULTS['language']
    base_url: str = DEFAULTS['base_url']
    log_level: str = DEFAULTS['logging']['level']
    log_file: str | None = None

    @property
    def success_ttl_delta(self) -> timedelta:
        return timedelta(seconds=self.success_ttl)

    @property
    def error_ttl_delta(self) -> timedelta:
        return timedelta(seconds=self.error_ttl)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WeatherBarSettings":
        """Build settings from a merged configuration dictionary.
        
        Raises:
            ConfigError: If a value is missing or invalid
        """
        location = str(data.get('location') or '').strip()
        if not location:
            raise ConfigError("Location must not be empty")
        
        try:
            success_ttl = parse_seconds(data.get('success_ttl'), 'success_ttl')
            error_ttl = parse_seconds(data.get('error_ttl'), 'error_ttl')
            timeout = parse_seconds(data.get('timeout'), 'timeout')
        except ValueError as e:
            raise ConfigError(str(e)) from e
        
        logging_config = data.get('logging') or {}
        if not isinstance(logging_config, dict):
            raise ConfigError("logging section must be a mapping")
        log_level = str(logging_config.get('level') or 'WARNING').upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {log_level}", {"allowed": list(LOG_LEVELS)})
        
        cache_file = data.get('cache_file')
        language = str(data.get('language') or '').strip()
        if not language:
            raise ConfigError("Language must not be empty")
        
        return cls(
            location=location,
            success_ttl=success_ttl,
            error_ttl=error_ttl,
            timeout=timeout,
            cache_file=resolve_path(cache_file) if cache_file else default_cache_file(),
            language=language,
            base_url=str(data.get('base_url') or DEFAULTS['base_url']).rstrip('/'),
            log_level=log_level,
            log_file=logging_config.get('file') or None,
        )


def _load_config_file(config_file: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = resolve_path(config_file)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    
    try:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return loaded


def load_settings(
    config_file: str | Path | None = None,
    overrides: dict[str, Any] | None = None
) -> WeatherBarSettings:
    """Load settings from defaults, YAML file, environment and overrides.
    
    Later sources win: defaults, then the YAML file (``config_file`` or
    ``WEATHERBAR_CONFIG``), then ``WEATHERBAR_*`` environment variables,
    then ``overrides`` (usually command line flags). ``None`` values in
    ``overrides`` are ignored.
    
    Raises:
        ConfigError: If any source holds an invalid value
    """
    with handle_errors(ConfigError, "settings", "load settings"):
        config: dict[str, Any] = deep_merge(DEFAULTS, {})
        
        config_file = config_file or EnvConfig.get_config_file()
        if config_file:
            config = deep_merge(config, _load_config_file(config_file))
        
        EnvConfig.update_config_from_env(config)
        
        if overrides:
            explicit = {k: v for k, v in overrides.items() if v is not None}
            config = deep_merge(config, explicit)
        
        return WeatherBarSettings.from_dict(config)
