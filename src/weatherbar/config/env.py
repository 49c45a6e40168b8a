"""Environment variable handling for configuration."""

import os
from typing import Any


class EnvConfig:
    """Environment variable configuration."""

    # Mapping of environment variables to configuration paths
    ENV_MAPPING = {
        'WEATHERBAR_LOCATION': ('location',),
        'WEATHERBAR_SUCCESS_TTL': ('success_ttl',),
        'WEATHERBAR_ERROR_TTL': ('error_ttl',),
        'WEATHERBAR_TIMEOUT': ('timeout',),
        'WEATHERBAR_CACHE_FILE': ('cache_file',),
        'WEATHERBAR_LANGUAGE': ('language',),
        'WEATHERBAR_BASE_URL': ('base_url',),
        'WEATHERBAR_LOG_LEVEL': ('logging', 'level'),
        'WEATHERBAR_LOG_FILE': ('logging', 'file'),
    }

    CONFIG_FILE_VAR = 'WEATHERBAR_CONFIG'

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @staticmethod
    def _set_nested_value(config: dict[str, Any], path: tuple, value: Any) -> None:
        """Set value in nested dictionary using path tuple."""
        current = config
        for part in path[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]
        current[path[-1]] = value

    @classmethod
    def update_config_from_env(cls, config: dict[str, Any]) -> None:
        """Update configuration dictionary with environment variables.
        
        Args:
            config: Configuration dictionary to update
        """
        for env_var, path in cls.ENV_MAPPING.items():
            value = cls.get_env_value(env_var)
            if value is not None and value != '':
                cls._set_nested_value(config, path, value)

    @classmethod
    def get_config_file(cls) -> str | None:
        """Get the YAML configuration file named by the environment."""
        return cls.get_env_value(cls.CONFIG_FILE_VAR) or None
