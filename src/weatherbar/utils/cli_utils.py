"""
Utility functions and decorators for CLI argument handling.
"""

import argparse
import logging
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import field
from typing import Any

from weatherbar.config.settings import WeatherBarSettings
from weatherbar.config.utils import parse_seconds


@dataclass
class CLIContext:
    """Context object for CLI command execution."""
    args: argparse.Namespace
    logger: logging.Logger
    settings: WeatherBarSettings
    parser: argparse.ArgumentParser

@dataclass
class CommandMetadata:
    """Metadata for command registration."""
    name: str
    help_text: str
    handler: Callable[[CLIContext], int]
    options: list[dict[str, Any]]
    aliases: list[str] = field(default_factory=list)

def _is_positive_seconds(value: Any) -> bool:
    try:
        parse_seconds(value, 'value')
    except ValueError:
        return False
    return True

class CLIOptionFactory:
    """Factory for creating common CLI options with consistent validation."""
    
    @staticmethod
    def create_format_option() -> dict[str, Any]:
        return {
            'name': '--format',
            'choices': ['text', 'json'],
            'default': 'json',
            'help': 'Output format: machine-readable JSON or human-readable text (default: json)'
        }
    
    @staticmethod
    def create_location_option() -> dict[str, Any]:
        return {
            'name': '--location',
            'short': '-l',
            'help': 'Target city or address name, see https://github.com/chubin/wttr.in (default: Shenzhen)',
            'validator': lambda x: bool(x.strip())
        }
    
    @staticmethod
    def create_seconds_option(name: str, help_text: str) -> dict[str, Any]:
        return {
            'name': name,
            'type': float,
            'metavar': 'SECONDS',
            'help': help_text,
            'validator': _is_positive_seconds
        }
    
    @staticmethod
    def create_ttl_options() -> list[dict[str, Any]]:
        return [
            CLIOptionFactory.create_seconds_option(
                '--success-ttl',
                'How long a fetched result is reused (default: 600)'
            ),
            CLIOptionFactory.create_seconds_option(
                '--error-ttl',
                'How long a failed fetch is replayed before retrying (default: 15)'
            ),
        ]
    
    @staticmethod
    def create_cache_file_option() -> dict[str, Any]:
        return {
            'name': '--cache-file',
            'metavar': 'PATH',
            'help': 'Cache file location (default: weatherbar.json in the temp directory)'
        }

class CommandRegistry:
    """Registry for CLI commands with metadata."""
    
    _commands: dict[str, CommandMetadata] = {}
    
    @classmethod
    def register(cls,
                name: str,
                help_text: str,
                options: list[dict[str, Any]] | None = None,
                aliases: list[str] | None = None) -> Callable[[Callable[[CLIContext], int]], Callable[[CLIContext], int]]:
        """Register a command handler."""
        def decorator(handler: Callable[[CLIContext], int]) -> Callable[[CLIContext], int]:
            cls._commands[name] = CommandMetadata(
                name=name,
                help_text=help_text,
                handler=handler,
                options=options or [],
                aliases=aliases or []
            )
            return handler
        return decorator
    
    @classmethod
    def get_command(cls, name: str) -> CommandMetadata | None:
        """Get command metadata by name or alias."""
        if name in cls._commands:
            return cls._commands[name]
        for command in cls._commands.values():
            if name in command.aliases:
                return command
        return None
    
    @classmethod
    def commands(cls) -> list[CommandMetadata]:
        return list(cls._commands.values())

class ArgumentValidator:
    """Validator for CLI arguments."""
    
    @staticmethod
    def validate_option(option: dict[str, Any], value: Any) -> bool:
        """Validate a single option value."""
        if 'validator' not in option:
            return True
            
        try:
            result = option['validator'](value)
            return bool(result)
        except (TypeError, ValueError, AttributeError):
            return False
    
    @staticmethod
    def validate_args(args: argparse.Namespace, command: CommandMetadata) -> list[str]:
        """Validate all arguments for a command."""
        errors = []
        
        for option in command.options:
            value = getattr(args, option['name'].lstrip('-').replace('-', '_'), None)
            if value is not None and not ArgumentValidator.validate_option(option, value):
                errors.append(f"Invalid value for {option['name']}: {value}")
        
        return errors

def add_common_options(parser: argparse.ArgumentParser) -> None:
    """Add common global options to a parser."""
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging output on stderr'
    )
    parser.add_argument(
        '--log-file',
        help='Path to write log output'
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='YAML configuration file (default: $WEATHERBAR_CONFIG)'
    )

class CLIBuilder:
    """Builder for constructing CLI parsers with consistent formatting."""
    
    # Custom option fields that should not be passed to argparse
    _CUSTOM_FIELDS = {'validator', 'short'}
    
    def __init__(self, description: str):
        """Initialize CLI builder."""
        self.parser = argparse.ArgumentParser(prog='weatherbar', description=description)
        self.subparsers = self.parser.add_subparsers(dest='command')
        add_common_options(self.parser)
    
    def add_command(self, command: CommandMetadata) -> None:
        """Add a command to the parser."""
        parser = self.subparsers.add_parser(
            command.name,
            aliases=command.aliases,
            help=command.help_text
        )
        
        for option in command.options:
            if 'name' not in option:
                continue
            
            flags = [option['short'], option['name']] if 'short' in option else [option['name']]
            option_dict = {k: v for k, v in option.items() if k not in self._CUSTOM_FIELDS | {'name'}}
            parser.add_argument(*flags, **option_dict)
        
        parser.set_defaults(func=command.handler, command_name=command.name)
    
    def build(self) -> argparse.ArgumentParser:
        """Build and return the parser."""
        return self.parser
