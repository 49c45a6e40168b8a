"""
Command line interface for weatherbar.
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any

from weatherbar.config.logging import setup_logging
from weatherbar.config.settings import WeatherBarSettings
from weatherbar.config.settings import load_settings
from weatherbar.exceptions import ConfigError
from weatherbar.exceptions import WeatherBarError
from weatherbar.services.cache_store import CacheStore
from weatherbar.services.reconciler import WeatherReconciler
from weatherbar.services.wttr_service import WttrService
from weatherbar.utils.cli_utils import ArgumentValidator
from weatherbar.utils.cli_utils import CLIBuilder
from weatherbar.utils.cli_utils import CLIContext
from weatherbar.utils.cli_utils import CLIOptionFactory
from weatherbar.utils.cli_utils import CommandRegistry
from weatherbar.utils.logging_utils import get_logger


def build_reconciler(settings: WeatherBarSettings) -> WeatherReconciler:
    """Wire the store, fetcher and reconciler for the given settings."""
    return WeatherReconciler(
        store=CacheStore(settings.cache_file),
        fetcher=WttrService(base_url=settings.base_url, language=settings.language),
        settings=settings
    )


@CommandRegistry.register(
    name='weather',
    aliases=['w'],
    help_text='Get current weather information by wttr.in',
    options=[
        CLIOptionFactory.create_location_option(),
        *CLIOptionFactory.create_ttl_options(),
        CLIOptionFactory.create_seconds_option(
            '--timeout',
            'Deadline for the whole upstream request (default: 5)'
        ),
        CLIOptionFactory.create_cache_file_option(),
        {
            'name': '--language',
            'help': 'wttr.in language code for the description (default: zh-cn)'
        }
    ]
)
def weather_command(ctx: CLIContext) -> int:
    """Print the cached or freshly fetched weather line."""
    try:
        message = build_reconciler(ctx.settings).run()
    except WeatherBarError as e:
        ctx.logger.debug(f"weather failed: {e}")
        print(e.message)
        return 1
    print(message)
    return 0


def _format_timestamp(value: int) -> str:
    if not value:
        return "never"
    return datetime.fromtimestamp(value).isoformat(sep=' ')


@CommandRegistry.register(
    name='cache',
    help_text='Show the cached record and whether the next run would fetch',
    options=[
        CLIOptionFactory.create_format_option(),
        *CLIOptionFactory.create_ttl_options(),
        CLIOptionFactory.create_cache_file_option()
    ]
)
def cache_command(ctx: CLIContext) -> int:
    """Show the cache file contents without fetching or writing."""
    try:
        record, decision = build_reconciler(ctx.settings).inspect()
    except WeatherBarError as e:
        ctx.logger.error(e.message)
        return 1
    
    if ctx.args.format == 'json':
        print(json.dumps({
            'path': str(ctx.settings.cache_file),
            'record': record.to_dict(),
            'decision': {'action': decision.action.value, 'reason': decision.reason}
        }, ensure_ascii=False, indent=2))
        return 0
    
    print(f"Cache file: {ctx.settings.cache_file}")
    print(f"Last success: {_format_timestamp(record.success_timestamp)}")
    print(f"Last error: {_format_timestamp(record.error_timestamp)}")
    if record.error_message:
        print(f"Error message: {record.error_message}")
    print(f"Payload cached: {'yes' if record.payload is not None else 'no'}")
    print(f"Next run: {decision.action.value} ({decision.reason})")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser from the registered commands."""
    builder = CLIBuilder(
        description='Cached current weather for terminal and desktop status bars'
    )
    for command in CommandRegistry.commands():
        builder.add_command(command)
    return builder.build()


def settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map parsed command line flags onto configuration keys."""
    overrides: dict[str, Any] = {
        'location': getattr(args, 'location', None),
        'success_ttl': getattr(args, 'success_ttl', None),
        'error_ttl': getattr(args, 'error_ttl', None),
        'timeout': getattr(args, 'timeout', None),
        'cache_file': getattr(args, 'cache_file', None),
        'language': getattr(args, 'language', None),
    }
    if args.log_file:
        overrides['logging'] = {'file': args.log_file}
    return overrides


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)
    logger = get_logger(__name__)
    
    if not args.command:
        parser.print_help()
        return 1
    
    command = CommandRegistry.get_command(args.command_name)
    if not command:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    
    errors = ArgumentValidator.validate_args(args, command)
    if errors:
        for error in errors:
            print(error, file=sys.stderr)
        return 1
    
    try:
        settings = load_settings(args.config, settings_overrides(args))
    except ConfigError as e:
        print(e.message, file=sys.stderr)
        return 1
    
    setup_logging(settings, verbose=args.verbose)
    
    ctx = CLIContext(
        args=args,
        logger=logger,
        settings=settings,
        parser=parser
    )
    return command.handler(ctx)
