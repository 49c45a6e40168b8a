"""Logging configuration utilities."""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any

from weatherbar.config.settings import WeatherBarSettings


LIBRARY_LEVELS = {
    'urllib3': logging.WARNING,
    'requests': logging.WARNING,
}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        """Initialize formatter.
        
        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.
        
        Args:
            record: Log record to format
            
        Returns:
            JSON formatted string
        """
        data: dict[str, Any] = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False)

class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]
        msg = record.getMessage()
        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"
        
        line = f"{timestamp} - {record.name} - {record.levelname} - {msg}"
        if not self.use_color:
            return line
        color = self.COLORS.get(record.levelname, self.RESET)
        return f"{color}{line}{self.RESET}"

def get_console_handler(formatter: logging.Formatter) -> logging.StreamHandler:
    """Create console handler on stderr.
    
    Stdout carries the status line, so log output never goes there.
    """
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    return console_handler

def get_file_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3
) -> logging.handlers.RotatingFileHandler:
    """Create rotating file handler.
    
    Args:
        log_file: Path to log file
        formatter: Formatter to use
        max_bytes: Maximum file size in bytes
        backup_count: Number of backup files to keep
        
    Returns:
        Configured file handler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    return file_handler

def setup_logging(
    settings: WeatherBarSettings | None = None,
    verbose: bool = False,
    log_file: str | None = None
) -> None:
    """Set up logging configuration.
    
    Args:
        settings: Resolved settings supplying the level and log file
        verbose: Force DEBUG level on the console
        log_file: Log file overriding the one from settings
    """
    settings = settings or WeatherBarSettings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    
    console_handler = get_console_handler(ColoredFormatter(use_color=sys.stderr.isatty()))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)
    
    log_file = log_file or settings.log_file
    if log_file:
        file_handler = get_file_handler(log_file, JsonFormatter(include_timestamp=True))
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    
    for name, library_level in LIBRARY_LEVELS.items():
        logging.getLogger(name).setLevel(max(library_level, level))
