"""
Logging utilities for weatherbar.
"""

import logging
import traceback
from collections.abc import Callable
from functools import wraps
from time import monotonic
from typing import Any
from typing import TypeVar

from typing_extensions import ParamSpec


T = TypeVar('T')
P = ParamSpec('P')

def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)

def log_execution(level: str = 'DEBUG') -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Decorator to log function execution with timing."""
    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            logger = logging.getLogger(func.__module__)
            log_level = getattr(logging, level)
            start = monotonic()
            logger.log(log_level, f"Calling {func.__qualname__}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.log(
                    log_level,
                    f"{func.__qualname__} failed after {monotonic() - start:.3f}s: {e!s}"
                )
                raise
            logger.log(log_level, f"{func.__qualname__} completed in {monotonic() - start:.3f}s")
            return result
        
        return wrapper
    return decorator

class EnhancedLoggerMixin:
    """Mixin class that provides contextual logging helpers."""
    
    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__module__)
        self._log_context: dict[str, Any] = {}
    
    @property
    def logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self._logger
    
    def set_log_context(self, **kwargs: Any) -> None:
        """Set context values for all subsequent log messages."""
        self._log_context.update(kwargs)
    
    def clear_log_context(self) -> None:
        """Clear all context values."""
        self._log_context.clear()
    
    def _format_message(self, msg: str, **kwargs: Any) -> str:
        context = {**self._log_context, **kwargs}
        if context:
            context_str = " | ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | Context: {context_str}"
        return msg
    
    def debug(self, msg: str, **kwargs: Any) -> None:
        self.logger.debug(self._format_message(msg, **kwargs))
    
    def info(self, msg: str, **kwargs: Any) -> None:
        self.logger.info(self._format_message(msg, **kwargs))
    
    def warning(self, msg: str, **kwargs: Any) -> None:
        self.logger.warning(self._format_message(msg, **kwargs))
    
    def error(self, msg: str, exc_info: Any = None, **kwargs: Any) -> None:
        """Log an error message with context and optional exception info."""
        if isinstance(exc_info, BaseException):
            kwargs['error'] = str(exc_info)
            kwargs['traceback'] = "".join(traceback.format_tb(exc_info.__traceback__))
            self.logger.error(self._format_message(msg, **kwargs))
        else:
            self.logger.error(self._format_message(msg, **kwargs), exc_info=bool(exc_info))
