"""
Logging utilities for the music bot.
Uses Rich for colored console output.
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom theme for logging
CUSTOM_THEME = Theme({
    "logging.level.success": "green",
    "logging.level.debug": "dim cyan",
})

console = Console(theme=CUSTOM_THEME)

_default_level = logging.INFO
_loggers: Dict[str, logging.Logger] = {}


def setup_logging(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Set up a logger with RichHandler.

    Args:
        name: Logger name
        level: Logging level (default: INFO, or DEBUG after set_debug(True))

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if level is None:
        level = _default_level

    logger.setLevel(level)
    logger.propagate = False

    # Remove existing handlers
    logger.handlers = []

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt="[%(name)s] %(message)s", datefmt="%H:%M:%S"))

    logger.addHandler(handler)
    _loggers[name] = logger

    return logger


def set_debug(enabled: bool) -> None:
    """Switch every project logger between DEBUG and INFO."""
    global _default_level
    _default_level = logging.DEBUG if enabled else logging.INFO
    for logger in _loggers.values():
        logger.setLevel(_default_level)
        for handler in logger.handlers:
            handler.setLevel(_default_level)


class CustomLogger(logging.LoggerAdapter):
    """Logger adapter adding a success() level helper."""

    def success(self, message: str, *args, **kwargs) -> None:
        """Log success message (info level, tagged)."""
        self.info(f"✔ {message}", *args, **kwargs)


class LoggerMixin:
    """Mixin class that provides logger functionality."""

    def __init__(self, name: str):
        self._logger = get_logger(name)

    @property
    def logger(self) -> CustomLogger:
        """Get the logger instance."""
        return self._logger

    def debug(self, message: str) -> None:
        self._logger.debug(message)

    def info(self, message: str) -> None:
        self._logger.info(message)

    def warning(self, message: str) -> None:
        self._logger.warning(message)

    def error(self, message: str) -> None:
        self._logger.error(message)


def get_logger(name: str) -> CustomLogger:
    """Get a logger instance."""
    return CustomLogger(setup_logging(name), {})
