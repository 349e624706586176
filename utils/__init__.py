"""
Utility modules for the music bot.
"""

from .logger import CustomLogger, LoggerMixin, get_logger, set_debug, setup_logging
from .discord import DiscordUtils
from .validation import ValidationUtils, ValidationResult
from .error_handler import ErrorHandler, get_error_handler, setup_error_handler

__all__ = [
    "CustomLogger",
    "LoggerMixin",
    "get_logger",
    "set_debug",
    "setup_logging",
    "DiscordUtils",
    "ValidationUtils",
    "ValidationResult",
    "ErrorHandler",
    "get_error_handler",
    "setup_error_handler",
]
