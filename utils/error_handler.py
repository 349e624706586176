"""
Error Handler
Process-wide fault recording for routed events
"""

import asyncio
import traceback
from typing import Any, Dict, Optional

from utils.logger import get_logger


class ErrorHandler:
    """Records faults raised while handling events so they never go unnoticed."""

    def __init__(self):
        self.logger = get_logger("ErrorHandler")
        self.error_counts: Dict[str, int] = {}

    def initialize(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        """Install the loop exception handler."""
        if loop is None:
            loop = asyncio.get_running_loop()

        loop.set_exception_handler(self._async_exception_handler)
        self.logger.info("Error handlers initialized")

    def _async_exception_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        """Handle exceptions from tasks nobody awaited."""
        exception = context.get("exception")
        if exception:
            self.handle_exception(exception, "loop")
        else:
            message = context.get("message", "Unknown async error")
            self.logger.error(f"Async error: {message}")

    def handle_exception(self, error: BaseException, context: str = "") -> int:
        """
        Record an exception.

        Args:
            error: The exception that occurred
            context: Where it happened (e.g. "/play", "button:queue-clear")

        Returns:
            How many times this context/exception pair has been seen
        """
        error_key = f"{context}:{type(error).__name__}"

        if context:
            self.logger.error(f"[{context}] {type(error).__name__}: {error}")
        else:
            self.logger.error(f"{type(error).__name__}: {error}")

        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        self.logger.debug(f"Traceback:\n{tb}")

        count = self.error_counts.get(error_key, 0) + 1
        self.error_counts[error_key] = count
        return count

    def fault_count(self) -> int:
        """Total faults recorded since startup."""
        return sum(self.error_counts.values())


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler()
    return _error_handler


def setup_error_handler(loop: Optional[asyncio.AbstractEventLoop] = None) -> ErrorHandler:
    """Set up the global error handler."""
    handler = get_error_handler()
    handler.initialize(loop)
    return handler
