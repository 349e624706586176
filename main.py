"""
Entry point for the music bot.
"""

import asyncio
import sys

from bot.client import run_bot
from bot.registration import RegistrationError
from commands import LoadError
from utils.logger import get_logger

logger = get_logger("Main")


def main():
    """Main entry point."""
    try:
        logger.info("Starting Muse Bot...")
        asyncio.run(run_bot())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
        sys.exit(0)
    except (LoadError, RegistrationError, ValueError) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
