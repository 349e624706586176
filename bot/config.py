"""
Configuration management for the music bot.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet

from dotenv import load_dotenv

from utils.validation import ValidationUtils

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Config:
    """Bot configuration settings."""

    # Discord
    DISCORD_TOKEN: str

    # Command registration: True uploads to the application, False per guild
    REGISTER_COMMANDS_ON_BOT: bool = False

    # Presence
    BOT_STATUS: str = "online"
    BOT_ACTIVITY_TYPE: str = "LISTENING"
    BOT_ACTIVITY: str = "music"
    BOT_ACTIVITY_URL: str = ""

    # Users allowed to run voice commands without being in a voice channel
    VOICE_EXEMPT_USER_IDS: FrozenSet[int] = field(default_factory=frozenset)
    VOICE_EXEMPT_USER_IDS_RAW: str = ""

    # Legacy text command, e.g. "?play lofi beats"
    TEXT_COMMAND_PREFIX: str = "?"
    TEXT_COMMAND_TARGET: str = "play"

    # Keep-alive web server
    KEEP_ALIVE: bool = False
    PORT: int = 11186
    HOST: str = "0.0.0.0"

    # Debug
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        raw_ids = os.getenv("VOICE_EXEMPT_USER_IDS", "")
        parsed = ValidationUtils.parse_id_list(raw_ids)
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            REGISTER_COMMANDS_ON_BOT=_env_bool("REGISTER_COMMANDS_ON_BOT"),
            BOT_STATUS=os.getenv("BOT_STATUS", "online"),
            BOT_ACTIVITY_TYPE=os.getenv("BOT_ACTIVITY_TYPE", "LISTENING"),
            BOT_ACTIVITY=os.getenv("BOT_ACTIVITY", "music"),
            BOT_ACTIVITY_URL=os.getenv("BOT_ACTIVITY_URL", ""),
            VOICE_EXEMPT_USER_IDS=frozenset(parsed.value or []),
            VOICE_EXEMPT_USER_IDS_RAW=raw_ids,
            TEXT_COMMAND_PREFIX=os.getenv("TEXT_COMMAND_PREFIX", "?"),
            TEXT_COMMAND_TARGET=os.getenv("TEXT_COMMAND_TARGET", "play"),
            KEEP_ALIVE=_env_bool("KEEP_ALIVE"),
            PORT=int(os.getenv("PORT", "11186")),
            HOST=os.getenv("HOST", "0.0.0.0"),
            DEBUG=_env_bool("DEBUG"),
        )

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")

        for result in (
            ValidationUtils.validate_status(self.BOT_STATUS),
            ValidationUtils.validate_activity_type(self.BOT_ACTIVITY_TYPE),
            ValidationUtils.parse_id_list(self.VOICE_EXEMPT_USER_IDS_RAW),
        ):
            if not result:
                raise ValueError(result.error)

        if not self.TEXT_COMMAND_PREFIX or not self.TEXT_COMMAND_TARGET:
            raise ValueError("TEXT_COMMAND_PREFIX and TEXT_COMMAND_TARGET must not be empty")


# Global config instance
config = Config.from_env()
