"""
Discord Utilities
Helper functions for Discord interactions
"""

from typing import Any, Optional

# Invite permissions: connect, speak, use voice activity, send messages, etc.
INVITE_PERMISSIONS = 36700160


class DiscordUtils:
    """Utility class for Discord-related helper functions."""

    @staticmethod
    def error_msg(text: Optional[str] = None) -> str:
        """
        Format a user-facing error message.

        Args:
            text: What went wrong (default: generic)

        Returns:
            Formatted message
        """
        return f"🚫 ope: {text or 'something went wrong'}"

    @staticmethod
    def find_member_voice_channel(guild: Any, user_id: int) -> Optional[Any]:
        """
        Find the voice channel in a guild that a user is currently in.

        Args:
            guild: Discord guild
            user_id: User snowflake

        Returns:
            The voice channel or None
        """
        if guild is None:
            return None
        for channel in getattr(guild, "voice_channels", []):
            if any(member.id == user_id for member in channel.members):
                return channel
        return None

    @staticmethod
    def is_user_in_voice(guild: Any, user_id: int) -> bool:
        """Check whether a user is in any voice channel of the guild."""
        return DiscordUtils.find_member_voice_channel(guild, user_id) is not None

    @staticmethod
    def truncate(text: str, limit: int = 100) -> str:
        """Truncate text to Discord's length limits, with an ellipsis."""
        if len(text) <= limit:
            return text
        return text[: limit - 1] + "…"
