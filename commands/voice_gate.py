"""
Voice Gate
Decides whether a caller may run a command that needs a voice channel
"""

from typing import Any, Iterable, Optional

from commands.command_registry import CommandDefinition
from utils.discord import DiscordUtils
from utils.logger import get_logger


class VoiceGate:
    """Voice-channel precondition with a fixed set of exempt users."""

    def __init__(self, exempt_user_ids: Iterable[int] = ()):
        self.logger = get_logger("VoiceGate")
        self.exempt_user_ids = frozenset(exempt_user_ids)

    def requires_voice(self, command: CommandDefinition, interaction: Any) -> bool:
        """
        Resolve a command's voice requirement for this interaction.

        A dynamic requirement that raises counts as required.
        """
        return self._resolve(command.requires_voice_channel, f"/{command.name}", interaction)

    def button_requires_voice(self, command: CommandDefinition, interaction: Any) -> bool:
        """Resolve the voice requirement of a command's buttons."""
        return self._resolve(command.button_requires_voice_channel, f"/{command.name} button", interaction)

    def _resolve(self, requirement: Any, label: str, interaction: Any) -> bool:
        if not callable(requirement):
            return bool(requirement)

        try:
            return bool(requirement(interaction))
        except Exception as e:
            self.logger.warning(f"Voice requirement of {label} failed ({e}), gating anyway")
            return True

    def is_exempt(self, user_id: int) -> bool:
        return user_id in self.exempt_user_ids

    def is_allowed(self, user_id: int, guild: Optional[Any]) -> bool:
        """
        Check whether a caller passes the gate.

        Args:
            user_id: Caller snowflake
            guild: Guild the command was used in, or None

        Returns:
            True if exempt or currently in a voice channel of the guild
        """
        if self.is_exempt(user_id):
            return True
        if guild is None:
            return False
        return DiscordUtils.is_user_in_voice(guild, user_id)
