"""
Command system for the music bot.
"""

from typing import List

from managers.queue_manager import QueueManager

from .command_registry import (
    CommandDefinition,
    CommandRegistry,
    LoadError,
    UnnamedCommandError,
    UnserializableCommandError,
)
from .playback_commands import build_playback_commands
from .router import InteractionRouter
from .status_commands import build_status_commands
from .voice_gate import VoiceGate


def all_commands(queue_manager: QueueManager) -> List[CommandDefinition]:
    """Every command the bot ships, in registration order."""
    return [
        *build_status_commands(),
        *build_playback_commands(queue_manager),
    ]


__all__ = [
    "CommandDefinition",
    "CommandRegistry",
    "InteractionRouter",
    "LoadError",
    "UnnamedCommandError",
    "UnserializableCommandError",
    "VoiceGate",
    "all_commands",
]
