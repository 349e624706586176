"""
Playback Commands
Handles play requests and queue inspection
"""

from typing import Any, List, Optional

import discord
from discord import app_commands

from commands.command_registry import CommandDefinition
from commands.invocation import get_boolean_option, get_focused_option, get_string_option, respond
from managers.queue_manager import QueueManager
from utils.discord import DiscordUtils

CLEAR_QUEUE_BUTTON_ID = "queue-clear"

# Discord limits for autocomplete choices
MAX_CHOICES = 25
MAX_CHOICE_LENGTH = 100


def clear_requested(interaction: Any) -> bool:
    """/queue only needs a voice channel when it is asked to clear."""
    return get_boolean_option(interaction, "clear")


class PlaybackCommands:
    """Play and queue commands backed by a QueueManager."""

    def __init__(self, queue_manager: QueueManager):
        self.queue_manager = queue_manager

    async def play(self, invocation: Any) -> None:
        """
        Queue a request. Works for /play and the legacy text command.

        Args:
            invocation: Interaction or PrefixedTextInvocation
        """
        query = get_string_option(invocation, "query")
        if not query:
            await respond(invocation, DiscordUtils.error_msg("tell me what to play"), ephemeral=True)
            return

        position = self.queue_manager.add(invocation.guild_id, query)
        await respond(invocation, f"u betcha, **{DiscordUtils.truncate(query)}** added to the queue (#{position})")

    def choices(self, guild_id: Optional[int], partial: str) -> List[app_commands.Choice[str]]:
        """Recent queries matching what the caller has typed so far."""
        if guild_id is None:
            return []
        return [
            app_commands.Choice(name=query, value=query)
            for query in self.queue_manager.suggest(guild_id, partial, limit=MAX_CHOICES)
            if len(query) <= MAX_CHOICE_LENGTH
        ]

    async def play_autocomplete(self, interaction: Any) -> None:
        focused = get_focused_option(interaction)
        partial = str(focused.get("value", "")) if focused else ""
        await interaction.response.autocomplete(self.choices(interaction.guild_id, partial))

    async def queue(self, interaction: Any) -> None:
        """Show the queue, or clear it with the clear option."""
        guild_id = interaction.guild_id

        if clear_requested(interaction):
            removed = self.queue_manager.clear(guild_id)
            await respond(interaction, f"🗑️ cleared {removed} queued requests")
            return

        entries = self.queue_manager.get(guild_id)
        if not entries:
            await respond(interaction, "the queue is empty", ephemeral=True)
            return

        lines = [f"`{i}.` {DiscordUtils.truncate(query)}" for i, query in enumerate(entries, start=1)]
        view = discord.ui.View(timeout=None)
        view.add_item(
            discord.ui.Button(label="Clear", style=discord.ButtonStyle.danger, custom_id=CLEAR_QUEUE_BUTTON_ID)
        )
        await interaction.response.send_message("\n".join(lines), view=view)

    async def clear_button(self, interaction: Any) -> None:
        removed = self.queue_manager.clear(interaction.guild_id)
        await interaction.response.edit_message(content=f"🗑️ cleared {removed} queued requests", view=None)


def build_playback_commands(queue_manager: QueueManager) -> List[CommandDefinition]:
    handlers = PlaybackCommands(queue_manager)

    @app_commands.command(name="play", description="queue a song or a search query")
    @app_commands.describe(query="YouTube URL or search query")
    async def play(interaction: discord.Interaction, query: str) -> None:
        await handlers.play(interaction)

    @play.autocomplete("query")
    async def play_query(interaction: discord.Interaction, current: str) -> List[app_commands.Choice[str]]:
        return handlers.choices(interaction.guild_id, current)

    @app_commands.command(name="queue", description="show the current queue")
    @app_commands.describe(clear="clear the queue instead")
    async def queue(interaction: discord.Interaction, clear: bool = False) -> None:
        await handlers.queue(interaction)

    return [
        CommandDefinition(
            name="play",
            payload=play,
            requires_voice_channel=True,
            execute=handlers.play,
            on_autocomplete=handlers.play_autocomplete,
        ),
        CommandDefinition(
            name="queue",
            payload=queue,
            requires_voice_channel=clear_requested,
            handled_button_ids=frozenset({CLEAR_QUEUE_BUTTON_ID}),
            # The clear button empties the queue just like /queue clear:true
            button_requires_voice_channel=True,
            execute=handlers.queue,
            on_button=handlers.clear_button,
        ),
    ]
