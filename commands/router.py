"""
Interaction Router
Classifies inbound events, resolves their handler, applies the voice gate
and contains any failure so one bad event never takes the bot down
"""

from typing import Any, Awaitable, Callable, Optional

import discord

from commands.command_registry import CommandRegistry
from commands.invocation import PrefixedTextInvocation
from commands.voice_gate import VoiceGate
from utils.discord import DiscordUtils
from utils.error_handler import ErrorHandler, get_error_handler
from utils.logger import get_logger

# User-facing messages
GUILD_ONLY_MESSAGE = DiscordUtils.error_msg("can't use commands outside of a server")
VOICE_REQUIRED_MESSAGE = DiscordUtils.error_msg("gotta be in a voice channel")
GENERIC_ERROR_MESSAGE = DiscordUtils.error_msg("something went wrong")
TEXT_ERROR_MESSAGE = "There was an error trying to execute that command."


class InteractionRouter:
    """Routes interactions and legacy text commands to command hooks."""

    def __init__(
        self,
        registry: CommandRegistry,
        voice_gate: VoiceGate,
        text_prefix: str = "?",
        text_target: str = "play",
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.logger = get_logger("Router")
        self.registry = registry
        self.voice_gate = voice_gate
        self.text_target = text_target
        self.text_trigger = f"{text_prefix}{text_target}"
        self.error_handler = error_handler or get_error_handler()

    # Interactions

    async def route_interaction(self, interaction: discord.Interaction) -> None:
        """Dispatch one interaction by kind. Unknown kinds are ignored."""
        data = interaction.data or {}

        if interaction.type == discord.InteractionType.application_command:
            await self._contained(interaction, f"/{data.get('name')}", self._handle_command)
        elif interaction.type == discord.InteractionType.component:
            await self._contained(interaction, f"button:{data.get('custom_id')}", self._handle_button)
        elif interaction.type == discord.InteractionType.autocomplete:
            await self._contained(interaction, f"autocomplete:/{data.get('name')}", self._handle_autocomplete)

    async def _handle_command(self, interaction: discord.Interaction) -> None:
        data = interaction.data or {}
        command = self.registry.get(data.get("name", ""))

        # Stale, foreign or non chat-input commands are not ours to answer
        if command is None or data.get("type") != discord.AppCommandType.chat_input.value:
            return

        # guild_id is set even when the guild itself is not cached
        if interaction.guild_id is None:
            await interaction.response.send_message(GUILD_ONLY_MESSAGE)
            return

        if self.voice_gate.requires_voice(command, interaction) and not self.voice_gate.is_allowed(
            interaction.user.id, interaction.guild
        ):
            await interaction.response.send_message(VOICE_REQUIRED_MESSAGE, ephemeral=True)
            return

        if command.execute is None:
            return

        self.logger.debug(f"/{command.name} by {interaction.user.id} in {interaction.guild_id}")
        await command.execute(interaction)

    async def _handle_button(self, interaction: discord.Interaction) -> None:
        data = interaction.data or {}
        command = self.registry.get_by_button_id(data.get("custom_id", ""))

        if command is None or command.on_button is None:
            return

        if self.voice_gate.button_requires_voice(command, interaction) and not self.voice_gate.is_allowed(
            interaction.user.id, interaction.guild
        ):
            await interaction.response.send_message(VOICE_REQUIRED_MESSAGE, ephemeral=True)
            return

        await command.on_button(interaction)

    async def _handle_autocomplete(self, interaction: discord.Interaction) -> None:
        data = interaction.data or {}
        command = self.registry.get(data.get("name", ""))

        if command is not None and command.on_autocomplete is not None:
            await command.on_autocomplete(interaction)

    async def _contained(
        self,
        interaction: discord.Interaction,
        context: str,
        handler: Callable[[discord.Interaction], Awaitable[None]],
    ) -> None:
        try:
            await handler(interaction)
        except Exception as e:
            self.error_handler.handle_exception(e, context)
            await self._report_failure(interaction)

    async def _report_failure(self, interaction: discord.Interaction) -> None:
        """Best-effort error notice: edit the existing reply, or send one."""
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=GENERIC_ERROR_MESSAGE)
            else:
                await interaction.response.send_message(GENERIC_ERROR_MESSAGE, ephemeral=True)
        except Exception as e:
            self.logger.debug(f"Could not deliver error reply: {e}")

    # Legacy text command

    def parse_text_command(self, content: str) -> Optional[str]:
        """
        Extract the argument of a legacy text command.

        Returns:
            The stripped remainder, or None if the message is not the trigger
        """
        if not content.startswith(self.text_trigger):
            return None
        remainder = content[len(self.text_trigger):]
        if remainder and not remainder[0].isspace():
            return None
        return remainder.strip()

    async def route_message(self, message: discord.Message) -> None:
        """Handle a plain message carrying the legacy text command."""
        if message.author.bot or message.guild is None:
            return

        argument = self.parse_text_command(message.content or "")
        if argument is None:
            return

        self.logger.debug(f"{self.text_trigger} by {message.author.id}: {argument!r}")
        command = self.registry.get(self.text_target)

        if command is None or command.execute is None:
            await self._safe_reply(message, f"Could not find the {self.text_target} command.")
            return

        invocation = PrefixedTextInvocation(message, argument)
        try:
            if self.voice_gate.requires_voice(command, invocation) and not self.voice_gate.is_allowed(
                message.author.id, message.guild
            ):
                await invocation.reply(VOICE_REQUIRED_MESSAGE)
                return

            await command.execute(invocation)
        except Exception as e:
            self.error_handler.handle_exception(e, self.text_trigger)
            await self._safe_reply(message, TEXT_ERROR_MESSAGE)

    async def _safe_reply(self, message: discord.Message, content: str) -> Any:
        try:
            return await message.reply(content)
        except Exception as e:
            self.logger.debug(f"Could not reply to message {message.id}: {e}")
            return None
