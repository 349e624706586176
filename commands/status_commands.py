"""
Status Commands
Handles latency check
"""

from typing import Any

import discord
from discord import app_commands

from commands.command_registry import CommandDefinition


async def ping_command(interaction: Any) -> None:
    """
    Reply with the gateway latency.

    Args:
        interaction: Discord interaction
    """
    latency_ms = round(interaction.client.latency * 1000)
    await interaction.response.send_message(f"🏓 pong ({latency_ms}ms)", ephemeral=True)


def build_status_commands() -> list:
    @app_commands.command(name="ping", description="check that the bot is alive")
    async def ping(interaction: discord.Interaction) -> None:
        await ping_command(interaction)

    return [
        CommandDefinition(name="ping", payload=ping, execute=ping_command),
    ]
