"""
Discord client setup using discord.py.
"""

import asyncio
import signal
from typing import Any, Coroutine, List, Optional, Set

import discord

from bot.config import Config, config as default_config
from bot.keep_alive import start_server, update_bot_status
from bot.presence import PresencePublisher
from bot.registration import CommandUploader, RegistrationError, RegistrationMode, RegistrationSynchronizer
from commands import CommandDefinition, CommandRegistry, InteractionRouter, VoiceGate, all_commands
from managers.queue_manager import QueueManager
from utils.discord import INVITE_PERMISSIONS
from utils.error_handler import setup_error_handler
from utils.logger import get_logger, set_debug

logger = get_logger("Client")


class MuseBot(discord.Client):
    """Music bot client: slash commands, buttons, autocomplete and ?play."""

    def __init__(self, config: Config, registry: CommandRegistry):
        intents = discord.Intents.default()
        intents.guilds = True
        intents.voice_states = True
        intents.message_content = True
        super().__init__(intents=intents)

        self.config = config
        self.registry = registry
        self.registration_mode = RegistrationMode.from_flag(config.REGISTER_COMMANDS_ON_BOT)
        self.router = InteractionRouter(
            registry,
            VoiceGate(config.VOICE_EXEMPT_USER_IDS),
            text_prefix=config.TEXT_COMMAND_PREFIX,
            text_target=config.TEXT_COMMAND_TARGET,
        )
        self.presence = PresencePublisher.from_config(self, config)
        self.synchronizer: Optional[RegistrationSynchronizer] = None

        self.startup_error: Optional[Exception] = None
        self._started = False
        self.background_tasks: Set[asyncio.Task] = set()

    def create_background_task(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Start a task and hold a reference to it until it finishes."""
        task = asyncio.create_task(coro)
        self.background_tasks.add(task)
        task.add_done_callback(self.background_tasks.discard)
        return task

    async def setup_hook(self):
        """Called after login, before connecting to the gateway."""
        self.synchronizer = RegistrationSynchronizer(
            CommandUploader(self.http, self.application_id),
            self.registration_mode,
        )
        update_bot_status(
            status="connecting",
            registration_mode=self.registration_mode.value,
            commands_loaded=len(self.registry),
        )

    async def on_ready(self):
        """Register commands and set presence, once per process."""
        update_bot_status(discord_connected=True)
        if self._started:
            logger.debug("Reconnected, skipping startup")
            return
        self._started = True

        logger.info(f"Logged in as: {self.user}")

        try:
            await self.synchronizer.sync(self.registry.payloads(), [guild.id for guild in self.guilds])
        except RegistrationError as e:
            logger.error(f"{e}. Fix the cause and restart the bot.")
            self.startup_error = e
            update_bot_status(status="failed")
            await self.close()
            return

        update_bot_status(status="ready", commands_registered=True)
        await self.presence.publish()

        invite = discord.utils.oauth_url(
            self.application_id,
            permissions=discord.Permissions(INVITE_PERMISSIONS),
            scopes=("bot", "applications.commands"),
        )
        logger.success(f"Ready! Invite the bot with {invite}")

    async def on_interaction(self, interaction: discord.Interaction):
        await self.router.route_interaction(interaction)

    async def on_message(self, message: discord.Message):
        await self.router.route_message(message)

    async def on_guild_join(self, guild: discord.Guild):
        """Newly joined guilds get the command set straight away."""
        logger.info(f"Joined guild {guild.name} ({guild.id})")
        if self.synchronizer is not None:
            await self.synchronizer.register_guild(guild.id, self.registry.payloads())

    async def on_disconnect(self):
        update_bot_status(discord_connected=False)

    async def close(self):
        """Clean shutdown."""
        logger.info("Shutting down bot...")
        update_bot_status(status="offline", discord_connected=False)
        await super().close()


def load_registry(commands: List[CommandDefinition]) -> CommandRegistry:
    """Build the registry. Raises LoadError on a malformed command."""
    registry = CommandRegistry().load(commands)
    logger.info(f"Loaded {len(registry)} commands")
    return registry


def create_bot(config: Config = default_config) -> MuseBot:
    """Create and return bot instance."""
    commands = all_commands(QueueManager())
    return MuseBot(config, load_registry(commands))


async def run_bot(config: Config = default_config) -> None:
    """Run the bot until it is closed."""
    config.validate()
    set_debug(config.DEBUG)
    setup_error_handler()

    bot = create_bot(config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda s=sig: bot.create_background_task(_shutdown(bot, s)))
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    if config.KEEP_ALIVE:
        bot.create_background_task(start_server(config.HOST, config.PORT))

    async with bot:
        await bot.start(config.DISCORD_TOKEN)

    if bot.startup_error is not None:
        raise bot.startup_error


async def _shutdown(bot: MuseBot, sig: signal.Signals) -> None:
    logger.info(f"Received {sig.name}, shutting down...")
    await bot.close()
