"""Tests for client startup sequencing."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from bot.client import MuseBot, create_bot, load_registry
from bot.config import Config
from bot.registration import RegistrationError, RegistrationMode
from commands.command_registry import CommandDefinition, UnserializableCommandError


def make_bot(**config_overrides):
    config = Config(DISCORD_TOKEN="test_token", **config_overrides)
    bot = create_bot(config)
    bot.synchronizer = MagicMock()
    bot.synchronizer.sync = AsyncMock()
    bot.synchronizer.register_guild = AsyncMock(return_value=True)
    bot.presence = MagicMock()
    bot.presence.publish = AsyncMock(return_value=True)
    bot.close = AsyncMock()
    return bot


class TestCreateBot:

    @pytest.mark.asyncio
    async def test_loads_shipped_commands(self):
        bot = create_bot(Config(DISCORD_TOKEN="test_token"))
        assert isinstance(bot, MuseBot)
        assert {"ping", "play", "queue"} <= set(bot.registry.commands_by_name)
        assert bot.router.registry is bot.registry

    @pytest.mark.asyncio
    async def test_registration_mode_from_config(self):
        assert create_bot(Config(DISCORD_TOKEN="t")).registration_mode is RegistrationMode.PER_GUILD
        bot = create_bot(Config(DISCORD_TOKEN="t", REGISTER_COMMANDS_ON_BOT=True))
        assert bot.registration_mode is RegistrationMode.APPLICATION

    @pytest.mark.asyncio
    async def test_exempt_users_reach_voice_gate(self):
        bot = create_bot(Config(DISCORD_TOKEN="t", VOICE_EXEMPT_USER_IDS=frozenset({123456789012345678})))
        assert bot.router.voice_gate.is_exempt(123456789012345678)

    def test_load_error_is_fatal(self):
        bad = CommandDefinition(name="bad", payload={"x": object()})
        with pytest.raises(UnserializableCommandError):
            load_registry([bad])


class TestOnReady:

    @pytest.mark.asyncio
    async def test_registers_then_publishes_presence(self):
        bot = make_bot()
        calls = []
        bot.synchronizer.sync.side_effect = lambda *a: calls.append("sync")
        bot.presence.publish.side_effect = lambda: calls.append("presence")

        await bot.on_ready()

        assert calls == ["sync", "presence"]
        payloads, guild_ids = bot.synchronizer.sync.await_args.args
        assert [p["name"] for p in payloads] == ["ping", "play", "queue"]
        assert guild_ids == []
        bot.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_runs_once(self):
        bot = make_bot()
        await bot.on_ready()
        await bot.on_ready()
        bot.synchronizer.sync.assert_awaited_once()
        bot.presence.publish.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_registration_failure_stops_bot(self):
        bot = make_bot()
        error = RegistrationError([100000000000000002])
        bot.synchronizer.sync.side_effect = error

        await bot.on_ready()

        assert bot.startup_error is error
        bot.presence.publish.assert_not_awaited()
        bot.close.assert_awaited_once()


class TestEvents:

    @pytest.mark.asyncio
    async def test_guild_join_registers(self):
        bot = make_bot()
        await bot.on_guild_join(SimpleNamespace(id=100000000000000009, name="New Guild"))
        guild_id, payloads = bot.synchronizer.register_guild.await_args.args
        assert guild_id == 100000000000000009
        assert len(payloads) == 3

    @pytest.mark.asyncio
    async def test_events_forwarded_to_router(self):
        bot = make_bot()
        bot.router = MagicMock()
        bot.router.route_interaction = AsyncMock()
        bot.router.route_message = AsyncMock()

        interaction, message = object(), object()
        await bot.on_interaction(interaction)
        await bot.on_message(message)

        bot.router.route_interaction.assert_awaited_once_with(interaction)
        bot.router.route_message.assert_awaited_once_with(message)


class TestBackgroundTasks:

    @pytest.mark.asyncio
    async def test_task_held_until_done(self):
        bot = create_bot(Config(DISCORD_TOKEN="test_token"))
        started = asyncio.Event()
        release = asyncio.Event()

        async def work():
            started.set()
            await release.wait()
            return "done"

        task = bot.create_background_task(work())
        await started.wait()
        assert task in bot.background_tasks

        release.set()
        assert await task == "done"
        await asyncio.sleep(0)
        assert task not in bot.background_tasks
