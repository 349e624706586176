"""Tests for the legacy ?play text command."""

from unittest.mock import AsyncMock

import pytest

from commands.command_registry import CommandDefinition, CommandRegistry
from commands.invocation import PrefixedTextInvocation, get_string_option
from commands.router import TEXT_ERROR_MESSAGE, VOICE_REQUIRED_MESSAGE, InteractionRouter
from commands.voice_gate import VoiceGate
from conftest import EXEMPT_USER_ID, FakeMessage, make_guild, USER_ID
from utils.error_handler import ErrorHandler


def make_router(*commands, exempt=()):
    registry = CommandRegistry().load(commands)
    return InteractionRouter(registry, VoiceGate(exempt), text_prefix="?", text_target="play",
                             error_handler=ErrorHandler())


def make_play(**kwargs):
    kwargs.setdefault("execute", AsyncMock())
    return CommandDefinition(name="play", payload={"name": "play", "description": "play"}, **kwargs)


class TestParse:

    def test_extracts_remainder(self):
        router = make_router()
        assert router.parse_text_command("?play lofi beats") == "lofi beats"
        assert router.parse_text_command("?play   spaced out  ") == "spaced out"
        assert router.parse_text_command("?play") == ""

    def test_rejects_other_text(self):
        router = make_router()
        assert router.parse_text_command("hello") is None
        assert router.parse_text_command("?playlist") is None
        assert router.parse_text_command("!play song") is None


class TestRouteMessage:

    @pytest.mark.asyncio
    async def test_invokes_play_with_adapter(self):
        play = make_play(requires_voice_channel=True)
        message = FakeMessage("?play lofi beats", guild=make_guild(voice_members=[USER_ID]))
        await make_router(play).route_message(message)

        play.execute.assert_awaited_once()
        invocation = play.execute.await_args.args[0]
        assert isinstance(invocation, PrefixedTextInvocation)
        assert invocation.options.get_string("query") == "lofi beats"
        assert get_string_option(invocation, "query") == "lofi beats"
        assert invocation.guild is message.guild
        assert invocation.user is message.author

    @pytest.mark.asyncio
    async def test_adapter_replies_through_message(self):
        async def execute(invocation):
            await invocation.reply("queued", ephemeral=True)

        message = FakeMessage("?play song", guild=make_guild())
        await make_router(make_play(execute=execute)).route_message(message)
        assert message.replies == ["queued"]

    @pytest.mark.asyncio
    async def test_ignores_bots(self):
        play = make_play()
        message = FakeMessage("?play song", guild=make_guild(), bot=True)
        await make_router(play).route_message(message)
        play.execute.assert_not_awaited()
        assert message.replies == []

    @pytest.mark.asyncio
    async def test_ignores_direct_messages(self):
        play = make_play()
        message = FakeMessage("?play song", guild=None)
        await make_router(play).route_message(message)
        play.execute.assert_not_awaited()
        assert message.replies == []

    @pytest.mark.asyncio
    async def test_ignores_regular_chat(self):
        play = make_play()
        message = FakeMessage("anyone up for a game?", guild=make_guild())
        await make_router(play).route_message(message)
        play.execute.assert_not_awaited()
        assert message.replies == []

    @pytest.mark.asyncio
    async def test_missing_target(self):
        message = FakeMessage("?play song", guild=make_guild())
        await make_router().route_message(message)
        assert message.replies == ["Could not find the play command."]

    @pytest.mark.asyncio
    async def test_failure_plain_reply(self):
        play = make_play(execute=AsyncMock(side_effect=RuntimeError("boom")))
        message = FakeMessage("?play song", guild=make_guild())
        router = make_router(play)
        await router.route_message(message)
        assert message.replies == [TEXT_ERROR_MESSAGE]
        assert router.error_handler.fault_count() == 1

    @pytest.mark.asyncio
    async def test_failure_reply_failure_swallowed(self):
        play = make_play(execute=AsyncMock(side_effect=RuntimeError("boom")))
        message = FakeMessage("?play song", guild=make_guild(), fail_replies=True)
        await make_router(play).route_message(message)

    @pytest.mark.asyncio
    async def test_voice_gate_applies(self):
        play = make_play(requires_voice_channel=True)
        message = FakeMessage("?play song", guild=make_guild())
        await make_router(play).route_message(message)
        play.execute.assert_not_awaited()
        assert message.replies == [VOICE_REQUIRED_MESSAGE]

    @pytest.mark.asyncio
    async def test_voice_gate_exemption(self):
        play = make_play(requires_voice_channel=True)
        message = FakeMessage("?play song", guild=make_guild(), author_id=EXEMPT_USER_ID)
        await make_router(play, exempt=[EXEMPT_USER_ID]).route_message(message)
        play.execute.assert_awaited_once()
