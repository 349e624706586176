"""Shared fakes for Discord objects."""

from types import SimpleNamespace
from typing import Any, List, Optional
from unittest.mock import MagicMock

import discord
import pytest

GUILD_ID = 111111111111111111
USER_ID = 222222222222222222
EXEMPT_USER_ID = 333333333333333333


class FakeResponse:
    """InteractionResponse stand-in that tracks the first-reply state."""

    def __init__(self, fail: bool = False):
        self._done = False
        self.fail = fail
        self.sent: List[tuple] = []
        self.edited: List[dict] = []
        self.choices: Optional[list] = None

    def is_done(self) -> bool:
        return self._done

    async def send_message(self, content: Any = None, **kwargs: Any) -> None:
        if self.fail:
            raise RuntimeError("Unknown Channel")
        self.sent.append((content, kwargs))
        self._done = True

    async def defer(self, **kwargs: Any) -> None:
        self._done = True

    async def edit_message(self, **kwargs: Any) -> None:
        self.edited.append(kwargs)
        self._done = True

    async def autocomplete(self, choices: list) -> None:
        self.choices = choices
        self._done = True


class FakeInteraction:
    def __init__(self, kind, data, guild=None, user_id=USER_ID, fail_replies=False, guild_id=None):
        self.type = kind
        self.data = data
        self.guild = guild
        # Uncached guilds arrive with only an id
        self.guild_id = guild.id if guild is not None else guild_id
        self.user = SimpleNamespace(id=user_id, bot=False)
        self.response = FakeResponse(fail=fail_replies)
        self.client = MagicMock(latency=0.042)
        self.edits: List[Any] = []
        self.fail_replies = fail_replies

    async def edit_original_response(self, content: Any = None, **kwargs: Any) -> None:
        if self.fail_replies:
            raise RuntimeError("Unknown Message")
        self.edits.append(content)


class FakeMessage:
    _next_id = 1

    def __init__(self, content, guild=None, author_id=USER_ID, bot=False, fail_replies=False):
        self.id = FakeMessage._next_id
        FakeMessage._next_id += 1
        self.content = content
        self.guild = guild
        self.author = SimpleNamespace(id=author_id, bot=bot)
        self.channel = SimpleNamespace(id=444444444444444444)
        self.replies: List[Any] = []
        self.fail_replies = fail_replies

    async def reply(self, content: Any = None, **kwargs: Any) -> None:
        if self.fail_replies:
            raise RuntimeError("Missing Access")
        self.replies.append(content)


def make_guild(voice_members=(), guild_id=GUILD_ID):
    """Guild with a single voice channel holding the given member ids."""
    channel = SimpleNamespace(members=[SimpleNamespace(id=m) for m in voice_members])
    return SimpleNamespace(id=guild_id, name="Test Guild", voice_channels=[channel])


def command_data(name, options=None):
    return {
        "type": discord.AppCommandType.chat_input.value,
        "name": name,
        "options": options or [],
    }


@pytest.fixture
def guild():
    """Guild where the default caller is not in voice."""
    return make_guild()


@pytest.fixture
def voice_guild():
    """Guild where the default caller is in a voice channel."""
    return make_guild(voice_members=[USER_ID])


@pytest.fixture
def make_command_interaction():
    def factory(name, options=None, guild=None, **kwargs):
        return FakeInteraction(
            discord.InteractionType.application_command,
            command_data(name, options),
            guild=guild,
            **kwargs,
        )
    return factory
