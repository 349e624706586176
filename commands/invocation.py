"""
Invocation helpers
Reading options from, and replying to, structured interactions and the
legacy text-command adapter alike
"""

from typing import Any, Dict, List, Optional


class TextOptions:
    """Option accessor over a single free-form argument."""

    def __init__(self, value: str):
        self.value = value

    def get_string(self, name: Optional[str] = None) -> str:
        """Every string option resolves to the free-form argument."""
        return self.value


class PrefixedTextInvocation:
    """
    Narrow view of a legacy text command ("?play lofi beats").

    Only exposes what a text message can do: read the argument and reply.
    There is no deferred or edit state.
    """

    def __init__(self, message: Any, argument: str):
        self.message = message
        self.guild = message.guild
        self.guild_id = message.guild.id if message.guild is not None else None
        self.user = message.author
        self.channel = message.channel
        self.options = TextOptions(argument)

    async def reply(self, content: str, **kwargs: Any) -> Any:
        kwargs.pop("ephemeral", None)
        return await self.message.reply(content, **kwargs)


def _flatten_options(options: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    flat: List[Dict[str, Any]] = []
    for option in options:
        # Subcommands and groups nest their own options
        if "options" in option:
            flat.extend(_flatten_options(option["options"]))
        else:
            flat.append(option)
    return flat


def _interaction_options(interaction: Any) -> List[Dict[str, Any]]:
    data = getattr(interaction, "data", None) or {}
    return _flatten_options(data.get("options", []))


def get_string_option(invocation: Any, name: str) -> Optional[str]:
    """Read a string option from an interaction or a text invocation."""
    if isinstance(invocation, PrefixedTextInvocation):
        return invocation.options.get_string(name)
    for option in _interaction_options(invocation):
        if option.get("name") == name:
            value = option.get("value")
            return None if value is None else str(value)
    return None


def get_boolean_option(invocation: Any, name: str, default: bool = False) -> bool:
    """Read a boolean option; text invocations never carry one."""
    if isinstance(invocation, PrefixedTextInvocation):
        return default
    for option in _interaction_options(invocation):
        if option.get("name") == name:
            return bool(option.get("value"))
    return default


def get_focused_option(interaction: Any) -> Optional[Dict[str, Any]]:
    """Return the option currently being typed in an autocomplete request."""
    for option in _interaction_options(interaction):
        if option.get("focused"):
            return option
    return None


async def respond(invocation: Any, content: str, ephemeral: bool = False) -> None:
    """
    Reply to an invocation.

    Text invocations get a message reply; interactions get a first reply, or
    an edit of the original response once one was sent or deferred.
    """
    if isinstance(invocation, PrefixedTextInvocation):
        await invocation.reply(content)
        return

    if invocation.response.is_done():
        await invocation.edit_original_response(content=content)
    else:
        await invocation.response.send_message(content, ephemeral=ephemeral)
