"""
Command Registry
Indexes loaded command definitions by name and by button id
"""

import json
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

import discord
from discord import app_commands

from utils.logger import get_logger

# Hook type aliases
CommandHook = Callable[[Any], Awaitable[None]]
VoiceRequirement = Union[bool, Callable[[Any], bool]]

# discord.py definitions that need a CommandTree to serialize
TREE_DEFINITIONS = (app_commands.Command, app_commands.Group, app_commands.ContextMenu)


class LoadError(Exception):
    """A command definition could not be loaded. Fatal at startup."""


class UnserializableCommandError(LoadError):
    """The command's definition payload cannot be serialized to JSON."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Could not serialize /{name} to JSON")


class UnnamedCommandError(LoadError):
    """The command has no name."""

    def __init__(self):
        super().__init__("Command definition is missing a name")


def definition_tree() -> app_commands.CommandTree:
    """
    CommandTree used only to serialize definitions.

    It sits on a client that never logs in, so it never sees interactions
    and never competes with the router.
    """
    return app_commands.CommandTree(discord.Client(intents=discord.Intents.none()))


@dataclass(frozen=True)
class CommandDefinition:
    """
    One invocable command.

    ``payload`` is the application-command definition: a discord.py
    ``app_commands.Command`` (or ``Group``/``ContextMenu``), a plain mapping,
    or any object with a ``to_dict()`` method. ``requires_voice_channel`` and
    ``button_requires_voice_channel`` are either a flag or a function of the
    interaction. Each hook is optional; an event kind only calls the hook
    that matches it.
    """

    name: str
    payload: Any
    requires_voice_channel: VoiceRequirement = False
    handled_button_ids: FrozenSet[str] = field(default_factory=frozenset)
    button_requires_voice_channel: VoiceRequirement = False
    execute: Optional[CommandHook] = None
    on_button: Optional[CommandHook] = None
    on_autocomplete: Optional[CommandHook] = None

    def to_payload(self, tree: app_commands.CommandTree) -> Dict[str, Any]:
        """Return the definition payload as a plain dict."""
        if isinstance(self.payload, TREE_DEFINITIONS):
            return self.payload.to_dict(tree)
        if isinstance(self.payload, Mapping):
            return dict(self.payload)
        to_dict = getattr(self.payload, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        raise TypeError(f"Unsupported payload type: {type(self.payload).__name__}")

    def serialize(self, tree: app_commands.CommandTree) -> str:
        """Serialize the definition payload to JSON."""
        return json.dumps(self.to_payload(tree))


class CommandRegistry:
    """Lookup tables for command definitions."""

    def __init__(self, tree: Optional[app_commands.CommandTree] = None):
        self.logger = get_logger("Registry")
        self.tree = tree or definition_tree()
        self.commands_by_name: Dict[str, CommandDefinition] = {}
        self.commands_by_button_id: Dict[str, CommandDefinition] = {}

    def load(self, commands: Iterable[CommandDefinition]) -> "CommandRegistry":
        """
        Load command definitions.

        The load is all-or-nothing: every definition is validated before any
        index is touched. A later definition with the same name (or button
        id) replaces the earlier one.

        Args:
            commands: Command definitions, in registration order

        Returns:
            Self for chaining

        Raises:
            UnnamedCommandError: a definition has an empty name
            UnserializableCommandError: a payload cannot be serialized
        """
        by_name: Dict[str, CommandDefinition] = {}
        by_button_id: Dict[str, CommandDefinition] = {}

        for command in commands:
            if not command.name:
                raise UnnamedCommandError()

            try:
                command.serialize(self.tree)
            except Exception as e:
                self.logger.error(f"Failed to serialize /{command.name}: {type(e).__name__}: {e}")
                raise UnserializableCommandError(command.name) from e

            if command.name in by_name or command.name in self.commands_by_name:
                self.logger.warning(f"Duplicate command /{command.name}, keeping the last one")
            by_name[command.name] = command

            for button_id in command.handled_button_ids:
                by_button_id[button_id] = command

        self.commands_by_name.update(by_name)
        self.commands_by_button_id.update(by_button_id)

        self.logger.debug(f"Loaded {len(by_name)} commands, {len(by_button_id)} button ids")
        return self

    def get(self, name: str) -> Optional[CommandDefinition]:
        """Look up a command by its invocation name."""
        return self.commands_by_name.get(name)

    def get_by_button_id(self, button_id: str) -> Optional[CommandDefinition]:
        """Look up the command owning a button id."""
        return self.commands_by_button_id.get(button_id)

    def get_all(self) -> List[CommandDefinition]:
        """Snapshot of all commands, in insertion order."""
        return list(self.commands_by_name.values())

    def payloads(self) -> List[Dict[str, Any]]:
        """Definition payloads of all commands, ready for upload."""
        return [command.to_payload(self.tree) for command in self.get_all()]

    def __len__(self) -> int:
        return len(self.commands_by_name)

    def __contains__(self, name: object) -> bool:
        return name in self.commands_by_name
