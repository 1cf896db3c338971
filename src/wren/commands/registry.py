"""
Command Registry for the Slash Command System

This module provides the registry that owns every slash command known to a
composer session. The registry is an explicit object constructed at startup
and handed to the executor and autocomplete engine, so tests and sessions
each get an isolated command set.

Architecture:
    - CommandRegistry: Command storage keyed by lower-cased canonical name
    - Alias resolution: Case-insensitive, scanned in registration order
    - Collision detection: Names and aliases may only be claimed once
    - Copy-on-write storage: Lookups never observe a half-applied mutation
"""

from collections.abc import Iterator

from wren.utils.logger import get_logger

from .tokenizer import COMMAND_MARKER
from .types import Command, CommandCategory, CommandCollisionError

logger = get_logger("commands")


class CommandRegistry:
    """Registry for all slash commands available to a composer session.

    Key Features:
        - Case-insensitive lookup by canonical name or alias
        - Loud failure on name/alias collisions
        - Category-based filtering for help output
        - Prefix matching for the autocomplete panel

    .. warning::
       Command names and aliases must be unique across the registry.
       Registration raises CommandCollisionError for conflicts unless
       ``replace=True`` is passed to overwrite a command of the same name.

    Examples:
        Basic registry usage::

            registry = CommandRegistry()
            registry.register(ping_command)

            command = registry.get_command("PING")
            notes = registry.get_commands_by_category(CommandCategory.NOTE)
    """

    def __init__(self, commands: list[Command] | None = None):
        self._commands: dict[str, Command] = {}
        for command in commands or []:
            self.register(command)

    def register(self, command: Command, replace: bool = False) -> None:
        """Register a command, claiming its canonical name and aliases.

        :param command: Command definition to register
        :type command: Command
        :param replace: Overwrite a command already registered under the same
            canonical name instead of raising
        :type replace: bool
        :raises ValueError: If the command name is empty
        :raises CommandCollisionError: If the name or an alias is already claimed
        """
        if not command.name or not command.name.strip():
            raise ValueError("Command name cannot be empty")

        key = command.key
        existing = self._commands.get(key)
        if existing is not None and not replace:
            raise CommandCollisionError(command.name, existing.name)

        claimed: dict[str, str] = {}
        for other in self._commands.values():
            if other.key == key:
                continue  # Released by the replacement
            for name in other.all_names():
                claimed[name] = other.name

        seen: set[str] = set()
        for name in command.all_names():
            if name in claimed:
                raise CommandCollisionError(name, claimed[name])
            if name in seen and name != key:
                raise CommandCollisionError(name, command.name)
            seen.add(name)

        commands = dict(self._commands)
        commands[key] = command
        self._commands = commands

        if existing is not None:
            logger.debug(f"Replaced /{existing.name} with a new definition")
        else:
            logger.debug(f"Registered /{command.name}")

    def unregister(self, name: str) -> Command | None:
        """Remove a command by canonical name (aliases are not consulted)."""
        key = name.lower()
        if key not in self._commands:
            return None

        commands = dict(self._commands)
        removed = commands.pop(key)
        self._commands = commands
        logger.debug(f"Unregistered /{removed.name}")
        return removed

    def get_command(self, name_or_alias: str, marker: str = COMMAND_MARKER) -> Command | None:
        """Get a command by canonical name or alias, case-insensitively.

        One leading ``marker`` is ignored, so ``/tag`` and ``tag`` both resolve.
        """
        name = name_or_alias.strip()
        if name.startswith(marker):
            name = name[len(marker) :]
        name = name.lower()
        if not name:
            return None

        commands = self._commands

        # Check direct command name
        if name in commands:
            return commands[name]

        # Check aliases
        for command in commands.values():
            if any(alias.lower() == name for alias in command.aliases):
                return command

        return None

    def get_all_commands(self) -> list[Command]:
        """Get all enabled commands in registration order."""
        return [cmd for cmd in self._commands.values() if cmd.enabled is not False]

    def get_commands_by_category(self, category: CommandCategory) -> list[Command]:
        """Get all enabled commands in a specific category."""
        return [cmd for cmd in self.get_all_commands() if cmd.category == category]

    def match_prefix(self, prefix: str, limit: int | None = None) -> list[Command]:
        """Enabled commands whose canonical name or any alias starts with ``prefix``."""
        prefix = prefix.lower()
        matches = [
            cmd
            for cmd in self.get_all_commands()
            if any(name.startswith(prefix) for name in cmd.all_names())
        ]
        return matches[:limit] if limit is not None else matches

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name_or_alias: str) -> bool:
        return self.get_command(name_or_alias) is not None

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands.values()))
