"""
Help Rendering for Slash Commands

Produces the two views of command documentation:

    - Markdown, created as a note by ``/help`` inside the composer
    - A rich Table, printed by ``wren commands`` in the terminal
"""

from collections.abc import Iterable

from rich.markup import escape
from rich.table import Table

from wren.cli.styles import Styles

from .tokenizer import COMMAND_MARKER
from .types import Command


def _aliases(command: Command, marker: str) -> str:
    return ", ".join(f"{marker}{alias}" for alias in command.aliases)


def render_command_help(command: Command, marker: str = COMMAND_MARKER) -> str:
    """Detailed markdown help for one command."""
    text = f"# {marker}{command.name}\n\n{command.description}\n\n"

    if command.usage:
        text += f"**Usage:** {command.usage}\n\n"

    if command.aliases:
        text += f"**Aliases:** {_aliases(command, marker)}\n\n"

    if command.arguments:
        text += "**Arguments:**\n"
        for arg in command.arguments:
            required = "(required)" if arg.required else "(optional)"
            default = f" (default: {arg.default})" if arg.default is not None else ""
            text += f"- **{arg.name}** {required}: {arg.description}{default}\n"

    return text


def render_command_index(commands: Iterable[Command], marker: str = COMMAND_MARKER) -> str:
    """Markdown index of commands grouped by category.

    Categories are listed alphabetically and commands by name within each.
    """
    by_category: dict[str, list[Command]] = {}
    for command in commands:
        by_category.setdefault(command.category.value, []).append(command)

    text = "# Available Commands\n\n"
    for category in sorted(by_category):
        text += f"## {category.capitalize()}\n\n"
        for command in sorted(by_category[category], key=lambda c: c.name):
            aliases = f" ({_aliases(command, marker)})" if command.aliases else ""
            text += f"- **{marker}{command.name}**{aliases}: {command.description}\n"
        text += "\n"

    text += f"\nType `{marker}help [command-name]` for detailed help on a specific command."
    return text


def build_help_table(commands: Iterable[Command], marker: str = COMMAND_MARKER) -> Table:
    """Terminal table of commands, sorted by category then name."""
    table = Table(title="Slash Commands", show_header=True, border_style=Styles.BORDER)
    table.add_column("Command", style=Styles.ACCENT, no_wrap=True)
    table.add_column("Category", style=Styles.DIM)
    table.add_column("Usage", style=Styles.COMMAND)
    table.add_column("Description", style=Styles.PRIMARY)

    for command in sorted(commands, key=lambda c: (c.category.value, c.name)):
        aliases = f" ({', '.join(command.aliases)})" if command.aliases else ""
        table.add_row(
            f"{marker}{command.name}{aliases}",
            command.category.value,
            escape(command.usage or ""),
            escape(command.description),
        )

    return table
