"""Tests for markdown and table help rendering."""

from rich.console import Console
from conftest import make_command

from wren.cli.styles import _build_rich_theme, get_active_theme
from wren.commands.help import build_help_table, render_command_help, render_command_index
from wren.commands.types import CommandArgument, CommandCategory


def test_command_help_lists_everything():
    command = make_command(
        "timestamp",
        description="Insert current timestamp",
        aliases=["time", "ts"],
        arguments=[
            CommandArgument("format", "Date format", default="short"),
            CommandArgument("zone", "Time zone", required=True),
        ],
    )

    text = render_command_help(command)

    assert text.startswith("# /timestamp\n\nInsert current timestamp\n\n")
    assert "**Usage:** /timestamp [format] <zone>" in text
    assert "**Aliases:** /time, /ts" in text
    assert "- **format** (optional): Date format (default: short)" in text
    assert "- **zone** (required): Time zone\n" in text


def test_command_help_omits_empty_sections():
    text = render_command_help(make_command("ping"))
    assert "Aliases" not in text
    assert "Arguments" not in text


def test_index_groups_and_sorts():
    commands = [
        make_command("todo", category=CommandCategory.NOTE),
        make_command("ping"),
        make_command("help", aliases=["h", "?"]),
        make_command("template", category=CommandCategory.NOTE),
    ]

    text = render_command_index(commands)

    assert text.index("## Note") < text.index("## Utility")
    assert text.index("**/template**") < text.index("**/todo**")
    assert text.index("**/help**") < text.index("**/ping**")
    assert "- **/help** (/h, /?): The help command" in text
    assert text.endswith("Type `/help [command-name]` for detailed help on a specific command.")


def test_index_uses_marker():
    text = render_command_index([make_command("ping")], marker="!")
    assert "**!ping**" in text
    assert "`!help [command-name]`" in text


def test_help_table_renders(registry):
    table = build_help_table(registry.get_all_commands())
    console = Console(theme=_build_rich_theme(get_active_theme()), width=200, record=True)

    console.print(table)
    output = console.export_text()

    assert table.row_count == 9
    assert "/reminder" in output
    assert "/timestamp [format]" in output
    assert "Insert a note template" in output
