"""
Built-in Command Implementations for Wren

This module registers the built-in slash commands, grouped the same way the
help index groups them. Each ``register_*`` function closes over the
collaborators it needs, so handlers reach storage, search and reminders
through the injected :class:`~wren.services.CommandServices` and never
import them at call time.

Command Categories:
    - Utility: help, ping, timestamp, reminder
    - Note: todo, template
    - Tag: tag
    - Notebook: notebook
    - Search: search
"""

from datetime import datetime, timezone

from wren.services import CommandServices
from wren.utils.logger import get_logger

from .executor import maybe_await
from .help import render_command_help, render_command_index
from .registry import CommandRegistry
from .reminders import (
    TIME_FORMAT_HELP,
    format_clock,
    format_reminder_time,
    parse_time_expression,
    to_epoch_millis,
)
from .templates import NOTE_TEMPLATES, render_template, template_names
from .tokenizer import COMMAND_MARKER
from .types import (
    Command,
    CommandArgument,
    CommandCategory,
    CommandContext,
    ExecutionResult,
    ValidationResult,
)

logger = get_logger("commands")

MAX_PROVIDER_SUGGESTIONS = 5

TIMESTAMP_FORMATS = ["iso", "short", "long", "time", "date"]


def format_timestamp(moment: datetime, style: str = "short") -> str:
    """Render ``moment`` in one of :data:`TIMESTAMP_FORMATS`; unknown styles use ``short``.

    Examples:
        >>> format_timestamp(datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc), "iso")
        '2024-05-01T14:30:00.000Z'
        >>> format_timestamp(datetime(2024, 5, 1, 14, 30), "long")
        'Wednesday, May 1, 2024 2:30 PM'
    """
    style = style.lower()
    if style == "iso":
        utc = moment.astimezone(timezone.utc) if moment.tzinfo else moment
        return utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"
    if style == "long":
        return f"{moment.strftime('%A, %B')} {moment.day}, {moment.year} {format_clock(moment)}"
    if style == "time":
        return format_clock(moment)
    if style == "date":
        return moment.strftime("%Y-%m-%d")
    return f"{moment.strftime('%Y-%m-%d')} {format_clock(moment)}"


def register_utility_commands(
    registry: CommandRegistry, services: CommandServices, marker: str = COMMAND_MARKER
) -> None:
    """Register general helper commands.

    Registered Commands:
        /help [command]: Command index, or detailed help for one command, as a new note
        /ping: Insert a confirmation that commands are working
        /timestamp [format]: Insert the current time
        /reminder <time> <message>: Schedule a reminder

    Examples:
        Command usage in the composer::

            /help              # Create a note listing every command
            /help tag          # Create a note describing /tag
            /ts iso            # Insert 2024-05-01T14:30:00.000Z
            /remind 5m "Check the oven"
    """

    def help_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        if args:
            command = registry.get_command(args[0], marker)
            if command is None:
                return ExecutionResult(success=False, message=f"Command {marker}{args[0]} not found")
            content = render_command_help(command, marker)
        else:
            content = render_command_index(registry.get_all_commands(), marker)

        return ExecutionResult(success=True, create_note=True, note_content=content, clear_input=True)

    def ping_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        return ExecutionResult(
            success=True,
            insert_content="Pong! Commands are working. ",
            message="Commands are working!",
        )

    def timestamp_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        style = args[0] if args else "short"
        return ExecutionResult(
            success=True, insert_content=format_timestamp(services.clock(), style) + " "
        )

    def timestamp_autocomplete(args: list[str], context: CommandContext) -> list[str]:
        partial = args[-1].lower() if args else ""
        return [fmt for fmt in TIMESTAMP_FORMATS if fmt.startswith(partial)]

    def reminder_validate(args: list[str], context: CommandContext) -> ValidationResult:
        if len(args) < 2:
            return ValidationResult.fail(
                "Please provide both time and message.\n"
                f"Usage: {marker}reminder <time> <message>\n\n"
                f"{TIME_FORMAT_HELP}\n\n"
                "Examples:\n"
                f"  {marker}reminder 5m Check the oven\n"
                f"  {marker}reminder tomorrow Call mom\n"
                f"  {marker}reminder 2:30pm Team meeting"
            )

        if parse_time_expression(args[0], services.clock()) is None:
            return ValidationResult.fail(f'Could not parse time: "{args[0]}"\n{TIME_FORMAT_HELP}')

        return ValidationResult.ok()

    async def reminder_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        now = services.clock()
        due = parse_time_expression(args[0], now)
        if due is None:
            return ExecutionResult(success=False, message=f'Could not parse time: "{args[0]}"')

        message = " ".join(args[1:])
        await maybe_await(
            services.reminders.create_reminder(message, to_epoch_millis(due), context.notebook_id)
        )
        logger.debug(f"Reminder scheduled for {due.isoformat()}")

        return ExecutionResult(
            success=True,
            message=f'Reminder set: "{message}" - {format_reminder_time(due, now)}',
            clear_input=True,
        )

    registry.register(
        Command(
            name="help",
            aliases=["h", "?"],
            description="Show available commands or help for a specific command",
            category=CommandCategory.UTILITY,
            usage=f"{marker}help [command-name]",
            arguments=[CommandArgument("command", "Specific command to get help for")],
            execute=help_handler,
            autocomplete=lambda args, ctx: [
                cmd.name
                for cmd in registry.match_prefix(args[-1] if args else "")
            ][:MAX_PROVIDER_SUGGESTIONS],
        )
    )

    registry.register(
        Command(
            name="ping",
            aliases=["test"],
            description="Test if commands are working",
            category=CommandCategory.UTILITY,
            usage=f"{marker}ping",
            execute=ping_handler,
        )
    )

    registry.register(
        Command(
            name="timestamp",
            aliases=["time", "now", "ts"],
            description="Insert current timestamp",
            category=CommandCategory.UTILITY,
            usage=f"{marker}timestamp [format]",
            arguments=[
                CommandArgument(
                    "format", "Date format (iso, short, long, time, date)", default="short"
                )
            ],
            execute=timestamp_handler,
            autocomplete=timestamp_autocomplete,
        )
    )

    registry.register(
        Command(
            name="reminder",
            aliases=["remind", "r"],
            description="Set a reminder",
            category=CommandCategory.UTILITY,
            usage=f"{marker}reminder <time> <message>",
            arguments=[
                CommandArgument(
                    "time",
                    "When to remind (5m, 2h, 1d, tomorrow, monday, 2:30pm, \"in 30 minutes\")",
                    required=True,
                ),
                CommandArgument("message", "What to be reminded about", required=True),
            ],
            validate=reminder_validate,
            execute=reminder_handler,
        )
    )


def register_note_commands(
    registry: CommandRegistry, services: CommandServices, marker: str = COMMAND_MARKER
) -> None:
    """Register commands that insert content into the current note.

    Registered Commands:
        /todo [item ...]: Insert checkbox items
        /template <name> [title]: Insert a note template
    """

    def todo_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        if not args:
            return ExecutionResult(success=True, insert_content="- [ ] ")

        todos = "\n".join(f"- [ ] {item}" for item in args)
        return ExecutionResult(success=True, insert_content=todos + "\n")

    available = ", ".join(template_names())

    def template_validate(args: list[str], context: CommandContext) -> ValidationResult:
        if not args:
            return ValidationResult.fail(f"Please specify a template. Available: {available}")

        name = args[0].lower()
        if name not in NOTE_TEMPLATES:
            return ValidationResult.fail(f'Unknown template "{name}". Available: {available}')

        return ValidationResult.ok()

    def template_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        name = args[0].lower()
        title = " ".join(args[1:]) or None
        return ExecutionResult(
            success=True,
            insert_content=render_template(name, services.clock(), title),
            message=f"Inserted {name} template",
        )

    def template_autocomplete(args: list[str], context: CommandContext) -> list[str]:
        if len(args) > 1:
            return []
        partial = args[0].lower() if args else ""
        return [name for name in template_names() if name.startswith(partial)]

    registry.register(
        Command(
            name="todo",
            aliases=["task", "checkbox"],
            description="Insert todo checkbox items",
            category=CommandCategory.NOTE,
            usage=f"{marker}todo [item1] [item2] ...",
            arguments=[CommandArgument("items", "Todo items to create")],
            execute=todo_handler,
        )
    )

    registry.register(
        Command(
            name="template",
            aliases=["tpl", "tmpl"],
            description="Insert a note template",
            category=CommandCategory.NOTE,
            usage=f"{marker}template <template-name> [title]",
            arguments=[
                CommandArgument("template", f"Template name ({available})", required=True),
                CommandArgument("title", "Optional title for the template"),
            ],
            validate=template_validate,
            execute=template_handler,
            autocomplete=template_autocomplete,
        )
    )


def register_tag_commands(
    registry: CommandRegistry, services: CommandServices, marker: str = COMMAND_MARKER
) -> None:
    """Register ``/tag``, which inserts ``#hashtags`` and completes known tags."""

    def tag_validate(args: list[str], context: CommandContext) -> ValidationResult:
        if not args:
            return ValidationResult.fail(
                f"Please provide at least one tag. Usage: {marker}tag <tag1> [tag2] ..."
            )
        return ValidationResult.ok()

    def tag_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        tags = [f"#{tag.strip().removeprefix('#')}" for tag in args]
        return ExecutionResult(
            success=True,
            insert_content=" ".join(tags) + " ",
            message=f"Added {len(tags)} tag(s)",
        )

    async def tag_autocomplete(args: list[str], context: CommandContext) -> list[str]:
        if not args:
            return []

        partial = args[-1].lower().removeprefix("#")
        known = await maybe_await(services.tags.list_all_tags())
        return [
            tag.removeprefix("#") for tag in known if partial in tag.lower()
        ][:MAX_PROVIDER_SUGGESTIONS]

    registry.register(
        Command(
            name="tag",
            aliases=["t"],
            description="Add tags to your note",
            category=CommandCategory.TAG,
            usage=f"{marker}tag <tag1> [tag2] [tag3] ...",
            arguments=[CommandArgument("tags", "One or more tags to add (without #)", required=True)],
            validate=tag_validate,
            execute=tag_handler,
            autocomplete=tag_autocomplete,
        )
    )


def register_notebook_commands(
    registry: CommandRegistry, services: CommandServices, marker: str = COMMAND_MARKER
) -> None:
    """Register ``/notebook`` for switching the active notebook.

    A successful switch also updates ``context.notebook_id`` so later
    commands in the same session see the new notebook.
    """

    def notebook_validate(args: list[str], context: CommandContext) -> ValidationResult:
        if not args:
            return ValidationResult.fail(
                f"Please provide a notebook name. Usage: {marker}notebook <name>"
            )
        return ValidationResult.ok()

    async def notebook_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        wanted = " ".join(args)
        notebooks = await maybe_await(services.notebooks.list_notebooks())

        match = next((nb for nb in notebooks if nb.name.lower() == wanted.lower()), None)
        if match is None:
            similar = [nb.name for nb in notebooks if wanted.lower() in nb.name.lower()]
            message = f'Notebook "{wanted}" not found.'
            if similar:
                message += f" Did you mean: {', '.join(similar)}?"
            return ExecutionResult(success=False, message=message)

        await maybe_await(services.notebooks.set_active_notebook(match.id))
        context.notebook_id = match.id
        return ExecutionResult(
            success=True, message=f"Switched to notebook: {match.name}", clear_input=True
        )

    async def notebook_autocomplete(args: list[str], context: CommandContext) -> list[str]:
        if not args:
            return []

        query = " ".join(args).lower()
        notebooks = await maybe_await(services.notebooks.list_notebooks())
        return [nb.name for nb in notebooks if query in nb.name.lower()][:MAX_PROVIDER_SUGGESTIONS]

    registry.register(
        Command(
            name="notebook",
            aliases=["nb", "switch"],
            description="Switch to a different notebook",
            category=CommandCategory.NOTEBOOK,
            usage=f"{marker}notebook <notebook-name>",
            arguments=[CommandArgument("notebook", "Name of the notebook to switch to", required=True)],
            validate=notebook_validate,
            execute=notebook_handler,
            autocomplete=notebook_autocomplete,
        )
    )


def register_search_commands(
    registry: CommandRegistry, services: CommandServices, marker: str = COMMAND_MARKER
) -> None:
    """Register ``/search``; a single ``#tag`` argument searches by tag instead of text."""

    def search_validate(args: list[str], context: CommandContext) -> ValidationResult:
        if not args:
            return ValidationResult.fail(
                f"Please provide a search query. Usage: {marker}search <query>"
            )
        return ValidationResult.ok()

    async def search_handler(args: list[str], context: CommandContext) -> ExecutionResult:
        if len(args) == 1 and args[0].startswith("#") and len(args[0]) > 1:
            query = args[0]
            notes = await maybe_await(
                services.search.search_by_tag(context.vault_path, args[0][1:])
            )
        else:
            query = " ".join(args)
            notes = await maybe_await(services.search.search_notes(context.vault_path, query))

        if not notes:
            return ExecutionResult(
                success=True, message=f'No notes found matching "{query}"', clear_input=True
            )

        return ExecutionResult(
            success=True,
            message=f'Found {len(notes)} note(s) matching "{query}"',
            clear_input=True,
        )

    registry.register(
        Command(
            name="search",
            aliases=["find", "s"],
            description="Search notes by query or #tag",
            category=CommandCategory.SEARCH,
            usage=f"{marker}search <query>",
            arguments=[CommandArgument("query", "Search query, or a single #tag", required=True)],
            validate=search_validate,
            execute=search_handler,
        )
    )


def register_builtin_commands(
    registry: CommandRegistry, services: CommandServices, marker: str = COMMAND_MARKER
) -> CommandRegistry:
    """Register every built-in command category into ``registry``.

    :raises CommandCollisionError: If the registry already holds a
        conflicting name or alias
    """
    register_utility_commands(registry, services, marker)
    register_note_commands(registry, services, marker)
    register_tag_commands(registry, services, marker)
    register_notebook_commands(registry, services, marker)
    register_search_commands(registry, services, marker)
    logger.debug(f"Registered {len(registry)} built-in commands")
    return registry
