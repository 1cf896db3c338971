"""
Terminal Note Composer

The interface layer around the command interpreter. It owns the input
buffer and the current command context, submits each line to the
executor, and applies the returned ExecutionResult:

    - failure           show the message inline, keep the buffer
    - insert_content    replace the buffer (shown as the next prompt's text)
    - create_note       persist note_content in the active notebook
    - clear_input       empty the buffer

Lines that are not commands are saved as notes; a doubled marker
(``//like this``) saves the text with one marker removed.
"""

from collections.abc import Callable
from pathlib import Path

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from wren.cli.styles import Messages, Styles
from wren.cli.styles import console as themed_console
from wren.commands import (
    AutocompleteEngine,
    CommandContext,
    CommandExecutionError,
    CommandExecutor,
    CommandHistory,
    CommandRegistry,
    ExecutionResult,
    is_command_input,
    register_builtin_commands,
)
from wren.commands.completer import SlashCommandCompleter
from wren.commands.executor import maybe_await
from wren.services import CommandServices, InMemoryVault, Note
from wren.utils.config import CommandSettings, get_command_settings, get_config_value
from wren.utils.logger import get_logger

logger = get_logger("composer")

EXIT_WORDS = ("bye", "end")


class NoteComposer:
    """Input buffer and result application for one composer session.

    :param executor: Interpreter for command lines
    :type executor: CommandExecutor
    :param services: Collaborators used to persist plain notes and help output
    :type services: CommandServices
    :param context: Active notebook and vault; updated in place by commands
    :type context: CommandContext
    :param console: Console receiving messages and banners
    :type console: rich.console.Console

    Examples:
        Submitting lines programmatically::

            composer = NoteComposer(executor, services, CommandContext(notebook_id="Inbox"))
            await composer.submit("/todo milk eggs")
            composer.buffer            # "- [ ] milk\\n- [ ] eggs\\n"
            await composer.submit("Picked up groceries #errands")
    """

    def __init__(
        self,
        executor: CommandExecutor,
        services: CommandServices,
        context: CommandContext | None = None,
        console: Console | None = None,
    ):
        self.executor = executor
        self.services = services
        self.context = context if context is not None else CommandContext()
        self.console = console or themed_console
        self.buffer = ""

    @property
    def marker(self) -> str:
        return self.executor.marker

    async def submit(self, text: str) -> ExecutionResult | Note | None:
        """Handle one submitted line.

        Returns the command's ExecutionResult, the Note created from plain
        text, or None for blank input and commands whose handler raised.
        """
        if not text.strip():
            return None

        if is_command_input(text, self.marker):
            return await self.run_command(text)

        content = text.strip()
        if content.startswith(self.marker * 2):
            content = content[len(self.marker) :]

        note = await self.save_note(content)
        self.buffer = ""
        self.console.print(Messages.success(f"Saved note {note.id}"))
        return note

    async def run_command(self, text: str) -> ExecutionResult | None:
        """Execute a command line and apply its result.

        The buffer keeps the submitted text unless the result inserts or clears.
        """
        self.buffer = text
        try:
            result = await self.executor.execute(text, self.context)
        except CommandExecutionError as e:
            self.show_error_banner(e)
            return None

        await self.apply(result)
        return result

    async def apply(self, result: ExecutionResult) -> None:
        """Perform the side effects described by ``result``."""
        if not result.success:
            self.console.print(Messages.error(escape(result.message or "Command failed")))
            return

        if result.insert_content is not None:
            self.buffer = result.insert_content

        if result.create_note and result.note_content:
            note = await self.save_note(result.note_content)
            self.console.print(Markdown(result.note_content))
            logger.debug(f"Command output saved as {note.id}")

        if result.clear_input:
            self.buffer = ""

        if result.message:
            self.console.print(Messages.info(escape(result.message)))

    async def save_note(self, content: str) -> Note:
        return await maybe_await(
            self.services.notes.create_note(
                self.context.vault_path, self.context.notebook_id, content
            )
        )

    def show_error_banner(self, error: CommandExecutionError) -> None:
        """Render a handler failure distinctly from inline validation errors."""
        args = escape(" ".join(error.command_args))
        invocation = f"{self.marker}{error.command_name} {args}".rstrip()
        body = f"{escape(str(error))}\n\n[{Styles.DIM}]{invocation}[/{Styles.DIM}]"
        self.console.print(
            Panel(body, title="Command Error", border_style=Styles.ERROR, expand=False)
        )


def create_composer(
    settings: CommandSettings | None = None,
    vault_path: str | None = None,
    notebook: str | None = None,
    notebooks: list[str] | None = None,
    services: CommandServices | None = None,
    console: Console | None = None,
) -> NoteComposer:
    """Wire registry, executor and services into a composer.

    Without ``services`` an :class:`InMemoryVault` seeded with ``notebooks``
    (plus ``notebook`` if it is not among them) backs the session.
    """
    settings = settings or CommandSettings()

    if services is None:
        names = list(notebooks or [])
        if notebook and notebook not in names:
            names.append(notebook)
        vault = InMemoryVault(notebooks=names)
        if notebook:
            vault.set_active_notebook(notebook)
        services = CommandServices.from_backend(vault)

    registry = register_builtin_commands(CommandRegistry(), services, settings.marker)
    executor = CommandExecutor(
        registry, CommandHistory(max_size=settings.history_size), marker=settings.marker
    )
    context = CommandContext(notebook_id=notebook, vault_path=vault_path)
    return NoteComposer(executor, services, context, console=console)


def create_composer_from_config(
    config_path: str | None = None,
    vault_path: str | None = None,
    notebook: str | None = None,
    console: Console | None = None,
) -> NoteComposer:
    """Build a composer from ``config.yml``; explicit arguments override ``vault.*``."""
    settings = get_command_settings(config_path)
    vault_path = vault_path or get_config_value("vault.path", None, config_path)
    notebook = notebook or get_config_value("vault.notebook", None, config_path)
    notebooks = get_config_value("vault.notebooks", [], config_path) or []

    if vault_path is not None:
        vault_path = str(Path(vault_path).expanduser())

    return create_composer(
        settings, vault_path=vault_path, notebook=notebook, notebooks=notebooks, console=console
    )


def _create_key_bindings() -> KeyBindings:
    bindings = KeyBindings()

    @bindings.add("c-l")
    def _(event):
        """Clear the screen."""
        clear()

    return bindings


def _prompt_for(composer: NoteComposer) -> Callable[[], HTML]:
    def prompt() -> HTML:
        notebook = composer.context.notebook_id or "no notebook"
        return HTML("<b>{}</b> &gt; ").format(notebook)

    return prompt


async def run_composer(composer: NoteComposer, settings: CommandSettings | None = None) -> None:
    """Interactive prompt loop until Ctrl+D, Ctrl+C or an exit word.

    The autocomplete engine tracks the buffer for argument hints shown in the
    bottom toolbar; the prompt_toolkit completer provides the suggestion menu.
    """
    settings = settings or CommandSettings(marker=composer.marker)
    registry = composer.executor.registry

    engine = AutocompleteEngine(
        registry,
        lambda: composer.context,
        marker=settings.marker,
        max_command_suggestions=settings.max_command_suggestions,
        max_argument_suggestions=settings.max_argument_suggestions,
    )
    completer = SlashCommandCompleter(
        registry,
        lambda: composer.context,
        marker=settings.marker,
        max_command_suggestions=settings.max_command_suggestions,
        max_argument_suggestions=settings.max_argument_suggestions,
    )

    def bottom_toolbar():
        hint = engine.argument_hint()
        if engine.current_command is not None and hint:
            return f"{engine.current_command.usage}  ·  next: {hint}"
        return None

    session = PromptSession(
        history=InMemoryHistory(),
        completer=completer,
        complete_while_typing=True,
        complete_in_thread=False,
        key_bindings=_create_key_bindings(),
        bottom_toolbar=bottom_toolbar,
        mouse_support=False,
        reserve_space_for_menu=8,
    )
    session.default_buffer.on_text_changed += lambda buffer: engine.update(buffer.text)

    composer.console.print(
        f"[{Styles.HEADER}]Wren composer[/{Styles.HEADER}]  "
        f"[{Styles.DIM}]Type {settings.marker}help for commands, "
        f"{settings.marker * 2} to start a note with {settings.marker}, Ctrl+D to exit[/{Styles.DIM}]"
    )

    while True:
        try:
            text = await session.prompt_async(_prompt_for(composer), default=composer.buffer)
        except (KeyboardInterrupt, EOFError):
            break

        if text.strip().lower() in EXIT_WORDS:
            break

        try:
            await composer.submit(text)
        except (OSError, KeyError, ValueError) as e:
            composer.console.print(Messages.error(escape(str(e))))
            logger.exception("Failed to store note")

    composer.console.print(f"[{Styles.WARNING}]Goodbye![/{Styles.WARNING}]")
