"""
Command Completion for the Terminal Composer

Adapts the command registry to prompt_toolkit's Completer interface so the
terminal composer gets the same suggestions as the autocomplete panel:

    - Command names (canonical name or alias prefix) with descriptions
    - Argument values from the command's suggestion provider

Providers may be async; prompt_toolkit drives :meth:`get_completions_async`
when the session runs with ``complete_while_typing``. The synchronous path
skips async providers rather than blocking the event loop.
"""

import inspect
from collections.abc import AsyncGenerator, Callable, Iterable
from html import escape

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import HTML

from wren.cli.styles import get_active_theme
from wren.utils.logger import get_logger

from .autocomplete import DEFAULT_MAX_ARGUMENT_SUGGESTIONS, DEFAULT_MAX_COMMAND_SUGGESTIONS
from .registry import CommandRegistry
from .tokenizer import COMMAND_MARKER, split_partial
from .types import Command, CommandContext

logger = get_logger("autocomplete")


class SlashCommandCompleter(Completer):
    """prompt_toolkit completer backed by a :class:`CommandRegistry`.

    :param registry: Commands to complete against
    :param context: Command context, or a callable returning the current one
    :param marker: Command marker character

    Examples:
        CLI integration::

            completer = SlashCommandCompleter(registry, lambda: composer.context)
            session = PromptSession(completer=completer, complete_while_typing=True)
    """

    def __init__(
        self,
        registry: CommandRegistry,
        context: CommandContext | Callable[[], CommandContext] | None = None,
        marker: str = COMMAND_MARKER,
        max_command_suggestions: int = DEFAULT_MAX_COMMAND_SUGGESTIONS,
        max_argument_suggestions: int = DEFAULT_MAX_ARGUMENT_SUGGESTIONS,
    ):
        self.registry = registry
        self.marker = marker
        self.max_command_suggestions = max_command_suggestions
        self.max_argument_suggestions = max_argument_suggestions
        self._context = context if context is not None else CommandContext()

    @property
    def context(self) -> CommandContext:
        return self._context() if callable(self._context) else self._context

    def _split(self, text: str) -> tuple[str, Command | None, list[str]] | None:
        """Classify the text before the cursor.

        Returns ``(prefix, None, [])`` while the name is being typed,
        ``(name, command, args)`` while an argument is being typed, and None
        when there is nothing to complete.
        """
        parts = split_partial(text, self.marker)
        if parts is None:
            return None
        if len(parts) == 1:
            return parts[0], None, []

        name, args = parts[0], parts[1:]
        if not name or not args[-1]:
            return None

        command = self.registry.get_command(name, self.marker)
        if command is None or command.autocomplete is None:
            return None
        return name, command, args

    def _name_completions(self, prefix: str) -> Iterable[Completion]:
        theme = get_active_theme()
        for command in self.registry.match_prefix(prefix, limit=self.max_command_suggestions):
            name = f"{self.marker}{command.name}"
            color = theme.category_color(command.category.value)
            yield Completion(
                text=name + " ",
                start_position=-(len(prefix) + len(self.marker)),
                display=HTML(f'<style fg="{color}">{escape(name)}</style>'),
                display_meta=command.description,
            )

    def _argument_completions(self, values: list[str], partial: str) -> Iterable[Completion]:
        for value in list(values or [])[: self.max_argument_suggestions]:
            yield Completion(text=f"{value} ", start_position=-len(partial), display=str(value))

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        """Get completions for the text before the cursor."""
        split = self._split(document.text_before_cursor)
        if split is None:
            return

        prefix, command, args = split
        if command is None:
            yield from self._name_completions(prefix)
            return

        try:
            values = command.autocomplete(args, self.context)
        except Exception as e:
            logger.debug(f"Suggestion provider for /{command.name} failed: {e}")
            return

        if inspect.isawaitable(values):
            if inspect.iscoroutine(values):
                values.close()
            return

        yield from self._argument_completions(values, args[-1])

    async def get_completions_async(
        self, document: Document, complete_event: CompleteEvent
    ) -> AsyncGenerator[Completion, None]:
        """Async variant that awaits async suggestion providers."""
        split = self._split(document.text_before_cursor)
        if split is None:
            return

        prefix, command, args = split
        if command is None:
            for completion in self._name_completions(prefix):
                yield completion
            return

        try:
            values = command.autocomplete(args, self.context)
            if inspect.isawaitable(values):
                values = await values
        except Exception as e:
            logger.debug(f"Suggestion provider for /{command.name} failed: {e}")
            return

        for completion in self._argument_completions(values, args[-1]):
            yield completion
