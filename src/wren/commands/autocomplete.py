"""
Autocomplete Engine for the Command Input

Keeps the suggestion panel consistent with the live input string. Every
change to the input calls :meth:`AutocompleteEngine.update`, which
recomputes state synchronously:

    IDLE           input is not a command (no marker), or nothing to suggest
    COMMAND_NAME   marker typed, no whitespace yet: filter commands by prefix
    ARGUMENTS      first token resolves to a command: ask its provider for
                   values matching the argument being typed

Argument providers may be asynchronous. Each update bumps a generation
counter; an async response is applied only if the counter still matches the
one captured at dispatch, so a slow reply to an old keystroke can never
overwrite fresher suggestions.
"""

import asyncio
import inspect
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from wren.utils.logger import get_logger

from .registry import CommandRegistry
from .tokenizer import COMMAND_MARKER, split_partial
from .types import Command, CommandContext

logger = get_logger("autocomplete")

DEFAULT_MAX_COMMAND_SUGGESTIONS = 6
DEFAULT_MAX_ARGUMENT_SUGGESTIONS = 5

_LAST_TOKEN = re.compile(r"\S+$")


class CompletionMode(Enum):
    """Which suggestion list the panel is showing."""

    IDLE = "idle"
    COMMAND_NAME = "command_name"
    ARGUMENTS = "arguments"


@dataclass(frozen=True)
class Suggestion:
    """One entry in the suggestion panel.

    For command-name suggestions ``value`` is the canonical name; for
    argument suggestions it is the provider's value.
    """

    value: str
    command: Command
    mode: CompletionMode


ContextProvider = Callable[[], CommandContext]


class AutocompleteEngine:
    """Reactive suggestion state for the command input.

    :param registry: Commands to complete against
    :type registry: CommandRegistry
    :param context: Current command context, or a callable returning it at
        dispatch time
    :type context: CommandContext | Callable[[], CommandContext]
    :param marker: Command marker character
    :param max_command_suggestions: Cap on command-name suggestions
    :param max_argument_suggestions: Cap on argument suggestions

    Examples:
        Driving the engine from an input widget::

            engine = AutocompleteEngine(registry, lambda: session.context)

            def on_change(text):
                engine.update(text)

            def on_key(key):
                handled, new_text = engine.handle_key(key)
                if new_text is not None:
                    widget.text = new_text
    """

    def __init__(
        self,
        registry: CommandRegistry,
        context: CommandContext | ContextProvider | None = None,
        marker: str = COMMAND_MARKER,
        max_command_suggestions: int = DEFAULT_MAX_COMMAND_SUGGESTIONS,
        max_argument_suggestions: int = DEFAULT_MAX_ARGUMENT_SUGGESTIONS,
    ):
        self.registry = registry
        self.marker = marker
        self.max_command_suggestions = max_command_suggestions
        self.max_argument_suggestions = max_argument_suggestions

        if context is None:
            context = CommandContext()
        if isinstance(context, CommandContext):
            fixed = context
            self._context_provider: ContextProvider = lambda: fixed
        else:
            self._context_provider = context

        self.text = ""
        self.mode = CompletionMode.IDLE
        self.suggestions: list[Suggestion] = []
        self.selected_index = 0
        self.current_command: Command | None = None
        self.generation = 0
        self._dismissed = False
        self._pending: set[asyncio.Task] = set()

    # ------------------------------------------------------------------
    # State recomputation
    # ------------------------------------------------------------------

    def update(self, text: str) -> asyncio.Task | None:
        """Recompute suggestions for new input text.

        Returns the task fetching async argument suggestions, if one was
        dispatched, so callers (and tests) can await it.
        """
        self.generation += 1
        self.text = text
        self._dismissed = False
        self.selected_index = 0

        parts = split_partial(text, self.marker)
        if parts is None:
            self._reset()
            return None

        if len(parts) == 1:
            self._show_command_names(parts[0])
            return None

        name, args = parts[0], parts[1:]
        command = self.registry.get_command(name, self.marker) if name else None
        if command is None:
            self._reset()
            return None

        self.mode = CompletionMode.ARGUMENTS
        self.current_command = command
        self.suggestions = []

        # An empty last token means the user is between arguments
        if command.autocomplete is None or not args[-1]:
            return None

        return self._request_arguments(command, args)

    def _reset(self) -> None:
        self.mode = CompletionMode.IDLE
        self.suggestions = []
        self.current_command = None

    def _show_command_names(self, prefix: str) -> None:
        self.mode = CompletionMode.COMMAND_NAME
        self.current_command = None
        matches = self.registry.match_prefix(prefix, limit=self.max_command_suggestions)
        self.suggestions = [Suggestion(cmd.name, cmd, CompletionMode.COMMAND_NAME) for cmd in matches]

    def _request_arguments(self, command: Command, args: list[str]) -> asyncio.Task | None:
        generation = self.generation
        try:
            outcome = command.autocomplete(args, self._context_provider())
        except Exception as e:
            logger.debug(f"Suggestion provider for /{command.name} failed: {e}")
            return None

        if not inspect.isawaitable(outcome):
            self._apply_arguments(command, outcome)
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No event loop for async suggestions from /{command.name}")
            if inspect.iscoroutine(outcome):
                outcome.close()
            return None

        task = loop.create_task(self._await_arguments(command, outcome, generation))
        # The loop keeps only weak references to tasks
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _await_arguments(
        self, command: Command, pending: Awaitable[list[str]], generation: int
    ) -> bool:
        """Apply an async provider's response if no newer input arrived meanwhile."""
        try:
            values = await pending
        except Exception as e:
            logger.debug(f"Suggestion provider for /{command.name} failed: {e}")
            values = []

        if generation != self.generation:
            logger.debug(
                f"Discarding stale suggestions for /{command.name} "
                f"(generation {generation}, current {self.generation})"
            )
            return False

        self._apply_arguments(command, values)
        return True

    def _apply_arguments(self, command: Command, values: list[str]) -> None:
        self.suggestions = [
            Suggestion(str(value), command, CompletionMode.ARGUMENTS)
            for value in list(values or [])[: self.max_argument_suggestions]
        ]
        self.selected_index = 0

    # ------------------------------------------------------------------
    # Panel state
    # ------------------------------------------------------------------

    @property
    def visible(self) -> bool:
        return bool(self.suggestions) and not self._dismissed

    @property
    def selected(self) -> Suggestion | None:
        if not self.visible:
            return None
        return self.suggestions[self.selected_index]

    def argument_hint(self) -> str | None:
        """Placeholder from the usage template for the argument being typed.

        ``/reminder 5m`` → ``<time>``; ``/reminder 5m `` → ``<message>``.
        """
        if self.mode is not CompletionMode.ARGUMENTS or self.current_command is None:
            return None

        placeholders = self.current_command.usage_placeholders()
        parts = split_partial(self.text, self.marker) or []
        index = len(parts) - 2
        if 0 <= index < len(placeholders):
            return placeholders[index]
        return None

    # ------------------------------------------------------------------
    # Keyboard interaction
    # ------------------------------------------------------------------

    def move_down(self) -> None:
        """Move the highlight down, cycling to the first entry at the end."""
        if self.visible:
            self.selected_index = (self.selected_index + 1) % len(self.suggestions)

    def move_up(self) -> None:
        """Move the highlight up, cycling to the last entry at the start."""
        if self.visible:
            self.selected_index = (self.selected_index - 1) % len(self.suggestions)

    def accept(self) -> str | None:
        """Return the input text produced by accepting the highlighted suggestion.

        The engine does not update itself; the host writes the returned text
        into the input and the resulting change event calls :meth:`update`.
        """
        suggestion = self.selected
        if suggestion is None:
            return None

        if suggestion.mode is CompletionMode.COMMAND_NAME:
            return f"{self.marker}{suggestion.command.name} "

        match = _LAST_TOKEN.search(self.text)
        head = self.text[: match.start()] if match else self.text
        return f"{head}{suggestion.value} "

    def dismiss(self) -> None:
        """Hide the panel until the input changes again."""
        self._dismissed = True

    def handle_key(self, key: str) -> tuple[bool, str | None]:
        """Dispatch a key press while the panel is visible.

        :param key: One of ``"up"``, ``"down"``, ``"tab"``, ``"escape"``
        :return: ``(handled, new_text)``; ``new_text`` is set only when Tab
            accepted a suggestion
        """
        if not self.visible:
            return False, None

        if key == "down":
            self.move_down()
        elif key == "up":
            self.move_up()
        elif key == "tab":
            return True, self.accept()
        elif key == "escape":
            self.dismiss()
        else:
            return False, None
        return True, None
