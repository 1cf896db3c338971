"""Slash Command System for Wren.

Interprets ``/name arg1 "arg two"`` input typed into the note composer:
tokenizes it, resolves the command by name or alias, validates, executes,
records history, and drives the keystroke-reactive suggestion panel.

Usage:
    from wren.commands import CommandExecutor, CommandRegistry, register_builtin_commands

    registry = register_builtin_commands(CommandRegistry(), services)
    executor = CommandExecutor(registry)
    result = await executor.execute("/tag work", context)
"""

from .autocomplete import AutocompleteEngine, CompletionMode, Suggestion
from .categories import (
    register_builtin_commands,
    register_note_commands,
    register_notebook_commands,
    register_search_commands,
    register_tag_commands,
    register_utility_commands,
)
from .executor import CommandExecutor
from .history import CommandHistory
from .registry import CommandRegistry
from .tokenizer import COMMAND_MARKER, is_command_input, split_partial, tokenize
from .types import (
    Command,
    CommandArgument,
    CommandCategory,
    CommandCollisionError,
    CommandContext,
    CommandExecutionError,
    ExecutionResult,
    FailureReason,
    HistoryEntry,
    Invocation,
    ValidationResult,
)

__all__ = [
    # Core system
    "CommandRegistry",
    "CommandExecutor",
    "CommandHistory",
    "AutocompleteEngine",
    "CompletionMode",
    "Suggestion",
    "tokenize",
    "is_command_input",
    "split_partial",
    "COMMAND_MARKER",
    # Types
    "Command",
    "CommandArgument",
    "CommandCategory",
    "CommandContext",
    "ExecutionResult",
    "FailureReason",
    "HistoryEntry",
    "Invocation",
    "ValidationResult",
    "CommandExecutionError",
    "CommandCollisionError",
    # Built-in command categories
    "register_builtin_commands",
    "register_utility_commands",
    "register_note_commands",
    "register_tag_commands",
    "register_notebook_commands",
    "register_search_commands",
]
