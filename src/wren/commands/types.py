"""
Type Definitions for the Slash Command System

This module provides the foundational types for Wren's slash command system:
the command definition contract that every built-in or plugin command
implements, the context handed to command hooks, and the structured results
the host composer applies.

Architecture:
    - CommandCategory: Grouping used by help output and registry filtering
    - CommandArgument: Documentation-only argument description
    - CommandContext: The only ambient state a command receives
    - ValidationResult: Outcome of a command's precondition check
    - ExecutionResult: Side effects for the host to perform
    - Command: Complete command definition with hooks and metadata
    - Invocation / HistoryEntry: Transient parse output and history records
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class CommandCategory(Enum):
    """Categories of slash commands for organization and help output.

    Categories:
        NOTE: Content insertion into the current note (todo, template)
        NOTEBOOK: Notebook navigation
        SEARCH: Note lookup
        TAG: Tagging of the current note
        SYNC: Synchronization control
        UTILITY: General helpers (help, ping, timestamp, reminder)
        CUSTOM: User-defined extensions
    """

    NOTE = "note"
    NOTEBOOK = "notebook"
    SEARCH = "search"
    TAG = "tag"
    SYNC = "sync"
    UTILITY = "utility"
    CUSTOM = "custom"


class FailureReason(Enum):
    """Why an invocation was rejected before its handler ran."""

    EMPTY_INVOCATION = "empty_invocation"
    UNKNOWN_COMMAND = "unknown_command"
    VALIDATION_FAILED = "validation_failed"


@dataclass
class CommandArgument:
    """Description of one positional argument, used for help text only.

    The tokenizer never enforces argument specs; commands that need checks
    implement ``validate``.
    """

    name: str
    description: str
    required: bool = False
    default: str | None = None


@dataclass
class CommandContext:
    """Execution context handed to every validate/execute/autocomplete call.

    :param notebook_id: Identifier of the active notebook, if any
    :type notebook_id: Optional[str]
    :param vault_path: Root path of the active storage vault, if any
    :type vault_path: Optional[str]

    .. note::
       Nothing else is implicitly available. Commands reach collaborators
       through the services injected when they were constructed.
    """

    notebook_id: str | None = None
    vault_path: str | None = None


@dataclass
class ValidationResult:
    """Outcome of a command's precondition check."""

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


@dataclass
class ExecutionResult:
    """Structured outcome of running a command.

    The executor never touches storage itself; every side effect is
    described here and performed by the host.

    :param success: Whether the command succeeded
    :param message: Optional user-facing message
    :param insert_content: Replacement for the live input buffer
    :param clear_input: Whether the host should empty the input buffer
    :param create_note: Whether the host should persist ``note_content`` as a new note
    :param note_content: Body of the note to create
    :param failure: Set when the invocation was rejected before execution
    """

    success: bool
    message: str | None = None
    insert_content: str | None = None
    clear_input: bool = False
    create_note: bool = False
    note_content: str | None = None
    failure: FailureReason | None = None

    @classmethod
    def rejected(cls, reason: FailureReason, message: str) -> "ExecutionResult":
        return cls(success=False, message=message, failure=reason)


# Hooks may be plain functions or coroutine functions.
ExecuteHook = Callable[[list[str], CommandContext], Union[ExecutionResult, Awaitable[ExecutionResult]]]
ValidateHook = Callable[
    [list[str], CommandContext], Union[ValidationResult, Awaitable[ValidationResult]]
]
AutocompleteHook = Callable[[list[str], CommandContext], Union[list[str], Awaitable[list[str]]]]


@dataclass
class Command:
    """Complete definition of a slash command.

    Command Lifecycle:

    1. **Definition**: Command created with required fields and optional metadata
    2. **Registration**: Registered once in a CommandRegistry at process start
    3. **Discovery**: Found by name or alias, listed by category
    4. **Validation**: Optional ``validate`` hook runs before execution
    5. **Execution**: ``execute`` produces an ExecutionResult
    6. **Completion**: Optional ``autocomplete`` hook suggests argument values

    :param name: Canonical name, unique case-insensitively within a registry
    :type name: str
    :param description: Brief description for help text and suggestions
    :type description: str
    :param category: Grouping for help output and filtering
    :type category: CommandCategory
    :param execute: Handler returning an ExecutionResult (sync or async)
    :type execute: ExecuteHook
    :param aliases: Alternative names, case-insensitive
    :type aliases: List[str]
    :param usage: Usage template, e.g. ``/reminder <time> <message>``
    :type usage: Optional[str]
    :param arguments: Argument specs for help text
    :type arguments: List[CommandArgument]
    :param validate: Precondition check run before execute
    :type validate: Optional[ValidateHook]
    :param autocomplete: Argument suggestion provider
    :type autocomplete: Optional[AutocompleteHook]
    :param enabled: Disabled commands resolve but are hidden from listings
    :type enabled: bool

    Examples:
        Simple command definition::

            command = Command(
                name="ping",
                description="Test if commands are working",
                category=CommandCategory.UTILITY,
                execute=lambda args, ctx: ExecutionResult(success=True, message="Pong"),
            )
    """

    name: str
    description: str
    category: CommandCategory
    execute: ExecuteHook

    aliases: list[str] = field(default_factory=list)
    usage: str | None = None
    arguments: list[CommandArgument] = field(default_factory=list)

    validate: ValidateHook | None = None
    autocomplete: AutocompleteHook | None = None

    enabled: bool = True

    def __post_init__(self):
        """Fill in the usage template when none was given."""
        if self.usage is None:
            placeholders = []
            for arg in self.arguments:
                placeholders.append(f"<{arg.name}>" if arg.required else f"[{arg.name}]")
            self.usage = " ".join([f"/{self.name}", *placeholders])

    @property
    def key(self) -> str:
        """Registry key: the lower-cased canonical name."""
        return self.name.lower()

    def all_names(self) -> list[str]:
        """Canonical name followed by aliases, lower-cased."""
        return [self.key, *(alias.lower() for alias in self.aliases)]

    def usage_placeholders(self) -> list[str]:
        """Argument placeholders from the usage template, e.g. ``['<time>', '<message>']``."""
        return self.usage.split()[1:] if self.usage else []


@dataclass(frozen=True)
class Invocation:
    """The (name, args) pair parsed from one raw input string."""

    name: str
    args: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.name


@dataclass(frozen=True)
class HistoryEntry:
    """One past invocation."""

    command: str
    timestamp: float
    success: bool


class CommandExecutionError(Exception):
    """Raised when a command handler itself fails.

    Carries the command name and arguments so callers can tell an
    unexpected exception apart from a structured failure result.
    """

    def __init__(self, message: str, command_name: str, args: list[str]):
        super().__init__(message)
        self.command_name = command_name
        self.command_args = list(args)

    def to_dict(self) -> dict[str, Any]:
        return {"message": str(self), "command": self.command_name, "args": self.command_args}


class CommandCollisionError(ValueError):
    """Raised when a command name or alias is already claimed in a registry."""

    def __init__(self, name: str, claimed_by: str):
        super().__init__(f"'{name}' is already claimed by command /{claimed_by}")
        self.name = name
        self.claimed_by = claimed_by
