"""
Command Executor

Orchestrates a single submission: tokenize, look up, validate, execute,
record. Anything structurally wrong with the invocation (empty, unknown,
invalid) comes back as a failed ExecutionResult the UI can render inline.
Only a handler that raises produces an exception, a CommandExecutionError,
and only after the failure has been recorded in history.
"""

import inspect
import time
from typing import Any

from wren.utils.logger import get_logger

from .history import CommandHistory
from .registry import CommandRegistry
from .tokenizer import COMMAND_MARKER, tokenize
from .types import (
    CommandContext,
    CommandExecutionError,
    ExecutionResult,
    FailureReason,
    ValidationResult,
)

logger = get_logger("commands")


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if a hook returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value


class CommandExecutor:
    """Runs raw command strings against a registry.

    :param registry: Commands available to this session
    :type registry: CommandRegistry
    :param history: Log receiving one entry per executed handler
    :type history: CommandHistory
    :param marker: Leading command marker stripped by the tokenizer
    :type marker: str

    Examples:
        Execute a command::

            executor = CommandExecutor(registry, CommandHistory())
            result = await executor.execute('/tag "work stuff" urgent', context)
            if not result.success:
                show_inline_error(result.message)
    """

    def __init__(
        self,
        registry: CommandRegistry,
        history: CommandHistory | None = None,
        marker: str = COMMAND_MARKER,
    ):
        self.registry = registry
        self.history = history if history is not None else CommandHistory()
        self.marker = marker

    async def execute(self, raw: str, context: CommandContext) -> ExecutionResult:
        """Execute a command from a raw input string.

        :raises CommandExecutionError: If the command handler raised
        """
        invocation = tokenize(raw, self.marker)

        if invocation.is_empty:
            return ExecutionResult.rejected(FailureReason.EMPTY_INVOCATION, "No command specified")

        command = self.registry.get_command(invocation.name)
        if command is None:
            logger.debug(f"Unknown command: {self.marker}{invocation.name}")
            return ExecutionResult.rejected(
                FailureReason.UNKNOWN_COMMAND,
                f"Unknown command: {self.marker}{invocation.name}. "
                f"Type {self.marker}help to see available commands.",
            )

        if command.validate is not None:
            validation: ValidationResult = await maybe_await(
                command.validate(invocation.args, context)
            )
            if not validation.valid:
                return ExecutionResult.rejected(
                    FailureReason.VALIDATION_FAILED,
                    validation.error or "Invalid command arguments",
                )

        start = time.perf_counter()
        try:
            result: ExecutionResult = await maybe_await(command.execute(invocation.args, context))
        except Exception as e:
            self.history.append(raw, success=False)
            logger.error(f"/{command.name} failed: {e}")
            raise CommandExecutionError(
                f"Failed to execute /{command.name}: {e}", command.name, invocation.args
            ) from e

        self.history.append(raw, success=result.success)
        logger.debug(f"/{command.name} finished in {(time.perf_counter() - start) * 1000:.1f} ms")
        return result
