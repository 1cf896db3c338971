"""
Pytest configuration and shared test utilities.

This module provides shared fixtures for all Wren tests: a fixed clock, an
in-memory vault, and a registry loaded with the built-in commands.
"""

from datetime import datetime, timezone

import pytest

from wren.commands import (
    Command,
    CommandCategory,
    CommandContext,
    CommandExecutor,
    CommandHistory,
    CommandRegistry,
    ExecutionResult,
    register_builtin_commands,
)
from wren.services import CommandServices, InMemoryVault
from wren.utils.config import reset_config

# Wednesday afternoon, UTC
FIXED_NOW = datetime(2024, 5, 1, 14, 30, 0, tzinfo=timezone.utc)


def make_command(name: str, **overrides) -> Command:
    """Factory for commands with minimal boilerplate.

    Examples:
        make_command("ping")
        make_command("tag", aliases=["t"], validate=lambda args, ctx: ...)
    """
    fields = {
        "description": f"The {name} command",
        "category": CommandCategory.UTILITY,
        "execute": lambda args, ctx: ExecutionResult(success=True, message=f"ran {name}"),
    }
    fields.update(overrides)
    return Command(name=name, **fields)


@pytest.fixture(autouse=True)
def _fresh_config():
    """Drop cached configuration between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def vault(clock):
    return InMemoryVault(notebooks=["Inbox", "Work", "Personal"], clock=clock)


@pytest.fixture
def services(vault, clock):
    return CommandServices.from_backend(vault, clock=clock)


@pytest.fixture
def context():
    return CommandContext(notebook_id="Inbox", vault_path="/tmp/vault")


@pytest.fixture
def registry(services):
    return register_builtin_commands(CommandRegistry(), services)


@pytest.fixture
def history():
    return CommandHistory(max_size=50, clock=lambda: 1000.0)


@pytest.fixture
def executor(registry, history):
    return CommandExecutor(registry, history)
