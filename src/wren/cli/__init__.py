"""Command-line interface for Wren.

Commands:
    - compose: Interactive note composer with slash commands
    - run: Execute a single slash command and print the result
    - commands: List the available slash commands

Architecture:
    Uses Click for command-line parsing with a group-based structure.
    Each command is implemented in its own module and lazy-loaded so
    ``wren --help`` stays fast.
"""

from .main import cli, main

__all__ = ["cli", "main"]
