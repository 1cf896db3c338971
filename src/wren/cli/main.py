"""Main CLI entry point for Wren.

This module provides the main CLI group that organizes all wren commands
under the ``wren`` command namespace.

Performance Note: Subcommands are imported only when invoked, so
``wren --help`` does not load prompt_toolkit or the command system.
"""

import importlib
import sys

import click

from wren import __version__


class LazyGroup(click.Group):
    """Click group that lazily loads subcommands only when invoked."""

    commands_map = {
        "compose": "wren.cli.compose_cmd",
        "run": "wren.cli.run_cmd",
        "commands": "wren.cli.commands_cmd",
    }

    def get_command(self, ctx, cmd_name):
        """Lazily import and return the command when it's invoked."""
        if cmd_name not in self.commands_map:
            return None

        mod = importlib.import_module(self.commands_map[cmd_name])
        # Convention: the click command is named after the subcommand
        return getattr(mod, cmd_name)

    def list_commands(self, ctx):
        """Return list of available commands (for --help)."""
        return list(self.commands_map)


@click.group(cls=LazyGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="wren")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration file (default: CONFIG_FILE env var or ./config.yml)",
)
@click.option("--vault", type=click.Path(file_okay=False), default=None, help="Vault directory")
@click.option("--notebook", "-n", default=None, help="Notebook to start in")
@click.pass_context
def cli(ctx, config_path, vault, notebook):
    """Wren - notes with slash commands.

    Use 'wren COMMAND --help' for more information on a specific command.

    Examples:

    \b
      wren                            Start the composer
      wren compose -n Work            Start the composer in the Work notebook
      wren run "/timestamp iso"       Run one command and print the result
      wren commands                   List available slash commands
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["vault"] = vault
    ctx.obj["notebook"] = notebook

    try:
        from .styles import initialize_theme_from_config

        initialize_theme_from_config(config_path)
    except Exception:
        # Default theme is used; the CLI must work without a valid theme
        pass

    if ctx.invoked_subcommand is None:
        ctx.invoke(ctx.command.get_command(ctx, "compose"))


def main():
    """Entry point for the wren CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nGoodbye!", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
