"""Interactive composer command.

Thin wrapper around :func:`wren.interfaces.cli.composer.run_composer`.
"""

import asyncio

import click

from wren.cli import styles
from wren.cli.styles import Styles


@click.command()
@click.option("--notebook", "-n", default=None, help="Notebook to start in (overrides the group option)")
@click.pass_context
def compose(ctx, notebook):
    """Start the interactive note composer.

    Lines starting with the command marker run slash commands; any other
    line is saved as a note in the active notebook.

    \b
      Tab      - Accept a suggestion
      Ctrl+L   - Clear screen
      Ctrl+D   - Exit
    """
    from wren.interfaces.cli.composer import create_composer_from_config, run_composer
    from wren.utils.config import get_command_settings

    obj = ctx.obj or {}
    config_path = obj.get("config_path")

    try:
        settings = get_command_settings(config_path)
        composer = create_composer_from_config(
            config_path,
            vault_path=obj.get("vault"),
            notebook=notebook or obj.get("notebook"),
            console=styles.console,
        )
        asyncio.run(run_composer(composer, settings))
    except KeyboardInterrupt:
        styles.console.print("\nGoodbye!", style=Styles.WARNING)
        raise click.Abort()
    except (OSError, ValueError, KeyError) as e:
        styles.console.print(f"Error: {e}", style=Styles.ERROR, markup=False)
        raise click.Abort()
