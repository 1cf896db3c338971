"""List the available slash commands."""

import click

from wren.cli import styles
from wren.commands.types import CommandCategory


@click.command()
@click.option(
    "--category",
    type=click.Choice([c.value for c in CommandCategory], case_sensitive=False),
    default=None,
    help="Only show commands in this category",
)
@click.option("--markdown", is_flag=True, help="Print the markdown index used by /help")
@click.pass_context
def commands(ctx, category, markdown):
    """List slash commands with their aliases and usage."""
    from wren.commands.help import build_help_table, render_command_index
    from wren.interfaces.cli.composer import create_composer_from_config

    obj = ctx.obj or {}
    composer = create_composer_from_config(obj.get("config_path"), console=styles.console)
    registry = composer.executor.registry

    if category:
        selected = registry.get_commands_by_category(CommandCategory(category.lower()))
    else:
        selected = registry.get_all_commands()

    if markdown:
        click.echo(render_command_index(selected, composer.marker))
    else:
        styles.console.print(build_help_table(selected, composer.marker))
