"""One-shot command execution.

Runs a single slash command against a fresh session and prints what the
composer would have done with the result.
"""

import asyncio

import click

from wren.cli import styles


@click.command()
@click.argument("command_line", nargs=-1, required=True)
@click.pass_context
def run(ctx, command_line):
    """Execute one slash command and print the result.

    Quote the whole command to keep quoted arguments intact:

    \b
      wren run "/timestamp iso"
      wren run '/tag "work stuff" urgent'
      wren run /help tag

    Exits with status 1 if the command fails.
    """
    from wren.interfaces.cli.composer import create_composer_from_config

    obj = ctx.obj or {}
    composer = create_composer_from_config(
        obj.get("config_path"),
        vault_path=obj.get("vault"),
        notebook=obj.get("notebook"),
        console=styles.console,
    )

    text = " ".join(command_line)
    if not text.lstrip().startswith(composer.marker):
        text = composer.marker + text.lstrip()

    result = asyncio.run(composer.run_command(text))

    if result is None or not result.success:
        ctx.exit(1)

    if result.insert_content is not None:
        click.echo(composer.buffer, nl=not composer.buffer.endswith("\n"))
