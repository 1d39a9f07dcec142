"""Commands that never analyse sources: help, list and test-features."""

from typing import Iterator, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..analyzers.static import StaticAnalyzer
from ..commands import TestFeaturesCommand
from . import app
from ._common import console


def _echo_help(command, ctx) -> None:
    # Rich help is printed directly and returns an empty string
    text = command.get_help(ctx)
    if text:
        typer.echo(text)


def find_command(root, name: str):
    """Look up a subcommand of the root group, or None.

    Typer may ship its own click, so the group is used through its
    ``get_command`` method rather than checked against a click class.
    """
    get_command = getattr(root.command, "get_command", None)
    if get_command is None:
        return None
    return get_command(root, name)


def visible_commands(root) -> Iterator[tuple[str, object]]:
    """Yield (name, command) for every subcommand that is not hidden."""
    list_names = getattr(root.command, "list_commands", None)
    if list_names is None:
        return
    for name in list_names(root):
        command = find_command(root, name)
        if command is None or getattr(command, "hidden", False):
            continue
        yield name, command


@app.command("help", rich_help_panel="Information")
def help_command(
    ctx: typer.Context,
    command: Optional[str] = typer.Argument(None, help="Command to describe"),
):
    """Show help for depscope or for one command."""
    root = ctx.find_root()
    if command is None:
        _echo_help(root.command, root)
        return

    target = find_command(root, command)
    if target is None:
        console.print(f"[red]Error:[/red] no such command '{escape(command)}'", soft_wrap=True)
        console.print(f"Run [bold]{root.info_name} list[/bold] to see the available commands.")
        raise typer.Exit(1)

    # Same context class as the running app, whichever click it comes from
    with type(root)(target, info_name=command, parent=root) as sub:
        _echo_help(target, sub)


@app.command("list", rich_help_panel="Information")
def list_commands(ctx: typer.Context):
    """List the available commands."""
    root = ctx.find_root()

    table = Table(title="depscope commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="bold")
    table.add_column("Description")
    for name, command in visible_commands(root):
        table.add_row(name, command.get_short_help_str(limit=80))
    console.print(table)


@app.command("test-features", rich_help_panel="Information")
def test_features():
    """Show which Python features produce dependencies."""
    outcome = TestFeaturesCommand(StaticAnalyzer()).execute({})
    console.out(outcome.output, end="", highlight=False)
    raise typer.Exit(outcome.exit_code)
