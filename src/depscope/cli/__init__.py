"""CLI entry point: registers all subcommands."""

import sys
from typing import Optional, Sequence

import typer

from ..dispatcher import AnalysisServices
from ..resolver import RawInvocation, scan

app = typer.Typer(
    name="depscope",
    help="depscope - Dependency analysis and visualisation for Python code",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


# Import subcommands to register them
from .analyze import uml as _uml, dot as _dot, dsm as _dsm, text as _text, metrics as _metrics  # noqa: F401, E402
from .meta import help_command as _help, list_commands as _list, test_features as _features  # noqa: F401, E402


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Console script entry point.

    The raw arguments are scanned before any parsing so that ``-h`` works
    for every command and analysis collaborators are only created when the
    command needs them.
    """
    invocation = RawInvocation.from_argv(sys.argv if argv is None else argv)
    route = scan(invocation)
    services = AnalysisServices() if route.requires_analysis else None
    app(args=list(route.arguments), prog_name=invocation.program, obj=services)


__all__ = ["app", "main"]
