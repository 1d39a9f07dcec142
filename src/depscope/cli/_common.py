"""Shared CLI helpers and option declarations."""

import re
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..config import DepscopeConfig, load_config
from ..dispatcher import AnalysisServices, Dispatcher
from ..exceptions import DepscopeError
from ..logging_config import setup_logging
from ..resolver import ParsedArguments, parsed_arguments

console = Console()


def _validate_regex(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    try:
        re.compile(value)
    except re.error as e:
        raise typer.BadParameter(f"invalid regular expression: {e}")
    return value


class DsmFormat(str, Enum):
    html = "html"
    csv = "csv"


class TextFormat(str, Enum):
    text = "text"
    json = "json"


class MetricsFormat(str, Enum):
    rich = "rich"
    json = "json"


# ── Options shared by every analysis command ──────────────────────

SourceArg = Annotated[
    list[str],
    typer.Argument(help="Python files, directories or glob patterns to analyse", show_default=False),
]
DynamicOpt = Annotated[
    Optional[Path],
    typer.Option(
        "--dynamic",
        help="Merge dependencies recorded in a call trace file (caller<TAB>callee[<TAB>count])",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
InternalsOpt = Annotated[
    bool, typer.Option("--internals", help="Keep dependencies on builtins and the standard library")
]
NoExternalsOpt = Annotated[
    bool, typer.Option("--no-externals", help="Drop dependencies on packages outside the sources")
]
FilterFromOpt = Annotated[
    Optional[str],
    typer.Option("--filter-from", help="Only keep dependencies originating in this namespace"),
]
DepthOpt = Annotated[
    int,
    typer.Option("--depth", "-d", help="Collapse names to this many namespace levels (0 = off)", min=0),
]
ExcludeRegexOpt = Annotated[
    Optional[str],
    typer.Option(
        "--exclude-regex",
        "-e",
        help="Drop dependencies where either side matches this regular expression",
        callback=_validate_regex,
    ),
]
NoClassesOpt = Annotated[
    bool, typer.Option("--no-classes", help="Show dependencies between namespaces only")
]
FilterNamespaceOpt = Annotated[
    Optional[str],
    typer.Option("--filter-namespace", help="Only show dependencies inside this namespace"),
]
ConfigOpt = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
]
VerboseOpt = Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose (DEBUG) logging")]
QuietOpt = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress all but ERROR logging")]

# ── Command specific options ──────────────────────────────────────

OutputOpt = Annotated[
    Path,
    typer.Option(
        "--output",
        "-o",
        help="Image to write; a .puml/.dot suffix writes the diagram source instead",
        dir_okay=False,
    ),
]


def resolve_config(parsed: ParsedArguments) -> DepscopeConfig:
    """Build configuration from CLI options."""
    # ctx.params holds click's raw string for path options
    config_file = parsed.options.get("config")
    return load_config(
        config_file=Path(config_file) if config_file else None,
        verbose=bool(parsed.options.get("verbose")),
        quiet=bool(parsed.options.get("quiet")),
    )


def run_analysis(ctx: typer.Context) -> int:
    """Phase 3 for the command in ``ctx``: analyse, filter, render."""
    parsed = parsed_arguments(ctx)
    verbose = bool(parsed.options.get("verbose"))
    logger = setup_logging(verbose=verbose, quiet=bool(parsed.options.get("quiet")))

    services = ctx.obj if isinstance(ctx.obj, AnalysisServices) else AnalysisServices()
    try:
        config = resolve_config(parsed)
        # Config files and DEPSCOPE_VERBOSITY may set verbosity without a flag
        verbose = config.verbosity == "verbose"
        logger = setup_logging(verbose=verbose, quiet=config.verbosity == "quiet")
        return Dispatcher(config, services, console).dispatch(parsed)
    except DepscopeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        return 1
    except Exception as e:
        logger.exception("Unexpected error")
        console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", soft_wrap=True)
        if verbose:
            console.print_exception()
        return 1
