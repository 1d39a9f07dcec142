"""Analysis commands: uml, dot, dsm, text and metrics.

Every command shares the source and filter options; the command specific
options come after them. The function bodies only hand the parsed context
to the dispatcher.
"""

import typer

from . import app
from ._common import (
    ConfigOpt,
    DepthOpt,
    DsmFormat,
    DynamicOpt,
    ExcludeRegexOpt,
    FilterFromOpt,
    FilterNamespaceOpt,
    InternalsOpt,
    MetricsFormat,
    NoClassesOpt,
    NoExternalsOpt,
    OutputOpt,
    QuietOpt,
    SourceArg,
    TextFormat,
    VerboseOpt,
    run_analysis,
)


@app.command(rich_help_panel="Analysis")
def uml(
    ctx: typer.Context,
    source: SourceArg,
    output: OutputOpt,
    keep_uml: bool = typer.Option(
        False, "--keep-uml", help="Keep the generated .puml file next to the image"
    ),
    dynamic: DynamicOpt = None,
    internals: InternalsOpt = False,
    no_externals: NoExternalsOpt = False,
    filter_from: FilterFromOpt = None,
    depth: DepthOpt = 0,
    exclude_regex: ExcludeRegexOpt = None,
    no_classes: NoClassesOpt = False,
    filter_namespace: FilterNamespaceOpt = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
):
    """
    Generate a UML class diagram with PlantUML.

    [bold cyan]Examples:[/bold cyan]

      depscope uml src/ -o deps.png
      depscope uml src/ -o deps.puml --no-externals
    """
    raise typer.Exit(run_analysis(ctx))


@app.command(rich_help_panel="Analysis")
def dot(
    ctx: typer.Context,
    source: SourceArg,
    output: OutputOpt,
    keep_dot: bool = typer.Option(
        False, "--keep-dot", help="Keep the generated .dot file next to the image"
    ),
    dynamic: DynamicOpt = None,
    internals: InternalsOpt = False,
    no_externals: NoExternalsOpt = False,
    filter_from: FilterFromOpt = None,
    depth: DepthOpt = 0,
    exclude_regex: ExcludeRegexOpt = None,
    no_classes: NoClassesOpt = False,
    filter_namespace: FilterNamespaceOpt = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
):
    """
    Generate a dependency graph image with Graphviz dot.

    [bold cyan]Examples:[/bold cyan]

      depscope dot src/ -o deps.svg --depth 2
      depscope dot src/ -o deps.dot --no-classes
    """
    raise typer.Exit(run_analysis(ctx))


@app.command(rich_help_panel="Analysis")
def dsm(
    ctx: typer.Context,
    source: SourceArg,
    fmt: DsmFormat = typer.Option(DsmFormat.html, "--format", "-f", help="Output format"),
    dynamic: DynamicOpt = None,
    internals: InternalsOpt = False,
    no_externals: NoExternalsOpt = False,
    filter_from: FilterFromOpt = None,
    depth: DepthOpt = 0,
    exclude_regex: ExcludeRegexOpt = None,
    no_classes: NoClassesOpt = False,
    filter_namespace: FilterNamespaceOpt = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
):
    """
    Print a dependency structure matrix (HTML or CSV).

    [bold cyan]Examples:[/bold cyan]

      depscope dsm src/ > dsm.html
      depscope dsm src/ --format csv --depth 1
    """
    raise typer.Exit(run_analysis(ctx))


@app.command(rich_help_panel="Analysis")
def text(
    ctx: typer.Context,
    source: SourceArg,
    fmt: TextFormat = typer.Option(TextFormat.text, "--format", "-f", help="Output format"),
    dynamic: DynamicOpt = None,
    internals: InternalsOpt = False,
    no_externals: NoExternalsOpt = False,
    filter_from: FilterFromOpt = None,
    depth: DepthOpt = 0,
    exclude_regex: ExcludeRegexOpt = None,
    no_classes: NoClassesOpt = False,
    filter_namespace: FilterNamespaceOpt = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
):
    """
    Print dependencies as text, one edge per line.

    [bold cyan]Examples:[/bold cyan]

      depscope text src/
      depscope text src/ --dynamic calls.tsv --format json
    """
    raise typer.Exit(run_analysis(ctx))


@app.command(rich_help_panel="Analysis")
def metrics(
    ctx: typer.Context,
    source: SourceArg,
    fmt: MetricsFormat = typer.Option(MetricsFormat.rich, "--format", "-f", help="Output format"),
    dynamic: DynamicOpt = None,
    internals: InternalsOpt = False,
    no_externals: NoExternalsOpt = False,
    filter_from: FilterFromOpt = None,
    depth: DepthOpt = 0,
    exclude_regex: ExcludeRegexOpt = None,
    no_classes: NoClassesOpt = False,
    filter_namespace: FilterNamespaceOpt = None,
    config: ConfigOpt = None,
    verbose: VerboseOpt = False,
    quiet: QuietOpt = False,
):
    """
    Print coupling, instability and abstractness metrics.

    Metrics are computed on the pre-filtered graph; --no-classes and
    --filter-namespace do not apply.

    [bold cyan]Examples:[/bold cyan]

      depscope metrics src/
      depscope metrics src/ --format json
    """
    raise typer.Exit(run_analysis(ctx))
