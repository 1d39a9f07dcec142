"""Phase 3 of a run: build the graph, bind the command, execute it.

The dispatcher is only reached for commands that need analysis. It locates
sources, runs static analysis, optionally merges a runtime trace, applies
the pre-filters and hands the command the graph together with the deferred
post-filters and a renderer.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.console import Console

from .analyzers.locator import find_source_files
from .analyzers.static import AnalysisResult, StaticAnalyzer
from .analyzers.trace import TraceAnalyzer
from .commands import ANALYSIS_COMMANDS, Command
from .config import DepscopeConfig
from .graph.filters import post_filters, pre_filters
from .graph.models import MergePolicy
from .logging_config import get_logger
from .renderers import DiagramWriter, ToolRunner, get_renderer
from .resolver import ParsedArguments

logger = get_logger(__name__)

SYNTAX_ERROR_EXIT_CODE = 1
SYNTAX_ERROR_MESSAGE = (
    "Sorry, we could not analyse your dependencies, "
    "because the sources contain syntax errors:"
)

SourceLocator = Callable[[Sequence[str], DepscopeConfig], list[Path]]


@dataclass
class AnalysisServices:
    """Collaborators used in phase 3; replaced by fakes in tests."""

    locate: SourceLocator = find_source_files
    static_analyzer: StaticAnalyzer = field(default_factory=StaticAnalyzer)
    trace_analyzer: TraceAnalyzer = field(default_factory=TraceAnalyzer)
    runner: Optional[ToolRunner] = None


class Dispatcher:
    def __init__(
        self,
        config: DepscopeConfig,
        services: Optional[AnalysisServices] = None,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.services = services or AnalysisServices()
        self.console = console or Console()

    def analyse(self, parsed: ParsedArguments) -> AnalysisResult:
        """Static analysis, optional dynamic merge, then pre-filters."""
        files = self.services.locate(parsed.positionals, self.config)
        result = self.services.static_analyzer.analyse(files)
        if not result.ok:
            return result

        graph = result.graph
        dynamic = parsed.options.get("dynamic")
        if dynamic:
            traced = self.services.trace_analyzer.analyse(Path(dynamic))
            graph = graph.merge(traced, MergePolicy(self.config.merge_policy))
            logger.debug(f"Merged dynamic dependencies: {graph.edge_count} edges")

        filtered = pre_filters(parsed.filter_options())(graph)
        logger.info(f"Pre-filtered graph: {filtered.edge_count} of {graph.edge_count} edges")
        return AnalysisResult.success(filtered)

    def create_command(self, parsed: ParsedArguments, result: AnalysisResult) -> Command:
        command_cls = ANALYSIS_COMMANDS[parsed.command]
        renderer = get_renderer(parsed.command, str(parsed.options.get("fmt") or ""))
        writer = DiagramWriter(
            self.services.runner or ToolRunner(timeout=self.config.tool_timeout_seconds),
            {"plantuml": self.config.plantuml_binary, "dot": self.config.dot_binary},
        )
        return command_cls.create(
            result.graph, post_filters(parsed.filter_options()), renderer, writer
        )

    def dispatch(self, parsed: ParsedArguments) -> int:
        """Run ``parsed.command`` end to end and return the process exit code."""
        result = self.analyse(parsed)
        if not result.ok:
            self.console.print(
                f"{SYNTAX_ERROR_MESSAGE}\n\n{result.error}",
                style="red",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return SYNTAX_ERROR_EXIT_CODE

        command = self.create_command(parsed, result)
        outcome = command.execute(parsed.options)
        if outcome.output:
            self.console.out(outcome.output, end="", highlight=False)
        if outcome.error:
            self.console.print(outcome.error, style="red", markup=False, highlight=False, soft_wrap=True)
        return outcome.exit_code
