"""Diagram commands that hand their markup to an external tool."""

from pathlib import Path
from typing import Any, Mapping

from ..exceptions import ExternalToolError
from ..logging_config import get_logger
from ..renderers.external import DiagramWriter
from .base import Command, CommandOutcome

logger = get_logger(__name__)

TOOL_FAILURE_EXIT_CODE = 3


class DiagramCommand(Command):
    keep_option: str = ""

    def __init__(self, graph, post_processor, renderer, writer: DiagramWriter):
        super().__init__(graph, post_processor, renderer)
        self.writer = writer

    @classmethod
    def create(cls, graph, post_processor, renderer, writer: Any = None) -> "DiagramCommand":
        return cls(graph, post_processor, renderer, writer)

    def execute(self, options: Mapping[str, Any]) -> CommandOutcome:
        destination = Path(options["output"])
        rendered = self.renderer.render(self.rendered_graph())
        try:
            written = self.writer.write(
                rendered, destination, keep_source=bool(options.get(self.keep_option))
            )
        except ExternalToolError as e:
            logger.debug(f"{self.name}: {e}")
            detail = f"\n{e.output}" if e.output else ""
            return CommandOutcome(
                error=f"{e.message}: {e.reason}{detail}", exit_code=TOOL_FAILURE_EXIT_CODE
            )
        return CommandOutcome(output=f"Wrote {written}\n")


class UmlCommand(DiagramCommand):
    name = "uml"
    help = "Generate a UML class diagram with PlantUML"
    keep_option = "keep_uml"


class DotCommand(DiagramCommand):
    name = "dot"
    help = "Generate a dependency graph image with Graphviz dot"
    keep_option = "keep_dot"
