"""Commands whose rendered output goes straight to stdout."""

from typing import Any, Mapping

from ..graph.filters import identity
from .base import Command, CommandOutcome


class InlineCommand(Command):
    def execute(self, options: Mapping[str, Any]) -> CommandOutcome:
        return CommandOutcome(output=self.renderer.render(self.rendered_graph()).content)


class DsmCommand(InlineCommand):
    name = "dsm"
    help = "Print a dependency structure matrix (HTML or CSV)"


class TextCommand(InlineCommand):
    name = "text"
    help = "Print dependencies as text"


class MetricsCommand(InlineCommand):
    """Metrics work on the pre-filtered graph; post-filters do not apply."""

    name = "metrics"
    help = "Print coupling and abstractness metrics"

    @classmethod
    def create(cls, graph, post_processor, renderer, writer: Any = None) -> "MetricsCommand":
        return cls(graph, identity, renderer)
