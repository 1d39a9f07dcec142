"""Command objects: a graph, a deferred post-processor and a renderer."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional

from ..graph.filters import GraphTransform, identity
from ..graph.models import DependencyGraph
from ..renderers.base import BaseRenderer


@dataclass(frozen=True)
class CommandOutcome:
    """What a command produced: stdout text, a diagnostic and an exit code."""

    output: str = ""
    exit_code: int = 0
    error: str = ""


class Command(ABC):
    """An executable binding of graph, post-processor and renderer."""

    name: ClassVar[str]
    help: ClassVar[str] = ""

    def __init__(
        self,
        graph: DependencyGraph,
        post_processor: GraphTransform = identity,
        renderer: Optional[BaseRenderer] = None,
    ):
        self.graph = graph
        self.post_processor = post_processor
        self.renderer = renderer

    @classmethod
    def create(
        cls,
        graph: DependencyGraph,
        post_processor: GraphTransform,
        renderer: BaseRenderer,
        writer: Any = None,
    ) -> "Command":
        return cls(graph, post_processor, renderer)

    def rendered_graph(self) -> DependencyGraph:
        return self.post_processor(self.graph)

    @abstractmethod
    def execute(self, options: Mapping[str, Any]) -> CommandOutcome:
        """Run the command with the parsed options."""
