"""Base renderer interface for depscope output."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..graph.models import DependencyGraph


@dataclass(frozen=True)
class RenderedOutput:
    """Rendered content.

    ``tool`` names the external binary that still has to turn ``content``
    into the final artefact (an image); None means the content is final.
    """

    content: str
    media_type: str = "text/plain"
    tool: Optional[str] = None
    suffix: str = ".txt"


class BaseRenderer(ABC):
    """Abstract base class for graph renderers."""

    @abstractmethod
    def render(self, graph: DependencyGraph) -> RenderedOutput:
        """Return the rendered representation of ``graph``."""
