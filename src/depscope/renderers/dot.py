"""Graphviz dot renderer."""

from ..graph.models import DependencyGraph
from .base import BaseRenderer, RenderedOutput


def _quote(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DotRenderer(BaseRenderer):
    """Render dependencies as a dot digraph (``dot`` draws it)."""

    def render(self, graph: DependencyGraph) -> RenderedOutput:
        lines = ["digraph generated_by_depscope {"]
        for source, target, weight in graph.edges():
            if source.name == target.name:
                continue
            attributes = f" [weight={weight}]" if weight > 1 else ""
            lines.append(f"  {_quote(source.name)} -> {_quote(target.name)}{attributes};")
        lines.append("}")
        return RenderedOutput(
            content="\n".join(lines) + "\n",
            media_type="text/vnd.graphviz",
            tool="dot",
            suffix=".dot",
        )
