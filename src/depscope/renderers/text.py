"""Plain text and JSON dependency listings."""

import json

from ..graph.models import DependencyGraph
from .base import BaseRenderer, RenderedOutput


class TextRenderer(BaseRenderer):
    """One ``A --> B`` line per dependency, or a JSON document."""

    FORMATS = ("text", "json")

    def __init__(self, fmt: str = "text"):
        if fmt not in self.FORMATS:
            raise ValueError(f"Unknown text format: {fmt!r}. Choose from: {', '.join(self.FORMATS)}")
        self.fmt = fmt

    def render(self, graph: DependencyGraph) -> RenderedOutput:
        if self.fmt == "json":
            return RenderedOutput(self._json(graph), media_type="application/json", suffix=".json")
        lines = [
            f"{source.name} --> {target.name}"
            for source, target, _ in graph.edges()
            if source.name != target.name
        ]
        return RenderedOutput("".join(line + "\n" for line in lines))

    @staticmethod
    def _json(graph: DependencyGraph) -> str:
        output = {
            "entities": [{"name": e.name, "kind": e.kind.value} for e in graph.entities],
            "dependencies": [
                {"from": source.name, "to": target.name, "weight": weight}
                for source, target, weight in graph.edges()
            ],
        }
        return json.dumps(output, indent=2) + "\n"
