"""PlantUML class diagram renderer."""

from ..graph.models import DependencyGraph, EntityKind
from .base import BaseRenderer, RenderedOutput

_DECLARATIONS = {
    EntityKind.INTERFACE: "interface",
    EntityKind.ABSTRACT_CLASS: "abstract class",
}


class PlantUmlRenderer(BaseRenderer):
    """Render dependencies as a PlantUML diagram (``plantuml`` draws it)."""

    def render(self, graph: DependencyGraph) -> RenderedOutput:
        lines = ["@startuml"]
        for entity in graph.entities:
            keyword = _DECLARATIONS.get(entity.kind)
            if keyword:
                lines.append(f"{keyword} {entity.name}")
        for source, target, _ in graph.edges():
            if source.name == target.name:
                continue
            lines.append(f"{source.name} --> {target.name}")
        lines.append("@enduml")
        return RenderedOutput(
            content="\n".join(lines) + "\n",
            media_type="text/x-plantuml",
            tool="plantuml",
            suffix=".puml",
        )
