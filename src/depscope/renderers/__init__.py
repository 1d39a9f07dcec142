"""Output renderers for depscope."""

from .base import BaseRenderer, RenderedOutput
from .dot import DotRenderer
from .dsm import DsmRenderer, build_matrix
from .external import DiagramWriter, ToolRunner
from .metrics import MetricsRenderer
from .plantuml import PlantUmlRenderer
from .text import TextRenderer


def get_renderer(name: str, fmt: str = "") -> BaseRenderer:
    """Get a renderer instance by command name.

    Args:
        name: One of "uml", "dot", "dsm", "text", "metrics"
        fmt: Output format for renderers that support several

    Raises:
        ValueError: If name is not recognized
    """
    if name == "uml":
        return PlantUmlRenderer()
    if name == "dot":
        return DotRenderer()
    if name == "dsm":
        return DsmRenderer(fmt or "html")
    if name == "text":
        return TextRenderer(fmt or "text")
    if name == "metrics":
        return MetricsRenderer(fmt or "rich")
    raise ValueError(
        f"Unknown renderer: {name!r}. Choose from: dot, dsm, metrics, text, uml"
    )


__all__ = [
    "BaseRenderer",
    "DiagramWriter",
    "DotRenderer",
    "DsmRenderer",
    "MetricsRenderer",
    "PlantUmlRenderer",
    "RenderedOutput",
    "TextRenderer",
    "ToolRunner",
    "build_matrix",
    "get_renderer",
]
