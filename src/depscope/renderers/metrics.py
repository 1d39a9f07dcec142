"""Metrics report renderer (rich table or JSON)."""

import io
import json

from rich.console import Console
from rich.table import Table

from ..graph.models import DependencyGraph
from ..metrics import GraphMetrics, compute_metrics
from .base import BaseRenderer, RenderedOutput


class MetricsRenderer(BaseRenderer):
    FORMATS = ("rich", "json")

    def __init__(self, fmt: str = "rich", width: int = 120):
        if fmt not in self.FORMATS:
            raise ValueError(
                f"Unknown metrics format: {fmt!r}. Choose from: {', '.join(self.FORMATS)}"
            )
        self.fmt = fmt
        self.width = width

    def render(self, graph: DependencyGraph) -> RenderedOutput:
        metrics = compute_metrics(graph)
        if self.fmt == "json":
            return RenderedOutput(self._json(metrics), media_type="application/json", suffix=".json")
        return RenderedOutput(self._rich(metrics))

    @staticmethod
    def _json(metrics: GraphMetrics) -> str:
        output = {
            "summary": {
                "classes": metrics.class_count,
                "abstract_classes": metrics.abstract_class_count,
                "interfaces": metrics.interface_count,
                "functions": metrics.function_count,
                "abstractness": round(metrics.abstractness, 3),
            },
            "entities": {
                name: {
                    "kind": em.kind.value,
                    "afferent_coupling": em.afferent,
                    "efferent_coupling": em.efferent,
                    "instability": None if em.instability is None else round(em.instability, 3),
                }
                for name, em in sorted(metrics.entities.items())
            },
        }
        return json.dumps(output, indent=2) + "\n"

    def _rich(self, metrics: GraphMetrics) -> str:
        buffer = io.StringIO()
        console = Console(file=buffer, width=self.width, force_terminal=False, color_system=None)

        summary = Table(show_header=False, box=None)
        summary.add_column("Metric", style="bold")
        summary.add_column("Value", justify="right")
        summary.add_row("Classes", str(metrics.class_count))
        summary.add_row("Abstract classes", str(metrics.abstract_class_count))
        summary.add_row("Interfaces", str(metrics.interface_count))
        summary.add_row("Functions", str(metrics.function_count))
        summary.add_row("Abstractness", f"{metrics.abstractness:.3f}")
        console.print(summary)
        console.print()

        table = Table(show_header=True)
        table.add_column("Entity", style="cyan")
        table.add_column("Kind")
        table.add_column("Ca", justify="right")
        table.add_column("Ce", justify="right")
        table.add_column("Instability", justify="right")
        for name in sorted(metrics.entities):
            em = metrics.entities[name]
            instability = "-" if em.instability is None else f"{em.instability:.2f}"
            table.add_row(name, em.kind.value, str(em.afferent), str(em.efferent), instability)
        console.print(table)
        return buffer.getvalue()
