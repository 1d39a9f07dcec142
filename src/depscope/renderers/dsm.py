"""Dependency structure matrix (DSM) renderer.

Row ``i``, column ``j`` holds the weight of the dependency of entity ``i``
on entity ``j``. The HTML output is self-contained, the CSV output is meant
for spreadsheets.
"""

import csv
import html
import io
from dataclasses import dataclass

import numpy as np

from ..graph.models import DependencyGraph
from .base import BaseRenderer, RenderedOutput


@dataclass
class DependencyStructureMatrix:
    labels: list[str]
    matrix: np.ndarray

    @property
    def size(self) -> int:
        return len(self.labels)

    @property
    def density(self) -> float:
        if self.size == 0:
            return 0.0
        return float(np.count_nonzero(self.matrix)) / (self.size * self.size)


def build_matrix(graph: DependencyGraph) -> DependencyStructureMatrix:
    labels = [entity.name for entity in graph.entities]
    position = {name: i for i, name in enumerate(labels)}
    matrix = np.zeros((len(labels), len(labels)), dtype=np.int64)
    for source, target, weight in graph.edges():
        matrix[position[source.name], position[target.name]] = weight
    return DependencyStructureMatrix(labels=labels, matrix=matrix)


_STYLE = """
table { border-collapse: collapse; font-family: monospace; font-size: 12px; }
th, td { border: 1px solid #ccc; padding: 2px 6px; text-align: center; }
th.row { text-align: left; white-space: nowrap; }
td.self { background: #eee; }
td.dep { background: #9ecae1; }
"""


class DsmRenderer(BaseRenderer):
    """Render the graph as an HTML table or CSV matrix."""

    FORMATS = ("html", "csv")

    def __init__(self, fmt: str = "html"):
        if fmt not in self.FORMATS:
            raise ValueError(f"Unknown DSM format: {fmt!r}. Choose from: {', '.join(self.FORMATS)}")
        self.fmt = fmt

    def render(self, graph: DependencyGraph) -> RenderedOutput:
        dsm = build_matrix(graph)
        if self.fmt == "csv":
            return RenderedOutput(self._csv(dsm), media_type="text/csv", suffix=".csv")
        return RenderedOutput(self._html(dsm), media_type="text/html", suffix=".html")

    @staticmethod
    def _csv(dsm: DependencyStructureMatrix) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow([""] + dsm.labels)
        for label, row in zip(dsm.labels, dsm.matrix):
            writer.writerow([label] + [int(v) for v in row])
        return output.getvalue()

    @staticmethod
    def _html(dsm: DependencyStructureMatrix) -> str:
        parts = [
            "<!DOCTYPE html>",
            '<html><head><meta charset="utf-8"><title>Dependency Structure Matrix</title>',
            f"<style>{_STYLE}</style></head><body>",
            "<table>",
            "<tr><th></th>" + "".join(f"<th>{i + 1}</th>" for i in range(dsm.size)) + "</tr>",
        ]
        for i, label in enumerate(dsm.labels):
            cells = []
            for j in range(dsm.size):
                value = int(dsm.matrix[i, j])
                if i == j:
                    cells.append(f'<td class="self">{value or ""}</td>')
                elif value:
                    cells.append(f'<td class="dep">{value}</td>')
                else:
                    cells.append("<td></td>")
            parts.append(
                f'<tr><th class="row">{i + 1}: {html.escape(label)}</th>' + "".join(cells) + "</tr>"
            )
        parts.append("</table></body></html>")
        return "\n".join(parts) + "\n"
