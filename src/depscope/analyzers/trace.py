"""Dependencies observed at runtime, read from a call trace file.

Trace format, one call relation per line::

    # comment
    caller<TAB>callee[<TAB>count]

Names are dotted and fully qualified. Blank and comment lines are ignored,
lines with fewer than two columns are skipped. The optional count repeats
the relation.
"""

from pathlib import Path

from ..exceptions import TraceFileError
from ..graph.models import DependencyFact, DependencyGraph, Entity, EntityKind
from ..logging_config import get_logger

logger = get_logger(__name__)


class TraceAnalyzer:
    """Turn a call trace into a dependency graph."""

    def analyse(self, trace_file: Path) -> DependencyGraph:
        try:
            text = trace_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TraceFileError(trace_file, str(e))

        facts: list[DependencyFact] = []
        skipped = 0
        for lineno, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            columns = [c.strip() for c in raw.split("\t")]
            if len(columns) < 2:
                skipped += 1
                continue
            caller, callee = columns[0], columns[1]
            count = 1
            if len(columns) > 2 and columns[2]:
                try:
                    count = int(columns[2])
                except ValueError:
                    raise TraceFileError(
                        trace_file, f"line {lineno}: count must be an integer, got {columns[2]!r}"
                    )
            fact = DependencyFact(
                Entity(caller, EntityKind.guess(caller)), Entity(callee, EntityKind.guess(callee))
            )
            facts.extend([fact] * max(count, 0))

        if skipped:
            logger.debug(f"Skipped {skipped} malformed lines in {trace_file}")
        graph = DependencyGraph.build(facts)
        logger.info(f"Dynamic analysis: {graph.edge_count} dependencies from {trace_file}")
        return graph
