"""Coupling metrics over a dependency graph.

- Afferent Coupling (Ca): number of distinct entities depending on an entity
- Efferent Coupling (Ce): number of distinct entities an entity depends on
- Instability (I): Ce / (Ca + Ce), None if isolated
- Abstractness (A): (abstract classes + interfaces) / all class-like entities
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .graph.models import DependencyGraph, EntityKind


@dataclass
class EntityMetrics:
    name: str
    kind: EntityKind
    afferent: int = 0
    efferent: int = 0
    instability: Optional[float] = None


@dataclass
class GraphMetrics:
    class_count: int = 0
    abstract_class_count: int = 0
    interface_count: int = 0
    function_count: int = 0
    abstractness: float = 0.0
    entities: Dict[str, EntityMetrics] = field(default_factory=dict)


def compute_instability(ca: int, ce: int) -> Optional[float]:
    """Compute instability I = Ce / (Ca + Ce).

    Returns:
        Instability in [0, 1], or None if isolated (Ca=Ce=0)
    """
    total = ca + ce
    if total == 0:
        return None
    return ce / total


def compute_metrics(graph: DependencyGraph) -> GraphMetrics:
    metrics = GraphMetrics()
    # Self-edges do not count as coupling
    for entity in graph.entities:
        efferent = len(graph.dependencies_of(entity.name) - {entity.name})
        afferent = len(graph.dependents_of(entity.name) - {entity.name})
        metrics.entities[entity.name] = EntityMetrics(
            name=entity.name,
            kind=entity.kind,
            afferent=afferent,
            efferent=efferent,
            instability=compute_instability(afferent, efferent),
        )
        if entity.kind is EntityKind.CLASS:
            metrics.class_count += 1
        elif entity.kind is EntityKind.ABSTRACT_CLASS:
            metrics.abstract_class_count += 1
        elif entity.kind is EntityKind.INTERFACE:
            metrics.interface_count += 1
        elif entity.kind is EntityKind.FUNCTION:
            metrics.function_count += 1

    abstract = metrics.abstract_class_count + metrics.interface_count
    total = metrics.class_count + abstract
    metrics.abstractness = abstract / total if total else 0.0
    return metrics
