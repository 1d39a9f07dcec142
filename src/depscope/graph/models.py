"""Dependency graph data model.

A dependency fact is one observed "A uses B" relation. Facts from static
analysis and from runtime traces are folded into a ``DependencyGraph``:
an immutable mapping from a source entity to the entities it depends on,
where each edge carries the number of times it was observed.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Optional


class EntityKind(str, Enum):
    """What a fully-qualified name refers to."""

    INTERFACE = "interface"
    ABSTRACT_CLASS = "abstract class"
    CLASS = "class"
    FUNCTION = "function"
    NAMESPACE = "namespace"
    UNKNOWN = "unknown"

    @property
    def precedence(self) -> int:
        """Specificity used to settle kind conflicts; higher wins."""
        return _KIND_PRECEDENCE[self]

    @property
    def is_class_like(self) -> bool:
        return self in (EntityKind.CLASS, EntityKind.ABSTRACT_CLASS, EntityKind.INTERFACE)

    @classmethod
    def guess(cls, name: str) -> "EntityKind":
        """Best guess for a name we never saw defined."""
        last = name.rsplit(".", 1)[-1]
        if not last:
            return cls.UNKNOWN
        return cls.CLASS if last[0].isupper() else cls.FUNCTION


_KIND_PRECEDENCE = {
    EntityKind.INTERFACE: 5,
    EntityKind.ABSTRACT_CLASS: 4,
    EntityKind.CLASS: 3,
    EntityKind.FUNCTION: 2,
    EntityKind.NAMESPACE: 1,
    EntityKind.UNKNOWN: 0,
}


@dataclass(frozen=True, order=True)
class Entity:
    """A class, interface, function or namespace identified by its dotted name."""

    name: str
    kind: EntityKind = field(default=EntityKind.CLASS, compare=False)

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.name.split("."))

    @property
    def namespace(self) -> str:
        """Everything before the last segment, or "" for a top-level name."""
        head, _, _ = self.name.rpartition(".")
        return head

    @property
    def root(self) -> str:
        return self.parts[0]

    def in_namespace(self, namespace: str) -> bool:
        namespace = namespace.strip(".")
        return self.name == namespace or self.name.startswith(namespace + ".")

    def truncated(self, depth: int) -> "Entity":
        """Collapse the name to its first ``depth`` segments."""
        parts = self.parts
        if depth < 1 or len(parts) <= depth:
            return self
        return Entity(".".join(parts[:depth]), EntityKind.NAMESPACE)

    def as_namespace(self) -> Optional["Entity"]:
        """The enclosing namespace, or None for a top-level name."""
        if not self.namespace:
            return None
        return Entity(self.namespace, EntityKind.NAMESPACE)


@dataclass(frozen=True)
class DependencyFact:
    """An ordered pair: ``source`` depends on ``target``."""

    source: Entity
    target: Entity

    @property
    def is_malformed(self) -> bool:
        return not self.source.name.strip() or not self.target.name.strip()


class MergePolicy(str, Enum):
    """How the weights of an edge seen by two sources combine."""

    SUM = "sum"
    DEDUPLICATE = "deduplicate"

    def combine(self, left: int, right: int) -> int:
        if self is MergePolicy.SUM:
            return left + right
        return max(left, right)


def _stronger(left: Entity, right: Entity) -> Entity:
    # Symmetric so that merge stays commutative
    return left if left.kind.precedence >= right.kind.precedence else right


@dataclass(frozen=True, eq=False)
class DependencyGraph:
    """Immutable weighted dependency graph.

    ``adjacency[A][B]`` is the weight of the edge A -> B (how often A was
    seen depending on B). ``entity_index`` only holds endpoints of edges.
    Filters and merges return new graphs; nothing mutates an existing one.
    """

    adjacency: Mapping[str, Mapping[str, int]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    entity_index: Mapping[str, Entity] = field(default_factory=lambda: MappingProxyType({}))

    # ── Construction ─────────────────────────────────────────────

    @classmethod
    def empty(cls) -> "DependencyGraph":
        return cls()

    @classmethod
    def build(cls, facts: Iterable[DependencyFact]) -> "DependencyGraph":
        """Group facts by source entity, counting repeated facts.

        Facts with an empty entity name are dropped without complaint.
        """
        weights: dict[tuple[str, str], int] = defaultdict(int)
        entities: dict[str, Entity] = {}
        for fact in facts:
            if fact.is_malformed:
                continue
            for entity in (fact.source, fact.target):
                known = entities.get(entity.name)
                entities[entity.name] = entity if known is None else _stronger(known, entity)
            weights[(fact.source.name, fact.target.name)] += 1
        return cls._freeze(weights, entities)

    @classmethod
    def _freeze(
        cls, weights: Mapping[tuple[str, str], int], entities: Mapping[str, Entity]
    ) -> "DependencyGraph":
        adjacency: dict[str, dict[str, int]] = {}
        for (source, target), weight in weights.items():
            if weight <= 0:
                continue
            adjacency.setdefault(source, {})[target] = weight
        used = set(adjacency)
        for targets in adjacency.values():
            used.update(targets)
        return cls(
            adjacency=MappingProxyType(
                {src: MappingProxyType(dict(tgts)) for src, tgts in adjacency.items()}
            ),
            entity_index=MappingProxyType({name: entities[name] for name in used}),
        )

    # ── Queries ──────────────────────────────────────────────────

    def is_empty(self) -> bool:
        return not self.adjacency

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())

    @property
    def entities(self) -> list[Entity]:
        return sorted(self.entity_index.values())

    def entity(self, name: str) -> Entity:
        return self.entity_index[name]

    def edges(self) -> Iterator[tuple[Entity, Entity, int]]:
        """Yield ``(source, target, weight)`` sorted by source then target."""
        for source in sorted(self.adjacency):
            targets = self.adjacency[source]
            for target in sorted(targets):
                yield self.entity_index[source], self.entity_index[target], targets[target]

    def weight(self, source: str, target: str) -> int:
        return self.adjacency.get(source, {}).get(target, 0)

    def dependencies_of(self, name: str) -> frozenset[str]:
        return frozenset(self.adjacency.get(name, {}))

    def dependents_of(self, name: str) -> frozenset[str]:
        return frozenset(src for src, targets in self.adjacency.items() if name in targets)

    def _weights(self) -> dict[tuple[str, str], int]:
        return {
            (source, target): weight
            for source, targets in self.adjacency.items()
            for target, weight in targets.items()
        }

    # ── Combination and transformation ───────────────────────────

    def merge(
        self, other: "DependencyGraph", policy: MergePolicy = MergePolicy.SUM
    ) -> "DependencyGraph":
        """Union of both edge sets; coincident edges combine under ``policy``."""
        weights = self._weights()
        for key, weight in other._weights().items():
            weights[key] = policy.combine(weights[key], weight) if key in weights else weight
        entities = dict(self.entity_index)
        for name, entity in other.entity_index.items():
            known = entities.get(name)
            entities[name] = entity if known is None else _stronger(known, entity)
        return self._freeze(weights, entities)

    def map_entities(self, fn: Callable[[Entity], Optional[Entity]]) -> "DependencyGraph":
        """Rename entities; edges whose endpoint maps to None are dropped.

        Edges that collapse onto the same pair have their weights summed.
        """
        weights: dict[tuple[str, str], int] = defaultdict(int)
        entities: dict[str, Entity] = {}
        for source, target, weight in self.edges():
            new_source, new_target = fn(source), fn(target)
            if new_source is None or new_target is None:
                continue
            for entity in (new_source, new_target):
                known = entities.get(entity.name)
                entities[entity.name] = entity if known is None else _stronger(known, entity)
            weights[(new_source.name, new_target.name)] += weight
        return self._freeze(weights, entities)

    def filter_edges(self, predicate: Callable[[Entity, Entity], bool]) -> "DependencyGraph":
        """Keep only the edges for which ``predicate(source, target)`` holds."""
        weights = {
            (source.name, target.name): weight
            for source, target, weight in self.edges()
            if predicate(source, target)
        }
        return self._freeze(weights, self.entity_index)

    # ── Value semantics ──────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DependencyGraph):
            return NotImplemented
        if self._weights() != other._weights():
            return False
        return {n: e.kind for n, e in self.entity_index.items()} == {
            n: e.kind for n, e in other.entity_index.items()
        }

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"DependencyGraph(entities={len(self.entity_index)}, edges={self.edge_count})"
