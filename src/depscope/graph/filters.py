"""Filter pipeline: option-driven graph transforms.

Every rule kind is declared once in ``FilterKind`` together with the option
that enables it and the stage it belongs to. Pre-filters run right after
analysis; post-filters are handed to the command and applied at render time,
so a command such as ``metrics`` can keep working on the unreduced graph.

Rules run in declaration order. Depth collapsing therefore happens before
regex exclusion, which then matches the collapsed names.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from enum import Enum
from functools import reduce
from typing import Any, Callable, Mapping

from .models import DependencyGraph, Entity

GraphTransform = Callable[[DependencyGraph], DependencyGraph]

INTERNAL_MODULES = frozenset(sys.stdlib_module_names) | {"builtins"}


class FilterStage(Enum):
    PRE = "pre"
    POST = "post"


class FilterKind(Enum):
    """Closed set of filter rules: (option key, stage)."""

    REMOVE_INTERNALS = ("no_internals", FilterStage.PRE)
    REMOVE_EXTERNALS = ("no_externals", FilterStage.PRE)
    FILTER_FROM = ("filter_from", FilterStage.PRE)
    DEPTH = ("depth", FilterStage.PRE)
    EXCLUDE_REGEX = ("exclude_regex", FilterStage.PRE)
    NO_CLASSES = ("no_classes", FilterStage.POST)
    FILTER_NAMESPACE = ("filter_namespace", FilterStage.POST)

    def __init__(self, option: str, stage: FilterStage):
        self.option = option
        self.stage = stage

    @classmethod
    def option_keys(cls) -> tuple[str, ...]:
        return tuple(kind.option for kind in cls)


@dataclass(frozen=True)
class FilterRule:
    """A rule kind bound to the option value that enabled it."""

    kind: FilterKind
    argument: Any = True

    def __call__(self, graph: DependencyGraph) -> DependencyGraph:
        return _APPLY[self.kind](graph, self.argument)


def identity(graph: DependencyGraph) -> DependencyGraph:
    return graph


def compose(*transforms: GraphTransform) -> GraphTransform:
    """Left-to-right composition; no transforms gives ``identity``."""
    if not transforms:
        return identity

    def composed(graph: DependencyGraph) -> DependencyGraph:
        return reduce(lambda acc, fn: fn(acc), transforms, graph)

    return composed


def rules_for(stage: FilterStage, options: Mapping[str, Any]) -> list[FilterRule]:
    """Rules of ``stage`` whose option is present and truthy, in application order."""
    return [
        FilterRule(kind, options[kind.option])
        for kind in FilterKind
        if kind.stage is stage and options.get(kind.option)
    ]


def pre_filters(options: Mapping[str, Any]) -> GraphTransform:
    return compose(*rules_for(FilterStage.PRE, options))


def post_filters(options: Mapping[str, Any]) -> GraphTransform:
    return compose(*rules_for(FilterStage.POST, options))


# ── Predicates and transforms ────────────────────────────────────


def is_internal(entity: Entity) -> bool:
    """True for builtins and standard library names."""
    return entity.root in INTERNAL_MODULES


def _exclude_where(graph: DependencyGraph, test: Callable[[Entity], bool]) -> DependencyGraph:
    return graph.filter_edges(lambda source, target: not (test(source) or test(target)))


def _remove_internals(graph: DependencyGraph, _: Any) -> DependencyGraph:
    return _exclude_where(graph, is_internal)


def _remove_externals(graph: DependencyGraph, _: Any) -> DependencyGraph:
    local_roots = {graph.entity(name).root for name in graph.adjacency}
    return graph.filter_edges(lambda source, target: target.root in local_roots)


def _filter_from(graph: DependencyGraph, namespace: str) -> DependencyGraph:
    return graph.filter_edges(lambda source, target: source.in_namespace(namespace))


def _collapse_depth(graph: DependencyGraph, depth: Any) -> DependencyGraph:
    depth = int(depth)
    return graph.map_entities(lambda entity: entity.truncated(depth))


def _exclude_regex(graph: DependencyGraph, pattern: str) -> DependencyGraph:
    regex = re.compile(pattern)
    return _exclude_where(graph, lambda entity: regex.search(entity.name) is not None)


def _to_namespaces(graph: DependencyGraph, _: Any) -> DependencyGraph:
    return graph.map_entities(Entity.as_namespace)


def _filter_namespace(graph: DependencyGraph, namespace: str) -> DependencyGraph:
    return graph.filter_edges(
        lambda source, target: source.in_namespace(namespace) and target.in_namespace(namespace)
    )


_APPLY: dict[FilterKind, Callable[[DependencyGraph, Any], DependencyGraph]] = {
    FilterKind.REMOVE_INTERNALS: _remove_internals,
    FilterKind.REMOVE_EXTERNALS: _remove_externals,
    FilterKind.FILTER_FROM: _filter_from,
    FilterKind.DEPTH: _collapse_depth,
    FilterKind.EXCLUDE_REGEX: _exclude_regex,
    FilterKind.NO_CLASSES: _to_namespaces,
    FilterKind.FILTER_NAMESPACE: _filter_namespace,
}
