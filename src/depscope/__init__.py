"""
depscope - dependency analysis for Python codebases

Extracts class and function dependencies from source (and optionally from a
runtime call trace), refines them through composable filters and renders the
result as UML, Graphviz, a dependency structure matrix, text or metrics.
"""

__version__ = "0.3.0"

from .graph.filters import FilterKind, post_filters, pre_filters
from .graph.models import DependencyFact, DependencyGraph, Entity, EntityKind, MergePolicy

__all__ = [
    "DependencyFact",
    "DependencyGraph",
    "Entity",
    "EntityKind",
    "FilterKind",
    "MergePolicy",
    "post_filters",
    "pre_filters",
]
