"""Dependency graph model and the filter pipeline that reshapes it."""

from .filters import FilterKind, FilterRule, FilterStage, compose, identity, post_filters, pre_filters
from .models import DependencyFact, DependencyGraph, Entity, EntityKind, MergePolicy

__all__ = [
    "DependencyFact",
    "DependencyGraph",
    "Entity",
    "EntityKind",
    "FilterKind",
    "FilterRule",
    "FilterStage",
    "MergePolicy",
    "compose",
    "identity",
    "post_filters",
    "pre_filters",
]
