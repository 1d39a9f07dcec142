"""Tests for coupling metrics."""

import pytest

from depscope.graph.models import DependencyFact, DependencyGraph, Entity, EntityKind
from depscope.metrics import compute_instability, compute_metrics


class TestInstability:
    def test_isolated(self):
        assert compute_instability(0, 0) is None

    def test_stable(self):
        assert compute_instability(4, 0) == 0.0

    def test_unstable(self):
        assert compute_instability(0, 3) == 1.0

    def test_mixed(self):
        assert compute_instability(1, 3) == pytest.approx(0.75)


class TestComputeMetrics:
    def test_coupling(self, make_graph):
        metrics = compute_metrics(make_graph("A->B", "C->B", "B->D", "A->B"))
        b = metrics.entities["B"]
        assert (b.afferent, b.efferent) == (2, 1)
        assert b.instability == pytest.approx(1 / 3)
        assert metrics.entities["D"].instability == 0.0

    def test_self_edges_ignored(self, make_graph):
        metrics = compute_metrics(make_graph("a->a"))
        assert metrics.entities["a"].instability is None

    def test_abstractness(self):
        graph = DependencyGraph.build(
            [
                DependencyFact(Entity("X", EntityKind.CLASS), Entity("P", EntityKind.INTERFACE)),
                DependencyFact(Entity("Y", EntityKind.CLASS), Entity("run", EntityKind.FUNCTION)),
            ]
        )
        metrics = compute_metrics(graph)
        assert metrics.class_count == 2
        assert metrics.interface_count == 1
        assert metrics.function_count == 1
        assert metrics.abstractness == pytest.approx(1 / 3)

    def test_empty(self):
        metrics = compute_metrics(DependencyGraph.empty())
        assert metrics.entities == {}
        assert metrics.abstractness == 0.0
