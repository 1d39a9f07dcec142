"""Tests for the dependency graph model."""

import pytest

from depscope.graph.models import (
    DependencyFact,
    DependencyGraph,
    Entity,
    EntityKind,
    MergePolicy,
)


class TestEntity:
    """Test Entity naming helpers."""

    def test_namespace_and_root(self):
        entity = Entity("shop.models.Book")
        assert entity.namespace == "shop.models"
        assert entity.root == "shop"

    def test_top_level_has_no_namespace(self):
        assert Entity("Book").as_namespace() is None

    def test_as_namespace(self):
        ns = Entity("shop.models.Book").as_namespace()
        assert ns == Entity("shop.models")
        assert ns.kind is EntityKind.NAMESPACE

    def test_truncated(self):
        short = Entity("a.b.c.D").truncated(2)
        assert short.name == "a.b"
        assert short.kind is EntityKind.NAMESPACE

    def test_truncated_keeps_short_names(self):
        entity = Entity("a.B", EntityKind.CLASS)
        assert entity.truncated(2) is entity
        assert entity.truncated(0) is entity

    def test_in_namespace_matches_whole_segments(self):
        entity = Entity("shop.models.Book")
        assert entity.in_namespace("shop")
        assert entity.in_namespace("shop.models.")
        assert not entity.in_namespace("sho")

    def test_equality_ignores_kind(self):
        assert Entity("a.B", EntityKind.CLASS) == Entity("a.B", EntityKind.INTERFACE)

    def test_guess(self):
        assert EntityKind.guess("pkg.Thing") is EntityKind.CLASS
        assert EntityKind.guess("pkg.run") is EntityKind.FUNCTION
        assert EntityKind.guess("pkg.") is EntityKind.UNKNOWN


class TestBuild:
    """Test DependencyGraph.build."""

    def test_empty(self):
        graph = DependencyGraph.build([])
        assert graph.is_empty()
        assert graph == DependencyGraph.empty()

    def test_repeated_facts_add_weight(self, make_graph):
        graph = make_graph("A->B", "A->B", "A->C")
        assert graph.weight("A", "B") == 2
        assert graph.weight("A", "C") == 1
        assert graph.edge_count == 2

    def test_malformed_facts_are_dropped(self):
        facts = [
            DependencyFact(Entity(""), Entity("B")),
            DependencyFact(Entity("A"), Entity("  ")),
            DependencyFact(Entity("A"), Entity("B")),
        ]
        graph = DependencyGraph.build(facts)
        assert [(s.name, t.name) for s, t, _ in graph.edges()] == [("A", "B")]

    def test_entities_are_edge_endpoints(self, make_graph):
        graph = make_graph("A->B", "B->C")
        assert [e.name for e in graph.entities] == ["A", "B", "C"]

    def test_most_specific_kind_wins(self):
        facts = [
            DependencyFact(Entity("a.X", EntityKind.CLASS), Entity("a.P", EntityKind.CLASS)),
            DependencyFact(Entity("a.Y", EntityKind.CLASS), Entity("a.P", EntityKind.INTERFACE)),
        ]
        graph = DependencyGraph.build(facts)
        assert graph.entity("a.P").kind is EntityKind.INTERFACE

    def test_adjacency_is_read_only(self, make_graph):
        graph = make_graph("A->B")
        with pytest.raises(TypeError):
            graph.adjacency["A"]["C"] = 1  # type: ignore[index]

    def test_dependents_and_dependencies(self, make_graph):
        graph = make_graph("A->B", "C->B", "B->D")
        assert graph.dependencies_of("B") == {"D"}
        assert graph.dependents_of("B") == {"A", "C"}
        assert graph.dependencies_of("missing") == frozenset()


class TestMerge:
    """Test merging static and dynamic graphs."""

    def test_static_and_dynamic_scenario(self, make_graph):
        static = make_graph("A->B", "B->C")
        dynamic = make_graph("B->C", "C->A")
        merged = static.merge(dynamic)
        assert merged == make_graph("A->B", "B->C", "B->C", "C->A")
        assert merged.weight("A", "B") == 1
        assert merged.weight("B", "C") == 2
        assert merged.weight("C", "A") == 1

    def test_merge_is_commutative(self, make_graph):
        left = make_graph("A->B", "B->C", "B->C")
        right = make_graph("B->C", "C->D")
        assert left.merge(right) == right.merge(left)

    def test_merge_with_empty_is_identity(self, make_graph):
        graph = make_graph("A->B", "B->C")
        assert graph.merge(DependencyGraph.empty()) == graph
        assert DependencyGraph.empty().merge(graph) == graph

    def test_merge_kinds_commutative(self):
        left = DependencyGraph.build(
            [DependencyFact(Entity("a.X"), Entity("a.P", EntityKind.ABSTRACT_CLASS))]
        )
        right = DependencyGraph.build(
            [DependencyFact(Entity("a.Y"), Entity("a.P", EntityKind.INTERFACE))]
        )
        assert left.merge(right).entity("a.P").kind is EntityKind.INTERFACE
        assert right.merge(left).entity("a.P").kind is EntityKind.INTERFACE

    def test_deduplicate_policy(self, make_graph):
        static = make_graph("A->B", "A->B")
        dynamic = make_graph("A->B", "B->C")
        merged = static.merge(dynamic, MergePolicy.DEDUPLICATE)
        assert merged.weight("A", "B") == 2
        assert merged.weight("B", "C") == 1

    def test_merge_leaves_inputs_untouched(self, make_graph):
        static = make_graph("A->B")
        static.merge(make_graph("A->B"))
        assert static.weight("A", "B") == 1


class TestTransforms:
    """Test map_entities and filter_edges."""

    def test_map_entities_sums_collapsed_edges(self, make_graph):
        graph = make_graph("a.X->b.Y", "a.Z->b.W")
        collapsed = graph.map_entities(lambda e: e.truncated(1))
        assert collapsed.weight("a", "b") == 2
        assert collapsed.edge_count == 1

    def test_map_entities_drops_none(self, make_graph):
        graph = make_graph("A->b.C", "b.C->b.D")
        mapped = graph.map_entities(Entity.as_namespace)
        assert mapped.is_empty() is False
        assert [(s.name, t.name) for s, t, _ in mapped.edges()] == [("b", "b")]

    def test_filter_edges_prunes_orphans(self, make_graph):
        graph = make_graph("A->B", "B->C")
        filtered = graph.filter_edges(lambda s, t: t.name != "C")
        assert [e.name for e in filtered.entities] == ["A", "B"]

    def test_graphs_are_unhashable(self, make_graph):
        with pytest.raises(TypeError):
            hash(make_graph("A->B"))
