"""
Tests for toolagents/memory/traversal.py - bounded BFS over the graph.
"""

from toolagents.memory import KnowledgeGraph, KnowledgeNode, Relationship
from toolagents.memory.traversal import traverse, OUTGOING, INCOMING, BOTH


def build_graph(node_keys, edges):
    graph = KnowledgeGraph()
    for key in node_keys:
        graph.put_node(KnowledgeNode(key=key, content=key))
    for from_key, to_key, rel_type in edges:
        graph.add_edge(Relationship(from_key, to_key, rel_type))
    return graph


def walk(graph, origin, depth=5, **kwargs):
    return traverse(graph, origin, depth, is_live=graph.has_node, **kwargs)


class TestTraverse:

    def test_shortest_distance_wins(self):
        graph = build_graph("abc", [("a", "b", "x"), ("b", "c", "x"), ("a", "c", "x")])

        hops = walk(graph, "a")

        assert [(h.key, h.distance) for h in hops] == [("b", 1), ("c", 1)]

    def test_first_edge_on_level_wins(self):
        graph = build_graph("ab", [("a", "b", "first"), ("a", "b", "second")])

        hops = walk(graph, "a")

        assert len(hops) == 1
        assert hops[0].relationship.relationship_type == "first"

    def test_cycle_terminates(self):
        graph = build_graph("abc", [("a", "b", "x"), ("b", "c", "x"), ("c", "a", "x")])

        hops = walk(graph, "a", depth=5)

        assert [h.key for h in hops] == ["b", "c"]

    def test_origin_never_emitted(self):
        graph = build_graph("a", [("a", "a", "self")])
        assert walk(graph, "a") == []

    def test_not_live_endpoints_skipped_and_not_expanded(self):
        graph = build_graph("ac", [("a", "ghost", "x"), ("ghost", "c", "x")])

        assert walk(graph, "a") == []

    def test_max_depth(self):
        graph = build_graph("abcd", [("a", "b", "x"), ("b", "c", "x"), ("c", "d", "x")])

        assert [h.key for h in walk(graph, "a", depth=2)] == ["b", "c"]

    def test_incoming(self):
        graph = build_graph("ab", [("a", "b", "x")])

        hops = walk(graph, "b", direction=INCOMING)

        assert [(h.key, h.direction) for h in hops] == [("a", INCOMING)]
        assert walk(graph, "b", direction=OUTGOING) == []

    def test_both(self):
        graph = build_graph("abc", [("a", "b", "x"), ("c", "a", "x")])

        hops = walk(graph, "a", direction=BOTH)

        assert [(h.key, h.direction) for h in hops] == [("b", OUTGOING), ("c", INCOMING)]

    def test_relationship_type_filter(self):
        graph = build_graph("abc", [("a", "b", "x"), ("b", "c", "y")])

        assert [h.key for h in walk(graph, "a", relationship_types=["x"])] == ["b"]
