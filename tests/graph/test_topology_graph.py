"""Tests for the bidirectional topology graph."""

from linkbudget.graph.topology import TopologyGraph, build_topology_graph
from linkbudget.model.network import Topology


def test_forward_and_reverse_connections(make_node, make_edge):
    edge = make_edge("e1", "A", "B")
    graph = build_topology_graph([make_node("A"), make_node("B")], [edge])

    (forward,) = graph.connections("A")
    (backward,) = graph.connections("B")
    assert forward.target == "B" and forward.reverse is False
    assert backward.target == "A" and backward.reverse is True
    assert forward.edge is edge and backward.edge is edge
    assert forward.origin == "A"
    assert backward.origin == "B"


def test_dangling_edges_are_skipped(make_node, make_edge):
    graph = build_topology_graph(
        [make_node("A"), make_node("B")],
        [make_edge("e1", "A", "B"), make_edge("ghost", "A", "Z")],
    )
    assert [c.edge.id for c in graph.connections("A")] == ["e1"]
    assert "Z" not in graph


def test_adjacency_follows_edge_order(make_node, make_edge):
    nodes = [make_node(n) for n in "ABCD"]
    edges = [
        make_edge("e1", "A", "C"),
        make_edge("e2", "B", "A"),
        make_edge("e3", "A", "D"),
    ]
    graph = build_topology_graph(nodes, edges)
    assert [c.target for c in graph.connections("A")] == ["C", "B", "D"]


def test_container_protocol(make_node):
    graph = build_topology_graph([make_node("A"), make_node("B")], [])
    assert len(graph) == 2
    assert list(graph) == ["A", "B"]
    assert "A" in graph
    assert graph.node("A").id == "A"
    assert graph.node("missing") is None
    assert graph.connections("missing") == []


def test_from_topology(make_node, make_edge):
    topology = Topology()
    topology.add_node(make_node("A"))
    topology.add_node(make_node("B"))
    topology.add_edge(make_edge("e1", "A", "B"))

    graph = TopologyGraph.from_topology(topology)
    assert len(graph.connections("A")) == 1
    assert len(graph.connections("B")) == 1


def test_self_loop_adds_both_directions(make_node, make_edge):
    graph = build_topology_graph([make_node("A")], [make_edge("loop", "A", "A")])
    assert [c.reverse for c in graph.connections("A")] == [False, True]
