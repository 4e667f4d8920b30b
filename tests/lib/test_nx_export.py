"""Tests for linkbudget.lib.nx NetworkX export."""

import networkx as nx
import pytest

from linkbudget.calculator import calculate
from linkbudget.lib.nx import to_networkx
from linkbudget.model.network import Edge, Node, Topology


class TestToNetworkx:
    """Tests for to_networkx."""

    def test_nodes_and_edges_are_exported(self, sample_topology):
        G = to_networkx(sample_topology)

        assert isinstance(G, nx.MultiGraph)
        assert set(G.nodes) == {"olt", "split", "ont", "sw", "enb", "mw"}
        assert G.number_of_edges() == 5
        assert G.nodes["olt"]["type"] == "OLT"
        assert G.nodes["olt"]["params"]["Power (dBm)"] == 5

        attrs = G.edges["olt", "split", "feeder"]
        assert attrs["link_type"] == "Optical"
        assert attrs["params"] == {"Range (km)": 10}
        assert (attrs["source"], attrs["target"]) == ("olt", "split")

    def test_graph_is_undirected(self, sample_topology):
        G = to_networkx(sample_topology)
        assert G.has_edge("split", "olt", key="feeder")

    def test_parallel_edges_keep_their_ids(self):
        topology = Topology()
        topology.add_node(Node("A"))
        topology.add_node(Node("B"))
        topology.add_edge(Edge("fiber", "A", "B", "Optical"))
        topology.add_edge(Edge("radio", "B", "A", "LineOfSight"))

        G = to_networkx(topology)
        assert G.number_of_edges("A", "B") == 2
        assert set(G["A"]["B"]) == {"fiber", "radio"}

    def test_dangling_edges_are_skipped(self):
        topology = Topology()
        topology.add_node(Node("A"))
        topology.add_edge(Edge("e1", "A", "Z", "Optical"))

        G = to_networkx(topology)
        assert list(G.nodes) == ["A"]
        assert G.number_of_edges() == 0

    def test_export_does_not_alias_params(self, sample_topology):
        G = to_networkx(sample_topology)
        G.nodes["olt"]["params"]["Power (dBm)"] = 99
        assert sample_topology.nodes["olt"].params["Power (dBm)"] == 5

    def test_report_is_attached(self, sample_document):
        sample_document["nodes"] += [{"id": "x1"}, {"id": "x2"}]
        sample_document["edges"].append(
            {"id": "bad", "source": "x1", "target": "x2", "link_type": "Carrier pigeon"}
        )
        from linkbudget.dsl.loader import load_topology

        topology = load_topology(sample_document)
        G = to_networkx(topology, calculate(topology))

        feeder = G.edges["olt", "split", "feeder"]
        assert feeder["result"]["loss"] == pytest.approx(2.5)
        assert "edgeId" not in feeder["result"]
        assert "error" not in feeder

        bad = G.edges["x1", "x2", "bad"]
        assert bad["error"].startswith("Calculation error:")
        assert "result" not in bad

    def test_graph_algorithms_apply(self, sample_topology):
        G = to_networkx(sample_topology)
        assert nx.shortest_path(G, "olt", "mw") == ["olt", "split", "ont", "sw", "enb", "mw"]
