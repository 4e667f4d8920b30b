"""Tests for chain detection and the regenerative/passive fold."""

import math

import pytest

from linkbudget.algorithms.chain import ChainState, chain_link_budget
from linkbudget.algorithms.direct import direct_link_budget
from linkbudget.graph.topology import build_topology_graph
from linkbudget.results.link import LinkBudgetResult
from linkbudget.types.base import LinkType


def _segment(loss, capacity=100.0, latency=1.0):
    return LinkBudgetResult(
        received_power=0.0,
        loss=loss,
        capacity=capacity,
        latency=latency,
        snr_db=0.0,
        link_type=LinkType.OPTICAL,
    )


class TestChainState:
    def test_passive_step_accumulates_loss(self):
        state = ChainState(running_power=20.0).step(_segment(5.0))
        assert state.running_power == pytest.approx(15.0)
        assert state.total_loss == pytest.approx(5.0)
        assert state.total_latency == pytest.approx(1.0)
        assert state.min_capacity == pytest.approx(100.0)

    def test_regenerative_step_resets_power(self):
        state = (
            ChainState(running_power=20.0)
            .step(_segment(5.0, capacity=300.0))
            .step(_segment(7.0, capacity=50.0), regenerated_power=23.0)
        )
        assert state.running_power == pytest.approx(23.0)
        # Loss of a regenerated hop does not propagate
        assert state.total_loss == pytest.approx(5.0)
        assert state.total_latency == pytest.approx(2.0)
        assert state.min_capacity == pytest.approx(50.0)

    def test_step_returns_new_state(self):
        initial = ChainState(running_power=10.0)
        initial.step(_segment(3.0))
        assert initial.running_power == 10.0
        assert initial.min_capacity == math.inf


class TestChainLinkBudget:
    @pytest.fixture
    def regenerating_chain(self, make_node, make_edge):
        """A -(copper, 5 dB)-> patch panel B -(copper, 100 Mbps)-> repeater C at 23 dBm."""
        nodes = [
            make_node("A", params={"Power (dBm)": 20}),
            make_node("B", "Patch panel"),
            make_node("C", "Repeater", params={"Power (dBm)": 23}),
        ]
        edges = [
            make_edge(
                "e1",
                "A",
                "B",
                "Copper(RJ45)",
                {"Range (km)": 0.05, "Attenuation (dB/100m)": 10},
            ),
            make_edge(
                "e2",
                "B",
                "C",
                "Copper(RJ45)",
                {"Range (km)": 0.05, "Nominal rate (Mbps)": 100},
            ),
        ]
        return nodes, edges

    def test_regeneration_at_the_far_end(self, regenerating_chain, make_edge):
        nodes, edges = regenerating_chain
        graph = build_topology_graph(nodes, edges)
        requested = make_edge("req", "A", "C", "Copper(RJ45)")

        result = chain_link_budget(nodes[0], nodes[2], requested, graph)

        assert result.is_chain_link is True
        assert result.segment_count == 2
        assert result.received_power == pytest.approx(23.0)
        assert result.loss == pytest.approx(-3.0)
        assert result.capacity == pytest.approx(100.0)
        assert result.latency == pytest.approx(0.0005)
        assert result.snr_db == pytest.approx(23.0 + 80.0)
        assert result.note == "Chain link of 2 segments"

        first, second = result.segments
        assert (first.from_label, first.to_label) == ("A", "B")
        assert first.loss == pytest.approx(5.0)
        assert first.is_regenerated is False
        assert first.power_after == pytest.approx(15.0)
        assert second.is_regenerated is True
        assert second.power_after == pytest.approx(23.0)

    def test_passive_chain_sums_losses(self, make_node, make_edge):
        nodes = [
            make_node("A"),
            make_node("B", "Passive splitter"),
            make_node("C", "Splice box"),
            make_node("D", "ONT"),
        ]
        edges = [
            make_edge("e1", "A", "B", "Optical", {"Range (km)": 10}),
            make_edge("e2", "B", "C", "Optical", {"Range (km)": 5}),
            make_edge("e3", "C", "D", "Optical", {"Range (km)": 2}),
        ]
        graph = build_topology_graph(nodes, edges)
        requested = make_edge("req", "A", "D", "Optical")

        result = chain_link_budget(nodes[0], nodes[3], requested, graph)

        segment_losses = [2.5, 1.5, 0.9]
        assert [s.loss for s in result.segments] == pytest.approx(segment_losses)
        assert result.loss == pytest.approx(sum(segment_losses))
        assert result.received_power == pytest.approx(20.0 - sum(segment_losses))
        assert not any(s.is_regenerated for s in result.segments)

    def test_capacity_is_minimum_over_segments(self, make_node, make_edge):
        nodes = [make_node("A"), make_node("B", "Patch panel"), make_node("C")]
        edges = [
            make_edge("e1", "A", "B", "Optical", {"Range (km)": 1}),
            make_edge(
                "e2", "B", "C", "Copper(RJ45)", {"Range (km)": 0.01, "Nominal rate (Mbps)": 10}
            ),
        ]
        graph = build_topology_graph(nodes, edges)
        result = chain_link_budget(
            nodes[0], nodes[2], make_edge("req", "A", "C", "Optical"), graph
        )
        assert result.capacity == pytest.approx(10.0)

    def test_regenerative_node_without_power_restores_incoming_power(
        self, make_node, make_edge
    ):
        nodes = [make_node("A"), make_node("R", "Router"), make_node("C", "Patch panel")]
        edges = [
            make_edge("e1", "A", "R", "Optical", {"Range (km)": 10}),
            make_edge("e2", "R", "C", "Optical", {"Range (km)": 10}),
        ]
        graph = build_topology_graph(nodes, edges)
        result = chain_link_budget(
            nodes[0], nodes[2], make_edge("req", "A", "C", "Optical"), graph
        )

        first, second = result.segments
        assert first.is_regenerated is True
        assert first.power_after == pytest.approx(20.0)
        assert second.power_after == pytest.approx(17.5)
        assert result.loss == pytest.approx(2.5)

    def test_unreachable_target_uses_supplied_edge(self, make_node, make_edge):
        source, target = make_node("A"), make_node("B")
        graph = build_topology_graph([source, target], [])
        requested = make_edge("e1", "A", "B", "Optical", {"Range (km)": 10})

        result = chain_link_budget(source, target, requested, graph)

        assert result.is_chain_link is False
        assert result.loss == pytest.approx(2.5)
        assert result == direct_link_budget(source, target, requested)

    def test_single_segment_uses_path_edge(self, make_node, make_edge):
        """A one-hop path is evaluated on the edge found, not the one requested."""
        source, target = make_node("A"), make_node("B")
        physical = make_edge("fiber", "A", "B", "Optical", {"Range (km)": 10})
        graph = build_topology_graph([source, target], [physical])
        requested = make_edge("req", "A", "B", "4G", {"Range (km)": 3})

        result = chain_link_budget(source, target, requested, graph)

        assert result.is_chain_link is False
        assert result.link_type is LinkType.OPTICAL
        assert result.loss == pytest.approx(2.5)

    def test_same_source_and_target_is_direct(self, make_node, make_edge):
        node = make_node("A")
        graph = build_topology_graph([node], [])
        requested = make_edge("loop", "A", "A", "Optical", {"Range (km)": 1})
        result = chain_link_budget(node, node, requested, graph)
        assert result.is_chain_link is False
        assert result.loss == pytest.approx(0.7)

    def test_reverse_hop_is_recorded(self, make_node, make_edge):
        nodes = [make_node("A"), make_node("B", "Patch panel"), make_node("C")]
        edges = [
            make_edge("e1", "A", "B", "Optical", {"Range (km)": 10}),
            make_edge("e2", "C", "B", "Optical", {"Range (km)": 10}),
        ]
        graph = build_topology_graph(nodes, edges)
        result = chain_link_budget(
            nodes[0], nodes[2], make_edge("req", "A", "C", "Optical"), graph
        )
        assert [s.reverse for s in result.segments] == [False, True]
        assert result.segments[1].to_label == "C"

    def test_reverse_hop_is_evaluated_along_declared_edge(self, make_node, make_edge):
        """A hop walked C <- B still transmits from the edge source C."""
        nodes = [
            make_node("A"),
            make_node("B", "Patch panel", {"Frequency (MHz)": 900}),
            make_node("C", params={"Frequency (MHz)": 2600}),
        ]
        e2 = make_edge("e2", "C", "B", "4G", {"Range (km)": 2})
        edges = [make_edge("e1", "A", "B", "Optical", {"Range (km)": 10}), e2]
        graph = build_topology_graph(nodes, edges)

        result = chain_link_budget(
            nodes[0], nodes[2], make_edge("req", "A", "C", "Optical"), graph
        )

        declared = direct_link_budget(nodes[2], nodes[1], e2)
        walked = direct_link_budget(nodes[1], nodes[2], e2)
        assert declared.loss != pytest.approx(walked.loss)
        assert result.segments[1].reverse is True
        assert result.segments[1].loss == pytest.approx(declared.loss)
        assert (result.segments[1].from_label, result.segments[1].to_label) == (
            "B",
            "C",
        )

    def test_chain_longer_than_recursion_limit(self, make_node, make_edge):
        n = 1500
        nodes = [make_node(f"n{i}", "Patch panel") for i in range(n)]
        edges = [
            make_edge(f"e{i}", f"n{i}", f"n{(i + 1) % n}", "Optical", {"Range (km)": 1})
            for i in range(n)
        ]
        graph = build_topology_graph(nodes, edges)

        result = chain_link_budget(
            nodes[0], nodes[-1], make_edge("req", "n0", f"n{n - 1}"), graph
        )

        assert result.is_chain_link is True
        assert result.segment_count == n - 1
        # 0.2 dB/km over 1 km plus 0.5 dB of connectors and splices per hop
        assert result.loss == pytest.approx(0.7 * (n - 1))

    def test_snr_uses_requested_edge_noise_floor(self, make_node, make_edge):
        nodes = [make_node("A"), make_node("B", "Patch panel"), make_node("C")]
        edges = [
            make_edge("e1", "A", "B", "Optical", {"Range (km)": 10}),
            make_edge("e2", "B", "C", "Optical", {"Range (km)": 10}),
        ]
        graph = build_topology_graph(nodes, edges)
        result = chain_link_budget(
            nodes[0], nodes[2], make_edge("req", "A", "C", "Copper(RJ45)"), graph
        )
        assert result.link_type is LinkType.COPPER
        assert result.snr_db == pytest.approx(15.0 + 80.0)
