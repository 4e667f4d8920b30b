"""Shared fixtures for the linkbudget test suite."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

import pytest

from linkbudget.model.equipment import EquipmentCatalog, load_default_catalog
from linkbudget.model.network import Edge, Node, Topology


@pytest.fixture
def make_node() -> Callable[..., Node]:
    """Factory for nodes with optional equipment type and params."""

    def _make(
        node_id: str,
        equipment_type: str = "",
        params: Optional[Dict[str, Any]] = None,
        label: str = "",
    ) -> Node:
        return Node(
            id=node_id,
            label=label,
            equipment_type=equipment_type,
            params=dict(params or {}),
        )

    return _make


@pytest.fixture
def make_edge() -> Callable[..., Edge]:
    """Factory for edges with a link type and params."""

    def _make(
        edge_id: str,
        source: str,
        target: str,
        link_type: str = "Optical",
        params: Optional[Dict[str, Any]] = None,
    ) -> Edge:
        return Edge(
            id=edge_id,
            source=source,
            target=target,
            link_type=link_type,
            params=dict(params or {}),
        )

    return _make


@pytest.fixture
def catalog() -> EquipmentCatalog:
    return load_default_catalog()


@pytest.fixture
def sample_document() -> Dict[str, Any]:
    """Mixed-technology topology: optical access, copper LAN, 4G and a LOS hop.

    Nodes carry a unit cost; the optical feeder passes a passive splitter.
    """
    return {
        "nodes": [
            {
                "id": "olt",
                "label": "OLT",
                "type": "OLT",
                "params": {"Power (dBm)": 5, "Unit cost": 1000},
            },
            {
                "id": "split",
                "label": "Splitter",
                "type": "Passive splitter",
                "params": {"Unit cost": 50},
            },
            {"id": "ont", "label": "ONT", "type": "ONT", "params": {"Unit cost": 80}},
            {
                "id": "sw",
                "label": "Switch",
                "type": "Switch",
                "params": {"Unit cost": "120.5"},
            },
            {"id": "enb", "label": "eNodeB", "type": "eNodeB"},
            {
                "id": "mw",
                "label": "Relay",
                "type": "Microwave relay",
                "params": {"Frequency (GHz)": 6},
            },
        ],
        "edges": [
            {
                "id": "feeder",
                "source": "olt",
                "target": "split",
                "link_type": "Optical",
                "params": {"Range (km)": 10},
            },
            {
                "id": "drop",
                "source": "split",
                "target": "ont",
                "link_type": "Optical",
                "params": {"Range (km)": 1},
            },
            {
                "id": "lan",
                "source": "ont",
                "target": "sw",
                "link_type": "Copper(RJ45)",
                "params": {"Range (km)": 0.05},
            },
            {
                "id": "radio",
                "source": "enb",
                "target": "sw",
                "link_type": "4G",
                "params": {"Range (km)": 2},
            },
            {
                "id": "backhaul",
                "source": "mw",
                "target": "enb",
                "link_type": "LineOfSight",
                "params": {"Range (km)": 20},
            },
        ],
    }


@pytest.fixture
def sample_topology(sample_document: Dict[str, Any]) -> Topology:
    from linkbudget.dsl.loader import load_topology

    return load_topology(sample_document)
