"""linkbudget: link-budget and capacity engine for telecom topologies.

Computes received power, loss, capacity, latency and SNR for every edge of a
topology of equipment nodes joined by optical, copper, line-of-sight and
cellular links. An edge whose endpoints are connected through a chain of
intermediate nodes is evaluated hop by hop, with regenerative equipment
restoring the signal on the way.

Primary API:
    calculate() - Validate a topology and compute every edge
    load_topology() - Build a Topology from a request document
    direct_link_budget() / chain_link_budget() - Single-edge engines
    get_default_params() - Default parameter sets per link type
    to_networkx() - Export a topology (and results) to NetworkX

Example:
    from linkbudget import calculate, load_topology

    topology = load_topology(
        {
            "nodes": [{"id": "A"}, {"id": "B"}],
            "edges": [
                {
                    "id": "e1",
                    "source": "A",
                    "target": "B",
                    "link_type": "Optical",
                    "params": {"Range (km)": 10},
                }
            ],
        }
    )
    report = calculate(topology)
    report.get("e1").result.loss  # 2.5
"""

from __future__ import annotations

from linkbudget import cli, logging
from linkbudget._version import __version__
from linkbudget.algorithms import chain_link_budget, direct_link_budget, find_chain_path
from linkbudget.calculator import calculate, calculate_document, total_cost
from linkbudget.config import ENGINE_CONFIG, EngineConfig
from linkbudget.defaults import available_link_types, get_default_params
from linkbudget.dsl import load_topology, load_topology_yaml
from linkbudget.lib.nx import to_networkx
from linkbudget.model.equipment import EquipmentCatalog, load_default_catalog
from linkbudget.model.network import Edge, Node, Topology
from linkbudget.model.path import ChainPath
from linkbudget.results.link import (
    CalculationReport,
    EdgeError,
    EdgeResult,
    LinkBudgetResult,
)
from linkbudget.types.base import FrequencyBand, LinkType
from linkbudget.validation import (
    TopologyValidationError,
    ensure_valid,
    validate_topology,
)

__all__ = [
    # Version
    "__version__",
    # Model
    "Topology",
    "Node",
    "Edge",
    "ChainPath",
    "EquipmentCatalog",
    "load_default_catalog",
    # Loading and validation
    "load_topology",
    "load_topology_yaml",
    "validate_topology",
    "ensure_valid",
    "TopologyValidationError",
    # Calculation (primary API)
    "calculate",
    "calculate_document",
    "total_cost",
    "direct_link_budget",
    "chain_link_budget",
    "find_chain_path",
    # Types
    "LinkType",
    "FrequencyBand",
    # Results
    "LinkBudgetResult",
    "EdgeResult",
    "EdgeError",
    "CalculationReport",
    # Configuration and defaults
    "EngineConfig",
    "ENGINE_CONFIG",
    "get_default_params",
    "available_link_types",
    # Library integrations (NetworkX)
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
