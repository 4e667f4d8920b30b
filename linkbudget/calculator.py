"""Request orchestration: validate, compute every edge, sum node costs.

A calculation fails as a whole only for structural or validation problems.
Once the engine runs, failures are scoped to single edges: an edge whose
endpoint is missing, or whose evaluation raises, becomes an ``EdgeError``
while every other edge is still computed.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from linkbudget.algorithms.chain import chain_link_budget
from linkbudget.algorithms.params import param_number
from linkbudget.config import ENGINE_CONFIG, EngineConfig
from linkbudget.dsl.loader import load_topology
from linkbudget.graph.topology import TopologyGraph
from linkbudget.logging import get_logger
from linkbudget.model.equipment import EquipmentCatalog, load_default_catalog
from linkbudget.model.network import Edge, Node, Topology
from linkbudget.results.link import (
    CalculationReport,
    EdgeError,
    EdgeOutcome,
    EdgeResult,
)
from linkbudget.validation import ensure_valid

logger = get_logger(__name__)

#: Node parameter holding the unit cost of the equipment.
UNIT_COST_PARAM = "Unit cost"

MISSING_NODE_ERROR = "Source or target node not found"


def total_cost(nodes: Iterable[Node]) -> float:
    """Sum the nodes' unit costs. Absent or non-numeric costs count as 0."""
    return sum(param_number(node.params, UNIT_COST_PARAM, 0.0) for node in nodes)


def evaluate_edge(
    edge: Edge,
    topology: Topology,
    graph: TopologyGraph,
    catalog: EquipmentCatalog,
    config: EngineConfig,
) -> EdgeOutcome:
    """Compute one edge, converting any failure into an ``EdgeError``."""
    source = topology.get_node(edge.source)
    target = topology.get_node(edge.target)
    if source is None or target is None:
        logger.warning("Edge '%s': %s", edge.id, MISSING_NODE_ERROR)
        return EdgeError(edge_id=edge.id, error=MISSING_NODE_ERROR)

    try:
        result = chain_link_budget(source, target, edge, graph, catalog, config)
    except Exception as exc:
        logger.exception("Calculation failed for edge '%s'", edge.id)
        return EdgeError(edge_id=edge.id, error=f"Calculation error: {exc}")
    return EdgeResult(edge_id=edge.id, result=result)


def calculate(
    topology: Topology,
    catalog: Optional[EquipmentCatalog] = None,
    config: Optional[EngineConfig] = None,
    validate: bool = True,
) -> CalculationReport:
    """Compute link budgets for every edge of ``topology``.

    Args:
        topology: Nodes and edges of the request.
        catalog: Node classifier. Defaults to the packaged catalog.
        config: Engine assumptions. Defaults to ``ENGINE_CONFIG``.
        validate: Apply the business-rule validation gate first.

    Returns:
        CalculationReport with one outcome per edge, in edge order.

    Raises:
        TopologyValidationError: If ``validate`` is set and a rule is broken.
    """
    if validate:
        ensure_valid(topology)

    catalog = catalog or load_default_catalog()
    config = config or ENGINE_CONFIG
    graph = TopologyGraph.from_topology(topology)

    outcomes = [
        evaluate_edge(edge, topology, graph, catalog, config)
        for edge in topology.iter_edges()
    ]
    report = CalculationReport(results=outcomes, total_cost=total_cost(topology.nodes.values()))
    logger.info(
        "Computed %d edge(s): %d ok, %d failed; total cost %s",
        len(report),
        len(report.successes),
        len(report.errors),
        report.total_cost,
    )
    return report


def calculate_document(
    data: Any,
    catalog: Optional[EquipmentCatalog] = None,
    config: Optional[EngineConfig] = None,
) -> CalculationReport:
    """Load a topology document and calculate it in one call."""
    return calculate(load_topology(data), catalog=catalog, config=config)
