"""NetworkX export of a topology.

Example:
    >>> from linkbudget.lib.nx import to_networkx
    >>> G = to_networkx(topology, report)
    >>> G.edges["A", "B", "e1"]["result"]["loss"]
    2.5
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from linkbudget.model.network import Topology
from linkbudget.results.link import CalculationReport

if TYPE_CHECKING:
    import networkx as nx


def to_networkx(
    topology: Topology, report: Optional[CalculationReport] = None
) -> "nx.MultiGraph":
    """Convert a topology to an undirected NetworkX ``MultiGraph``.

    Nodes carry ``label``, ``type`` and ``params``. Edges are keyed by edge id
    and carry ``link_type``, ``params`` and the declared ``source``/``target``
    (the graph itself is undirected). Edges with a missing endpoint are
    skipped, as in the topology graph.

    Args:
        topology: Topology to convert.
        report: Optional calculation report. Each edge outcome is attached as
            ``result`` (the serialised result) or ``error`` (the message).

    Returns:
        A new ``networkx.MultiGraph``.
    """
    import networkx as nx

    G = nx.MultiGraph()
    for node in topology.nodes.values():
        G.add_node(
            node.id,
            label=node.label,
            type=node.equipment_type,
            params=dict(node.params),
        )

    for edge in topology.iter_edges():
        if edge.source not in topology.nodes or edge.target not in topology.nodes:
            continue
        G.add_edge(
            edge.source,
            edge.target,
            key=edge.id,
            link_type=edge.link_type,
            params=dict(edge.params),
            source=edge.source,
            target=edge.target,
        )

    if report is not None:
        for outcome in report:
            edge = topology.edges.get(outcome.edge_id)
            if edge is None or not G.has_edge(edge.source, edge.target, key=edge.id):
                continue
            attrs = G.edges[edge.source, edge.target, edge.id]
            data = outcome.to_dict()
            if outcome.ok:
                data.pop("edgeId")
                attrs["result"] = data
            else:
                attrs["error"] = data["error"]
    return G
