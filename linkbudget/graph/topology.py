"""Bidirectional adjacency structure over a topology.

``build_topology_graph`` turns flat node and edge lists into a
``TopologyGraph``: for every edge whose endpoints both exist, the source gets
a forward ``Connection`` and the target a reverse one. Edges with a dangling
endpoint are left out, which only affects reachability for chain queries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from linkbudget.logging import get_logger
from linkbudget.model.network import Edge, Node, Topology

logger = get_logger(__name__)


@dataclass(frozen=True)
class Connection:
    """One traversable direction of an edge.

    Attributes:
        target: Id of the neighbor reached through ``edge``.
        edge: The underlying edge.
        reverse: True when the traversal runs target -> source of ``edge``.
    """

    target: str
    edge: Edge
    reverse: bool = False

    @property
    def origin(self) -> str:
        """Id of the node this connection leaves from."""
        return self.edge.target if self.reverse else self.edge.source


@dataclass
class Adjacency:
    """A node and its outgoing connections in edge input order."""

    node: Node
    connections: List[Connection] = field(default_factory=list)


@dataclass
class TopologyGraph:
    """Mapping of node id -> ``Adjacency``. Read-only once built."""

    adjacency: Dict[str, Adjacency] = field(default_factory=dict)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def __iter__(self) -> Iterator[str]:
        return iter(self.adjacency)

    def node(self, node_id: str) -> Optional[Node]:
        """Return the node with ``node_id`` or None."""
        entry = self.adjacency.get(node_id)
        return entry.node if entry is not None else None

    def connections(self, node_id: str) -> List[Connection]:
        """Return the connections leaving ``node_id`` (empty if unknown)."""
        entry = self.adjacency.get(node_id)
        return entry.connections if entry is not None else []

    @classmethod
    def from_topology(cls, topology: Topology) -> TopologyGraph:
        """Build the graph for a ``Topology`` container."""
        return build_topology_graph(topology.nodes.values(), topology.edges.values())


def build_topology_graph(
    nodes: Iterable[Node], edges: Iterable[Edge]
) -> TopologyGraph:
    """Build a bidirectional adjacency structure.

    Args:
        nodes: Network elements. Later duplicates of an id replace earlier ones.
        edges: Connections, in the order that defines adjacency order.

    Returns:
        TopologyGraph with a forward entry on each edge source and a reverse
        entry on each edge target.
    """
    graph = TopologyGraph()
    for node in nodes:
        graph.adjacency[node.id] = Adjacency(node=node)

    for edge in edges:
        if edge.source not in graph.adjacency or edge.target not in graph.adjacency:
            logger.debug("Skipping dangling edge '%s' in topology graph", edge.id)
            continue
        graph.adjacency[edge.source].connections.append(
            Connection(target=edge.target, edge=edge)
        )
        graph.adjacency[edge.target].connections.append(
            Connection(target=edge.source, edge=edge, reverse=True)
        )
    return graph
