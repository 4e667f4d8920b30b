"""Topology modeling with Node, Edge and Topology classes.

A topology is the caller-supplied input of one calculation: a flat set of
network elements and the connections between them, each carrying a free-form
parameter map whose keys embed their units (e.g. ``"Attenuation (dB/km)"``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from linkbudget.logging import get_logger
from linkbudget.types.base import LinkType

logger = get_logger(__name__)

#: Parameter consulted when a node declares no explicit equipment type.
EQUIPMENT_TYPE_PARAM = "Equipment type"

#: Edge parameter consulted when an edge declares no explicit link type.
LINK_TYPE_PARAM = "Link type"


@dataclass
class Node:
    """A network element.

    Attributes:
        id (str): Identifier, unique within one topology.
        label (str): Display name. Defaults to the id.
        equipment_type (str): Equipment tag used for classification. Falls
            back to the ``"Equipment type"`` parameter when empty.
        params (Dict[str, Any]): Engineering parameters (numbers or strings).
    """

    id: str
    label: str = ""
    equipment_type: str = ""
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.id
        if not self.equipment_type:
            self.equipment_type = str(self.params.get(EQUIPMENT_TYPE_PARAM) or "")


@dataclass
class Edge:
    """A connection between two nodes.

    The link type is kept as the raw tag supplied by the caller. It is
    parsed when the edge is evaluated, so an unrecognized tag fails that
    edge alone instead of the whole topology.

    Attributes:
        id (str): Identifier, unique within one topology.
        source (str): Id of the transmitting node.
        target (str): Id of the receiving node.
        link_type (str): Technology tag, e.g. ``"Optical"`` or ``"5G"``.
        params (Dict[str, Any]): Engineering parameters.
    """

    id: str
    source: str
    target: str
    link_type: str = ""
    params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.link_type:
            self.link_type = str(
                self.params.get(LINK_TYPE_PARAM) or LinkType.LINE_OF_SIGHT.value
            )

    @property
    def technology(self) -> LinkType:
        """Parsed link type.

        Raises:
            ValueError: If the tag is not a recognized link type.
        """
        return LinkType.from_string(self.link_type)


@dataclass
class Topology:
    """A container for the nodes and edges of one calculation request.

    Both mappings preserve insertion order, which determines adjacency order
    in the topology graph and therefore which chain path is found first.

    Attributes:
        nodes (Dict[str, Node]): Mapping from node id -> Node.
        edges (Dict[str, Edge]): Mapping from edge id -> Edge.
    """

    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: Dict[str, Edge] = field(default_factory=dict)

    def add_node(self, node: Node) -> None:
        """Add a node to the topology (keyed by node.id).

        Raises:
            ValueError: If a node with the same id already exists.
        """
        if node.id in self.nodes:
            raise ValueError(f"Node '{node.id}' already exists in the topology.")
        self.nodes[node.id] = node

    def add_edge(self, edge: Edge) -> None:
        """Add an edge to the topology (keyed by edge.id).

        Endpoints are not checked here: an edge that references a missing
        node is kept and reported as a per-edge error during calculation.

        Raises:
            ValueError: If an edge with the same id already exists.
        """
        if edge.id in self.edges:
            raise ValueError(f"Edge '{edge.id}' already exists in the topology.")
        if edge.source not in self.nodes or edge.target not in self.nodes:
            logger.debug(
                "Edge '%s' references a missing node (%s -> %s)",
                edge.id,
                edge.source,
                edge.target,
            )
        self.edges[edge.id] = edge

    def get_node(self, node_id: str) -> Optional[Node]:
        """Return the node with ``node_id`` or None."""
        return self.nodes.get(node_id)

    def iter_edges(self) -> Iterator[Edge]:
        """Iterate edges in insertion order."""
        return iter(self.edges.values())
