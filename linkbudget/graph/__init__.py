"""Graph primitives.

This package provides the bidirectional `TopologyGraph` used for chain
traversal and its builder.
"""

from linkbudget.graph.topology import (
    Adjacency,
    Connection,
    TopologyGraph,
    build_topology_graph,
)

__all__ = [
    "Adjacency",
    "Connection",
    "TopologyGraph",
    "build_topology_graph",
]
