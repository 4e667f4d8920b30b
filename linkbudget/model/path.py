"""Lightweight representation of a multi-hop chain between two nodes.

``ChainPath`` stores the ordered connections traversed from a source node to
a target node. No node repeats along a chain.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Tuple

if TYPE_CHECKING:
    from linkbudget.graph.topology import Connection


@dataclass(frozen=True)
class ChainPath:
    """A simple path through the topology graph.

    Attributes:
        source: Id of the node the chain starts from.
        connections: Traversed connections in order. Each connection's
            ``target`` is the node reached by that hop.
    """

    source: str
    connections: Tuple["Connection", ...] = ()

    def __len__(self) -> int:
        """Return the number of segments."""
        return len(self.connections)

    def __iter__(self) -> Iterator["Connection"]:
        return iter(self.connections)

    def __getitem__(self, idx: int) -> "Connection":
        return self.connections[idx]

    @property
    def target(self) -> str:
        """Id of the last node reached (the source for an empty chain)."""
        return self.connections[-1].target if self.connections else self.source

    @property
    def node_ids(self) -> Tuple[str, ...]:
        """Ids of every node on the chain, source first."""
        return (self.source,) + tuple(conn.target for conn in self.connections)

    def hops(self) -> Iterator[Tuple[str, "Connection"]]:
        """Yield ``(from_node_id, connection)`` for every segment in order."""
        previous = self.source
        for conn in self.connections:
            yield previous, conn
            previous = conn.target
