"""Depth-first search for a chain between two nodes."""

from __future__ import annotations

from typing import Iterator, List, Optional, Set, Tuple

from linkbudget.graph.topology import Connection, TopologyGraph
from linkbudget.model.path import ChainPath


def find_chain_path(
    graph: TopologyGraph, source_id: str, target_id: str
) -> Optional[ChainPath]:
    """Find one simple path from ``source_id`` to ``target_id``.

    The search is a DFS over connections in adjacency order and returns the
    first path that reaches the target. It is neither the shortest nor the
    cheapest path. A node is removed from the visited set when all its
    branches dead-end, so a later branch may pass through it.

    The DFS keeps an explicit stack of frames rather than recursing, so the
    chain length is not bounded by the interpreter's recursion limit.

    Args:
        graph: Topology graph to search.
        source_id: Id of the starting node.
        target_id: Id of the node to reach.

    Returns:
        The first ChainPath found, an empty ChainPath when source equals
        target, or None when the target is unreachable.
    """
    if source_id == target_id:
        return ChainPath(source=source_id)
    if source_id not in graph:
        return None

    visited: Set[str] = {source_id}
    trail: List[Connection] = []
    # One frame per node on the current trail: the node and its unexplored
    # connections. trail[i] leads from stack[i] to stack[i + 1].
    stack: List[Tuple[str, Iterator[Connection]]] = [
        (source_id, iter(graph.connections(source_id)))
    ]

    while stack:
        node_id, pending = stack[-1]
        for conn in pending:
            if conn.target in visited:
                continue
            if conn.target == target_id:
                trail.append(conn)
                return ChainPath(source=source_id, connections=tuple(trail))
            if conn.target not in graph:
                continue
            trail.append(conn)
            visited.add(conn.target)
            stack.append((conn.target, iter(graph.connections(conn.target))))
            break
        else:
            # Dead end: backtrack and free the node for other branches
            stack.pop()
            visited.discard(node_id)
            if trail:
                trail.pop()

    return None
