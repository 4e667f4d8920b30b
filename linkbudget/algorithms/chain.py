"""Link budget of an edge realised as a multi-hop chain.

A requested edge between two nodes may physically be a chain of segments
through intermediate elements. ``chain_link_budget`` finds that chain,
evaluates every segment with the direct model, and folds the segment results
left to right:

- a passive arrival node only attenuates: the segment loss accumulates and
  the running power drops by it;
- a regenerative arrival node retransmits at its own declared power, or at
  the power it was sent when it declares none: the running power is reset
  and upstream loss stops propagating.

Latency always accumulates and capacity is the minimum over all segments.

Each segment is evaluated along its declared edge, source to target, even
when the walk traverses it target to source; ``SegmentResult.reverse``
records that the walk ran against the edge.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import List, Optional

from linkbudget.algorithms.chain_path import find_chain_path
from linkbudget.algorithms.direct import direct_link_budget, snr_db
from linkbudget.algorithms.params import param_number
from linkbudget.config import ENGINE_CONFIG, EngineConfig
from linkbudget.graph.topology import TopologyGraph
from linkbudget.logging import get_logger, log_trace
from linkbudget.model.equipment import EquipmentCatalog, load_default_catalog
from linkbudget.model.network import Edge, Node
from linkbudget.results.link import LinkBudgetResult, SegmentResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChainState:
    """Accumulator of the chain fold.

    Attributes:
        running_power: Signal power (dBm) after the last folded segment.
        total_loss: Loss accumulated over passive segments (dB).
        total_latency: Latency accumulated over all segments (ms).
        min_capacity: Smallest segment capacity seen so far.
    """

    running_power: float
    total_loss: float = 0.0
    total_latency: float = 0.0
    min_capacity: float = math.inf

    def step(
        self, segment: LinkBudgetResult, regenerated_power: Optional[float] = None
    ) -> ChainState:
        """Fold one segment into the state.

        Args:
            segment: Direct result of the segment.
            regenerated_power: Power the arrival node retransmits at, or None
                if the arrival node is passive.
        """
        base = replace(
            self,
            total_latency=self.total_latency + segment.latency,
            min_capacity=min(self.min_capacity, segment.capacity),
        )
        if regenerated_power is not None:
            return replace(base, running_power=regenerated_power)
        return replace(
            base,
            running_power=self.running_power - segment.loss,
            total_loss=self.total_loss + segment.loss,
        )


def chain_link_budget(
    source: Node,
    target: Node,
    edge: Edge,
    graph: TopologyGraph,
    classifier: Optional[EquipmentCatalog] = None,
    config: Optional[EngineConfig] = None,
) -> LinkBudgetResult:
    """Compute the link budget of ``edge``, following a chain when there is one.

    When no chain exists, or the chain is a single segment, the direct model
    is applied and its result returned unchanged.

    Args:
        source: Node the requested edge starts from.
        target: Node the requested edge ends at.
        edge: The requested edge. Its link type sets the noise floor of the
            aggregated SNR.
        graph: Topology graph of the request.
        classifier: Catalog answering ``is_regenerative`` for nodes.
            Defaults to the packaged catalog.
        config: Engine assumptions. Defaults to ``ENGINE_CONFIG``.

    Returns:
        A direct result, or an aggregated result with ``is_chain_link`` set.
    """
    config = config or ENGINE_CONFIG
    path = find_chain_path(graph, source.id, target.id)

    if not path:
        return direct_link_budget(source, target, edge, config)
    if len(path) == 1:
        return direct_link_budget(source, target, path[0].edge, config)

    classifier = classifier or load_default_catalog()
    logger.debug(
        "Chain detected %s -> %s with %d segments", source.label, target.label, len(path)
    )

    start_power = param_number(source.params, "Power (dBm)", config.default_tx_power_dbm)
    state = ChainState(running_power=start_power)
    segments: List[SegmentResult] = []
    trace: List[tuple] = []

    for index, (from_id, conn) in enumerate(path.hops(), start=1):
        from_node = graph.node(from_id)
        to_node = graph.node(conn.target)
        if from_node is None or to_node is None:
            continue

        # Physics runs along the declared edge, not the walk
        tx, rx = (to_node, from_node) if conn.reverse else (from_node, to_node)
        segment = direct_link_budget(tx, rx, conn.edge, config)
        regenerated = classifier.is_regenerative(to_node)
        regenerated_power = (
            param_number(to_node.params, "Power (dBm)", state.running_power)
            if regenerated
            else None
        )
        state = state.step(segment, regenerated_power)

        trace.append(
            (
                index,
                f"{from_node.label} -> {to_node.label}",
                "reverse" if conn.reverse else "forward",
                "regenerated" if regenerated else "passive",
                segment.loss,
                state.running_power,
            )
        )
        segments.append(
            SegmentResult(
                from_label=from_node.label,
                to_label=to_node.label,
                loss=segment.loss,
                is_regenerated=regenerated,
                power_after=state.running_power,
                reverse=conn.reverse,
            )
        )

    final_power = state.running_power
    link_type = edge.technology
    log_trace(
        logger,
        f"Chain complete: {start_power:.2f} dBm -> {final_power:.2f} dBm, "
        f"effective loss {start_power - final_power:.2f} dB",
        ["#", "Hop", "Direction", "Arrival", "Loss (dB)", "Power after (dBm)"],
        trace,
    )
    return LinkBudgetResult(
        received_power=final_power,
        loss=start_power - final_power,
        capacity=state.min_capacity,
        latency=state.total_latency,
        snr_db=snr_db(final_power, link_type, config),
        link_type=link_type,
        segment_count=len(path),
        segments=tuple(segments),
        is_chain_link=True,
        note=f"Chain link of {len(path)} segments",
    )
