"""Immutable result records of a link-budget calculation.

Every record serialises with ``to_dict`` to the camelCase keys of the
calculation response (``receivedPower``, ``snr_dB``, ``segmentResults`` ...).
Optional fields that were not produced are omitted from the output.
Non-finite numbers (an unbounded optical coverage, for instance) serialise as
``None`` so the payload stays strict JSON.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from linkbudget.types.base import LinkType


def _json_number(value: float) -> Optional[float]:
    """Return ``value``, or None when it is infinite or NaN."""
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class NumerologyInfo:
    """5G NR numerology derived from the index mu.

    Attributes:
        subcarrier_spacing: Subcarrier spacing in kHz.
        number_of_subcarriers: Subcarriers that fit in the channel bandwidth.
        slot_duration: Slot duration in ms.
        numerology: The index mu.
    """

    subcarrier_spacing: int
    number_of_subcarriers: int
    slot_duration: float
    numerology: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subcarrierSpacing": self.subcarrier_spacing,
            "numberOfSubcarriers": self.number_of_subcarriers,
            "slotDuration": self.slot_duration,
            "numerology": self.numerology,
        }


@dataclass(frozen=True)
class SegmentResult:
    """One hop of a chain as it contributed to the aggregate.

    Attributes:
        from_label: Display label of the transmitting node.
        to_label: Display label of the receiving node.
        loss: Loss of this hop in dB.
        is_regenerated: True if the receiving node regenerated the signal.
        power_after: Running power (dBm) after this hop.
        reverse: True if the hop traversed its edge target -> source.
    """

    from_label: str
    to_label: str
    loss: float
    is_regenerated: bool
    power_after: float
    reverse: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.from_label,
            "to": self.to_label,
            "loss": _json_number(self.loss),
            "isRegenerated": self.is_regenerated,
            "powerAfter": _json_number(self.power_after),
            "reverse": self.reverse,
        }


@dataclass(frozen=True)
class LinkBudgetResult:
    """Link budget of one edge, evaluated directly or aggregated over a chain.

    Attributes:
        received_power: Received power in dBm.
        loss: Net loss in dB. Negative for a chain that ends above its start
            power because of regeneration.
        capacity: Capacity in Mbps.
        latency: Latency in ms.
        snr_db: Signal-to-noise ratio in dB.
        link_type: Technology of the evaluated edge.
        coverage: Coverage radius in km (direct results only).
        bitrate: Symbol-rate derived bitrate in Mbps (direct results only).
        margin: Optical link margin in dB, when non-zero.
        frequencies_per_cell: GSM frequencies per cell.
        reuse_distance: Frequency reuse distance in km.
        cellular_capacity: Area-wide cellular capacity.
        numerology: 5G numerology block.
        segment_count: Number of hops (chain results only).
        segments: Per-hop breakdown (chain results only).
        is_chain_link: True for chain results.
        note: Human-readable remark (chain results only).
    """

    received_power: float
    loss: float
    capacity: float
    latency: float
    snr_db: float
    link_type: LinkType
    coverage: Optional[float] = None
    bitrate: Optional[float] = None
    margin: Optional[float] = None
    frequencies_per_cell: Optional[float] = None
    reuse_distance: Optional[float] = None
    cellular_capacity: Optional[float] = None
    numerology: Optional[NumerologyInfo] = None
    segment_count: Optional[int] = None
    segments: Tuple[SegmentResult, ...] = ()
    is_chain_link: bool = False
    note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "receivedPower": _json_number(self.received_power),
            "loss": _json_number(self.loss),
            "capacity": _json_number(self.capacity),
        }
        if self.coverage is not None:
            data["coverage"] = _json_number(self.coverage)
        data["latency"] = _json_number(self.latency)
        data["snr_dB"] = _json_number(self.snr_db)
        if self.bitrate is not None:
            data["bitrate"] = _json_number(self.bitrate)
        data["linkType"] = self.link_type.value

        optional = {
            "margin": self.margin,
            "frequenciesPerCell": self.frequencies_per_cell,
            "reuseDistance": self.reuse_distance,
            "cellularCapacity": self.cellular_capacity,
        }
        data.update(
            {k: _json_number(v) for k, v in optional.items() if v is not None}
        )
        if self.numerology is not None:
            data["numerologyInfo"] = self.numerology.to_dict()

        if self.is_chain_link:
            data["segmentCount"] = self.segment_count
            data["segmentResults"] = [seg.to_dict() for seg in self.segments]
            data["isChainLink"] = True
            data["note"] = self.note
        return data


@dataclass(frozen=True)
class EdgeResult:
    """Successful outcome for one edge of the request."""

    edge_id: str
    result: LinkBudgetResult

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"edgeId": self.edge_id, **self.result.to_dict()}


@dataclass(frozen=True)
class EdgeError:
    """Failed outcome for one edge of the request."""

    edge_id: str
    error: str

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"edgeId": self.edge_id, "error": self.error}


EdgeOutcome = Union[EdgeResult, EdgeError]


@dataclass
class CalculationReport:
    """Full response of one calculation: per-edge outcomes plus total cost.

    Attributes:
        results: One outcome per submitted edge, in submission order.
        total_cost: Sum of the nodes' unit costs.
    """

    results: List[EdgeOutcome] = field(default_factory=list)
    total_cost: float = 0.0

    def __iter__(self) -> Iterator[EdgeOutcome]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def get(self, edge_id: str) -> Optional[EdgeOutcome]:
        """Return the outcome recorded for ``edge_id`` or None."""
        for outcome in self.results:
            if outcome.edge_id == edge_id:
                return outcome
        return None

    @property
    def successes(self) -> List[EdgeResult]:
        return [o for o in self.results if isinstance(o, EdgeResult)]

    @property
    def errors(self) -> List[EdgeError]:
        return [o for o in self.results if isinstance(o, EdgeError)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [outcome.to_dict() for outcome in self.results],
            "totalCost": _json_number(self.total_cost),
        }
