"""Business-rule validation of a topology before calculation.

The engine assumes these rules hold and performs no policy checks itself:

- a 5G edge declares a ``Frequency band`` of ``sub-6`` or ``mmWave``;
- a 5G edge's ``Numerology (mu)``, when non-empty, is an integer in 0..4;
- the 5G carrier (source node ``Frequency (MHz)``, default 3500) matches the
  band: mmWave needs at least 24 GHz, sub-6 stays below 6 GHz;
- an RJ45 edge is at most 100 m (``Range (km)`` <= 0.1, default 0.1).
"""

from __future__ import annotations

import math
from typing import Any, List, Optional

from linkbudget.algorithms.params import param_number
from linkbudget.model.network import Edge, Topology
from linkbudget.types.base import FrequencyBand, LinkType

VALID_NUMEROLOGIES = frozenset({0, 1, 2, 3, 4})
MMWAVE_MIN_FREQUENCY_MHZ = 24000.0
SUB6_MAX_FREQUENCY_MHZ = 6000.0
RJ45_MAX_DISTANCE_KM = 0.1


class TopologyValidationError(ValueError):
    """Raised when a topology breaks one or more business rules.

    Attributes:
        details: One message per violation, in edge order.
    """

    def __init__(self, details: List[str]) -> None:
        super().__init__("Validation errors: " + "; ".join(details))
        self.details = list(details)


def _edge_technology(edge: Edge) -> Optional[LinkType]:
    try:
        return edge.technology
    except ValueError:
        return None


def _parse_numerology(value: Any) -> Optional[int]:
    """Integer part of ``value`` (as ``parseInt`` would read it), or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    text = str(value).strip()
    digits = ""
    for idx, char in enumerate(text):
        if char.isdigit() or (idx == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return None


def _validate_nr_edge(edge: Edge, topology: Topology) -> List[str]:
    errors: List[str] = []
    band = FrequencyBand.parse(edge.params.get("Frequency band"))
    if band is None:
        errors.append(f"Edge {edge.id}: Frequency band must be 'sub-6' or 'mmWave'")

    raw_mu = edge.params.get("Numerology (mu)")
    if raw_mu not in (None, ""):
        mu = _parse_numerology(raw_mu)
        if mu not in VALID_NUMEROLOGIES:
            errors.append(f"Edge {edge.id}: Numerology (mu) must be 0, 1, 2, 3, or 4")

    source = topology.get_node(edge.source)
    frequency = param_number(source.params if source else None, "Frequency (MHz)", 3500.0)
    if band is FrequencyBand.MMWAVE and frequency < MMWAVE_MIN_FREQUENCY_MHZ:
        errors.append(f"Edge {edge.id}: mmWave requires frequency >= 24 GHz")
    if band is FrequencyBand.SUB_6 and frequency >= SUB6_MAX_FREQUENCY_MHZ:
        errors.append(f"Edge {edge.id}: sub-6 requires frequency < 6 GHz")
    return errors


def _validate_copper_edge(edge: Edge) -> List[str]:
    distance = param_number(edge.params, "Range (km)", RJ45_MAX_DISTANCE_KM)
    if distance > RJ45_MAX_DISTANCE_KM:
        return [f"Edge {edge.id}: RJ45 maximum distance is 100m (0.1 km)"]
    return []


def validate_topology(topology: Topology) -> List[str]:
    """Return one message per business-rule violation (empty when valid).

    Edges with an unrecognized link type are not checked here. They fail
    individually during calculation.
    """
    errors: List[str] = []
    for edge in topology.iter_edges():
        technology = _edge_technology(edge)
        if technology is LinkType.NR:
            errors.extend(_validate_nr_edge(edge, topology))
        elif technology is LinkType.COPPER:
            errors.extend(_validate_copper_edge(edge))
    return errors


def ensure_valid(topology: Topology) -> None:
    """Raise ``TopologyValidationError`` if ``topology`` breaks any rule."""
    errors = validate_topology(topology)
    if errors:
        raise TopologyValidationError(errors)
