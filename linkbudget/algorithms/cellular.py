"""Numeric helpers for the cellular link models.

Spectral efficiency, 5G numerology, cell counting and the empirical
inter-cell interference models used by the 4G and 5G handlers.
"""

from __future__ import annotations

import math
from typing import Dict, Optional, Union

from linkbudget.results.link import NumerologyInfo
from linkbudget.types.base import FrequencyBand, LinkType

#: Bits per symbol for each supported modulation.
MODULATION_BITS: Dict[str, int] = {
    "QPSK": 2,
    "16QAM": 4,
    "64QAM": 6,
    "256QAM": 8,
    "1024QAM": 10,
}

#: Typical spectral-efficiency multiplier per technology.
TECHNOLOGY_FACTOR: Dict[LinkType, float] = {
    LinkType.GSM: 0.5,
    LinkType.UMTS: 0.5,
    LinkType.LTE: 3.0,
    LinkType.NR: 6.0,
}

#: 5G NR subcarrier spacing (kHz) per numerology index.
SUBCARRIER_SPACING_KHZ: Dict[int, int] = {0: 15, 1: 30, 2: 60, 3: 120, 4: 240}
DEFAULT_SUBCARRIER_SPACING_KHZ = 30

#: Inter-cell interference coordination gain applied to 4G.
ICIC_GAIN = 1.2

#: Advanced coordination gain (CoMP, eICIC) applied to 5G.
COORDINATION_GAIN_5G = 1.4


def spectral_efficiency(
    link_type: Union[LinkType, str], modulation: str, code_rate: float = 1.0
) -> float:
    """Return spectral efficiency (bit/s/Hz) for a modulation and technology.

    Unknown modulations count as QPSK and unknown technologies use factor 1.
    """
    try:
        technology: Optional[LinkType] = LinkType.from_string(link_type)
    except ValueError:
        technology = None
    factor = TECHNOLOGY_FACTOR.get(technology, 1.0) if technology else 1.0
    bits = MODULATION_BITS.get(str(modulation).strip().upper(), 2)
    return bits * code_rate * factor


def numerology_5g(bandwidth_mhz: float, mu: int = 1) -> NumerologyInfo:
    """Derive subcarrier spacing, subcarrier count and slot duration.

    Args:
        bandwidth_mhz: Channel bandwidth in MHz.
        mu: Numerology index. Indices outside 0..4 use 30 kHz spacing.
    """
    scs = SUBCARRIER_SPACING_KHZ.get(mu, DEFAULT_SUBCARRIER_SPACING_KHZ)
    return NumerologyInfo(
        subcarrier_spacing=scs,
        number_of_subcarriers=math.floor(bandwidth_mhz * 1000 / scs),
        slot_duration=1 / (2**mu),
        numerology=mu,
    )


def cluster_size(i: float, j: float) -> float:
    """GSM reuse cluster size N = i^2 + j^2 + i*j."""
    return i**2 + j**2 + i * j


def cell_area(radius_km: float) -> float:
    """Area (km^2) of a circular cell."""
    return math.pi * radius_km**2


def cell_count(total_area_km2: float, radius_km: float) -> float:
    """Number of cells of ``radius_km`` needed to cover ``total_area_km2``."""
    return total_area_km2 / cell_area(radius_km)


def interference_reduction_4g(number_of_cells: float) -> float:
    """Fraction of per-cell capacity left after inter-cell interference.

    Empirical log-density model with a fixed ICIC gain, capped at 1.
    """
    if number_of_cells <= 1:
        return 1.0
    density = math.sqrt(number_of_cells)
    reduction = 1 / (1 + 0.3 * math.log10(density))
    return min(1.0, reduction * ICIC_GAIN)


def interference_reduction_5g(
    number_of_cells: float,
    beamforming_gain_db: float,
    band: FrequencyBand = FrequencyBand.SUB_6,
) -> float:
    """Fraction of per-cell capacity left after interference, with beamforming.

    Beamforming efficiency grows as ``1 - exp(-gain/10)``. The density term
    is weighted 0.8 for mmWave and 0.5 for sub-6. Capped at 1.
    """
    if number_of_cells <= 1:
        return 1.0
    beamforming_efficiency = 1 - math.exp(-beamforming_gain_db / 10)
    frequency_factor = 0.8 if band is FrequencyBand.MMWAVE else 0.5
    density = math.sqrt(number_of_cells)
    base = 1 / (1 + frequency_factor * math.log10(density))
    total = base * (1 + beamforming_efficiency) * COORDINATION_GAIN_5G
    return min(1.0, total)
