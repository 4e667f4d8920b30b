"""Configuration classes for the link-budget engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from linkbudget.types.base import FrequencyBand, LinkType


def _default_noise_floors() -> Dict[LinkType, float]:
    return {
        LinkType.OPTICAL: -100.0,
        LinkType.COPPER: -80.0,
        LinkType.GSM: -90.0,
        LinkType.UMTS: -92.0,
        LinkType.LTE: -94.0,
        LinkType.NR: -95.0,
        LinkType.LINE_OF_SIGHT: -95.0,
    }


def _default_shannon_bandwidths() -> Dict[LinkType, float]:
    return {
        LinkType.OPTICAL: 1000.0,
        LinkType.GSM: 0.2,
        LinkType.UMTS: 5.0,
        LinkType.LTE: 20.0,
    }


@dataclass
class EngineConfig:
    """Fixed engineering assumptions used by the link-budget engine."""

    # Transmit power when a node declares none (dBm)
    default_tx_power_dbm: float = 20.0

    # Edge length when an edge declares none (km)
    default_distance_km: float = 0.1

    # Path-loss budget used to derive radio coverage radii (dB)
    coverage_budget_db: float = 100.0

    # Noise floor per technology (dBm)
    noise_floors: Dict[LinkType, float] = field(default_factory=_default_noise_floors)
    fallback_noise_floor: float = -95.0

    # Bandwidth (MHz) used for the Shannon fallback, fixed per technology
    shannon_bandwidths: Dict[LinkType, float] = field(
        default_factory=_default_shannon_bandwidths
    )
    nr_shannon_bandwidths: Dict[FrequencyBand, float] = field(
        default_factory=lambda: {FrequencyBand.SUB_6: 100.0, FrequencyBand.MMWAVE: 400.0}
    )

    def noise_floor(self, link_type: LinkType) -> float:
        """Return the noise floor (dBm) assumed for ``link_type``."""
        return self.noise_floors.get(link_type, self.fallback_noise_floor)

    def shannon_bandwidth(
        self, link_type: LinkType, band: Optional[FrequencyBand] = None
    ) -> Optional[float]:
        """Return the fixed Shannon bandwidth (MHz) for ``link_type``.

        Returns None when the technology has no fixed bandwidth and the
        caller must derive one from the edge or node parameters.
        """
        if link_type is LinkType.NR:
            return self.nr_shannon_bandwidths.get(
                band or FrequencyBand.SUB_6, self.nr_shannon_bandwidths[FrequencyBand.SUB_6]
            )
        return self.shannon_bandwidths.get(link_type)


# Global configuration instance
ENGINE_CONFIG = EngineConfig()
