"""Base enums shared by the link-budget engine."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class LinkType(str, Enum):
    """Physical technology of an edge.

    Values are the wire tags used in topology documents and result payloads.
    """

    OPTICAL = "Optical"
    COPPER = "Copper(RJ45)"
    LINE_OF_SIGHT = "LineOfSight"
    GSM = "GSM"
    UMTS = "UMTS"
    LTE = "4G"
    NR = "5G"

    @property
    def is_cellular(self) -> bool:
        """True for the radio generations GSM, UMTS, 4G and 5G."""
        return self in _CELLULAR

    @classmethod
    def from_string(cls, value: str) -> "LinkType":
        """Parse a link-type tag.

        Accepts the wire value ("Copper(RJ45)"), the member name ("COPPER"),
        and a few common aliases ("RJ45", "Microwave"). Matching is
        case-insensitive.

        Raises:
            ValueError: If the string doesn't match any link type.
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        if key in _ALIASES:
            return _ALIASES[key]
        valid = ", ".join(e.value for e in cls)
        raise ValueError(f"Invalid link type '{value}'. Valid values are: {valid}")


_CELLULAR = frozenset({LinkType.GSM, LinkType.UMTS, LinkType.LTE, LinkType.NR})

_ALIASES: Dict[str, LinkType] = {
    "rj45": LinkType.COPPER,
    "copper": LinkType.COPPER,
    "fiber": LinkType.OPTICAL,
    "microwave": LinkType.LINE_OF_SIGHT,
    "los": LinkType.LINE_OF_SIGHT,
    "lte": LinkType.LTE,
    "nr": LinkType.NR,
}


class FrequencyBand(str, Enum):
    """5G frequency range."""

    SUB_6 = "sub-6"
    MMWAVE = "mmWave"

    @classmethod
    def parse(cls, value: object) -> "FrequencyBand | None":
        """Return the band for an exact wire value, or None if unrecognized."""
        for member in cls:
            if value == member.value:
                return member
        return None
