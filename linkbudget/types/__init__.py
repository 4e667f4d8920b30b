"""Shared enums for linkbudget.

Centralizes the technology tags so that the model, the engine and the
validation gate agree on a single vocabulary. Contains no runtime logic.
"""

from linkbudget.types.base import FrequencyBand, LinkType

__all__ = [
    "LinkType",
    "FrequencyBand",
]
