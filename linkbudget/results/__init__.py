"""Result records produced by the link-budget engine."""

from __future__ import annotations

from .link import (
    CalculationReport,
    EdgeError,
    EdgeOutcome,
    EdgeResult,
    LinkBudgetResult,
    NumerologyInfo,
    SegmentResult,
)

__all__ = [
    "LinkBudgetResult",
    "SegmentResult",
    "NumerologyInfo",
    "EdgeResult",
    "EdgeError",
    "EdgeOutcome",
    "CalculationReport",
]
