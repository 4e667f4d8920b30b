"""Parameter-with-default accessors shared by every technology handler.

Parameter maps come straight from the caller and may hold numbers, numeric
strings, empty strings or nothing at all. A missing or unusable value is
never an error: the documented default is substituted.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional, Tuple

from linkbudget.logging import get_logger

logger = get_logger(__name__)

Params = Mapping[str, Any]


def _coerce_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float, or None if missing, non-numeric or NaN."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def param_number(params: Optional[Params], key: str, default: float) -> float:
    """Return ``params[key]`` as a float, or ``default`` when absent or unusable.

    Zero is a legitimate value and is returned as-is.
    """
    if not params or key not in params:
        return float(default)
    number = _coerce_number(params[key])
    if number is None:
        if params[key] not in (None, ""):
            logger.debug(
                "Parameter '%s'=%r is not numeric, using default %s",
                key,
                params[key],
                default,
            )
        return float(default)
    return number


def param_text(params: Optional[Params], key: str, default: str) -> str:
    """Return ``params[key]`` as a stripped string, or ``default`` when absent."""
    if not params:
        return default
    value = params.get(key)
    if value is None:
        return default
    text = str(value).strip()
    return text if text else default


def first_number(sources: Iterable[Tuple[Optional[Params], str]], default: float) -> float:
    """Return the first usable numeric value among ``(params, key)`` sources.

    Args:
        sources: Candidate lookups, tried in order.
        default: Value used when no source yields a number.
    """
    for params, key in sources:
        if params and key in params:
            number = _coerce_number(params[key])
            if number is not None:
                return number
    return float(default)
