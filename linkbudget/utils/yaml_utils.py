"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Normalize dictionary keys from YAML parsing to plain strings.

    YAML 1.1 boolean keys (``yes``, ``no``, ``on``, ``off``, ...) arrive as
    Python ``True``/``False`` and numeric keys arrive as ints. Parameter maps
    are keyed by name, so every key is converted with ``str``.

    Args:
        data: Dictionary that may contain boolean or other non-string keys.

    Returns:
        Dictionary with all keys converted to strings.

    Examples:
        >>> normalize_yaml_dict_keys({True: "a", 1: "b", "i": 2})
        {'True': 'a', '1': 'b', 'i': 2}
    """
    return {str(key): value for key, value in data.items()}
