"""Utility helpers used across linkbudget.

Small, self-contained utilities that do not depend on project internals.
"""

from linkbudget.utils.yaml_utils import normalize_yaml_dict_keys

__all__ = [
    "normalize_yaml_dict_keys",
]
