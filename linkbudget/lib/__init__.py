"""Integrations with third-party graph libraries."""

from linkbudget.lib.nx import to_networkx

__all__ = [
    "to_networkx",
]
