"""Topology document parsing.

Exposes the loader that validates a request document against the packaged
schema and builds the `Topology` model from it.
"""

from linkbudget.dsl.loader import (
    load_topology,
    load_topology_yaml,
    validate_topology_document,
)

__all__ = [
    "load_topology",
    "load_topology_yaml",
    "validate_topology_document",
]
