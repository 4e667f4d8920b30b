"""Topology model package.

Defines the request-scoped data model: nodes, edges, the `Topology`
container, chain paths and the equipment catalog used to classify nodes.
"""

from linkbudget.model.equipment import (
    Capabilities,
    Equipment,
    EquipmentCatalog,
    load_default_catalog,
)
from linkbudget.model.network import Edge, Node, Topology
from linkbudget.model.path import ChainPath

__all__ = [
    # Topology
    "Topology",
    "Node",
    "Edge",
    "ChainPath",
    # Classification
    "Capabilities",
    "Equipment",
    "EquipmentCatalog",
    "load_default_catalog",
]
