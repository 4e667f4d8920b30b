"""Topology loader + schema validation.

Provides the entrypoints to turn a request document (a mapping, or YAML/JSON
text) into a ``Topology``. Structure is checked against the packaged JSON
schema before any node or edge is built.

Two entry shapes are accepted for nodes and edges. The flat form:

    nodes:
      - id: A
        label: Central office
        type: OLT
        params: {Power (dBm): 5}
    edges:
      - id: e1
        source: A
        target: B
        link_type: Optical
        params: {Range (km): 12}

and the editor form, where ``label`` and ``params`` sit under ``data``.
"""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Mapping

import jsonschema
import yaml

from linkbudget.logging import get_logger
from linkbudget.model.network import EQUIPMENT_TYPE_PARAM, Edge, Node, Topology
from linkbudget.utils.yaml_utils import normalize_yaml_dict_keys

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def _topology_schema() -> Dict[str, Any]:
    with (
        resources.files("linkbudget.schemas")
        .joinpath("topology.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def _entry_params(entry: Mapping[str, Any]) -> Dict[str, Any]:
    data = entry.get("data") or {}
    params = entry.get("params")
    if params is None:
        params = data.get("params")
    return normalize_yaml_dict_keys(dict(params or {}))


def _entry_label(entry: Mapping[str, Any]) -> str:
    data = entry.get("data") or {}
    label = entry.get("label")
    if label is None:
        label = data.get("label")
    return str(label) if label is not None else ""


def _build_node(entry: Mapping[str, Any]) -> Node:
    params = _entry_params(entry)
    equipment_type = (
        entry.get("equipment_type")
        or params.get(EQUIPMENT_TYPE_PARAM)
        or entry.get("type")
        or ""
    )
    return Node(
        id=str(entry["id"]),
        label=_entry_label(entry),
        equipment_type=str(equipment_type),
        params=params,
    )


def _build_edge(entry: Mapping[str, Any]) -> Edge:
    return Edge(
        id=str(entry["id"]),
        source=str(entry["source"]),
        target=str(entry["target"]),
        link_type=str(entry.get("link_type") or ""),
        params=_entry_params(entry),
    )


def validate_topology_document(data: Any) -> None:
    """Check the shape of a topology document.

    Raises:
        ValueError: If the document is not a mapping or lacks nodes/edges.
        jsonschema.ValidationError: If the document violates the schema.
    """
    if not isinstance(data, dict):
        raise ValueError("The topology document must map to a dictionary at top-level.")
    if data.get("nodes") is None or data.get("edges") is None:
        raise ValueError("Nodes and edges are required")
    if not isinstance(data["nodes"], list):
        raise ValueError("'nodes' must be a list")
    if not isinstance(data["edges"], list):
        raise ValueError("'edges' must be a list")

    jsonschema.validate(data, _topology_schema())


def load_topology(data: Any) -> Topology:
    """Validate a topology document and build the ``Topology``.

    Args:
        data: Parsed document with ``nodes`` and ``edges`` lists.

    Returns:
        Topology preserving the document order of nodes and edges.

    Raises:
        ValueError: On structural problems, including duplicate ids.
        jsonschema.ValidationError: If the document violates the schema.
    """
    validate_topology_document(data)

    topology = Topology()
    for entry in data["nodes"]:
        topology.add_node(_build_node(entry))
    for entry in data["edges"]:
        topology.add_edge(_build_edge(entry))

    logger.debug(
        "Loaded topology with %d nodes and %d edges",
        len(topology.nodes),
        len(topology.edges),
    )
    return topology


def load_topology_yaml(text: str) -> Topology:
    """Parse YAML (or JSON, a YAML subset) text and build the ``Topology``."""
    data = yaml.safe_load(text)
    if data is None:
        data = {}
    return load_topology(data)
