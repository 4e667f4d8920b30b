"""Equipment and EquipmentCatalog classes for node classification."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Dict, Optional

import yaml

from linkbudget.model.network import Node
from linkbudget.utils.yaml_utils import normalize_yaml_dict_keys


@dataclass(frozen=True)
class Capabilities:
    """Capability set of a node: any combination of active, passive, regenerative."""

    active: bool = False
    passive: bool = False
    regenerative: bool = False

    def labels(self) -> list[str]:
        """Return the names of the capabilities that are set."""
        names = []
        if self.active:
            names.append("active")
        if self.passive:
            names.append("passive")
        if self.regenerative:
            names.append("regenerative")
        return names


#: Capability set of equipment types that are not in the catalog.
NO_CAPABILITIES = Capabilities()


@dataclass
class Equipment:
    """An equipment type and the signal-handling capabilities it implies.

    Attributes:
        name (str): Equipment type tag (e.g., "Repeater", "Passive splitter").
        description (str): A human-readable description.
        capabilities (Capabilities): Active/passive/regenerative flags.
        attrs (Dict[str, Any]): Arbitrary key-value attributes for extra metadata.
    """

    name: str
    description: str = ""
    capabilities: Capabilities = NO_CAPABILITIES
    attrs: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        """Returns a dictionary containing all properties of this equipment."""
        return {
            "name": self.name,
            "description": self.description,
            "active": self.capabilities.active,
            "passive": self.capabilities.passive,
            "regenerative": self.capabilities.regenerative,
            "attrs": dict(self.attrs),
        }


@dataclass
class EquipmentCatalog:
    """Holds named Equipment entries and answers capability queries for nodes.

    Lookups match the equipment tag exactly first and then case-insensitively.
    A node whose tag is unknown has no capabilities: it is neither active,
    passive nor regenerative.

    Example (YAML-like):
        equipment:
          Repeater:
            description: Optical-electrical-optical regenerator
            active: true
            regenerative: true
          Passive splitter:
            passive: true
    """

    equipment: Dict[str, Equipment] = field(default_factory=dict)

    def get(self, name: str) -> Optional[Equipment]:
        """Retrieves Equipment by its tag, or None if not found."""
        if name in self.equipment:
            return self.equipment[name]
        folded = name.strip().lower()
        for key, entry in self.equipment.items():
            if key.lower() == folded:
                return entry
        return None

    def classify(self, node: Node) -> Capabilities:
        """Return the capability set of ``node`` from its equipment type."""
        entry = self.get(node.equipment_type) if node.equipment_type else None
        return entry.capabilities if entry is not None else NO_CAPABILITIES

    def is_active(self, node: Node) -> bool:
        return self.classify(node).active

    def is_passive(self, node: Node) -> bool:
        return self.classify(node).passive

    def is_regenerative(self, node: Node) -> bool:
        return self.classify(node).regenerative

    def merge(
        self, other: EquipmentCatalog, override: bool = True
    ) -> EquipmentCatalog:
        """Merges another catalog into this one.

        Args:
            other (EquipmentCatalog): Catalog to merge into this one.
            override (bool): If True, entries in ``other`` replace existing ones.

        Returns:
            EquipmentCatalog: This instance, updated in place.
        """
        for name, entry in other.equipment.items():
            if override or name not in self.equipment:
                self.equipment[name] = entry
        return self

    def clone(self) -> EquipmentCatalog:
        """Creates a deep copy of this catalog."""
        return EquipmentCatalog(equipment=deepcopy(self.equipment))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> EquipmentCatalog:
        """Constructs a catalog from a mapping of tag -> definition.

        A definition may declare ``active``, ``passive``, ``regenerative`` and
        ``description``. Any other key is kept in ``attrs``. A regenerative
        entry that does not declare ``active`` is treated as active.

        Raises:
            ValueError: If a definition is not a mapping.
        """
        normalized = normalize_yaml_dict_keys(data)
        catalog: Dict[str, Equipment] = {}
        for name, definition in normalized.items():
            catalog[name] = cls._build_equipment(name, definition or {})
        return EquipmentCatalog(equipment=catalog)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> EquipmentCatalog:
        """Constructs a catalog from YAML with a top-level ``equipment`` mapping."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Equipment catalog YAML must map to a dictionary.")
        section = data.get("equipment", {})
        if not isinstance(section, dict):
            raise ValueError("'equipment' must be a mapping of type -> definition")
        return cls.from_dict(section)

    @classmethod
    def _build_equipment(cls, name: str, definition: Any) -> Equipment:
        if not isinstance(definition, dict):
            raise ValueError(
                f"Equipment '{name}' must be defined by a mapping, got {definition!r}"
            )
        regenerative = bool(definition.get("regenerative", False))
        capabilities = Capabilities(
            active=bool(definition.get("active", regenerative)),
            passive=bool(definition.get("passive", False)),
            regenerative=regenerative,
        )
        recognized = {"active", "passive", "regenerative", "description", "attrs"}
        attrs: Dict[str, Any] = normalize_yaml_dict_keys(dict(definition.get("attrs") or {}))
        attrs.update(
            normalize_yaml_dict_keys(
                {k: v for k, v in definition.items() if k not in recognized}
            )
        )
        return Equipment(
            name=name,
            description=str(definition.get("description", "")),
            capabilities=capabilities,
            attrs=attrs,
        )


def load_default_catalog() -> EquipmentCatalog:
    """Load the equipment catalog packaged with linkbudget."""
    text = (
        resources.files("linkbudget.data")
        .joinpath("equipment.yaml")
        .read_text(encoding="utf-8")
    )
    return EquipmentCatalog.from_yaml(text)
