"""Read-only lookup of default engineering parameters per link type.

The table is packaged as ``linkbudget/data/default_params.yaml``. Besides the
seven link types it carries a ``5G-mmWave`` preset.
"""

from __future__ import annotations

from copy import deepcopy
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, List, Optional

import yaml

from linkbudget.types.base import LinkType
from linkbudget.utils.yaml_utils import normalize_yaml_dict_keys


@lru_cache(maxsize=1)
def _load_table() -> Dict[str, Dict[str, Any]]:
    text = (
        resources.files("linkbudget.data")
        .joinpath("default_params.yaml")
        .read_text(encoding="utf-8")
    )
    data = yaml.safe_load(text) or {}
    return {
        str(name): normalize_yaml_dict_keys(params or {})
        for name, params in data.items()
    }


def available_link_types() -> List[str]:
    """Return the keys of the default-parameter table in file order."""
    return list(_load_table())


def get_default_params(link_type: str) -> Optional[Dict[str, Any]]:
    """Return a fresh copy of the defaults for ``link_type``.

    Exact table keys match first ("5G-mmWave"); otherwise the tag is parsed
    as a ``LinkType`` so aliases such as "RJ45" resolve.

    Returns:
        Mapping of parameter name to default value, or None if the link
        type is not in the table.
    """
    table = _load_table()
    if link_type in table:
        return deepcopy(table[link_type])
    try:
        key = LinkType.from_string(link_type).value
    except ValueError:
        return None
    entry = table.get(key)
    return deepcopy(entry) if entry is not None else None
