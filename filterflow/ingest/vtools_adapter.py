"""
V‑Tools adapter.

V‑Tools returns saved filters from
`https://custom.v-tools.com/v3/services/filters` as an envelope whose
`data` key holds the filter list.  Relation objects carry their
label under `data` and their identifier under `id`.  A filter is
active when its `enabled` flag is literally ``true``.  V‑Tools has
no video game platform category.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..normalize.schema import Source
from .base import SourceNormalizer


class VToolsNormalizer(SourceNormalizer):
    """Normalizer for V‑Tools filter responses."""

    source = Source.VTOOLS
    entries_path = ("data",)
    status_key = "success"
    status_ok = (True,)
    label_key = "data"
    relation_fields = {
        "catalogs": "catalogs",
        "brands": "brands",
        "sizes": "sizes",
        "statuses": "statuses",
        "colors": "colors",
        "materials": "materials",
        "countries": "countries",
    }

    def is_enabled(self, entry: Mapping[str, Any]) -> bool:
        return entry.get("enabled") is True
