"""
Souk.to adapter.

Souk.to returns matching alerts from
`https://api.souk.to/api/v1/matching_alert/web` with the alert list
nested under `body.alerts`.  Relation objects carry their label
under `title`; the condition list is called `status` rather than
`statuses`.  Alerts are active unless `is_deactivated` is literally
``true``.  Souk.to exposes video game platforms but no materials or
countries.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..normalize.schema import Source
from .base import SourceNormalizer


class SoukNormalizer(SourceNormalizer):
    """Normalizer for Souk.to alert responses."""

    source = Source.SOUK
    entries_path = ("body", "alerts")
    status_key = "status"
    status_ok = (200, "200", "ok", "success")
    label_key = "title"
    relation_fields = {
        "catalogs": "catalogs",
        "brands": "brands",
        "sizes": "sizes",
        "statuses": "status",
        "colors": "colors",
        "video_game_platforms": "video_game_platforms",
    }

    def is_enabled(self, entry: Mapping[str, Any]) -> bool:
        return entry.get("is_deactivated") is not True
