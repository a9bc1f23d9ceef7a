# normalize/schema.py
from __future__ import annotations

from dataclasses import dataclass, asdict, field, fields
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple


class Source(Enum):
    """Upstream APIs whose filters can be captured."""

    VTOOLS = "vtools"
    SOUK = "souk"

    @property
    def label(self) -> str:
        return _SOURCE_LABELS[self]

    @classmethod
    def from_tag(cls, tag: object) -> Optional["Source"]:
        for source in cls:
            if source.value == tag:
                return source
        return None


_SOURCE_LABELS = {
    Source.VTOOLS: "V-Tools",
    Source.SOUK: "Souk.to",
}


@dataclass(frozen=True)
class RelationCategory:
    """A group of related sub‑entities flattened into two columns."""

    name: str            # labels column, e.g. 'brands'
    ids_column: str      # e.g. 'brand_ids'


RELATION_CATEGORIES: Tuple[RelationCategory, ...] = (
    RelationCategory("catalogs", "catalog_ids"),
    RelationCategory("brands", "brand_ids"),
    RelationCategory("sizes", "size_ids"),
    RelationCategory("statuses", "status_ids"),
    RelationCategory("colors", "color_ids"),
    RelationCategory("materials", "material_ids"),
    RelationCategory("countries", "country_ids"),
    RelationCategory("video_game_platforms", "video_game_platform_ids"),
)

FILTER_HEADERS = (
    ["source", "name", "search_text", "price_from", "price_to"]
    + [col for cat in RELATION_CATEGORIES for col in (cat.name, cat.ids_column)]
    + ["enabled"]
)


@dataclass(frozen=True)
class FilterRecord:
    source: str                   # 'V-Tools' | 'Souk.to'
    name: str
    search_text: str = ""
    price_from: str = ""          # '' means unbounded
    price_to: str = ""
    catalogs: str = ""
    catalog_ids: str = ""
    brands: str = ""
    brand_ids: str = ""
    sizes: str = ""
    size_ids: str = ""
    statuses: str = ""
    status_ids: str = ""
    colors: str = ""
    color_ids: str = ""
    materials: str = ""
    material_ids: str = ""
    countries: str = ""
    country_ids: str = ""
    video_game_platforms: str = ""
    video_game_platform_ids: str = ""
    enabled: str = "yes"          # 'yes' | 'no'

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def to_csv_row(self) -> list:
        d = asdict(self)
        return [d[h] for h in FILTER_HEADERS]

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "FilterRecord":
        """Rebuild a record from its stored mapping.

        Unknown keys are ignored and missing ones become empty strings so
        a batch written by an older schema still loads with every column.
        """
        values = {}
        for f in fields(cls):
            raw = data.get(f.name)
            values[f.name] = "" if raw is None else str(raw)
        if values["enabled"] not in ("yes", "no"):
            values["enabled"] = "yes"
        return cls(**values)


@dataclass
class CaptureResult:
    """Records produced from one payload plus everything that was skipped."""

    records: List[FilterRecord] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)


@dataclass
class CapturedBatch:
    """The last committed capture, as held by the store."""

    records: List[FilterRecord]
    source_label: str
    captured_at: str              # ISO8601, UTC
    diagnostics: Optional[List[str]] = None

    STORE_KEYS = ("records", "source_label", "captured_at", "diagnostics")

    def to_store(self) -> Dict[str, object]:
        return {
            "records": [r.to_dict() for r in self.records],
            "source_label": self.source_label,
            "captured_at": self.captured_at,
            "diagnostics": list(self.diagnostics) if self.diagnostics else None,
        }

    @classmethod
    def from_store(cls, data: Mapping[str, object]) -> Optional["CapturedBatch"]:
        raw_records = data.get("records")
        if not isinstance(raw_records, list) or not raw_records:
            return None
        records = [FilterRecord.from_dict(r) for r in raw_records if isinstance(r, Mapping)]
        diagnostics = data.get("diagnostics")
        return cls(
            records=records,
            source_label=str(data.get("source_label") or ""),
            captured_at=str(data.get("captured_at") or ""),
            diagnostics=list(diagnostics) if isinstance(diagnostics, list) and diagnostics else None,
        )
