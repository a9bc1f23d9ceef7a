"""
Source normalizer contract.

Every upstream API is handled by a subclass of `SourceNormalizer`
that only declares where its data lives: the path of the entries
array, the status indicator of the envelope, and for each relation
category the raw field and the key holding its label.  The shared
`normalize` method performs the validation and mapping so both
sources produce records of exactly the same shape.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..errors import RecordValidationError, StructuralError
from ..normalize.joiner import join_ids, join_labels
from ..normalize.schema import RELATION_CATEGORIES, CaptureResult, FilterRecord, Source

logger = logging.getLogger(__name__)


def _price(value: Any) -> str:
    """Render a price bound as text; empty means unbounded."""
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class SourceNormalizer(ABC):
    """Abstract base class for per‑source payload normalizers."""

    source: Source
    # Path of keys leading from the envelope to the entries array.
    entries_path: Tuple[str, ...] = ()
    # Envelope key reporting success and the values that mean success.
    status_key: Optional[str] = None
    status_ok: Tuple[Any, ...] = ()
    # Label key shared by every relation object of this source.
    label_key: str = "title"
    # category name -> raw field name; categories not listed are unsupported.
    relation_fields: Dict[str, str] = {}

    @abstractmethod
    def is_enabled(self, entry: Mapping[str, Any]) -> bool:
        """Map the source's enabled/disabled semantics to a boolean."""
        raise NotImplementedError

    def normalize(self, raw: Any) -> CaptureResult:
        """Validate a raw API response and map its entries to records.

        Args:
            raw: The decoded JSON payload as returned by the API.

        Returns:
            A `CaptureResult` with one record per valid entry, in the
            original order, and one diagnostic per skipped entry or
            structural problem.  Only a missing entries array yields an
            empty result; a single bad entry never aborts the batch.
        """
        result = CaptureResult()
        try:
            entries = self._locate_entries(raw, result.diagnostics)
        except StructuralError as exc:
            logger.warning("Invalid %s response structure: %s", self.source.label, exc)
            result.diagnostics.append(str(exc))
            return result

        for index, entry in enumerate(entries):
            try:
                result.records.append(self._map_entry(index, entry))
            except RecordValidationError as exc:
                logger.debug("%s: %s", self.source.label, exc)
                result.diagnostics.append(str(exc))
        logger.info(
            "Normalized %d of %d %s entries",
            len(result.records),
            len(entries),
            self.source.label,
        )
        return result

    def _locate_entries(self, raw: Any, diagnostics: List[str]) -> list:
        if not isinstance(raw, Mapping):
            raise StructuralError(
                f"unexpected {self.source.label} response: expected an object, got {type(raw).__name__}"
            )
        if self.status_key is not None and self.status_key in raw:
            status = raw[self.status_key]
            if status not in self.status_ok:
                message = f"unexpected {self.source.label} status {self.status_key}={status!r}"
                logger.warning("%s", message)
                diagnostics.append(message)
        node: Any = raw
        for key in self.entries_path:
            node = node.get(key) if isinstance(node, Mapping) else None
        if not isinstance(node, list):
            path = ".".join(self.entries_path)
            raise StructuralError(f"invalid {self.source.label} response: '{path}' is missing or not a list")
        return node

    def _map_entry(self, index: int, entry: Any) -> FilterRecord:
        if not isinstance(entry, Mapping):
            raise RecordValidationError(index)
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise RecordValidationError(index)
        search_text = entry.get("search_text")
        values: Dict[str, str] = {
            "source": self.source.label,
            "name": name,
            "search_text": "" if search_text is None else str(search_text),
            "price_from": _price(entry.get("price_from")),
            "price_to": _price(entry.get("price_to")),
            "enabled": "yes" if self.is_enabled(entry) else "no",
        }
        for category in RELATION_CATEGORIES:
            raw_field = self.relation_fields.get(category.name)
            items = entry.get(raw_field) if raw_field else None
            values[category.name] = join_labels(items, self.label_key)
            values[category.ids_column] = join_ids(items)
        return FilterRecord(**values)
