"""
Record selection.

This module filters the loaded batch by a free‑text query and keeps
the user's explicit selection.  The visible list is never cached: it
is recomputed from the current records and query whenever it is
needed, so replacing the batch cannot leave stale indices behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Set

from ..normalize.schema import FilterRecord

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "search_text", "brands", "video_game_platforms")


def _matches(record: FilterRecord, needle: str) -> bool:
    return any(needle in getattr(record, f).casefold() for f in SEARCH_FIELDS)


def visible_indices(records: Sequence[FilterRecord], query: str) -> List[int]:
    """Return the indices of records matching ``query``.

    Args:
        records: The loaded batch.
        query: Free text; matched case‑insensitively as a substring of
            the name, search text, brands and platforms.  Only the empty
            query matches every record; whitespace is part of the text
            searched for.
    """
    needle = (query or "").casefold()
    if not needle:
        return list(range(len(records)))
    return [i for i, record in enumerate(records) if _matches(record, needle)]


@dataclass(frozen=True)
class SelectionSummary:
    total: int
    visible: int
    selected: int
    all_visible_selected: bool


class RecordSelector:
    """Search query and selection state over one batch snapshot."""

    def __init__(self, records: Iterable[FilterRecord] = ()) -> None:
        self.records: List[FilterRecord] = list(records)
        self.query = ""
        self.selected: Set[int] = set()

    def load(self, records: Iterable[FilterRecord]) -> None:
        """Replace the snapshot; the old selection no longer applies."""
        self.records = list(records)
        self.selected.clear()
        logger.debug("Loaded %d records into selector", len(self.records))

    def set_query(self, text: str) -> None:
        self.query = text or ""

    def visible(self) -> List[int]:
        return visible_indices(self.records, self.query)

    def toggle(self, index: int) -> None:
        if not 0 <= index < len(self.records):
            logger.warning("Ignoring selection of index %d outside 0..%d", index, len(self.records) - 1)
            return
        if index in self.selected:
            self.selected.remove(index)
        else:
            self.selected.add(index)

    def toggle_select_all(self) -> None:
        """Select every visible record, or deselect them if all are selected.

        Only the visible records are affected; selected records hidden
        by the query stay selected.
        """
        visible = self.visible()
        if visible and all(i in self.selected for i in visible):
            self.selected.difference_update(visible)
        else:
            self.selected.update(visible)

    def export_subset(self) -> List[FilterRecord]:
        """Return the records to export.

        The selected records in batch order when anything is selected,
        otherwise the whole batch regardless of the query.
        """
        if self.selected:
            return [self.records[i] for i in sorted(self.selected)]
        return list(self.records)

    def summary(self) -> SelectionSummary:
        visible = self.visible()
        return SelectionSummary(
            total=len(self.records),
            visible=len(visible),
            selected=len(self.selected),
            all_visible_selected=bool(visible) and all(i in self.selected for i in visible),
        )
