"""
Interactive filter session.

A `FilterSession` is the query surface used by a presentation layer:
it loads the stored batch, applies search and selection through a
`RecordSelector` and exports through an `ExportPipeline`.  All of the
state lives on the session instance.  When the store reports that the
batch changed, the session marks its snapshot stale and reloads it
before the next query, dropping the selection made against the old
batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .capture.processor import CaptureProcessor
from .errors import StoreError
from .export.pipeline import ExportPipeline, ExportResult
from .normalize.schema import CapturedBatch, FilterRecord
from .selection.selector import RecordSelector, SelectionSummary

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    ok: bool
    batch: Optional[CapturedBatch] = None
    error: Optional[str] = None


class FilterSession:
    def __init__(self, processor: CaptureProcessor, pipeline: Optional[ExportPipeline] = None) -> None:
        self.processor = processor
        self.pipeline = pipeline or ExportPipeline()
        self.selector = RecordSelector()
        self.batch: Optional[CapturedBatch] = None
        self._stale = True
        self._unsubscribe = processor.store.subscribe(self._on_store_change)

    def _on_store_change(self, keys: Set[str]) -> None:
        if "records" in keys:
            logger.debug("Stored batch changed; snapshot is stale")
            self._stale = True

    def close(self) -> None:
        self._unsubscribe()

    async def load_batch(self) -> LoadResult:
        """Load the stored batch into the selector.

        The current query is kept; the selection is reset because its
        indices referred to the previous snapshot.
        """
        try:
            batch = await self.processor.load()
        except StoreError as exc:
            logger.error("Could not load filters: %s", exc)
            return LoadResult(ok=False, error=str(exc))
        self.batch = batch
        self.selector.load(batch.records if batch else [])
        self._stale = False
        return LoadResult(ok=True, batch=batch)

    async def _refresh(self) -> Optional[LoadResult]:
        if self._stale:
            return await self.load_batch()
        return None

    def set_search_query(self, text: str) -> None:
        self.selector.set_query(text)

    def toggle_selection(self, index: int) -> None:
        self.selector.toggle(index)

    def toggle_select_all(self) -> None:
        self.selector.toggle_select_all()

    def get_visible(self) -> List[Tuple[int, FilterRecord]]:
        return [(i, self.selector.records[i]) for i in self.selector.visible()]

    def get_selection_summary(self) -> SelectionSummary:
        return self.selector.summary()

    async def export_selection(self) -> ExportResult:
        """Export the current selection, or the whole batch if none.

        A reload that fails, or that discards a selection made against
        the previous batch, blocks the export instead of falling back to
        a different set of records.
        """
        had_selection = bool(self.selector.selected)
        loaded = await self._refresh()
        if loaded is not None:
            if not loaded.ok:
                return ExportResult(ok=False, error=loaded.error)
            if had_selection:
                logger.warning("Batch changed before export; selection cleared")
                return ExportResult(ok=False, error="batch changed; selection cleared")
        return self.pipeline.export(self.batch, self.selector)

    async def clear_batch(self) -> LoadResult:
        try:
            await self.processor.clear()
        except StoreError as exc:
            logger.error("Could not clear filters: %s", exc)
            return LoadResult(ok=False, error=str(exc))
        self.batch = None
        self.selector.load([])
        self._stale = False
        return LoadResult(ok=True)
