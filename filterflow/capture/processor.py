"""
Capture processing.

The `CaptureProcessor` receives one tagged raw payload at a time,
runs the matching normalizer and, when at least one record came out,
replaces the stored batch with the new one.  A capture that yields
nothing leaves the store exactly as it was.  Failures are reported in
the returned `CaptureOutcome`; nothing raised by the normalizers or
the store escapes `process`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from ..errors import StoreError
from ..ingest import get_normalizer
from ..normalize.schema import CapturedBatch, Source
from .store import BatchStore

logger = logging.getLogger(__name__)


@dataclass
class CaptureOutcome:
    ok: bool
    count: int
    diagnostics: List[str] = field(default_factory=list)


class CaptureIndicator:
    """Keeps the number of captured filters, like a toolbar badge."""

    def __init__(self) -> None:
        self.count = 0

    def __call__(self, count: int) -> None:
        self.count = count
        logger.debug("Capture indicator set to %s", count or "''")

    @property
    def text(self) -> str:
        return str(self.count) if self.count else ""


class CaptureProcessor:
    """Turn tagged payloads into stored batches.

    Args:
        store: Where the latest batch is kept.
        indicator: Called with the record count after each commit and
            with zero after a clear.
        clock: Returns the capture timestamp; defaults to UTC now.
    """

    def __init__(
        self,
        store: BatchStore,
        indicator: Optional[Callable[[int], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.store = store
        self.indicator = indicator or CaptureIndicator()
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    async def process(self, source_tag: Any, raw_payload: Any) -> CaptureOutcome:
        source = source_tag if isinstance(source_tag, Source) else Source.from_tag(source_tag)
        if source is None:
            logger.error("Ignoring capture from unknown source %r", source_tag)
            return CaptureOutcome(ok=False, count=0, diagnostics=[f"unknown source {source_tag!r}"])

        normalizer = get_normalizer(source)
        result = normalizer.normalize(raw_payload)
        diagnostics = list(result.diagnostics)
        if not result.records:
            logger.warning("No filters parsed from %s", source.label)
            return CaptureOutcome(ok=False, count=0, diagnostics=diagnostics)

        batch = CapturedBatch(
            records=list(result.records),
            source_label=source.label,
            captured_at=self.clock().isoformat(),
            diagnostics=diagnostics or None,
        )
        try:
            await self.store.set(batch.to_store())
        except StoreError as exc:
            logger.error("Could not store %s filters: %s", source.label, exc)
            diagnostics.append(f"store unavailable: {exc}")
            return CaptureOutcome(ok=False, count=0, diagnostics=diagnostics)

        self.indicator(len(batch.records))
        logger.info("Stored %d filters from %s", len(batch.records), source.label)
        if diagnostics:
            logger.warning("Skipped %d entries from %s", len(diagnostics), source.label)
        return CaptureOutcome(ok=True, count=len(batch.records), diagnostics=diagnostics)

    async def load(self) -> Optional[CapturedBatch]:
        """Return the stored batch, or ``None`` when nothing is stored.

        Raises:
            StoreError: If the store cannot be read.
        """
        data = await self.store.get(CapturedBatch.STORE_KEYS)
        return CapturedBatch.from_store(data)

    async def clear(self) -> None:
        """Drop the stored batch and reset the indicator.

        Raises:
            StoreError: If the store cannot be written.
        """
        await self.store.remove(CapturedBatch.STORE_KEYS)
        self.indicator(0)
        logger.info("Cleared stored filters")
