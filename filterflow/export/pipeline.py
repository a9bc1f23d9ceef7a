"""
Export pipeline.

Takes the export subset chosen by a `RecordSelector`, encodes it as
CSV and hands the document with a generated filename to a delivery
callable.  The default delivery writes the file, with a UTF‑8
byte‑order mark, into a directory.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..errors import ExportEmptyError
from ..normalize.schema import CapturedBatch
from ..normalize.write_csv import BOM, encode_records
from ..selection.selector import RecordSelector

logger = logging.getLogger(__name__)

Delivery = Callable[[str, str], Optional[str]]


def export_filename(source_label: Optional[str], day: date) -> str:
    """Build ``{source}_filters_{YYYY-MM-DD}.csv`` for a batch.

    The source label is lower‑cased and every run of characters other
    than ASCII letters and digits becomes a single underscore, so
    ``"Souk.to"`` gives ``souk_to``.
    """
    slug = re.sub(r"[^a-z0-9]+", "_", (source_label or "").lower()).strip("_")
    return f"{slug or 'filters'}_filters_{day.isoformat()}.csv"


class FileDelivery:
    """Write exported documents into ``export_dir``."""

    def __init__(self, export_dir: str = ".") -> None:
        self.export_dir = export_dir

    def __call__(self, document: str, filename: str) -> str:
        os.makedirs(self.export_dir, exist_ok=True)
        path = os.path.join(self.export_dir, filename)
        with open(path, "wb") as f:
            f.write((BOM + document).encode("utf-8"))
        logger.debug("Wrote export to %s", path)
        return path


@dataclass
class ExportResult:
    ok: bool
    count: int = 0
    filename: Optional[str] = None
    document: Optional[str] = None
    location: Optional[str] = None   # what the delivery reported, e.g. a path
    error: Optional[str] = None


class ExportPipeline:
    """Encode a selection of a batch and deliver it as a CSV file."""

    def __init__(self, delivery: Optional[Delivery] = None,
                 today: Optional[Callable[[], date]] = None) -> None:
        self.delivery = delivery or FileDelivery()
        self.today = today or date.today

    def build(self, batch: Optional[CapturedBatch], selector: RecordSelector) -> ExportResult:
        """Encode the export subset without delivering it.

        Raises:
            ExportEmptyError: If there is no batch or the subset is empty.
        """
        records = selector.export_subset() if batch is not None else []
        if not records:
            raise ExportEmptyError()
        document = encode_records(records)
        filename = export_filename(batch.source_label, self.today())
        return ExportResult(ok=True, count=len(records), filename=filename, document=document)

    def export(self, batch: Optional[CapturedBatch], selector: RecordSelector) -> ExportResult:
        try:
            result = self.build(batch, selector)
        except ExportEmptyError as exc:
            logger.warning("Export aborted: %s", exc)
            return ExportResult(ok=False, error=str(exc))
        try:
            result.location = self.delivery(result.document, result.filename)
        except OSError as exc:
            logger.error("Could not deliver %s: %s", result.filename, exc)
            return ExportResult(ok=False, count=result.count, filename=result.filename,
                                error=f"cannot write export: {exc}")
        logger.info("Exported %d filters to %s", result.count, result.location or result.filename)
        return result
