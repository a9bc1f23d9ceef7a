"""Tests for the export pipeline and filename generation."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest import mock

from filterflow.export.pipeline import ExportPipeline, FileDelivery, export_filename
from filterflow.normalize.schema import CapturedBatch, FilterRecord
from filterflow.normalize.write_csv import encode_records
from filterflow.selection.selector import RecordSelector

DAY = date(2024, 5, 17)


def _batch(count: int = 3, label: str = "V-Tools") -> CapturedBatch:
    records = [FilterRecord(source=label, name=f"Filter {i}") for i in range(count)]
    return CapturedBatch(records=records, source_label=label, captured_at="2024-05-17T09:30:00+00:00")


def test_export_filename() -> None:
    assert export_filename("V-Tools", DAY) == "v_tools_filters_2024-05-17.csv"
    assert export_filename("Souk.to", DAY) == "souk_to_filters_2024-05-17.csv"
    assert export_filename("  Weird -- Source!! ", DAY) == "weird_source_filters_2024-05-17.csv"
    assert export_filename(None, DAY) == "filters_filters_2024-05-17.csv"


def test_export_hands_document_to_delivery() -> None:
    batch = _batch()
    selector = RecordSelector(batch.records)
    selector.toggle(2)
    delivery = mock.Mock(return_value="/tmp/out.csv")
    result = ExportPipeline(delivery, today=lambda: DAY).export(batch, selector)
    assert result.ok
    assert result.count == 1
    assert result.filename == "v_tools_filters_2024-05-17.csv"
    assert result.document == encode_records([batch.records[2]])
    assert result.location == "/tmp/out.csv"
    delivery.assert_called_once_with(result.document, result.filename)


def test_export_without_batch_is_empty_error() -> None:
    delivery = mock.Mock()
    result = ExportPipeline(delivery).export(None, RecordSelector())
    assert not result.ok
    assert result.error == "nothing to export"
    delivery.assert_not_called()


def test_export_of_empty_batch_is_empty_error() -> None:
    batch = CapturedBatch(records=[], source_label="V-Tools", captured_at="")
    result = ExportPipeline(mock.Mock()).export(batch, RecordSelector([]))
    assert not result.ok
    assert result.error == "nothing to export"


def test_delivery_failure_is_reported() -> None:
    batch = _batch()
    delivery = mock.Mock(side_effect=PermissionError("read-only"))
    result = ExportPipeline(delivery, today=lambda: DAY).export(batch, RecordSelector(batch.records))
    assert not result.ok
    assert "read-only" in result.error


def test_file_delivery_writes_bom(tmp_path: Path) -> None:
    batch = _batch(label="Souk.to")
    pipeline = ExportPipeline(FileDelivery(str(tmp_path / "exports")), today=lambda: DAY)
    result = pipeline.export(batch, RecordSelector(batch.records))
    path = Path(result.location)
    assert path.name == "souk_to_filters_2024-05-17.csv"
    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert raw.decode("utf-8-sig").count("\n") == 3
