"""Tests for the V‑Tools and Souk.to normalizers."""

from __future__ import annotations

import pytest

from filterflow.ingest import NORMALIZERS, get_normalizer
from filterflow.ingest.souk_adapter import SoukNormalizer
from filterflow.ingest.vtools_adapter import VToolsNormalizer
from filterflow.normalize.schema import FILTER_HEADERS, Source


def test_vtools_maps_valid_entries(vtools_payload: dict) -> None:
    result = VToolsNormalizer().normalize(vtools_payload)
    assert [r.name for r in result.records] == ["Nike sneakers", "Vintage jackets"]
    first = result.records[0]
    assert first.source == "V-Tools"
    assert first.search_text == "air max"
    assert first.price_from == "10"
    assert first.price_to == "55"
    assert first.brands == "Nike | Nike, Inc."
    assert first.brand_ids == "53 | 14"
    assert first.statuses == "New with tags"
    assert first.materials == "Leather"
    assert first.country_ids == "1"
    assert first.colors == ""
    assert first.video_game_platforms == ""
    assert first.video_game_platform_ids == ""
    assert first.enabled == "yes"


def test_vtools_defaults_and_disabled(vtools_payload: dict) -> None:
    second = VToolsNormalizer().normalize(vtools_payload).records[1]
    assert second.search_text == ""
    assert second.price_from == ""
    assert second.price_to == ""
    # id-less label data: the label is null so only the id survives
    assert second.brands == ""
    assert second.brand_ids == "9"
    assert second.enabled == "no"


def test_vtools_reports_skipped_entries(vtools_payload: dict) -> None:
    result = VToolsNormalizer().normalize(vtools_payload)
    assert result.diagnostics == ["entry at index 1 skipped (invalid or unnamed)"]


def test_souk_maps_valid_entries(souk_payload: dict) -> None:
    result = SoukNormalizer().normalize(souk_payload)
    assert [r.name for r in result.records] == ["Switch games", "Paused alert"]
    first, second = result.records
    assert first.source == "Souk.to"
    assert first.price_from == ""
    assert first.price_to == "40"
    assert first.statuses == "Very good"
    assert first.status_ids == "2"
    assert first.video_game_platforms == "Nintendo Switch"
    assert first.sizes == ""
    assert first.materials == "" and first.countries == ""
    assert first.enabled == "yes"
    assert second.enabled == "no"
    assert result.diagnostics == ["entry at index 1 skipped (invalid or unnamed)"]


def test_records_have_every_column(vtools_payload: dict, souk_payload: dict) -> None:
    records = (
        VToolsNormalizer().normalize(vtools_payload).records
        + SoukNormalizer().normalize(souk_payload).records
    )
    for record in records:
        assert set(record.to_dict()) == set(FILTER_HEADERS)
        assert record.name.strip()


def test_order_preserved_with_invalid_entries() -> None:
    entries = []
    for i in range(10):
        entries.append({"name": f"f{i}"} if i % 3 else {"name": None})
    result = VToolsNormalizer().normalize({"data": entries})
    invalid = [i for i in range(10) if i % 3 == 0]
    assert [r.name for r in result.records] == [f"f{i}" for i in range(10) if i % 3]
    assert len(result.diagnostics) == len(invalid)
    for index, message in zip(invalid, result.diagnostics):
        assert f"index {index} " in message


@pytest.mark.parametrize("payload", [None, [], "oops", {"data": None}, {"data": {"a": 1}}, {}])
def test_vtools_structural_problems_yield_no_records(payload) -> None:
    result = VToolsNormalizer().normalize(payload)
    assert result.records == []
    assert len(result.diagnostics) == 1


def test_souk_missing_body_is_structural() -> None:
    result = SoukNormalizer().normalize({"status": 200, "body": None})
    assert result.records == []
    assert "body.alerts" in result.diagnostics[0]


def test_bad_status_is_diagnostic_but_not_fatal() -> None:
    result = SoukNormalizer().normalize({"status": 500, "body": {"alerts": [{"name": "A"}]}})
    assert [r.name for r in result.records] == ["A"]
    assert len(result.diagnostics) == 1
    assert "status" in result.diagnostics[0]

    result = VToolsNormalizer().normalize({"success": False, "data": [{"name": "B"}]})
    assert [r.name for r in result.records] == ["B"]
    assert len(result.diagnostics) == 1


def test_closed_normalizer_set() -> None:
    assert set(NORMALIZERS) == set(Source)
    assert isinstance(get_normalizer(Source.VTOOLS), VToolsNormalizer)
    assert isinstance(get_normalizer(Source.SOUK), SoukNormalizer)


@pytest.mark.parametrize("name", [False, 0, 12, ["A"], {"text": "A"}])
def test_non_string_names_are_rejected(name) -> None:
    result = VToolsNormalizer().normalize({"data": [{"name": name}, {"name": "kept"}]})
    assert [r.name for r in result.records] == ["kept"]
    assert result.diagnostics == ["entry at index 0 skipped (invalid or unnamed)"]
