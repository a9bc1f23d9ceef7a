"""
Command line interface for filterflow.

This module exposes subcommands to capture a saved filter response,
browse the captured batch, export a selection of it to CSV and clear
it.  The CLI is intentionally lightweight and delegates the work to
the `capture`, `selection` and `export` packages through a
`FilterSession`.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

import requests

from .capture.processor import CaptureProcessor
from .capture.store import JsonFileStore
from .config import Settings, load_settings
from .errors import ConfigError
from .export.pipeline import ExportPipeline, FileDelivery
from .ingest.intercept import fetch_payload, match_source
from .normalize.schema import FilterRecord, Source
from .session import FilterSession

logger = logging.getLogger("filterflow.cli")


def _build_session(settings: Settings, export_dir: Optional[str] = None) -> FilterSession:
    processor = CaptureProcessor(JsonFileStore(settings.store_path))
    pipeline = ExportPipeline(FileDelivery(export_dir or settings.export_dir))
    return FilterSession(processor, pipeline)


def _parse_indices(value: str) -> List[int]:
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma separated indices, got {value!r}")


def _format_price(record: FilterRecord) -> str:
    low = record.price_from if record.price_from != "" else "0"
    high = record.price_to if record.price_to != "" else "∞"
    return f"€{low}–{high}"


def _load_payload(args: argparse.Namespace, settings: Settings):
    if args.url:
        source = Source.from_tag(args.source) or match_source(args.url)
        payload = fetch_payload(args.url, headers=settings.headers_for(source),
                                timeout=settings.request_timeout)
        return source, payload
    with open(args.file, "r", encoding="utf-8") as f:
        payload = json.load(f)
    return Source.from_tag(args.source), payload


def cmd_capture(args: argparse.Namespace, settings: Settings) -> int:
    """Normalize a saved or fetched response and store it as the batch."""
    try:
        source, payload = _load_payload(args, settings)
    except (OSError, ValueError, requests.RequestException) as exc:
        print(f"Error: could not load payload: {exc}")
        return 1
    if source is None:
        print("Error: cannot detect the source; pass --source")
        return 1
    session = _build_session(settings)
    outcome = asyncio.run(session.processor.process(source, payload))
    if not outcome.ok:
        print(f"Error: no filters captured from {source.label}")
        for message in outcome.diagnostics:
            print(f"   {message}")
        return 1
    print(f"Captured {outcome.count} filters from {source.label}")
    if outcome.diagnostics:
        print(f"Warning: {len(outcome.diagnostics)} problem(s) while parsing:")
        for message in outcome.diagnostics:
            print(f"   {message}")
    return 0


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    """Print the captured batch, optionally narrowed by a search."""
    session = _build_session(settings)
    loaded = asyncio.run(session.load_batch())
    if not loaded.ok:
        print(f"Error: {loaded.error}")
        return 1
    if loaded.batch is None:
        print("Waiting for data: no filters captured yet")
        return 0
    session.set_search_query(args.search or "")
    batch = loaded.batch
    count = len(batch.records)
    print(f"{batch.source_label} - {count} filter{'s' if count > 1 else ''} captured")
    if batch.captured_at:
        print(f"Last capture: {batch.captured_at}")
    for i, record in session.get_visible():
        status = "Active" if record.enabled == "yes" else "Off"
        print(f"{i:3d}. {record.name} | {record.brands or '-'} | {_format_price(record)} | {status}")
    summary = session.get_selection_summary()
    if summary.visible != summary.total:
        print(f"{summary.visible} of {summary.total} filters match {args.search!r}")
    return 0


def cmd_export(args: argparse.Namespace, settings: Settings) -> int:
    """Write the selected filters, or all of them, to CSV."""
    session = _build_session(settings, export_dir=args.out_dir)

    async def run():
        loaded = await session.load_batch()
        if not loaded.ok:
            return None, loaded.error
        session.set_search_query(args.search or "")
        if args.select_all:
            session.toggle_select_all()
        for index in args.select or []:
            session.toggle_selection(index)
        return await session.export_selection(), None

    result, error = asyncio.run(run())
    if result is None:
        print(f"Error: {error}")
        return 1
    if not result.ok:
        print(f"Error: {result.error}")
        return 1
    print(f"Exported {result.count} filters to {result.location}")
    return 0


def cmd_clear(args: argparse.Namespace, settings: Settings) -> int:
    """Remove the stored batch."""
    session = _build_session(settings)
    cleared = asyncio.run(session.clear_batch())
    if not cleared.ok:
        print(f"Error: {cleared.error}")
        return 1
    print("Filters cleared")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="filterflow", description="Saved filter exporter")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--store", help="Path of the JSON batch store")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Capture
    capture_cmd = subparsers.add_parser("capture", help="Capture a filter API response")
    origin = capture_cmd.add_mutually_exclusive_group(required=True)
    origin.add_argument("--file", help="Saved JSON response")
    origin.add_argument("--url", help="Filter endpoint to fetch")
    capture_cmd.add_argument("--source", choices=[s.value for s in Source],
                             help="Source API; detected from --url when omitted")
    capture_cmd.set_defaults(func=cmd_capture)

    # Show
    show_cmd = subparsers.add_parser("show", help="List captured filters")
    show_cmd.add_argument("--search", help="Only show filters matching this text")
    show_cmd.set_defaults(func=cmd_show)

    # Export
    export_cmd = subparsers.add_parser("export", help="Export captured filters to CSV")
    export_cmd.add_argument("--search", help="Search applied before --select-all")
    export_cmd.add_argument("--select", type=_parse_indices,
                            help="Comma separated indices to export (as listed by show)")
    export_cmd.add_argument("--select-all", action="store_true", dest="select_all",
                            help="Toggle selection of every filter matching --search")
    export_cmd.add_argument("--out-dir", dest="out_dir", help="Directory for the CSV file")
    export_cmd.set_defaults(func=cmd_export)

    # Clear
    clear_cmd = subparsers.add_parser("clear", help="Remove captured filters")
    clear_cmd.set_defaults(func=cmd_clear)

    args = parser.parse_args(argv)
    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 1
    if args.store:
        settings.store_path = args.store
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")
    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
