"""
CSV writer for normalized filters.

Provides helpers to serialize a list of `FilterRecord` instances
using the column order defined by `FILTER_HEADERS`.  The escaping
policy is stricter than the `csv` module's minimal quoting: any
value holding a delimiter‑like character or anything outside
printable ASCII is quoted, and control and zero‑width characters
are removed first so spreadsheet applications parse the file the
same way every time.  Files are written as UTF‑8 with a leading
byte‑order mark.  If the file already exists, it will be overwritten.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable

from .schema import FILTER_HEADERS, FilterRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = list(FILTER_HEADERS)

BOM = "\ufeff"

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
_ZERO_WIDTH_CHARS = re.compile("[\u200b\u200c\u200d\ufeff\u2060]")
_NEEDS_QUOTING = re.compile(r'[,"\n\t;|]|[^\x20-\x7e]')


def escape_value(value: object) -> str:
    """Clean a single value and quote it when needed.

    Args:
        value: Any value; ``None`` is written as an empty field.

    Returns:
        The cleaned text, wrapped in double quotes with internal quotes
        doubled when it contains a comma, quote, newline, tab, semicolon,
        pipe or any non‑ASCII character.
    """
    text = "" if value is None else str(value)
    text = _CONTROL_CHARS.sub("", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _ZERO_WIDTH_CHARS.sub("", text)
    if _NEEDS_QUOTING.search(text):
        return '"' + text.replace('"', '""') + '"'
    return text


def encode_records(records: Iterable[FilterRecord]) -> str:
    """Encode records as a CSV document without a byte‑order mark.

    An empty input yields an empty string, not even a header.  Rows are
    joined by a bare newline and there is no trailing newline.
    """
    rows = [",".join(escape_value(v) for v in record.to_csv_row()) for record in records]
    if not rows:
        return ""
    return "\n".join([",".join(CSV_COLUMNS)] + rows)


def write_filters_csv(records: Iterable[FilterRecord], path: str) -> None:
    """Write normalized filters to a CSV file.

    Args:
        records: Iterable of `FilterRecord` objects.
        path: Destination path for the CSV.
    """
    document = encode_records(records)
    with open(path, "wb") as csvfile:
        csvfile.write((BOM + document).encode("utf-8"))
    logger.debug("Wrote %d bytes of CSV to %s", len(document), path)
