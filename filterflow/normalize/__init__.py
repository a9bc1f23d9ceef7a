"""
Normalization subsystem for filterflow.

This package defines the canonical `FilterRecord` schema, the helper
that flattens relation lists into delimited strings and the CSV
encoder that serializes records for spreadsheets.

The CSV column order is `FILTER_HEADERS` in `schema.py`: scalar
fields first, then each relation category as its labels column
followed by its ids column, and `enabled` last.
"""

from .schema import (  # noqa: F401
    FILTER_HEADERS,
    RELATION_CATEGORIES,
    CaptureResult,
    CapturedBatch,
    FilterRecord,
    RelationCategory,
    Source,
)
from .joiner import JOIN_DELIMITER, join_ids, join_labels  # noqa: F401
from .write_csv import CSV_COLUMNS, encode_records, escape_value, write_filters_csv  # noqa: F401
