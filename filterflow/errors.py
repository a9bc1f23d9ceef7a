"""
Exception hierarchy for filterflow.

None of these exceptions cross a public operation boundary: the
normalizers turn structural and validation problems into diagnostic
strings, the capture processor reports store failures in its outcome
and the export pipeline reports an empty export in its result.
"""

from __future__ import annotations


class FilterflowError(Exception):
    """Base class for all filterflow errors."""


class StructuralError(FilterflowError):
    """The top‑level payload does not have the expected shape."""


class RecordValidationError(FilterflowError):
    """A single raw entry cannot be turned into a record."""

    def __init__(self, index: int, reason: str = "invalid or unnamed") -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"entry at index {index} skipped ({reason})")


class StoreError(FilterflowError):
    """The batch store could not be read or written."""


class ExportEmptyError(FilterflowError):
    """There are no records to export."""

    def __init__(self, message: str = "nothing to export") -> None:
        super().__init__(message)


class ConfigError(FilterflowError):
    """The configuration file cannot be used."""
