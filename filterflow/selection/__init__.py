"""
Search and selection over a loaded batch.

The `RecordSelector` decides which records of the current batch are
shown for a search query and which ones are exported.
"""

from .selector import RecordSelector, SelectionSummary, visible_indices  # noqa: F401
