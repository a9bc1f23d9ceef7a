"""
Capture subsystem for filterflow.

The `capture` package receives tagged raw payloads, normalizes them
and keeps the most recent batch in a store.  Each capture replaces
the previous batch wholesale; batches are never merged.
"""

from .processor import CaptureIndicator, CaptureOutcome, CaptureProcessor  # noqa: F401
from .store import BatchStore, JsonFileStore, MemoryStore  # noqa: F401
