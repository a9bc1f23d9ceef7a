"""
CSV export of the selected filters.
"""

from .pipeline import ExportPipeline, ExportResult, FileDelivery, export_filename  # noqa: F401
