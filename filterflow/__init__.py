"""
Filterflow: capture and export saved marketplace search filters.

This package turns the saved search filters ("alerts") returned by
the V‑Tools and Souk.to APIs into one flat record schema and writes
them to a spreadsheet‑safe CSV file.  Each submodule implements one
step of the pipeline:

1. **ingest** – Per‑source normalizers that validate a raw API
   payload and map every usable entry into a `FilterRecord`.  Entries
   that cannot be used are reported as diagnostics instead of
   aborting the batch.  The `intercept` module recognises the source
   of a captured request URL and can fetch a payload over HTTP.
2. **capture** – The `CaptureProcessor` runs a normalizer for a
   tagged payload and commits the resulting batch to a store,
   replacing whatever batch was stored before.
3. **selection** – The `RecordSelector` keeps a search query and a
   selection over the loaded batch and decides which records are
   exported.
4. **export** – The `ExportPipeline` encodes the chosen records as
   CSV and hands the document to a delivery callable.
5. **cli** – Command line entry point wiring together the above
   components through a `FilterSession`.
"""

from importlib import metadata  # noqa: F401 (expose package version)
