"""relchart.api

Stable *library* entrypoint for relchart.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from relchart.config import TimelineConfig
from relchart.filters import FilterEngine, filter_records, parse_model_sizes
from relchart.html_extract import extract_data_json
from relchart.layout import TemporalLayoutEngine, layout_records
from relchart.loader import load_records
from relchart.render.inline import build_html as render_html
from relchart.session import TimelineSession
from relchart.store import RecordStore
from relchart.util.timeparse import parse_date_ms
from relchart.validate import validate_records
from relchart.viewport import ViewportController


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "FilterEngine",
    "RecordStore",
    "TemporalLayoutEngine",
    "TimelineConfig",
    "TimelineSession",
    "ViewportController",
    "extract_data_json",
    "filter_records",
    "layout_records",
    "load_records",
    "parse_date_ms",
    "parse_model_sizes",
    "render_html",
    "validate_records",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
