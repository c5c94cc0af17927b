# Public helper: read the embedded session data back out of a rendered page
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any


class HtmlDataExtractError(RuntimeError):
    pass


_DATA_SCRIPT_RE = re.compile(
    r'<script\b[^>]*\bid=["\']relchart-data["\'][^>]*>(?P<body>.*?)</script>',
    flags=re.IGNORECASE | re.DOTALL,
)


def extract_data_json(html_text: str) -> Any:
    m = _DATA_SCRIPT_RE.search(html_text)
    if not m:
        raise HtmlDataExtractError("No <script id='relchart-data'> block found in HTML.")
    body = (m.group("body") or "").strip()
    try:
        return json.loads(body)
    except ValueError as e:
        raise HtmlDataExtractError(f"Embedded data is not valid JSON: {e}") from e


def extract_data_json_from_file(path: str | Path) -> Any:
    return extract_data_json(Path(path).read_text(encoding="utf-8"))


__all__ = ["HtmlDataExtractError", "extract_data_json", "extract_data_json_from_file"]
