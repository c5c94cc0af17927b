# relchart/loader.py
from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml

from .errors import DataLoadError
from .util.console import eprint

DEFAULT_FETCH_TIMEOUT_S = 15.0

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _StringDateLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates (2024-01-01) as plain strings."""


_StringDateLoader.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _fetch_timeout_s() -> float:
    raw = (os.getenv("RELCHART_FETCH_TIMEOUT_S", "") or "").strip()
    if not raw:
        return DEFAULT_FETCH_TIMEOUT_S
    try:
        v = float(raw)
    except ValueError:
        return DEFAULT_FETCH_TIMEOUT_S
    return v if v > 0 else DEFAULT_FETCH_TIMEOUT_S


def is_url(source: str) -> bool:
    s = source.strip().lower()
    return s.startswith("http://") or s.startswith("https://")


def parse_yaml_text(text: str) -> Any:
    return yaml.load(text, Loader=_StringDateLoader)


def parse_data_text(text: str, source: str) -> Any:
    """JSON for `.json` sources, YAML otherwise (YAML also accepts JSON)."""
    name = source.split("?", 1)[0].lower()
    if name.endswith(".json"):
        return json.loads(text)
    return parse_yaml_text(text)


class DataLoader:
    """Try each data source in order and return the first one that parses."""

    def __init__(self, sources: Sequence[str], *, timeout_s: Optional[float] = None) -> None:
        self.sources = [str(s) for s in sources if str(s).strip()]
        self.timeout_s = float(timeout_s) if timeout_s is not None else _fetch_timeout_s()
        self.loaded_from: Optional[str] = None

    def read_text(self, source: str) -> str:
        if is_url(source):
            with urllib.request.urlopen(source, timeout=self.timeout_s) as resp:
                charset = resp.headers.get_content_charset() or "utf-8"
                return resp.read().decode(charset, errors="replace")
        return Path(source).expanduser().read_text(encoding="utf-8", errors="replace")

    def load(self) -> Any:
        if not self.sources:
            raise DataLoadError("all data sources failed (no sources configured)")

        failures: List[str] = []
        for i, source in enumerate(self.sources, start=1):
            try:
                data = parse_data_text(self.read_text(source), source)
            except (OSError, urllib.error.URLError, ValueError, yaml.YAMLError) as ex:
                failures.append(f"{source}: {ex}")
                eprint(f"[relchart.loader] WARN: data source {i}/{len(self.sources)} failed: {source} ({ex})")
                continue
            self.loaded_from = source
            return data

        raise DataLoadError("all data sources failed: " + "; ".join(failures))


def load_records(sources: Sequence[str] | str, *, timeout_s: Optional[float] = None) -> Any:
    """Load raw record data from the first working source (path or http(s) URL)."""
    if isinstance(sources, (str, Path)):
        sources = [str(sources)]
    return DataLoader(sources, timeout_s=timeout_s).load()


__all__ = [
    "DEFAULT_FETCH_TIMEOUT_S",
    "DataLoader",
    "is_url",
    "load_records",
    "parse_data_text",
    "parse_yaml_text",
]
