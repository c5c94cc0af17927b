#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import yaml

from relchart.errors import DataLoadError, DataShapeError
from relchart.filters import FilterEngine
from relchart.loader import load_records
from relchart.store import RecordStore


def _die(msg: str, rc: int = 2) -> int:
    print(f"[relchart-filter-records] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="relchart-filter-records", description="Write the subset of timeline records matching the given filters.")
    ap.add_argument("--in", dest="in_path", required=True, help="Input data file (YAML or JSON)")
    ap.add_argument("--q", default="", help="Case-insensitive title substring")
    ap.add_argument("--category", action="append", default=[], help="Category key (repeatable; OR semantics)")
    ap.add_argument("--size", default=None, help="Size bucket label, e.g. '≤7B' or '>400B'")
    ap.add_argument("--out", required=True, help="Output path (.json writes JSON, anything else YAML)")
    ns = ap.parse_args(argv)

    p = Path(ns.in_path)
    if not p.exists():
        return _die(f"Missing data file: {p}")

    try:
        store = RecordStore.load(load_records(str(p)))
    except (DataLoadError, DataShapeError) as e:
        return _die(f"Failed to load records: {p} ({e})")

    engine = FilterEngine(store)
    try:
        engine.set_text_query(ns.q)
        for key in ns.category:
            engine.toggle_category(key)
        engine.select_size_label(ns.size)
    except KeyError as e:
        return _die(f"Unknown filter value: {e}", rc=3)

    kept = [dict(r.raw) for r in engine.filtered]

    out_path = Path(ns.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if out_path.suffix.lower() == ".json":
        txt = json.dumps(kept, ensure_ascii=False, indent=2) + "\n"
    else:
        txt = yaml.safe_dump(kept, allow_unicode=True, sort_keys=False)
    out_path.write_text(txt, encoding="utf-8", newline="\n")

    print(f"[relchart-filter-records] OK: wrote {len(kept)} of {len(store)} records to {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
