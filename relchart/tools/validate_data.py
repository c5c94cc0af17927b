#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import yaml

from relchart.loader import parse_data_text
from relchart.validate import validate_records, yaml_error_position

DEFAULT_REPORT = "validation-report.txt"


def _die(msg: str, rc: int = 2) -> int:
    print(f"[relchart-validate-data] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="relchart-validate-data", description="Validate a timeline data file (YAML or JSON).")
    ap.add_argument("--in", dest="in_path", default="timeline-data.yaml", help="Data file (default: ./timeline-data.yaml)")
    ap.add_argument("--report", default=DEFAULT_REPORT, help=f"Report output path (default: ./{DEFAULT_REPORT})")
    ap.add_argument("--no-report", action="store_true", help="Print the report only; do not write it to disk")
    ns = ap.parse_args(argv)

    p = Path(ns.in_path)
    if not p.exists():
        return _die(f"Missing data file: {p}", rc=1)

    text = p.read_text(encoding="utf-8", errors="replace")
    try:
        data = parse_data_text(text, str(p))
    except yaml.YAMLError as e:
        pos = yaml_error_position(e)
        where = f" at line {pos[0]}, column {pos[1]}" if pos else ""
        return _die(f"YAML syntax error{where}: {e}", rc=1)
    except ValueError as e:
        return _die(f"JSON syntax error: {e}", rc=1)

    report = validate_records(data)
    content = report.render()
    print(content)

    if not ns.no_report:
        out = Path(ns.report)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content + "\n", encoding="utf-8", newline="\n")
        print(f"[relchart-validate-data] report written to {out}")

    if not report.is_valid():
        print(f"[relchart-validate-data] FAIL: {len(report.errors)} error(s)", file=sys.stderr)
        return 1

    print("[relchart-validate-data] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
