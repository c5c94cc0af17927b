from __future__ import annotations

import argparse
import os
import sys
import webbrowser
from pathlib import Path

import orjson

from .config import TimelineConfig
from .errors import ConfigError
from .render.inline import build_html
from .session import TimelineSession


def _build_config(args: argparse.Namespace) -> TimelineConfig:
    try:
        if args.config:
            cfg = TimelineConfig.from_file(args.config, preset=args.preset)
        elif args.preset:
            cfg = TimelineConfig.from_preset(args.preset)
        else:
            cfg = TimelineConfig()

        cfg.apply_env()
        if args.data:
            cfg.set("dataSources", list(args.data))
        if args.width is not None:
            cfg.set("chart.width", int(args.width))
        if args.height is not None:
            cfg.set("chart.height", int(args.height))
    except ConfigError as e:
        raise SystemExit(f"Invalid config: {e}")
    return cfg


def _write_out(out_arg: str, default_out: str, fallback_name: str, text: str) -> str:
    out_path = os.path.abspath(out_arg)
    try:
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        # Default relative path from an unwritable CWD: fall back to a user-writable location.
        if out_arg == default_out:
            fallback = Path.home() / ".relchart" / "build" / fallback_name
            fallback.parent.mkdir(parents=True, exist_ok=True)
            out_path = str(fallback)
            print(
                f"[relchart] WARN: default output directory is not writable; using {out_path}",
                file=sys.stderr,
            )
        else:
            raise SystemExit(f"Cannot create output directory '{Path(out_path).parent}': {e}")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(text)
    return out_path


def main(argv: list[str] | None = None) -> None:
    default_out = os.path.join("build", "relchart_timeline.html")
    ap = argparse.ArgumentParser(
        description="Generate an interactive model release timeline HTML from YAML/JSON records."
    )
    ap.add_argument(
        "--data",
        action="append",
        default=None,
        help="Data source path or http(s) URL; repeat to add fallbacks (default: config dataSources, env RELCHART_DATA)",
    )
    ap.add_argument("--config", default=None, help="Timeline config file (YAML or JSON)")
    ap.add_argument("--preset", default=None, help="Named config preset (standalone, simple)")
    ap.add_argument("--q", default="", help="Title filter (case-insensitive substring)")
    ap.add_argument("--category", action="append", default=[], help="Category key filter (repeatable; any match)")
    ap.add_argument("--size", default=None, help="Size bucket label filter, e.g. '≤7B' or '>400B'")
    ap.add_argument("--width", type=int, default=None, help="Chart viewport width in px (default: 1200)")
    ap.add_argument("--height", type=int, default=None, help="Chart viewport height in px (default: 240)")
    ap.add_argument("--title", default=None, help="Page title")
    ap.add_argument(
        "--out",
        default=default_out,
        help="Output HTML path (default: ./build/relchart_timeline.html)",
    )
    ap.add_argument("--json-out", default=None, help="Also write the session snapshot JSON to this path")
    ap.add_argument("--no-open", action="store_true", help="Do not open the generated HTML in a browser")

    args = ap.parse_args(argv)

    cfg = _build_config(args)
    session = TimelineSession.from_sources(cfg)
    try:
        if args.q:
            session.set_text_query(args.q)
        for key in args.category:
            session.toggle_category(key)
        if args.size:
            session.select_size_label(args.size)
    except KeyError as e:
        raise SystemExit(f"Unknown filter value: {e}")

    if args.title:
        html = build_html(session, title=args.title)
    else:
        html = build_html(session)
    out_path = _write_out(args.out, default_out, "relchart_timeline.html", html)

    if args.json_out:
        snap = orjson.dumps(session.snapshot(), option=orjson.OPT_INDENT_2).decode("utf-8")
        json_path = Path(args.json_out)
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(snap + "\n", encoding="utf-8", newline="\n")

    session.close()
    print(out_path)

    if not getattr(args, "no_open", False):
        try:
            webbrowser.open("file://" + out_path)
        except webbrowser.Error as e:
            print(f"[relchart] WARN: could not open browser ({e})", file=sys.stderr)


if __name__ == "__main__":
    main()
