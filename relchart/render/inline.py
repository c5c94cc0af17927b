# relchart/render/inline.py
from __future__ import annotations

import re
from html import escape
from typing import Any, Dict

import orjson

from .html_shell import HTML_SHELL
from .inline_css import CSS_BLOCK
from .inline_js import JS_BLOCK
from . import markup

DEFAULT_TITLE = "Model release timeline"

_DATA_MARKER = "__DATA_JSON__"
_DATA_MARKER_COUNT = HTML_SHELL.count(_DATA_MARKER)
_MARKER_RE = re.compile(r"__(PAGE_TITLE|BODY_CLASS|CSS_BLOCK|JS_BLOCK|BODY_MARKUP|DATA_JSON)__")


def data_json(payload: Dict[str, Any]) -> str:
    # Script-safe: a literal "</" inside record text must not close the <script> block.
    return orjson.dumps(payload).decode("utf-8").replace("</", r"<\/")


def body_markup(session: Any, title: str = DEFAULT_TITLE) -> str:
    cfg = session.config
    parts = [markup.header(title)]
    if session.load_error is not None:
        parts.append(markup.fallback(session.load_error, show=cfg.settings.error_handling.show_fallback_data))
        return "".join(parts)

    filtered = session.filtered
    parts.append(
        markup.filter_bar(
            session.filter_state,
            session.filters.counts(),
            categories=session.filters.categories,
            size_options=session.filters.size_options,
            search=cfg.feature("enableSearch"),
            types=cfg.feature("enableTypeFilter"),
            sizes=cfg.feature("enableSizeFilter"),
            shown=len(filtered),
            total=len(session.store),
        )
    )
    if cfg.feature("enableChart"):
        parts.append(markup.chart(session.layout, session.viewport_state))
    parts.append(markup.toc(filtered, toggle=cfg.settings.layout.show_toc_toggle))
    parts.append(markup.timeline_list(filtered, markdown=cfg.feature("enableMarkdown")))
    return "".join(parts)


def build_html(session: Any, *, title: str = DEFAULT_TITLE) -> str:
    """Render a self-contained page for the session's current state."""
    if _DATA_MARKER_COUNT != 1:
        raise RuntimeError(f"HTML_SHELL must contain {_DATA_MARKER} exactly once (found {_DATA_MARKER_COUNT})")

    cfg = session.config
    css = CSS_BLOCK
    custom_css = cfg.settings.styles.custom_css
    if custom_css:
        css = css + "\n" + custom_css

    values = {
        "PAGE_TITLE": escape(title),
        "BODY_CLASS": markup.body_class(cfg.settings.styles.theme_class, cfg.settings.layout.toc_visible),
        "CSS_BLOCK": css,
        "JS_BLOCK": JS_BLOCK,
        "BODY_MARKUP": body_markup(session, title),
        "DATA_JSON": data_json(session.snapshot()),
    }
    # Single pass: inserted content is never rescanned for markers.
    return _MARKER_RE.sub(lambda m: values[m.group(1)], HTML_SHELL)
