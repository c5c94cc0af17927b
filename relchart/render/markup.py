# relchart/render/markup.py
"""Body markup builders. Every piece of record text goes through escape()."""
from __future__ import annotations

from html import escape
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from ..categories import CATEGORY_OPTIONS, SIZE_OPTIONS
from ..layout import MARGIN_LEFT
from ..model import Category, FilterState, LayoutResult, Record, SizeBucket, ViewportState
from ..util.timeparse import format_ymd
from .text import is_long_text, render_text, truncate_text

NO_DATA_MESSAGE = "No release dates to chart"
UNTITLED = "(untitled)"


def _num(x: float) -> str:
    s = f"{float(x):.2f}".rstrip("0").rstrip(".")
    return "0" if s in ("", "-0") else s


def item_anchor(origin_index: int) -> str:
    return f"timeline-item-{int(origin_index)}"


def header(title: str) -> str:
    return f'<h1 class="page-title">{escape(title)}</h1>\n'


def filter_bar(
    state: FilterState,
    counts: Mapping[str, int],
    *,
    categories: Sequence[Category] = CATEGORY_OPTIONS,
    size_options: Sequence[SizeBucket] = SIZE_OPTIONS,
    search: bool = True,
    types: bool = True,
    sizes: bool = True,
    shown: int = 0,
    total: int = 0,
) -> str:
    parts: List[str] = ['<div class="filter-bar">']
    if search:
        parts.append(
            f'<input type="search" class="search-box" readonly value="{escape(state.text_query)}" placeholder="title" />'
        )
    if types:
        parts.append('<div class="type-chips">')
        for c in categories:
            cls = "type-chip active" if c.key in state.selected_categories else "type-chip"
            parts.append(
                f'<span class="{cls}" data-key="{escape(c.key)}">{escape(c.label)}'
                f'<span class="count">{int(counts.get(c.key, 0))}</span></span>'
            )
        parts.append("</div>")
    if sizes:
        current = state.size_bucket.label if state.size_bucket else ""
        opts = ['<option value="">all sizes</option>']
        for b in size_options:
            sel = " selected" if b.label == current else ""
            opts.append(f'<option value="{escape(b.label)}"{sel}>{escape(b.label)} ({int(counts.get(b.label, 0))})</option>')
        parts.append(f'<select class="size-select" disabled>{"".join(opts)}</select>')
    parts.append(f'<span class="filter-summary">{int(shown)} / {int(total)}</span>')
    parts.append("</div>\n")
    return "".join(parts)


def _chart_svg(layout: LayoutResult) -> str:
    h = layout.height_px
    base = layout.baseline_y_px
    out: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{layout.content_width_px}" height="{h}">',
        f'<line class="axis" x1="{MARGIN_LEFT}" x2="{_num(MARGIN_LEFT + layout.content_inner_width_px)}" '
        f'y1="{_num(base)}" y2="{_num(base)}" stroke="rgba(86,152,195,0.45)" stroke-width="1" />',
    ]
    last = len(layout.ticks) - 1
    for i, t in enumerate(layout.ticks):
        anchor = "start" if i == 0 else ("end" if i == last else "middle")
        out.append(
            f'<line class="tick" x1="{_num(t.x_px)}" x2="{_num(t.x_px)}" y1="{_num(base - 8)}" y2="{_num(base + 8)}" '
            'stroke="rgba(86,152,195,0.35)" stroke-width="1" />'
        )
        out.append(
            f'<text class="tick-label" x="{_num(t.x_px)}" y="{_num(base - 12)}" text-anchor="{anchor}" '
            f'font-size="12" fill="#3c6a93">{escape(t.label)}</text>'
        )
    for p in layout.points:
        anchor_id = item_anchor(p.record.origin_index)
        tip = f"{format_ymd(p.timestamp_ms)} · {p.record.title or UNTITLED}"
        if p.has_marker:
            node = (
                f'<text x="{_num(p.x_px)}" y="{_num(p.y_px)}" text-anchor="middle" dominant-baseline="middle" '
                'font-size="12">⭐</text>'
            )
        else:
            node = f'<circle cx="{_num(p.x_px)}" cy="{_num(p.y_px)}" r="4.5" fill="#2f6bd8" opacity="0.95" />'
        out.append(
            f'<a class="point" href="#{anchor_id}" data-target="{anchor_id}" data-lane="{p.lane_index}">'
            f"<title>{escape(tip)}</title>{node}</a>"
        )
    out.append("</svg>")
    return "".join(out)


def chart(layout: LayoutResult, viewport: ViewportState) -> str:
    parts: List[str] = [
        '<div class="release-chart-wrapper">',
        f'<div id="release-chart" style="width:{layout.width_px}px;height:{layout.height_px}px">',
    ]
    if layout.empty:
        parts.append(f'<div class="rc-inner"></div><div class="empty">{escape(NO_DATA_MESSAGE)}</div>')
    else:
        parts.append(
            f'<div class="rc-inner" style="width:{layout.content_width_px}px;left:{layout.left_pad_px}px;'
            f'transform:translateX({_num(-viewport.pan_offset_px)}px)">'
        )
        parts.append(_chart_svg(layout))
        parts.append("</div>")
    left_dis = "" if viewport.can_pan_left else " disabled"
    right_dis = "" if viewport.can_pan_right else " disabled"
    parts.append(f'<button class="pan-btn pan-left" aria-label="pan left"{left_dis}><span>‹</span></button>')
    parts.append(f'<button class="pan-btn pan-right" aria-label="pan right"{right_dis}><span>›</span></button>')
    parts.append("</div></div>\n")
    return "".join(parts)


def toc(records: Iterable[Record], *, toggle: bool = False) -> str:
    parts: List[str] = []
    if toggle:
        parts.append('<button class="toc-toggle" type="button">Hide contents</button>\n')
    parts.append('<nav class="custom-toc"><div class="custom-toc-header">Contents</div>')
    parts.append('<div class="custom-toc-content"><ul id="toc-list">')
    for n, r in enumerate(records, start=1):
        aid = item_anchor(r.origin_index)
        parts.append(f'<li><a href="#{aid}" data-target="{aid}">{n}. {escape(r.title or UNTITLED)}</a></li>')
    parts.append("</ul></div></nav>\n")
    return "".join(parts)


def _details(r: Record) -> str:
    rows: List[str] = []
    for label, key in (("Model size", "modelSize"), ("Model type", "modelType"), ("Context window", "contextWindow")):
        v = r.get(key)
        if isinstance(v, str) and v.strip():
            rows.append(f"<li><strong>{label}:</strong> {escape(v)}</li>")
    if not rows:
        return ""
    return f'<div class="timeline-details"><ul>{"".join(rows)}</ul></div>'


def _text_block(text: str, *, markdown: bool) -> str:
    if not is_long_text(text):
        return (
            '<div class="timeline-text-container">'
            f'<div class="timeline-text">{render_text(text, markdown)}</div></div>'
        )
    return (
        '<div class="timeline-text-container">'
        f'<div class="timeline-text text-truncated text-short">{render_text(truncate_text(text), markdown)}</div>'
        f'<div class="timeline-text text-full" hidden>{render_text(text, markdown)}</div>'
        '<button class="expand-btn" type="button">Show more</button></div>'
    )


def timeline_item(r: Record, *, markdown: bool = True) -> str:
    parts: List[str] = [f'<div class="timeline-item" id="{item_anchor(r.origin_index)}">']
    parts.append('<div class="timeline-dot"></div><div class="timeline-content">')
    badge = ""
    open_source = r.get("openSource")
    if isinstance(open_source, bool):
        cls, label = ("badge-open", "open source") if open_source else ("badge-closed", "closed")
        badge = f'<span class="badge {cls}">{label}</span>'
    parts.append(f'<h3 class="timeline-title">{escape(r.title or UNTITLED)}{badge}</h3>')
    parts.append(f'<div class="timeline-date">{escape("" if r.raw_date is None else str(r.raw_date))}</div>')
    text = r.get("text")
    if isinstance(text, str) and text:
        parts.append(_text_block(text, markdown=markdown))
    evaluation = r.get("evaluation")
    if isinstance(evaluation, str) and evaluation.strip():
        parts.append(
            '<div class="timeline-evaluation"><div class="timeline-evaluation-label">Evaluation</div>'
            f'<div class="timeline-evaluation-text">{render_text(evaluation, markdown)}</div></div>'
        )
    parts.append(_details(r))
    doc = r.get("officialDoc")
    if isinstance(doc, str) and doc.strip().lower().startswith(("http://", "https://")):
        parts.append(f'<a class="timeline-link" target="_blank" rel="noopener" href="{escape(doc.strip())}">Official docs</a>')
    parts.append("</div></div>\n")
    return "".join(parts)


def timeline_list(records: Iterable[Record], *, markdown: bool = True) -> str:
    return '<div id="timeline" class="timeline-container">\n' + "".join(
        timeline_item(r, markdown=markdown) for r in records
    ) + "</div>\n"


def fallback(message: str, *, show: bool = True) -> str:
    if not show:
        return '<div id="timeline" class="timeline-container"></div>\n'
    return (
        '<div id="timeline" class="timeline-container"><div class="load-error">'
        f"<h3>{escape(message)}</h3><p>Check the data source and try again.</p></div></div>\n"
    )


def body_class(theme: Optional[str], toc_visible: bool) -> str:
    classes: Dict[str, bool] = {str(theme or "").strip(): True, "toc-hidden": not toc_visible}
    return " ".join(k for k, on in classes.items() if k and on)
