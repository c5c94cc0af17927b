# relchart/layout.py
"""Temporal scatter layout.

Turns a filtered record sequence plus viewport pixel dimensions into a
LayoutResult: sorted points with x positions and same-day lanes, an adaptive
content width and human-legible axis ticks.

Geometry (pixels):
  - the chart viewport is W x H; pan buttons reserve GUARD px on each side
  - visible_width = W - 2*GUARD, the pannable window
  - content is MARGIN.left + content_inner_width + MARGIN.right wide and may
    exceed visible_width (up to MAX_SCALE times the inner viewport width)

All derived per-record values are recomputed from scratch on every call.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .errors import DateParseFailure
from .model import LayoutPoint, LayoutResult, Record, Tick
from .util.console import eprint, obs_enabled
from .util.jitter import LCG_SEED, LcgJitter
from .util.timeparse import DAY_MS, day_key, month_start_ms, parse_date_ms_strict, utc_from_ms

DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 240

MARGIN_LEFT = 40
MARGIN_RIGHT = 6
MARGIN_TOP = 16
MARGIN_BOTTOM = 28
GUARD = 42

MIN_GAP_PX = 34
MAX_SCALE = 12

MONTH_MODE_MIN_DAYS = 120
MONTH_STEPS = (1, 2, 3, 6, 12)
DAY_STEPS = (1, 2, 3, 5, 7, 10, 14, 21, 30, 60)
TICK_SPACING_PX = 160
TICKS_MIN = 6
TICKS_MAX = 10

BASELINE_RATIO = 0.68
LANE_GAP_RATIO = 0.18
LANE_GAP_MIN = 10
JITTER_RATIO = 0.15
JITTER_MIN = 4
JITTER_WEIGHT = 0.25


def js_round(x: float) -> int:
    # Half-up rounding; Python's round() is banker's rounding.
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class Geometry:
    width: int
    height: int
    visible_width: int
    inner_viewport_width: int
    inner_height: int

    @classmethod
    def from_viewport(cls, width: float, height: float) -> "Geometry":
        w = max(0, int(width))
        h = max(0, int(height))
        visible = max(0, w - GUARD * 2)
        return cls(
            width=w,
            height=h,
            visible_width=visible,
            inner_viewport_width=max(0, visible - MARGIN_LEFT - MARGIN_RIGHT),
            inner_height=max(0, h - MARGIN_TOP - MARGIN_BOTTOM),
        )

    @property
    def baseline_y(self) -> float:
        return MARGIN_TOP + self.inner_height * BASELINE_RATIO


def sort_by_date(records: Sequence[Record]) -> Tuple[List[Tuple[int, Record]], List[int]]:
    """Return ((timestamp_ms, record) ascending, dropped origin indices).

    Ties keep input order (stable sort).
    """
    items: List[Tuple[int, Record]] = []
    dropped: List[int] = []
    for r in records:
        try:
            t = parse_date_ms_strict(r.raw_date)
        except DateParseFailure as ex:
            dropped.append(r.origin_index)
            if obs_enabled():
                eprint(f"[relchart.layout] WARN: point dropped origin={r.origin_index} ({ex})")
            continue
        items.append((t, r))
    items.sort(key=lambda it: it[0])
    return items, dropped


def zigzag_lane(group_index: int) -> int:
    """0, +1, -1, +2, -2, ... for group positions 0, 1, 2, 3, 4, ..."""
    if group_index <= 0:
        return 0
    s = (group_index + 1) // 2
    return s if group_index % 2 == 1 else -s


def assign_lanes(timestamps: Sequence[int]) -> List[Tuple[int, int, int, int]]:
    """Per timestamp: (day_key, lane_index, group_size, max_abs_lane).

    `timestamps` must already be sorted so group positions follow chart order.
    """
    groups: Dict[int, List[int]] = {}
    positions: List[Tuple[int, int]] = []
    for i, t in enumerate(timestamps):
        k = day_key(t)
        members = groups.setdefault(k, [])
        positions.append((k, len(members)))
        members.append(i)

    out: List[Tuple[int, int, int, int]] = []
    for k, gi in positions:
        n = len(groups[k])
        out.append((k, zigzag_lane(gi), n, n // 2))
    return out


def min_positive_delta(timestamps: Sequence[int]) -> Optional[int]:
    best: Optional[int] = None
    for a, b in zip(timestamps, timestamps[1:]):
        dt_ms = b - a
        if dt_ms > 0 and (best is None or dt_ms < best):
            best = dt_ms
    return best


def content_inner_width(timestamps: Sequence[int], inner_viewport_width: int) -> int:
    """Width that keeps adjacent distinct points MIN_GAP_PX apart, within [inner, inner*MAX_SCALE]."""
    base = int(inner_viewport_width)
    if not timestamps:
        return base
    min_delta = min_positive_delta(timestamps)
    if min_delta is None:
        return base
    span = max(1, timestamps[-1] - timestamps[0])
    candidate = js_round(MIN_GAP_PX * span / min_delta)
    return max(base, min(base * MAX_SCALE, candidate))


def target_tick_count(content_inner_w: int) -> int:
    return min(TICKS_MAX, max(TICKS_MIN, content_inner_w // TICK_SPACING_PX))


def choose_ticks(build: Callable[[int], List[int]], steps: Sequence[int], target: int) -> Tuple[int, List[int]]:
    """Step and ticks whose actual count is closest to target.

    Counts inside [TICKS_MIN, TICKS_MAX] beat counts outside it; the first
    step wins ties.
    """
    best_step, best_ticks = steps[0], []
    best_key: Optional[Tuple[int, int]] = None
    for s in steps:
        ticks = build(s)
        n = len(ticks)
        key = (0 if TICKS_MIN <= n <= TICKS_MAX else 1, abs(n - target))
        if best_key is None or key < best_key:
            best_step, best_ticks, best_key = s, ticks, key
    return best_step, best_ticks


def month_ticks(min_t: int, max_t: int, step: int) -> List[int]:
    """Month starts every `step` months, from the month holding min_t."""
    d0 = utc_from_ms(min_t)
    out: List[int] = []
    y, m = d0.year, d0.month - 1
    while True:
        t = month_start_ms(y, m + 1)
        if t > max_t:
            break
        out.append(t)
        m += step
        y += m // 12
        m %= 12
    return out


def day_ticks(min_t: int, max_t: int, step: int) -> List[int]:
    """UTC midnights every `step` days, from the first midnight at or after min_t."""
    first = -(-min_t // DAY_MS) * DAY_MS
    return list(range(first, max_t + 1, step * DAY_MS))


def tick_label(t: int, month_mode: bool) -> str:
    d = utc_from_ms(t)
    return d.strftime("%Y-%m") if month_mode else d.strftime("%m-%d")


def make_x_mapper(min_t: int, max_t: int, content_inner_w: int) -> Callable[[int], float]:
    def x_for(t: int) -> float:
        if max_t == min_t:
            return MARGIN_LEFT + content_inner_w / 2
        clamped = max(min_t, min(max_t, t))
        return MARGIN_LEFT + (clamped - min_t) / (max_t - min_t) * content_inner_w

    return x_for


class TemporalLayoutEngine:
    def __init__(self, *, jitter_seed: int = LCG_SEED) -> None:
        self.jitter_seed = int(jitter_seed)

    def no_data(self, geo: Geometry, dropped: Sequence[int] = ()) -> LayoutResult:
        return LayoutResult(
            empty=True,
            width_px=geo.width,
            height_px=geo.height,
            visible_width_px=geo.visible_width,
            content_width_px=0,
            content_inner_width_px=0,
            left_pad_px=0,
            baseline_y_px=geo.baseline_y,
            dropped=tuple(dropped),
        )

    def layout(
        self,
        records: Sequence[Record],
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
    ) -> LayoutResult:
        geo = Geometry.from_viewport(width, height)
        items, dropped = sort_by_date(records)
        if not items:
            return self.no_data(geo, dropped)

        timestamps = [t for t, _ in items]
        min_t, max_t = timestamps[0], timestamps[-1]

        inner_w = content_inner_width(timestamps, geo.inner_viewport_width)
        content_w = MARGIN_LEFT + MARGIN_RIGHT + inner_w
        left_pad = 0
        if content_w <= geo.visible_width:
            left_pad = max(0, math.floor(GUARD + (geo.visible_width - content_w) / 2))

        span_ms = max(1, max_t - min_t)
        span_days = max(1, js_round(span_ms / DAY_MS))
        target = target_tick_count(inner_w)
        month_mode = span_days >= MONTH_MODE_MIN_DAYS
        if month_mode:
            _, tick_ts = choose_ticks(lambda s: month_ticks(min_t, max_t, s), MONTH_STEPS, target)
        else:
            _, tick_ts = choose_ticks(lambda s: day_ticks(min_t, max_t, s), DAY_STEPS, target)

        x_for = make_x_mapper(min_t, max_t, inner_w)
        ticks = tuple(Tick(timestamp_ms=t, label=tick_label(t, month_mode), x_px=x_for(t)) for t in tick_ts)

        baseline = geo.baseline_y
        lane_gap = max(LANE_GAP_MIN, js_round(geo.inner_height * LANE_GAP_RATIO))
        jitter_amp = max(JITTER_MIN, geo.inner_height * JITTER_RATIO)
        rng = LcgJitter(self.jitter_seed)

        points: List[LayoutPoint] = []
        for (t, rec), (dk, lane, n, max_abs) in zip(items, assign_lanes(timestamps)):
            lane_offset = lane * lane_gap
            jitter = rng.offset(jitter_amp) * JITTER_WEIGHT
            points.append(
                LayoutPoint(
                    record=rec,
                    timestamp_ms=t,
                    day_key=dk,
                    lane_index=lane,
                    group_size=n,
                    max_abs_lane=max_abs,
                    x_px=x_for(t),
                    lane_offset_px=float(lane_offset),
                    jitter_px=jitter,
                    y_px=baseline - lane_offset - jitter,
                )
            )

        return LayoutResult(
            empty=False,
            width_px=geo.width,
            height_px=geo.height,
            visible_width_px=geo.visible_width,
            content_width_px=content_w,
            content_inner_width_px=inner_w,
            left_pad_px=left_pad,
            baseline_y_px=baseline,
            min_timestamp=min_t,
            max_timestamp=max_t,
            span_days=span_days,
            tick_mode="month" if month_mode else "day",
            ticks=ticks,
            points=tuple(points),
            dropped=tuple(dropped),
        )


def layout_records(
    records: Sequence[Record],
    width: float = DEFAULT_WIDTH,
    height: float = DEFAULT_HEIGHT,
) -> LayoutResult:
    return TemporalLayoutEngine().layout(records, width, height)
