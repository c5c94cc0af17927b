# relchart/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

STAR_MARKER = "⭐"


@dataclass(frozen=True)
class Record:
    origin_index: int
    title: str
    raw_date: Any
    model_type: Optional[str]
    model_size: Optional[str]

    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def has_marker(self) -> bool:
        return STAR_MARKER in self.title

    def get(self, name: str, default: Any = None) -> Any:
        return self.raw.get(name, default)


@dataclass(frozen=True)
class Category:
    key: str
    label: str
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SizeBucket:
    label: str
    kind: str  # "at-most" | "above"
    threshold_b: float


@dataclass(frozen=True)
class FilterState:
    text_query: str = ""
    selected_categories: FrozenSet[str] = frozenset()
    size_bucket: Optional[SizeBucket] = None

    @property
    def is_default(self) -> bool:
        return not self.text_query and not self.selected_categories and self.size_bucket is None


@dataclass(frozen=True)
class Tick:
    timestamp_ms: int
    label: str
    x_px: float


@dataclass(frozen=True)
class LayoutPoint:
    record: Record
    timestamp_ms: int
    day_key: int
    lane_index: int
    group_size: int
    max_abs_lane: int
    x_px: float
    lane_offset_px: float
    jitter_px: float
    y_px: float

    @property
    def has_marker(self) -> bool:
        return self.record.has_marker


@dataclass(frozen=True)
class LayoutResult:
    empty: bool
    width_px: int
    height_px: int
    visible_width_px: int
    content_width_px: int
    content_inner_width_px: int
    left_pad_px: int
    baseline_y_px: float
    min_timestamp: Optional[int] = None
    max_timestamp: Optional[int] = None
    span_days: int = 0
    tick_mode: str = "none"  # "month" | "day" | "none"
    ticks: Tuple[Tick, ...] = ()
    points: Tuple[LayoutPoint, ...] = ()
    dropped: Tuple[int, ...] = ()

    @property
    def overflows(self) -> bool:
        return self.content_width_px > self.visible_width_px

    def to_dict(self) -> Dict[str, Any]:
        return {
            "empty": self.empty,
            "width_px": self.width_px,
            "height_px": self.height_px,
            "visible_width_px": self.visible_width_px,
            "content_width_px": self.content_width_px,
            "content_inner_width_px": self.content_inner_width_px,
            "left_pad_px": self.left_pad_px,
            "baseline_y_px": self.baseline_y_px,
            "min_timestamp": self.min_timestamp,
            "max_timestamp": self.max_timestamp,
            "span_days": self.span_days,
            "tick_mode": self.tick_mode,
            "ticks": [{"timestamp_ms": t.timestamp_ms, "label": t.label, "x_px": t.x_px} for t in self.ticks],
            "points": [
                {
                    "origin_index": p.record.origin_index,
                    "title": p.record.title,
                    "timestamp_ms": p.timestamp_ms,
                    "lane_index": p.lane_index,
                    "group_size": p.group_size,
                    "x_px": p.x_px,
                    "y_px": p.y_px,
                    "lane_offset_px": p.lane_offset_px,
                    "marker": p.has_marker,
                }
                for p in self.points
            ],
            "dropped": list(self.dropped),
        }


@dataclass(frozen=True)
class ViewportState:
    pan_offset_px: float
    max_offset_px: float
    visible_width_px: int
    phase: str  # "at-start" | "mid" | "at-end"

    @property
    def can_pan_left(self) -> bool:
        return self.max_offset_px > 0 and self.pan_offset_px > 0

    @property
    def can_pan_right(self) -> bool:
        return self.max_offset_px > 0 and self.pan_offset_px < self.max_offset_px

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pan_offset_px": self.pan_offset_px,
            "max_offset_px": self.max_offset_px,
            "visible_width_px": self.visible_width_px,
            "phase": self.phase,
            "can_pan_left": self.can_pan_left,
            "can_pan_right": self.can_pan_right,
        }


__all__ = [
    "STAR_MARKER",
    "Record",
    "Category",
    "SizeBucket",
    "FilterState",
    "Tick",
    "LayoutPoint",
    "LayoutResult",
    "ViewportState",
]
