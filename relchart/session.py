# relchart/session.py
"""One timeline instance: records, filters, layout and viewport in one place.

All derived state (filtered list, LayoutResult, ViewportState) is recomputed
together under one re-entrant lock, so a layout always corresponds to a
single FilterState snapshot even when a debounced resize or a hold-pan frame
lands from a timer thread.
"""
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .config import TimelineConfig
from .errors import DataLoadError, DataShapeError
from .filters import FilterEngine
from .layout import DEFAULT_HEIGHT, DEFAULT_WIDTH, Geometry, TemporalLayoutEngine
from .loader import DataLoader
from .model import FilterState, LayoutResult, Record, SizeBucket, ViewportState
from .store import RecordStore
from .util.console import eprint
from .util.debounce import RESIZE_DEBOUNCE_S, Debouncer
from .viewport import HoldPan, ViewportController

LayoutListener = Callable[[LayoutResult, ViewportState], Any]
ListListener = Callable[[Tuple[Record, ...]], Any]


class TimelineSession:
    def __init__(
        self,
        records: Any = None,
        config: Optional[TimelineConfig] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        *,
        store: Optional[RecordStore] = None,
        load_error: Optional[str] = None,
        frame_scheduler: Any = None,
        timer_factory: Any = None,
    ) -> None:
        self.config = config if config is not None else TimelineConfig()
        if store is None:
            store = RecordStore.load(records if records is not None else [])
        self.store = store
        self.load_error = load_error

        cw, ch = self.config.chart_size
        self.width = float(width) if width is not None else float(cw or DEFAULT_WIDTH)
        self.height = float(height) if height is not None else float(ch or DEFAULT_HEIGHT)

        self._lock = threading.RLock()
        self._layout_listeners: List[LayoutListener] = []
        self._list_listeners: List[ListListener] = []

        self.layout_engine = TemporalLayoutEngine()
        self.viewport = ViewportController()
        self.hold = HoldPan(self.viewport, frame_scheduler)
        self._resize = Debouncer(self.resize_now, RESIZE_DEBOUNCE_S, timer_factory=timer_factory or threading.Timer)

        self._layout: Optional[LayoutResult] = None
        self.filters = FilterEngine(self.store, on_recompute=self._on_filtered)
        self.filters.recompute()

    @classmethod
    def from_sources(
        cls,
        config: Optional[TimelineConfig] = None,
        width: Optional[float] = None,
        height: Optional[float] = None,
        **kwargs: Any,
    ) -> "TimelineSession":
        """Load records from config.data_sources; fall back to an empty session on failure."""
        cfg = config if config is not None else TimelineConfig()
        try:
            raw = DataLoader(cfg.data_sources).load()
            store = RecordStore.load(raw)
        except (DataLoadError, DataShapeError) as ex:
            eprint(f"[relchart.session] WARN: timeline data unavailable ({ex})")
            message = cfg.settings.error_handling.fallback_message or str(ex)
            return cls(config=cfg, width=width, height=height, store=RecordStore.empty(), load_error=message, **kwargs)
        return cls(config=cfg, width=width, height=height, store=store, **kwargs)

    # --- listeners ------------------------------------------------------

    def on_layout(self, cb: LayoutListener) -> None:
        self._layout_listeners.append(cb)

    def on_list(self, cb: ListListener) -> None:
        self._list_listeners.append(cb)

    # --- recompute ------------------------------------------------------

    def _on_filtered(self, filtered: Tuple[Record, ...]) -> None:
        with self._lock:
            self._relayout(filtered)
            for cb in list(self._list_listeners):
                cb(filtered)

    def _relayout(self, filtered: Sequence[Record]) -> LayoutResult:
        if self.config.feature("enableChart"):
            layout = self.layout_engine.layout(filtered, self.width, self.height)
        else:
            layout = self.layout_engine.no_data(Geometry.from_viewport(self.width, self.height))
        self._layout = layout
        vp = self.viewport.reset_for(layout)
        for cb in list(self._layout_listeners):
            cb(layout, vp)
        return layout

    def refresh(self) -> LayoutResult:
        with self._lock:
            self.filters.recompute()
            return self.layout

    # --- filters --------------------------------------------------------

    def set_text_query(self, s: Any) -> Tuple[Record, ...]:
        with self._lock:
            return self.filters.set_text_query(s)

    def toggle_category(self, key: str) -> Tuple[Record, ...]:
        with self._lock:
            return self.filters.toggle_category(key)

    def set_size_bucket(self, bucket: Optional[SizeBucket]) -> Tuple[Record, ...]:
        with self._lock:
            return self.filters.set_size_bucket(bucket)

    def select_size_label(self, label: Optional[str]) -> Tuple[Record, ...]:
        with self._lock:
            return self.filters.select_size_label(label)

    def reset_filters(self) -> Tuple[Record, ...]:
        with self._lock:
            return self.filters.reset()

    # --- sizing ---------------------------------------------------------

    def resize(self, width: float, height: float) -> None:
        """Debounced: only the last size in a burst is laid out."""
        self._resize.trigger(width, height)

    def resize_now(self, width: float, height: float) -> LayoutResult:
        with self._lock:
            self.width = float(width)
            self.height = float(height)
            return self._relayout(self.filters.filtered)

    def flush_resize(self) -> bool:
        return self._resize.flush()

    # --- panning --------------------------------------------------------

    def pan_click(self, direction: int) -> ViewportState:
        return self.viewport.click(direction)

    def wheel(self, delta_x: float, delta_y: float) -> bool:
        return self.viewport.wheel(delta_x, delta_y)

    def start_hold(self, direction: int) -> bool:
        if not self.viewport.enabled:
            return False
        return self.hold.start(direction)

    def stop_hold(self) -> None:
        self.hold.stop()

    def close(self) -> None:
        self.hold.stop()
        self._resize.cancel()

    # --- state ----------------------------------------------------------

    @property
    def filter_state(self) -> FilterState:
        return self.filters.state

    @property
    def filtered(self) -> Tuple[Record, ...]:
        return self.filters.filtered

    @property
    def layout(self) -> LayoutResult:
        with self._lock:
            if self._layout is None:
                return self._relayout(self.filters.filtered)
            return self._layout

    @property
    def viewport_state(self) -> ViewportState:
        return self.viewport.state

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the current session state."""
        with self._lock:
            st = self.filters.state
            return {
                "load_error": self.load_error,
                "filters": {
                    "text_query": st.text_query,
                    "selected_categories": sorted(st.selected_categories),
                    "size_bucket": st.size_bucket.label if st.size_bucket else None,
                },
                "counts": self.filters.counts(),
                "total": len(self.store),
                "list": [r.origin_index for r in self.filters.filtered],
                "layout": self.layout.to_dict(),
                "viewport": self.viewport.state.to_dict(),
                "pan": {
                    "click_step_px": self.viewport.click_step,
                    "hold_speed_px": self.viewport.hold_speed,
                },
            }


__all__ = ["TimelineSession"]
