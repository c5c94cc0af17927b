# relchart/viewport.py
from __future__ import annotations

import threading
from typing import Any, Optional

from .layout import js_round
from .model import LayoutResult, ViewportState
from .util.frames import TimerFrameScheduler

AT_START = "at-start"
MID = "mid"
AT_END = "at-end"

CLICK_STEP_RATIO = 0.6
CLICK_STEP_MIN = 120
HOLD_SPEED_DIVISOR = 200
HOLD_SPEED_MIN = 6


class ViewportController:
    """Pan offset for the chart window; 0 <= offset <= max_offset always holds.

    Offset mutation is locked: continuous hold steps arrive from the frame
    scheduler's thread.
    """

    def __init__(self, visible_width: int = 0, content_width: int = 0) -> None:
        self._lock = threading.Lock()
        self._offset = 0.0
        self._visible = max(0, int(visible_width))
        self._max = float(max(0, int(content_width) - self._visible))

    # --- bounds ---------------------------------------------------------

    def reset_for(self, layout: LayoutResult) -> ViewportState:
        """Re-bound after a layout pass; pin to the right edge only if content overflows."""
        with self._lock:
            self._visible = max(0, int(layout.visible_width_px))
            content = 0 if layout.empty else int(layout.content_width_px)
            self._max = float(max(0, content - self._visible))
            self._offset = self._max if content > self._visible else 0.0
            return self._state_locked()

    @property
    def click_step(self) -> int:
        return max(CLICK_STEP_MIN, js_round(self._visible * CLICK_STEP_RATIO))

    @property
    def hold_speed(self) -> int:
        return max(HOLD_SPEED_MIN, js_round(self._visible / HOLD_SPEED_DIVISOR))

    @property
    def enabled(self) -> bool:
        return self._max > 0

    # --- transitions ----------------------------------------------------

    def pan_by(self, dx: float) -> ViewportState:
        with self._lock:
            self._offset = max(0.0, min(self._max, self._offset + float(dx)))
            return self._state_locked()

    def click(self, direction: int) -> ViewportState:
        """One click-step left (direction < 0) or right (direction > 0)."""
        if not self.enabled:
            return self.state
        sign = -1 if direction < 0 else 1
        return self.pan_by(sign * self.click_step)

    def wheel(self, delta_x: float, delta_y: float) -> bool:
        """Apply the dominant-axis wheel delta 1:1. Returns True when consumed."""
        if not self.enabled:
            return False
        delta = delta_x if abs(delta_x) > abs(delta_y) else delta_y
        if delta == 0:
            return False
        self.pan_by(delta)
        return True

    # --- state ----------------------------------------------------------

    def _state_locked(self) -> ViewportState:
        if self._offset <= 0:
            phase = AT_START
        elif self._offset >= self._max:
            phase = AT_END
        else:
            phase = MID
        return ViewportState(
            pan_offset_px=self._offset,
            max_offset_px=self._max,
            visible_width_px=self._visible,
            phase=phase,
        )

    @property
    def state(self) -> ViewportState:
        with self._lock:
            return self._state_locked()


class HoldPan:
    """Hold-to-scroll loop: one pan step per frame until stop().

    stop() cancels the pending frame synchronously. Every start() opens a new
    generation; a frame from an earlier generation that was already dequeued
    does nothing, so a quick stop()/start() never runs two chains.
    """

    def __init__(self, viewport: ViewportController, scheduler: Any = None) -> None:
        self.viewport = viewport
        self.scheduler = scheduler if scheduler is not None else TimerFrameScheduler()
        self._lock = threading.Lock()
        self._running = False
        self._direction = 0
        self._generation = 0
        self._handle: Optional[Any] = None
        self.steps = 0

    @property
    def running(self) -> bool:
        return self._running

    def _request(self, generation: int) -> Any:
        return self.scheduler.request(lambda: self._step(generation))

    def start(self, direction: int) -> bool:
        with self._lock:
            if self._running:
                return False
            self._running = True
            self._direction = -1 if direction < 0 else 1
            self._generation += 1
            self._handle = self._request(self._generation)
            return True

    def _step(self, generation: int) -> None:
        with self._lock:
            if not self._running or generation != self._generation:
                return
            self.viewport.pan_by(self._direction * self.viewport.hold_speed)
            self.steps += 1
            self._handle = self._request(generation)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            handle, self._handle = self._handle, None
        self.scheduler.cancel(handle)
