# relchart/util/frames.py
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional

FRAME_INTERVAL_S = 1.0 / 60.0


class TimerFrameScheduler:
    """Frame-callback source backed by one-shot threading.Timer objects.

    request(cb) schedules cb for the next frame and returns a handle;
    cancel(handle) drops it if it has not fired yet.
    """

    def __init__(self, interval_s: float = FRAME_INTERVAL_S) -> None:
        self.interval_s = float(interval_s)
        self._lock = threading.Lock()
        self._next_handle = 0
        self._timers: Dict[int, threading.Timer] = {}

    def request(self, cb: Callable[[], Any]) -> int:
        with self._lock:
            self._next_handle += 1
            handle = self._next_handle

            def _fire() -> None:
                with self._lock:
                    if self._timers.pop(handle, None) is None:
                        return
                cb()

            t = threading.Timer(self.interval_s, _fire)
            t.daemon = True
            self._timers[handle] = t
        t.start()
        return handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is None:
            return
        with self._lock:
            t = self._timers.pop(handle, None)
        if t is not None:
            t.cancel()


class ManualFrameScheduler:
    """Deterministic scheduler: frames advance only when tick() is called."""

    def __init__(self) -> None:
        self._next_handle = 0
        self._pending: Dict[int, Callable[[], Any]] = {}

    def request(self, cb: Callable[[], Any]) -> int:
        self._next_handle += 1
        self._pending[self._next_handle] = cb
        return self._next_handle

    def cancel(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._pending.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def tick(self, frames: int = 1) -> None:
        for _ in range(int(frames)):
            due = list(self._pending.items())
            self._pending.clear()
            for _handle, cb in due:
                cb()
