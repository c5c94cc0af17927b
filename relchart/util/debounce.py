# relchart/util/debounce.py
from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Tuple

RESIZE_DEBOUNCE_S = 0.150


class Debouncer:
    """Coalesce bursts of trigger() calls into one callback after a quiet period.

    Only the arguments of the last trigger() are delivered. `timer_factory`
    defaults to threading.Timer; tests pass a fake to drive time by hand.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay_s: float = RESIZE_DEBOUNCE_S,
        *,
        timer_factory: Callable[..., Any] = threading.Timer,
    ) -> None:
        self._callback = callback
        self.delay_s = float(delay_s)
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Any = None
        self._args: Optional[Tuple[Any, ...]] = None

    @property
    def pending(self) -> bool:
        return self._args is not None

    def trigger(self, *args: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._args = args
            self._timer = self._timer_factory(self.delay_s, self._fire)
            if hasattr(self._timer, "daemon"):
                self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        with self._lock:
            args = self._args
            self._args = None
            self._timer = None
        if args is not None:
            self._callback(*args)

    def flush(self) -> bool:
        """Run the pending callback now; return False if nothing was pending."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        if self._args is None:
            return False
        self._fire()
        return True

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._args = None
