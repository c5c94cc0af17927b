from __future__ import annotations

import unittest

from relchart.util.debounce import RESIZE_DEBOUNCE_S, Debouncer


class _FakeTimer:
    def __init__(self, delay, fn) -> None:
        self.delay = delay
        self.fn = fn
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.started and not self.cancelled:
            self.fn()


class TestDebounceContract(unittest.TestCase):
    def setUp(self) -> None:
        self.timers: list = []
        self.calls: list = []

        def factory(delay, fn):
            t = _FakeTimer(delay, fn)
            self.timers.append(t)
            return t

        self.deb = Debouncer(lambda *a: self.calls.append(a), timer_factory=factory)

    def test_burst_coalesces_to_last_call(self) -> None:
        self.deb.trigger(800, 200)
        self.deb.trigger(900, 200)
        self.deb.trigger(1000, 240)
        self.assertEqual(len(self.timers), 3)
        self.assertTrue(all(t.cancelled for t in self.timers[:-1]))
        self.assertEqual(self.timers[-1].delay, RESIZE_DEBOUNCE_S)
        for t in self.timers:
            t.fire()
        self.assertEqual(self.calls, [(1000, 240)])
        self.assertFalse(self.deb.pending)

    def test_flush_runs_pending_now(self) -> None:
        self.deb.trigger(1)
        self.assertTrue(self.deb.pending)
        self.assertTrue(self.deb.flush())
        self.assertEqual(self.calls, [(1,)])
        self.assertFalse(self.deb.flush())

    def test_cancel_drops_pending(self) -> None:
        self.deb.trigger(1)
        self.deb.cancel()
        self.timers[-1].fire()
        self.assertEqual(self.calls, [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
