from __future__ import annotations

import json
import unittest
from pathlib import Path
from unittest.mock import patch

from relchart.config import TimelineConfig
from relchart.session import TimelineSession
from relchart.util.frames import ManualFrameScheduler

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE = REPO_ROOT / "tests" / "fixtures" / "timeline-data.yaml"

RAW = [
    {"date": "2024-01-01", "title": "Alpha", "modelType": "LLM", "modelSize": "7B"},
    {"date": "2024-01-02", "title": "Beta", "modelType": "多模态", "modelSize": "72B"},
    {"date": "2024-04-10", "title": "Gamma", "modelType": "代码", "modelSize": "32B"},
]


class _FakeTimer:
    instances: list = []

    def __init__(self, delay, fn) -> None:
        self.fn = fn
        self.cancelled = False
        _FakeTimer.instances.append(self)

    def start(self) -> None:
        pass

    def cancel(self) -> None:
        self.cancelled = True


def _session(records=RAW, config=None) -> TimelineSession:
    return TimelineSession(
        records,
        config=config,
        width=1200,
        height=240,
        frame_scheduler=ManualFrameScheduler(),
        timer_factory=_FakeTimer,
    )


class TestTimelineSessionContract(unittest.TestCase):
    def test_initial_layout_covers_all_records(self) -> None:
        s = _session()
        self.assertEqual(len(s.filtered), 3)
        self.assertEqual(len(s.layout.points), 3)
        self.assertTrue(s.layout.overflows)
        self.assertEqual(s.viewport_state.pan_offset_px, s.viewport_state.max_offset_px)

    def test_filter_change_relayouts_and_notifies(self) -> None:
        s = _session()
        layouts: list = []
        lists: list = []
        s.on_layout(lambda layout, vp: layouts.append((layout, vp)))
        s.on_list(lists.append)

        s.set_text_query("beta")
        self.assertEqual(len(layouts), 1)
        self.assertEqual([r.title for r in lists[-1]], ["Beta"])
        layout, vp = layouts[-1]
        self.assertEqual([p.record.title for p in layout.points], ["Beta"])
        self.assertFalse(layout.overflows)
        self.assertEqual(vp.pan_offset_px, 0)

        s.reset_filters()
        self.assertEqual(len(s.layout.points), 3)

    def test_filter_to_nothing_gives_no_data_layout(self) -> None:
        s = _session()
        s.set_text_query("zzz")
        self.assertTrue(s.layout.empty)
        self.assertEqual(s.filtered, ())

    def test_resize_is_debounced(self) -> None:
        _FakeTimer.instances.clear()
        s = _session()
        s.resize(800, 200)
        s.resize(900, 220)
        s.resize(1000, 260)
        self.assertEqual(s.layout.width_px, 1200)
        self.assertTrue(all(t.cancelled for t in _FakeTimer.instances[:-1]))
        self.assertTrue(s.flush_resize())
        self.assertEqual(s.layout.width_px, 1000)
        self.assertEqual(s.layout.height_px, 260)
        self.assertFalse(s.flush_resize())

    def test_resize_now_returns_fresh_layout(self) -> None:
        s = _session()
        res = s.resize_now(900, 200)
        self.assertIs(res, s.layout)
        self.assertEqual(res.width_px, 900)

    def test_missing_layout_is_rebuilt_on_access(self) -> None:
        s = _session()
        s._layout = None
        res = s.layout
        self.assertIsNotNone(res)
        self.assertEqual(len(res.points), 3)
        self.assertIs(s.layout, res)

    def test_chart_feature_flag_skips_layout(self) -> None:
        cfg = TimelineConfig({"features": {"enableChart": False}})
        s = _session(config=cfg)
        self.assertEqual(len(s.filtered), 3)
        self.assertTrue(s.layout.empty)

    def test_pan_commands_delegate_to_viewport(self) -> None:
        s = _session()
        start = s.viewport_state.pan_offset_px
        st = s.pan_click(-1)
        self.assertEqual(st.pan_offset_px, start - s.viewport.click_step)
        self.assertTrue(s.wheel(0, -100))
        self.assertTrue(s.start_hold(1))
        s.hold.scheduler.tick(2)
        s.stop_hold()
        self.assertFalse(s.hold.running)

    def test_hold_refused_without_overflow(self) -> None:
        s = _session(records=RAW[:1])
        self.assertFalse(s.start_hold(1))

    def test_snapshot_is_json_ready(self) -> None:
        s = _session()
        s.toggle_category("lang")
        snap = s.snapshot()
        text = json.dumps(snap, ensure_ascii=False)
        self.assertIn('"selected_categories": ["lang"]', text)
        self.assertEqual(snap["list"], [0])
        self.assertEqual(snap["total"], 3)
        self.assertIsNone(snap["load_error"])
        self.assertIn("click_step_px", snap["pan"])


class TestTimelineSessionSourcesContract(unittest.TestCase):
    def test_from_sources_loads_fixture(self) -> None:
        cfg = TimelineConfig({"dataSources": [str(FIXTURE)]})
        s = TimelineSession.from_sources(cfg)
        self.assertIsNone(s.load_error)
        self.assertEqual(len(s.store), 5)
        self.assertEqual(s.layout.dropped, (4,))

    def test_from_sources_falls_back_on_failure(self) -> None:
        cfg = TimelineConfig({"dataSources": ["/no/such/file.yaml"]})
        with patch("relchart.session.eprint") as ep, patch("relchart.loader.eprint"):
            s = TimelineSession.from_sources(cfg)
        self.assertEqual(s.load_error, cfg.get("errorHandling.fallbackMessage"))
        self.assertEqual(len(s.store), 0)
        self.assertTrue(s.layout.empty)
        self.assertTrue(ep.called)

    def test_from_sources_rejects_non_list_data(self) -> None:
        import tempfile

        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "data.yaml"
            p.write_text("title: not a list\n", encoding="utf-8")
            cfg = TimelineConfig({"dataSources": [str(p)]})
            with patch("relchart.session.eprint"):
                s = TimelineSession.from_sources(cfg)
        self.assertIsNotNone(s.load_error)
        self.assertEqual(len(s.store), 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
