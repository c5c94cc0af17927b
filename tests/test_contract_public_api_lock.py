from __future__ import annotations

import unittest

EXPECTED = [
    "FilterEngine",
    "RecordStore",
    "TemporalLayoutEngine",
    "TimelineConfig",
    "TimelineSession",
    "ViewportController",
    "extract_data_json",
    "filter_records",
    "layout_records",
    "load_records",
    "parse_date_ms",
    "parse_model_sizes",
    "render_html",
    "validate_records",
]


class TestPublicApiLockContract(unittest.TestCase):
    def test_api_exports_are_locked(self) -> None:
        import relchart.api as api

        self.assertEqual(list(api.__all__), EXPECTED)
        for name in api.__all__:
            self.assertIsNotNone(getattr(api, name, None), f"relchart.api missing public name: {name}")

    def test_package_reexports_match_api_all(self) -> None:
        import relchart
        import relchart.api as api

        for name in api.__all__:
            self.assertTrue(hasattr(relchart, name), f"relchart package does not re-export: {name}")
            self.assertIs(getattr(relchart, name), getattr(api, name), f"relchart.{name} must be same object as relchart.api.{name}")

    def test_end_to_end_through_public_api(self) -> None:
        import relchart

        session = relchart.TimelineSession([{"date": "2024-01-01", "title": "a", "modelSize": "7B"}])
        html = relchart.render_html(session)
        self.assertEqual(relchart.extract_data_json(html)["list"], [0])
        self.assertEqual(relchart.parse_model_sizes("7B"), [7.0])


if __name__ == "__main__":
    unittest.main(verbosity=2)
