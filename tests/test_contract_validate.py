from __future__ import annotations

import unittest
from pathlib import Path

from relchart.loader import load_records
from relchart.validate import RecordValidationError, assert_valid_records, validate_records

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE = REPO_ROOT / "tests" / "fixtures" / "timeline-data.yaml"

GOOD = {
    "date": "2024-01-01",
    "title": "Good",
    "text": "Long enough description.",
    "openSource": False,
    "officialDoc": "https://example.com",
}


class TestValidateRecordsContract(unittest.TestCase):
    def test_fixture_report(self) -> None:
        report = validate_records(load_records(str(FIXTURE)))
        self.assertFalse(report.is_valid())
        self.assertEqual(report.stats, {"total_records": 5, "valid_records": 3, "invalid_records": 2})
        self.assertEqual([(e.record, e.field) for e in report.errors], [(2, "date"), (4, "date")])
        self.assertEqual([(w.record, w.field) for w in report.warnings], [(4, "releaseNotes")])

    def test_valid_record_passes(self) -> None:
        report = validate_records([GOOD])
        self.assertTrue(report.is_valid())
        assert_valid_records([GOOD])
        self.assertIn("Result: PASS", report.render())

    def test_field_rules(self) -> None:
        cases = [
            ({**GOOD, "title": ""}, "title"),
            ({**GOOD, "text": "short"}, "text"),
            ({**GOOD, "openSource": "yes"}, "openSource"),
            ({**GOOD, "officialDoc": "ftp://example.com"}, "officialDoc"),
            ({**GOOD, "modelSize": 7}, "modelSize"),
            ({k: v for k, v in GOOD.items() if k != "date"}, "date"),
        ]
        for rec, field in cases:
            with self.subTest(field=field):
                report = validate_records([rec])
                self.assertEqual([e.field for e in report.errors], [field])

    def test_non_list_root(self) -> None:
        report = validate_records({"title": "x"})
        self.assertEqual(report.errors[0].field, "root")
        with self.assertRaises(RecordValidationError):
            assert_valid_records({"title": "x"})

    def test_non_mapping_record(self) -> None:
        report = validate_records(["just a string"])
        self.assertEqual(report.errors[0].field, "record")
        self.assertEqual(report.invalid_records, 1)

    def test_render_lists_errors_and_warnings(self) -> None:
        report = validate_records([{**GOOD, "date": "Jan 1", "extra": 1}])
        text = report.render()
        self.assertIn("record #1 - date: date must be YYYY-MM-DD", text)
        self.assertIn("record #1 - extra: unknown field", text)
        self.assertIn("Result: FAIL", text)
        self.assertIn("pass rate:       0.0%", text)


if __name__ == "__main__":
    unittest.main(verbosity=2)
