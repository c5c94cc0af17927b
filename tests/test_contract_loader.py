from __future__ import annotations

import os
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from relchart.errors import DataLoadError
from relchart.loader import DEFAULT_FETCH_TIMEOUT_S, DataLoader, load_records

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE = REPO_ROOT / "tests" / "fixtures" / "timeline-data.yaml"


class TestDataLoaderContract(unittest.TestCase):
    def test_yaml_dates_stay_strings(self) -> None:
        data = load_records(str(FIXTURE))
        self.assertIsInstance(data, list)
        self.assertEqual(data[0]["date"], "2024-01-15")
        self.assertEqual(data[2]["date"], "2024-02")
        self.assertIs(data[0]["openSource"], True)

    def test_falls_back_to_next_source(self) -> None:
        loader = DataLoader(["/no/such/data.yaml", str(FIXTURE)])
        with patch("relchart.loader.eprint") as ep:
            data = loader.load()
        self.assertEqual(len(data), 5)
        self.assertEqual(loader.loaded_from, str(FIXTURE))
        combined = "\n".join(str(c.args[0]) for c in ep.call_args_list if c.args)
        self.assertIn("[relchart.loader] WARN: data source 1/2 failed", combined)

    def test_all_sources_failing_raises(self) -> None:
        with patch("relchart.loader.eprint"):
            with self.assertRaises(DataLoadError) as ctx:
                DataLoader(["/no/a.yaml", "/no/b.json"]).load()
        self.assertIn("all data sources failed", str(ctx.exception))

    def test_no_sources_raises(self) -> None:
        with self.assertRaises(DataLoadError):
            DataLoader([]).load()

    def test_http_source(self) -> None:
        resp = MagicMock()
        resp.read.return_value = "- title: remote\n  date: 2024-03-01\n".encode("utf-8")
        resp.headers.get_content_charset.return_value = "utf-8"
        with patch("relchart.loader.urllib.request.urlopen") as uo:
            uo.return_value.__enter__.return_value = resp
            data = DataLoader(["https://example.com/timeline-data.yaml"], timeout_s=3).load()
        self.assertEqual(data, [{"title": "remote", "date": "2024-03-01"}])
        self.assertEqual(uo.call_args.kwargs.get("timeout"), 3.0)

    def test_fetch_timeout_env(self) -> None:
        with patch.dict(os.environ, {"RELCHART_FETCH_TIMEOUT_S": "2.5"}):
            self.assertEqual(DataLoader(["x"]).timeout_s, 2.5)
        with patch.dict(os.environ, {"RELCHART_FETCH_TIMEOUT_S": "junk"}):
            self.assertEqual(DataLoader(["x"]).timeout_s, DEFAULT_FETCH_TIMEOUT_S)


class TestDataLoaderJsonContract:
    def test_json_source(self, tmp_path: Path):
        p = tmp_path / "data.json"
        p.write_text('[{"title": "j", "date": "2024-01-01"}]', encoding="utf-8")
        assert load_records(p) == [{"title": "j", "date": "2024-01-01"}]

    def test_broken_yaml_counts_as_failure(self, tmp_path: Path):
        p = tmp_path / "bad.yaml"
        p.write_text("- title: [unclosed\n", encoding="utf-8")
        with patch("relchart.loader.eprint"):
            try:
                load_records(str(p))
            except DataLoadError:
                return
        raise AssertionError("expected DataLoadError")


if __name__ == "__main__":
    unittest.main(verbosity=2)
