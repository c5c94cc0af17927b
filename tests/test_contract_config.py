from __future__ import annotations

import os
import unittest
from pathlib import Path
from unittest.mock import patch

from relchart.config import DEFAULTS, TIMELINE_CONFIGS, TimelineConfig, deep_merge
from relchart.errors import ConfigError


class TestTimelineConfigContract(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = TimelineConfig()
        self.assertEqual(cfg.data_sources, ["timeline-data.yaml"])
        self.assertTrue(cfg.feature("enableChart"))
        self.assertEqual(cfg.chart_size, (1200, 240))
        self.assertEqual(cfg.get("layout.leftMargin"), 0)

    def test_deep_merge_keeps_siblings(self) -> None:
        out = deep_merge(DEFAULTS, {"layout": {"leftMargin": 12}})
        self.assertEqual(out["layout"]["leftMargin"], 12)
        self.assertTrue(out["layout"]["tocVisible"])
        self.assertEqual(DEFAULTS["layout"]["leftMargin"], 0)

    def test_preset_merges_over_defaults(self) -> None:
        cfg = TimelineConfig.from_preset("standalone", {"features": {"enableSearch": False}})
        self.assertEqual(cfg.get("layout.leftMargin"), 290)
        self.assertTrue(cfg.get("layout.showTocToggle"))
        self.assertIn("margin-left: 290px", cfg.get("styles.customCSS"))
        self.assertFalse(cfg.feature("enableSearch"))
        self.assertTrue(cfg.feature("enableChart"))
        self.assertIn("simple", TIMELINE_CONFIGS)

    def test_unknown_preset(self) -> None:
        with self.assertRaises(ConfigError):
            TimelineConfig.from_preset("nope")

    def test_dotted_get_and_set(self) -> None:
        cfg = TimelineConfig()
        self.assertIsNone(cfg.get("no.such.path"))
        self.assertEqual(cfg.get("no.such.path", 5), 5)
        cfg.set("chart.width", 800)
        cfg.set("new.nested.key", "v")
        self.assertEqual(cfg.chart_size, (800, 240))
        self.assertEqual(cfg.get("new.nested.key"), "v")

    def test_string_flags_are_coerced(self) -> None:
        cfg = TimelineConfig({"features": {"enableChart": "false", "enableSearch": "0"}, "chart": {"width": "800"}})
        self.assertFalse(cfg.feature("enableChart"))
        self.assertFalse(cfg.feature("enableSearch"))
        self.assertIs(cfg.get("features.enableChart"), False)
        self.assertFalse(cfg.settings.features.enable_chart)
        self.assertEqual(cfg.chart_size, (800, 240))

    def test_disabled_chart_from_string_gives_empty_layout(self) -> None:
        from relchart.session import TimelineSession

        cfg = TimelineConfig({"features": {"enableChart": "false"}})
        s = TimelineSession([{"date": "2024-01-01", "title": "a"}], config=cfg)
        self.assertTrue(s.layout.empty)
        s.close()

    def test_bad_values_raise_config_error(self) -> None:
        for opts in (
            {"chart": {"width": "wide"}},
            {"chart": {"height": -5}},
            {"features": {"enableChart": "maybe"}},
            {"layout": {"leftMargin": "left"}},
        ):
            with self.assertRaises(ConfigError, msg=repr(opts)):
                TimelineConfig(opts)

    def test_rejected_set_keeps_previous_values(self) -> None:
        cfg = TimelineConfig()
        with self.assertRaises(ConfigError):
            cfg.set("chart.width", "wide")
        self.assertEqual(cfg.chart_size, (1200, 240))
        self.assertEqual(cfg.get("chart.width"), 1200)

    def test_single_data_source_string_becomes_list(self) -> None:
        cfg = TimelineConfig({"dataSources": "only.yaml"})
        self.assertEqual(cfg.data_sources, ["only.yaml"])

    def test_unknown_keys_are_kept(self) -> None:
        cfg = TimelineConfig({"features": {"enableExport": True}, "extra": {"a": 1}})
        self.assertEqual(cfg.get("features.enableExport"), True)
        self.assertEqual(cfg.get("extra.a"), 1)

    def test_env_overrides_data_sources(self) -> None:
        cfg = TimelineConfig()
        with patch.dict(os.environ, {"RELCHART_DATA": os.pathsep.join(["a.yaml", "b.json"])}):
            cfg.apply_env()
        self.assertEqual(cfg.data_sources, ["a.yaml", "b.json"])


class TestTimelineConfigFileContract:
    def test_from_yaml_file(self, tmp_path: Path):
        p = tmp_path / "cfg.yaml"
        p.write_text("dataSources:\n  - one.yaml\nchart:\n  height: 300\n", encoding="utf-8")
        cfg = TimelineConfig.from_file(p)
        assert cfg.data_sources == ["one.yaml"]
        assert cfg.chart_size == (1200, 300)

    def test_from_json_file_with_preset(self, tmp_path: Path):
        p = tmp_path / "cfg.json"
        p.write_text('{"layout": {"leftMargin": 10}}', encoding="utf-8")
        cfg = TimelineConfig.from_file(p, preset="standalone")
        assert cfg.get("layout.leftMargin") == 10
        assert cfg.get("layout.showTocToggle") is True

    def test_bad_files_raise_config_error(self, tmp_path: Path):
        p = tmp_path / "list.yaml"
        p.write_text("- a\n- b\n", encoding="utf-8")
        for path in (p, tmp_path / "missing.yaml"):
            try:
                TimelineConfig.from_file(path)
            except ConfigError:
                continue
            raise AssertionError(f"expected ConfigError for {path}")


if __name__ == "__main__":
    unittest.main(verbosity=2)
