from __future__ import annotations

import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
FIXTURE = REPO_ROOT / "tests" / "fixtures" / "timeline-data.yaml"


def _run(*args: str):
    cmd = [sys.executable, "-m", "relchart.tools.validate_data", *args]
    return subprocess.run(cmd, cwd=str(REPO_ROOT), capture_output=True, text=True, encoding="utf-8")


class TestValidateDataToolContract:
    def test_fixture_fails_and_writes_report(self, tmp_path: Path):
        report = tmp_path / "validation-report.txt"
        p = _run("--in", str(FIXTURE), "--report", str(report))
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        assert p.returncode == 1, combined
        assert report.exists()
        text = report.read_text(encoding="utf-8")
        assert "record #3 - date" in text
        assert "Result: FAIL" in text

    def test_valid_file_passes(self, tmp_path: Path):
        data = tmp_path / "ok.yaml"
        data.write_text(
            "- date: 2024-01-01\n  title: Ok\n  text: A sufficiently long description.\n",
            encoding="utf-8",
        )
        p = _run("--in", str(data), "--no-report")
        combined = (p.stdout or "") + "\n" + (p.stderr or "")
        assert p.returncode == 0, combined
        assert "[relchart-validate-data] OK" in p.stdout
        assert not (tmp_path / "validation-report.txt").exists()

    def test_yaml_syntax_error_reports_position(self, tmp_path: Path):
        data = tmp_path / "broken.yaml"
        data.write_text("- date: 2024-01-01\n  title: [unclosed\n", encoding="utf-8")
        p = _run("--in", str(data), "--no-report")
        assert p.returncode == 1
        assert "YAML syntax error at line" in p.stderr

    def test_missing_file(self, tmp_path: Path):
        p = _run("--in", str(tmp_path / "nope.yaml"))
        assert p.returncode == 1
        assert "Missing data file" in p.stderr
