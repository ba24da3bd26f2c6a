"""Tests for the command line entry point."""

from __future__ import annotations

import io
import json
import sys
from pathlib import Path

import pytest

import main

SCENARIO = "- Design the schema\n- Implement the schema after Design the schema\n"


@pytest.fixture
def plan_file(tmp_path: Path) -> Path:
    path = tmp_path / "plan.md"
    path.write_text(SCENARIO, encoding="utf-8")
    return path


class TestExtractCommand:
    """Tests for the default ``extract`` command."""

    def test_prints_json_payload(self, plan_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main.main([str(plan_file)])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert [task["title"] for task in payload["tasks"]] == [
            "Design the schema",
            "Implement the schema after Design the schema",
        ]
        assert payload["dependencies"] == {"1": [0]}
        assert payload["estimated_effort_minutes"] == 180
        assert payload["metadata"]["status"] == "completed"

    def test_explicit_command_and_text_output(
        self, plan_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main.main(["extract", str(plan_file), "--output", "text"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Design the schema (medium, 90 min) [backend]" in out
        assert "  1 depends on 0" in out
        assert "Estimated effort: 180 min" in out

    def test_declared_type_overrides_suffix(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "tasks.txt"
        path.write_text('{"title": "X", "tasks": [{"title": "T1", "duration": 30}]}', encoding="utf-8")

        exit_code = main.main([str(path), "--type", "application/json"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert payload["title"] == "X"
        assert payload["tasks"][0]["estimated_duration_minutes"] == 30

    def test_parsing_error_exits_non_zero(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"title": ', encoding="utf-8")

        exit_code = main.main([str(path)])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 1
        assert payload["title"] == "Parsing Error"
        assert payload["tasks"] == []

    def test_reads_standard_input(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(SCENARIO.encode("utf-8"))))

        exit_code = main.main(["-"])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert len(payload["tasks"]) == 2

    def test_reports_cycles(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "cycle.md"
        path.write_text("- Alpha\n- Beta\n\nAlpha depends on Beta. Beta depends on Alpha.\n", encoding="utf-8")

        exit_code = main.main([str(path), "--check-cycles"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert json.loads(captured.out)["dependencies"] == {"0": [1], "1": [0]}
        assert "Dependency cycle: 0 -> 1" in captured.err


class TestAnalyzeCommand:
    """Tests for the ``analyze`` command."""

    def test_includes_recommendations_and_dependencies(
        self, plan_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main.main(["analyze", str(plan_file)])

        payload = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert payload["dependencies"] == {"1": [0]}
        assert [item["type"] for item in payload["recommendations"]] == ["learning"]
        assert payload["suggested_skills"] == ["backend", "feature"]


class TestFailures:
    """Tests for configuration and input failures."""

    def test_missing_config_file(self, plan_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main.main([str(plan_file), "--config", str(tmp_path / "missing.yaml")])

        assert exit_code == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_invalid_config_file(self, plan_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_path = tmp_path / "extraction.yaml"
        config_path.write_text("resolution:\n  threshold: 7\n", encoding="utf-8")

        exit_code = main.main([str(plan_file), "--config", str(config_path)])

        assert exit_code == 1
        assert "resolution.threshold" in capsys.readouterr().err

    def test_malformed_yaml_config(
        self, plan_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config_path = tmp_path / "extraction.yaml"
        config_path.write_text("resolution: [threshold: 0.5\n", encoding="utf-8")

        exit_code = main.main([str(plan_file), "--config", str(config_path)])

        assert exit_code == 1
        assert "Invalid YAML in" in capsys.readouterr().err

    def test_missing_document(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        exit_code = main.main([str(tmp_path / "absent.md")])

        assert exit_code == 1
        assert "Unable to read" in capsys.readouterr().err
