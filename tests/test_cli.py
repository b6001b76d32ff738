"""
Tests for the command line interface.
"""

import json

import pytest

from wellness_engine.cli import main


@pytest.fixture
def day_file(tmp_path):
    path = tmp_path / "day.json"
    path.write_text(json.dumps({
        "health": {"date": "2026-03-10", "sleepHours": 5.5},
        "baseline": {"sleepHours": 7},
        "work_history": [{"date": "2026-03-07", "hours_worked": 0}],
    }))
    return path


class TestCli:
    """Test CLI commands and exit codes."""

    def test_templates(self):
        assert main(["templates"]) == 0

    def test_demo_archetypes_match(self):
        assert main(["demo", "--days", "14"]) == 0

    def test_score_file(self, day_file):
        assert main(["score", str(day_file)]) == 0

    def test_score_json_output(self, day_file, capsys):
        assert main(["score", str(day_file), "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["status"] == "scored"
        assert data["zone"] == "yellow"
        assert data["burnout_score"] == 63.0
        assert data["explanation"]["context"]["days_since_rest_day"] == 3

    def test_missing_file(self, tmp_path):
        assert main(["score", str(tmp_path / "nope.json")]) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        assert main(["score", str(path)]) == 2

    def test_engine_error(self, tmp_path):
        path = tmp_path / "rating.json"
        path.write_text(json.dumps({"health": {"stressLevel": 150}}))

        assert main(["score", str(path)]) == 1

    def test_no_command_prints_help(self):
        assert main([]) == 0
