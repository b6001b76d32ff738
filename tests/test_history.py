"""
Tests for zone history records.
"""

import json

import pytest

from wellness_engine.exceptions import InsufficientDataError, ValidationError
from wellness_engine.history import from_history_record, to_history_record
from wellness_engine.models.explanations import ScoreResult, Zone
from wellness_engine.scoring import evaluate


@pytest.fixture
def green_result(green_health, green_work, green_baseline, settings):
    return evaluate(green_health, green_work, green_baseline, settings=settings)


class TestToHistoryRecord:
    """Test flattening results into history rows."""

    def test_row_shape(self, green_result, score_day):
        record = to_history_record(green_result, "emp-001", score_day)

        assert record["employee_id"] == "emp-001"
        assert record["date"] == "2026-03-10"
        assert record["zone"] == "green"
        assert record["burnout_score"] == green_result.burnout_score
        assert record["previous_zone"] is None
        assert record["zone_changed"] is False
        assert json.loads(record["explanation"])["zone"] == "green"

    @pytest.mark.parametrize("previous,changed", [
        ("yellow", True),
        (Zone.RED, True),
        ("green", False),
    ])
    def test_zone_change_tracking(self, green_result, score_day, previous, changed):
        record = to_history_record(green_result, "emp-001", score_day, previous_zone=previous)

        assert record["zone_changed"] is changed

    def test_unscored_day_rejected(self, score_day):
        with pytest.raises(InsufficientDataError):
            to_history_record(ScoreResult.insufficient_data(score_day), "emp-001", score_day)


class TestFromHistoryRecord:
    """Test restoring results from history rows."""

    def test_round_trip(self, green_result, score_day):
        record = to_history_record(green_result, "emp-001", score_day)

        restored = from_history_record(record)

        assert restored == green_result

    def test_explanation_as_dict(self, green_result, score_day):
        record = to_history_record(green_result, "emp-001", score_day)
        record["explanation"] = json.loads(record["explanation"])

        assert from_history_record(record).explanation == green_result.explanation

    def test_malformed_record(self, green_result, score_day):
        record = to_history_record(green_result, "emp-001", score_day)

        with pytest.raises(ValidationError):
            from_history_record({**record, "zone": "purple"})
        with pytest.raises(ValidationError):
            from_history_record({"employee_id": "emp-001"})
