"""
Tests for organisation-wide batch scoring.
"""

from wellness_engine.services import EvaluationRequest, score_batch


class TestScoreBatch:
    """Test concurrent scoring of many employees."""

    def test_scores_every_employee(self, green_health, green_work, green_baseline,
                                   red_health, red_work, standard_baseline, settings):
        batch = score_batch(
            [
                EvaluationRequest("emp-green", green_health, green_work, green_baseline),
                EvaluationRequest("emp-red", red_health, red_work, standard_baseline),
            ],
            max_workers=2,
            settings=settings,
        )

        assert set(batch.results) == {"emp-green", "emp-red"}
        assert batch.errors == {}
        assert batch.scored_count == 2
        assert batch.zone_counts() == {"green": 1, "red": 1}

    def test_bad_record_does_not_abort_batch(self, green_health, green_work, green_baseline, settings):
        batch = score_batch(
            [
                EvaluationRequest("emp-ok", green_health, green_work, green_baseline),
                EvaluationRequest("emp-bad", health={"stressLevel": 150}),
            ],
            settings=settings,
        )

        assert "emp-ok" in batch.results
        assert batch.errors["emp-bad"]["code"] == "RATING_OUT_OF_RANGE"

    def test_unscored_employees_not_counted(self, settings):
        batch = score_batch([EvaluationRequest("emp-empty")], settings=settings)

        assert not batch.results["emp-empty"].is_scored
        assert batch.scored_count == 0
        assert batch.zone_counts() == {}

    def test_empty_batch(self, settings):
        batch = score_batch([], settings=settings)

        assert batch.results == {}
        assert batch.to_dict() == {"results": {}, "errors": {}}

    def test_bad_history_row_does_not_abort_batch(self, green_health, green_work, green_baseline, settings):
        batch = score_batch(
            [
                EvaluationRequest(
                    "emp-a", green_health, green_work, green_baseline,
                    work_history=[{"date": "2026-03-07", "hours_worked": "lots"}],
                ),
                EvaluationRequest("emp-b", green_health, green_work, green_baseline),
            ],
            settings=settings,
        )

        assert set(batch.results) == {"emp-b"}
        assert batch.errors["emp-a"]["code"] == "INVALID_INPUT"
        assert batch.errors["emp-a"]["details"]["record"] == "work_history"
