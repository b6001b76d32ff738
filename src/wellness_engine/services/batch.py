"""
Organisation-wide batch scoring.

Each employee-day is independent, so requests are fanned out to a bounded
thread pool. A bad record for one employee is recorded against that
employee and never aborts the rest of the batch.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..config import Settings, get_settings
from ..exceptions import WellnessEngineError
from ..models.explanations import ScoreResult
from ..scoring.engine import evaluate


logger = logging.getLogger(__name__)


@dataclass
class EvaluationRequest:
    """Inputs for one employee-day."""
    employee_id: str
    health: Any = None
    work: Any = None
    baseline: Any = None
    preferences: Any = None
    life_events: List[Any] = field(default_factory=list)
    as_of: Optional[date] = None
    work_history: List[Any] = field(default_factory=list)


@dataclass
class BatchResult:
    """Results keyed by employee id, plus per-employee errors."""
    results: Dict[str, ScoreResult] = field(default_factory=dict)
    errors: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def scored_count(self) -> int:
        return sum(1 for r in self.results.values() if r.is_scored)

    def zone_counts(self) -> Dict[str, int]:
        """Number of scored employees per zone."""
        counts: Dict[str, int] = {}
        for result in self.results.values():
            if result.zone is not None:
                counts[result.zone.value] = counts.get(result.zone.value, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": {k: v.to_dict() for k, v in self.results.items()},
            "errors": dict(self.errors),
        }


def _evaluate_request(request: EvaluationRequest, settings: Settings) -> ScoreResult:
    return evaluate(
        request.health,
        request.work,
        baseline=request.baseline,
        preferences=request.preferences,
        life_events=request.life_events,
        as_of=request.as_of,
        work_history=request.work_history,
        settings=settings,
    )


def score_batch(
    requests: Iterable[EvaluationRequest],
    max_workers: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> BatchResult:
    """
    Score many employee-days concurrently.

    Args:
        requests: One request per employee
        max_workers: Thread pool size (defaults to settings.batch_max_workers)
        settings: Engine settings shared by every evaluation

    Returns:
        BatchResult with results and errors keyed by employee id
    """
    settings = settings or get_settings()
    workers = max(1, max_workers or settings.batch_max_workers)
    requests = list(requests)
    batch = BatchResult()

    if not requests:
        return batch

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(_evaluate_request, request, settings): request.employee_id
            for request in requests
        }
        for future in as_completed(futures):
            employee_id = futures[future]
            try:
                batch.results[employee_id] = future.result()
            except WellnessEngineError as e:
                logger.warning("Skipping employee in batch: %s", e.message)
                batch.errors[employee_id] = e.to_dict()["error"]

    logger.info(
        "Batch scored %d of %d employees (%d errors)",
        batch.scored_count,
        len(requests),
        len(batch.errors),
    )
    return batch
