"""Services built on top of the scoring engine."""

from .batch import BatchResult, EvaluationRequest, score_batch

__all__ = ["BatchResult", "EvaluationRequest", "score_batch"]
