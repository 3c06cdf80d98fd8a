from __future__ import annotations

from typing import Iterable

from quizgrader.domain.entities.evaluation import (
    ComparisonResult,
    Evaluated,
    EvaluationResponse,
    ItemOutcome,
    Skipped,
    TotalScore,
)
from quizgrader.domain.services.similarity import MAX_SCORE


def partition(outcomes: Iterable[ItemOutcome]) -> tuple[list[ComparisonResult], list[Skipped]]:
    comparisons: list[ComparisonResult] = []
    skipped: list[Skipped] = []
    for outcome in outcomes:
        if isinstance(outcome, Evaluated):
            comparisons.append(outcome.comparison)
        else:
            skipped.append(outcome)
    return comparisons, skipped


def aggregate(total_questions: int, comparisons: Iterable[ComparisonResult]) -> EvaluationResponse:
    return EvaluationResponse(
        total_questions=total_questions,
        answers_comparison=tuple(comparisons),
    )


def total_score(response: EvaluationResponse) -> TotalScore:
    """Caller-side total: sum of the item scores out of ten points per scored item."""
    earned = sum(c.score_out_of_ten for c in response.answers_comparison)
    return TotalScore(earned=earned, possible=len(response.answers_comparison) * MAX_SCORE)
