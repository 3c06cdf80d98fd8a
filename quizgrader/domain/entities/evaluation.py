from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ComparisonResult:
    question_id: str
    user_answer: str
    ai_answer: str
    score_out_of_ten: int
    question: str | None = None


@dataclass(frozen=True)
class Evaluated:
    comparison: ComparisonResult


@dataclass(frozen=True)
class Skipped:
    question_id: str
    reason: str


ItemOutcome = Union[Evaluated, Skipped]


@dataclass(frozen=True)
class EvaluationResponse:
    total_questions: int
    answers_comparison: tuple[ComparisonResult, ...]


@dataclass(frozen=True)
class TotalScore:
    earned: int
    possible: int

    @property
    def percentage(self) -> float:
        if self.possible <= 0:
            return 0.0
        return round(100.0 * self.earned / self.possible, 2)
