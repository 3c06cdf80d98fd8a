from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from quizgrader.application.exceptions import InputValidationError, ReferenceAnswerError
from quizgrader.application.ports.reference_answer import ReferenceAnswerPort
from quizgrader.application.use_cases.aggregate_results import aggregate, partition
from quizgrader.domain.entities.evaluation import (
    ComparisonResult,
    Evaluated,
    EvaluationResponse,
    ItemOutcome,
    Skipped,
)
from quizgrader.domain.entities.submission import SubmittedAnswer
from quizgrader.domain.services.similarity import score

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4


def build_prompt(submission: SubmittedAnswer) -> str:
    if submission.question:
        return f"{submission.question} {submission.user_answer}"
    return submission.user_answer


def parse_submissions(payload: Mapping[Any, Any] | None) -> list[SubmittedAnswer]:
    if not payload or not isinstance(payload, Mapping):
        raise InputValidationError("Invalid input: User answers are required.")
    try:
        return [SubmittedAnswer.from_payload(key, value) for key, value in payload.items()]
    except ValueError as e:
        raise InputValidationError(f"Invalid input: {e}") from e


@dataclass
class EvaluateAnswersUseCase:
    provider: ReferenceAnswerPort
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY

    async def execute(self, submissions: list[SubmittedAnswer]) -> EvaluationResponse:
        """
        Score every submission against a freshly obtained reference answer.

        Reference answers are requested concurrently (at most
        ``max_concurrency`` in flight); results keep the submission order.
        Items whose reference answer cannot be obtained are skipped but
        still count toward ``total_questions``.
        """
        if not submissions:
            raise InputValidationError("Invalid input: User answers are required.")

        semaphore = asyncio.Semaphore(max(1, self.max_concurrency))

        async def run(submission: SubmittedAnswer) -> ItemOutcome:
            async with semaphore:
                return await self._evaluate_item(submission)

        tasks = [asyncio.ensure_future(run(s)) for s in submissions]
        try:
            outcomes = await asyncio.gather(*tasks)
        except BaseException:
            # an aborted batch must not leave reference requests running
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        comparisons, skipped = partition(outcomes)

        logger.info(
            "Evaluation finished",
            extra={
                "total_questions": len(submissions),
                "evaluated": len(comparisons),
                "skipped": len(skipped),
            },
        )
        return aggregate(len(submissions), comparisons)

    async def _evaluate_item(self, submission: SubmittedAnswer) -> ItemOutcome:
        try:
            ai_answer = (await self.provider.get_reference_answer(build_prompt(submission)) or "").strip()
        except ReferenceAnswerError as e:
            logger.warning(
                "Reference answer failed",
                extra={"question_id": submission.question_id, "reason": str(e)},
            )
            return Skipped(question_id=submission.question_id, reason=str(e))

        if not ai_answer:
            logger.warning(
                "Reference answer empty",
                extra={"question_id": submission.question_id, "reason": "empty"},
            )
            return Skipped(question_id=submission.question_id, reason="empty reference answer")

        result = ComparisonResult(
            question_id=submission.question_id,
            question=submission.question,
            user_answer=submission.user_answer,
            ai_answer=ai_answer,
            score_out_of_ten=score(submission.user_answer, ai_answer),
        )
        logger.debug(
            "Answer scored",
            extra={"question_id": result.question_id, "score": result.score_out_of_ten},
        )
        return Evaluated(comparison=result)
