from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from quizgrader.api.v1.schemas import (
    ComparisonSchema,
    ErrorSchema,
    EvaluateResponseSchema,
    QuestionSchema,
    SubmissionsSchema,
)
from quizgrader.application.exceptions import InputValidationError, UnsupportedOperationError
from quizgrader.application.use_cases.evaluate_answers import EvaluateAnswersUseCase, parse_submissions
from quizgrader.infrastructure.questions import list_questions
from quizgrader.wiring.dependencies import get_evaluate_use_case

router = APIRouter()
logger = logging.getLogger(__name__)

GENERIC_ERROR = "An unexpected error occurred."


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorSchema(error=message).model_dump())


@router.post(
    "/evaluate",
    response_model=EvaluateResponseSchema,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorSchema}, 405: {"model": ErrorSchema}, 500: {"model": ErrorSchema}},
)
async def evaluate(
    submissions: SubmissionsSchema | None = Body(None),
    uc: EvaluateAnswersUseCase = Depends(get_evaluate_use_case),
):
    try:
        payload = {
            key: value if isinstance(value, str) else value.model_dump(by_alias=True)
            for key, value in (submissions or {}).items()
        }
        response = await uc.execute(parse_submissions(payload))
    except InputValidationError as e:
        return error_response(400, str(e))
    except Exception:
        logger.exception("Error processing evaluation request")
        return error_response(500, GENERIC_ERROR)

    return EvaluateResponseSchema(
        total_questions=response.total_questions,
        answers_comparison=[
            ComparisonSchema(
                question_id=c.question_id,
                question=c.question,
                user_answer=c.user_answer,
                ai_answer=c.ai_answer,
                score_out_of_ten=c.score_out_of_ten,
            )
            for c in response.answers_comparison
        ],
    )


@router.api_route(
    "/evaluate",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
def evaluate_unsupported():
    raise UnsupportedOperationError("Method Not Allowed")


@router.get("/questions", response_model=list[QuestionSchema])
def questions():
    return [QuestionSchema(id=q.id, question=q.text) for q in list_questions()]
