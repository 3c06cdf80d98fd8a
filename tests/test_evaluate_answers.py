"""
Tests for the answer evaluation pipeline.
"""

from __future__ import annotations

import asyncio
import logging

import pytest

from quizgrader.application.exceptions import InputValidationError, LLMContractError, LLMUpstreamError
from quizgrader.application.use_cases.evaluate_answers import (
    EvaluateAnswersUseCase,
    build_prompt,
    parse_submissions,
)
from quizgrader.domain.entities.submission import SubmittedAnswer


def evaluate(provider, payload, max_concurrency=4):
    uc = EvaluateAnswersUseCase(provider=provider, max_concurrency=max_concurrency)
    return asyncio.run(uc.execute(parse_submissions(payload)))


def test_build_prompt_joins_question_and_answer():
    with_question = SubmittedAnswer(question_id="1", user_answer="A JS library", question="What is ReactJS?")
    bare = SubmittedAnswer(question_id="2", user_answer="A JS library")

    assert build_prompt(with_question) == "What is ReactJS? A JS library"
    assert build_prompt(bare) == "A JS library"


def test_parse_submissions_accepts_strings_and_records():
    parsed = parse_submissions({"1": "bare answer", "2": {"question": "Q?", "userAnswer": "record answer"}})

    assert parsed == [
        SubmittedAnswer(question_id="1", user_answer="bare answer"),
        SubmittedAnswer(question_id="2", user_answer="record answer", question="Q?"),
    ]


@pytest.mark.parametrize("payload", [None, {}, []])
def test_empty_submissions_are_rejected(payload):
    with pytest.raises(InputValidationError):
        parse_submissions(payload)


@pytest.mark.parametrize("value", [5, {"question": "Q?"}, {"userAnswer": 3}, {"userAnswer": "a", "question": 1}])
def test_malformed_submission_is_rejected(value):
    with pytest.raises(InputValidationError):
        parse_submissions({"1": value})


def test_execute_rejects_empty_list_without_calling_provider(stub_provider_factory):
    provider = stub_provider_factory({})
    uc = EvaluateAnswersUseCase(provider=provider)

    with pytest.raises(InputValidationError):
        asyncio.run(uc.execute([]))
    assert provider.prompts == []


def test_single_question_is_scored_against_reference(stub_provider_factory):
    provider = stub_provider_factory({"What is ReactJS? A JS library": "A JavaScript library"})

    response = evaluate(provider, {"1": {"question": "What is ReactJS?", "userAnswer": "A JS library"}})

    assert provider.prompts == ["What is ReactJS? A JS library"]
    assert response.total_questions == 1
    [item] = response.answers_comparison
    assert item.question_id == "1"
    assert item.question == "What is ReactJS?"
    assert item.user_answer == "A JS library"
    assert item.ai_answer == "A JavaScript library"
    # 8 edits over 20 characters -> ratio 60
    assert item.score_out_of_ten == 6
    assert 0 < item.score_out_of_ten < 10


def test_failed_reference_answer_is_skipped(stub_provider_factory, caplog):
    provider = stub_provider_factory(
        {
            "What is tsx? TypeScript JSX": "TSX is TypeScript with JSX",
            "What is Virtual DOM? A copy of the DOM": LLMUpstreamError("timeout"),
        }
    )
    caplog.set_level(logging.WARNING)

    response = evaluate(
        provider,
        {
            "3": {"question": "What is tsx?", "userAnswer": "TypeScript JSX"},
            "4": {"question": "What is Virtual DOM?", "userAnswer": "A copy of the DOM"},
        },
    )

    assert response.total_questions == 2
    assert [c.question_id for c in response.answers_comparison] == ["3"]
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert [getattr(r, "question_id", None) for r in warnings] == ["4"]


def test_empty_reference_answer_is_skipped(stub_provider_factory):
    provider = stub_provider_factory({"blank": "   ", "fine": "fine"})

    response = evaluate(provider, {"a": "blank", "b": "fine"})

    assert response.total_questions == 2
    assert [c.question_id for c in response.answers_comparison] == ["b"]


def test_partial_failures_keep_total_count(stub_provider_factory):
    answers = {f"answer {i}": f"reference {i}" for i in range(5)}
    answers["answer 1"] = LLMContractError("empty completion")
    answers["answer 3"] = LLMUpstreamError("connection reset")
    provider = stub_provider_factory(answers)

    response = evaluate(provider, {str(i): f"answer {i}" for i in range(5)})

    assert response.total_questions == 5
    assert len(response.answers_comparison) == 5 - 2
    assert [c.question_id for c in response.answers_comparison] == ["0", "2", "4"]


def test_results_keep_submission_order(stub_provider_factory):
    provider = stub_provider_factory(
        {"first": "first", "second": "second", "third": "third"},
        delays={"first": 0.03, "second": 0.02, "third": 0.0},
    )

    response = evaluate(provider, {"9": "first", "2": "second", "5": "third"})

    assert [c.question_id for c in response.answers_comparison] == ["9", "2", "5"]


def test_concurrency_is_capped(stub_provider_factory):
    prompts = {f"p{i}": f"p{i}" for i in range(6)}
    provider = stub_provider_factory(prompts, delays={p: 0.01 for p in prompts})

    response = evaluate(provider, {str(i): f"p{i}" for i in range(6)}, max_concurrency=2)

    assert len(response.answers_comparison) == 6
    assert provider.max_in_flight == 2


def test_matching_answer_scores_ten(stub_provider_factory):
    provider = stub_provider_factory({"What is Virtual DOM? Virtual DOM": "  virtual dom\n"})

    response = evaluate(provider, {"4": {"question": "What is Virtual DOM?", "userAnswer": "Virtual DOM"}})

    [item] = response.answers_comparison
    assert item.ai_answer == "virtual dom"
    assert item.score_out_of_ten == 10


def test_unexpected_error_aborts_batch(stub_provider_factory):
    provider = stub_provider_factory({"boom": RuntimeError("database exploded")})

    with pytest.raises(RuntimeError):
        evaluate(provider, {"1": "boom"})


def test_unexpected_error_cancels_sibling_requests(stub_provider_factory):
    provider = stub_provider_factory(
        {"boom": RuntimeError("database exploded"), "slow": "slow", "slower": "slower"},
        delays={"slow": 0.05, "slower": 0.1},
    )
    uc = EvaluateAnswersUseCase(provider=provider, max_concurrency=4)

    async def scenario():
        with pytest.raises(RuntimeError):
            await uc.execute(parse_submissions({"1": "boom", "2": "slow", "3": "slower"}))
        # checked before the loop closes, so nothing else could have cancelled them
        assert sorted(provider.cancelled) == ["slow", "slower"]
        await asyncio.sleep(0.15)
        assert provider.finished == ["boom"]

    asyncio.run(scenario())


def test_cancellation_abandons_in_flight_requests():
    from quizgrader.application.ports.reference_answer import ReferenceAnswerPort

    class HangingProvider(ReferenceAnswerPort):
        def __init__(self) -> None:
            self.started = 0
            self.cancelled = 0

        async def get_reference_answer(self, prompt: str) -> str:
            self.started += 1
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled += 1
                raise
            return prompt

    provider = HangingProvider()
    uc = EvaluateAnswersUseCase(provider=provider, max_concurrency=4)

    async def scenario():
        task = asyncio.create_task(uc.execute(parse_submissions({"1": "a", "2": "b"})))
        while provider.started < 2:
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(scenario())
    assert provider.cancelled == 2
