from __future__ import annotations

import asyncio

import pytest

from quizgrader.application.exceptions import LLMUpstreamError
from quizgrader.application.ports.reference_answer import ReferenceAnswerPort


class StubReferenceAnswerProvider(ReferenceAnswerPort):
    """Returns fixed answers per prompt; values that are exceptions get raised."""

    def __init__(self, answers: dict[str, object], delays: dict[str, float] | None = None) -> None:
        self.answers = answers
        self.delays = delays or {}
        self.prompts: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.finished: list[str] = []
        self.cancelled: list[str] = []

    async def get_reference_answer(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            try:
                await asyncio.sleep(self.delays.get(prompt, 0))
            except asyncio.CancelledError:
                self.cancelled.append(prompt)
                raise
            self.finished.append(prompt)
            answer = self.answers.get(prompt, LLMUpstreamError(f"no answer for {prompt!r}"))
            if isinstance(answer, BaseException):
                raise answer
            return answer
        finally:
            self.in_flight -= 1


@pytest.fixture
def stub_provider_factory():
    return StubReferenceAnswerProvider
