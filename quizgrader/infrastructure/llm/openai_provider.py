from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from openai import AsyncOpenAI

from quizgrader.application.exceptions import LLMContractError, LLMUpstreamError
from quizgrader.application.ports.reference_answer import ReferenceAnswerPort


@dataclass(frozen=True)
class ReferenceAnswerConfig:
    api_key: str
    model: str = "gpt-4o-mini"
    temperature: float | None = None
    timeout_seconds: float = 30.0
    max_tokens: int = 512


class OpenAIReferenceAnswerProvider(ReferenceAnswerPort):
    """
    OpenAI-backed adapter implementing ReferenceAnswerPort.

    Sends the prompt as a single user message and returns the trimmed
    completion text.

    Raises:
        LLMUpstreamError: networking/provider failures
        LLMContractError: empty completion or unexpected response shape
    """

    def __init__(self, config: ReferenceAnswerConfig, client: Any | None = None) -> None:
        self.config = config
        self.client = client or AsyncOpenAI(api_key=config.api_key, timeout=config.timeout_seconds)

    async def get_reference_answer(self, prompt: str) -> str:
        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.config.max_tokens,
        }
        if self.config.temperature is not None:
            kwargs["temperature"] = self.config.temperature

        try:
            resp = await self.client.chat.completions.create(**kwargs)
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        try:
            content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        except (AttributeError, IndexError, TypeError) as e:
            raise LLMContractError(f"Malformed completion payload: {e}") from e

        if not content:
            raise LLMContractError("LLM returned empty response text.")

        return content
