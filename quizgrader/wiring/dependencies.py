from functools import lru_cache
import logging

from quizgrader.application.ports.reference_answer import ReferenceAnswerPort
from quizgrader.application.use_cases.evaluate_answers import EvaluateAnswersUseCase
from quizgrader.core.config import settings
from quizgrader.infrastructure.llm.mock_provider import MockReferenceAnswerProvider
from quizgrader.infrastructure.llm.openai_provider import (
    OpenAIReferenceAnswerProvider,
    ReferenceAnswerConfig,
)

logger = logging.getLogger(__name__)


@lru_cache
def get_reference_answer_provider() -> ReferenceAnswerPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        config = ReferenceAnswerConfig(
            api_key=settings.OPENAI_API_KEY.strip(),
            model=settings.OPENAI_MODEL,
            temperature=settings.OPENAI_TEMPERATURE,
            timeout_seconds=settings.OPENAI_TIMEOUT_SECONDS,
            max_tokens=settings.OPENAI_MAX_TOKENS,
        )
        logger.info("Using OpenAIReferenceAnswerProvider model=%s", config.model)
        return OpenAIReferenceAnswerProvider(config)
    logger.info("Using MockReferenceAnswerProvider (OPENAI_API_KEY missing, ENV=%s)", settings.ENV)
    return MockReferenceAnswerProvider()


def get_evaluate_use_case() -> EvaluateAnswersUseCase:
    return EvaluateAnswersUseCase(
        provider=get_reference_answer_provider(),
        max_concurrency=settings.REFERENCE_MAX_CONCURRENCY,
    )
