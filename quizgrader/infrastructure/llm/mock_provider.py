from __future__ import annotations

from quizgrader.application.ports.reference_answer import ReferenceAnswerPort
from quizgrader.infrastructure.questions import QUESTIONS

CANNED_ANSWERS = {
    "What is ReactJS?": "ReactJS is a JavaScript library for building user interfaces.",
    "Explain props and state in React with differences?": (
        "Props are read-only inputs passed from a parent component, "
        "while state is data owned and updated by the component itself."
    ),
    "What is tsx?": "TSX is the TypeScript file extension that allows JSX syntax.",
    "What is Virtual DOM?": "The Virtual DOM is an in-memory representation of the real DOM.",
    "What is higher-order component in React?": (
        "A higher-order component is a function that takes a component and returns a new component."
    ),
}


class MockReferenceAnswerProvider(ReferenceAnswerPort):
    """Deterministic stand-in used when no OpenAI key is configured."""

    async def get_reference_answer(self, prompt: str) -> str:
        text = (prompt or "").strip()
        for question in QUESTIONS:
            if text.startswith(question.text):
                return CANNED_ANSWERS[question.text]
        return text
