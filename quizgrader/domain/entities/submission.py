from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SubmittedAnswer:
    question_id: str
    user_answer: str
    question: str | None = None

    @staticmethod
    def from_payload(question_id: Any, value: Any) -> "SubmittedAnswer":
        """
        Build a submission from one entry of the submitted mapping.

        The value is either a bare answer string or a record with
        ``userAnswer`` and an optional ``question``.
        """
        if isinstance(value, str):
            return SubmittedAnswer(question_id=str(question_id), user_answer=value)
        if isinstance(value, dict):
            user_answer = value.get("userAnswer")
            if not isinstance(user_answer, str):
                raise ValueError(f"Answer for question {question_id} must include a string 'userAnswer'.")
            question = value.get("question")
            if question is not None and not isinstance(question, str):
                raise ValueError(f"Question text for {question_id} must be a string.")
            return SubmittedAnswer(
                question_id=str(question_id),
                user_answer=user_answer,
                question=question or None,
            )
        raise ValueError(f"Answer for question {question_id} must be a string or an object.")
