from dataclasses import dataclass


@dataclass(frozen=True)
class Question:
    id: int
    text: str
