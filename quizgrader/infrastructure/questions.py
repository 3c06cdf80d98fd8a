from quizgrader.domain.entities.question import Question

QUESTIONS: tuple[Question, ...] = (
    Question(id=1, text="What is ReactJS?"),
    Question(id=2, text="Explain props and state in React with differences?"),
    Question(id=3, text="What is tsx?"),
    Question(id=4, text="What is Virtual DOM?"),
    Question(id=5, text="What is higher-order component in React?"),
)


def list_questions() -> list[Question]:
    return list(QUESTIONS)
