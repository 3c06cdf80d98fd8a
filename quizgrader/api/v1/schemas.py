from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubmissionSchema(CamelSchema):
    question: str | None = None
    user_answer: str


SubmissionsSchema = dict[str, str | SubmissionSchema]


class ComparisonSchema(CamelSchema):
    question_id: str
    question: str | None = None
    user_answer: str
    ai_answer: str
    score_out_of_ten: int


class EvaluateResponseSchema(CamelSchema):
    total_questions: int
    answers_comparison: list[ComparisonSchema]


class QuestionSchema(BaseModel):
    id: int
    question: str


class ErrorSchema(BaseModel):
    error: str
