"""
Pydantic schemas for the mental health questionnaire.

Submissions are validated strictly here: every answer must match its
question's kind and range, otherwise the request is rejected with 422
before anything is scored or stored. Unanswered questions are allowed and
take the scorer's defaults.
"""
import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from services.mental_health.questionnaire import Question

MAX_TEXT_ANSWER_LENGTH = 2000

AnswerValue = Union[bool, float, str]


class QuestionResponse(BaseModel):
    id: int
    kind: str = Field(..., description="slider, mcq, boolean or text")
    text: str
    options: List[str] = Field(default_factory=list)
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    @classmethod
    def from_question(cls, question: "Question") -> "QuestionResponse":
        return cls(
            id=question.id,
            kind=question.kind.value,
            text=question.text,
            options=list(question.options),
            min=question.min,
            max=question.max,
            step=question.step,
        )


def _check_scale(question: "Question", value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"question {question.id}: expected a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"question {question.id}: expected a number")
    if math.isnan(number) or math.isinf(number):
        raise ValueError(f"question {question.id}: expected a finite number")
    if not question.min <= number <= question.max:
        raise ValueError(f"question {question.id}: must be between {question.min:g} and {question.max:g}")
    steps = (number - question.min) / question.step
    if not math.isclose(steps, round(steps), abs_tol=1e-9):
        raise ValueError(f"question {question.id}: must be in steps of {question.step:g}")
    return number


def _check_choice(question: "Question", value: Any) -> str:
    if not isinstance(value, str) or value not in question.options:
        raise ValueError(f"question {question.id}: must be one of {', '.join(question.options)}")
    return value


def _check_boolean(question: "Question", value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower()
    raise ValueError(f"question {question.id}: must be true or false")


def _check_text(question: "Question", value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"question {question.id}: expected text")
    if len(value) > MAX_TEXT_ANSWER_LENGTH:
        raise ValueError(f"question {question.id}: at most {MAX_TEXT_ANSWER_LENGTH} characters")
    return value


_CHECKS = {
    "slider": _check_scale,
    "mcq": _check_choice,
    "boolean": _check_boolean,
    "text": _check_text,
}


class AssessmentSubmission(BaseModel):
    """
    Questionnaire answers keyed by question id.

    Example:
        {"answers": {"1": 4, "2": 7.5, "3": "Sometimes", "4": "Good",
                     "5": "Daily", "6": "false", "7": "Exams"}}
    """
    answers: Dict[int, AnswerValue] = Field(default_factory=dict)

    @field_validator("answers", mode="before")
    @classmethod
    def validate_answers(cls, v: Any) -> Dict[int, Any]:
        # Lazy import to avoid a schemas <-> services import cycle
        from services.mental_health.questionnaire import QUESTIONS_BY_ID

        if not isinstance(v, dict):
            raise ValueError("answers must be an object keyed by question id")

        checked: Dict[int, Any] = {}
        for key, value in v.items():
            try:
                question_id = int(key)
            except (TypeError, ValueError):
                raise ValueError(f"unknown question id: {key}")
            question = QUESTIONS_BY_ID.get(question_id)
            if question is None:
                raise ValueError(f"unknown question id: {key}")
            if value is None:
                continue
            checked[question_id] = _CHECKS[question.kind.value](question, value)
        return checked


class AssessmentResponse(BaseModel):
    """A stored assessment record."""
    id: str
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    score: int = Field(..., ge=0, le=100)
    status: str
    recommendations: List[str]
    lifestyle: List[str]
    stressors: Optional[str] = None
    created_at: str


class AssessmentResultResponse(BaseModel):
    """
    Result of a submission.

    `saved` is true and `assessment` is set only when the caller was signed in.
    """
    score: int = Field(..., ge=0, le=100)
    status: str
    recommendations: List[str]
    lifestyle: List[str]
    saved: bool = False
    assessment: Optional[AssessmentResponse] = None
