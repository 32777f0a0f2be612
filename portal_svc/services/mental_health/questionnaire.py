"""
Mental health questionnaire definition and typed answers.

The questionnaire has seven fixed questions. Each answer is a tagged value
whose type follows the question kind:

    SCALE   -> ScaleAnswer(value)      questions 1 (stress) and 2 (sleep)
    CHOICE  -> ChoiceAnswer(label)     questions 3, 4 and 5
    BOOLEAN -> BooleanAnswer(value)    question 6
    TEXT    -> TextAnswer(text)        question 7

Choice labels are ranked through explicit tables below, so renaming or
reordering the options shown to students never changes how they score.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class QuestionKind(str, Enum):
    SCALE = "slider"
    CHOICE = "mcq"
    BOOLEAN = "boolean"
    TEXT = "text"


# =============================================================================
# CHOICE LABELS AND RANKS
# =============================================================================

class WorkloadFrequency(str, Enum):
    NEVER = "Never"
    SOMETIMES = "Sometimes"
    OFTEN = "Often"
    ALWAYS = "Always"


class SocialSupport(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class ExerciseFrequency(str, Enum):
    DAILY = "Daily"
    FEW_TIMES_A_WEEK = "Few times a week"
    RARELY = "Rarely"
    NEVER = "Never"


# Higher rank = worse for wellbeing
WORKLOAD_RANK: Dict[WorkloadFrequency, int] = {
    WorkloadFrequency.NEVER: 0,
    WorkloadFrequency.SOMETIMES: 1,
    WorkloadFrequency.OFTEN: 2,
    WorkloadFrequency.ALWAYS: 3,
}

SOCIAL_SUPPORT_RANK: Dict[SocialSupport, int] = {
    SocialSupport.EXCELLENT: 0,
    SocialSupport.GOOD: 1,
    SocialSupport.FAIR: 2,
    SocialSupport.POOR: 3,
}

EXERCISE_RANK: Dict[ExerciseFrequency, int] = {
    ExerciseFrequency.DAILY: 0,
    ExerciseFrequency.FEW_TIMES_A_WEEK: 1,
    ExerciseFrequency.RARELY: 2,
    ExerciseFrequency.NEVER: 3,
}


# =============================================================================
# QUESTIONS
# =============================================================================

STRESS = 1
SLEEP = 2
WORKLOAD = 3
SOCIAL_SUPPORT = 4
EXERCISE = 5
FUTURE_ANXIETY = 6
STRESSORS = 7


@dataclass(frozen=True)
class Question:
    id: int
    kind: QuestionKind
    text: str
    options: Tuple[str, ...] = ()
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None


QUESTIONS: Tuple[Question, ...] = (
    Question(STRESS, QuestionKind.SCALE, "How would you rate your stress level today?", min=1, max=10, step=1),
    Question(SLEEP, QuestionKind.SCALE, "How many hours do you sleep on average?", min=1, max=12, step=0.5),
    Question(
        WORKLOAD, QuestionKind.CHOICE,
        "How often do you feel overwhelmed by your academic workload?",
        options=tuple(label.value for label in WorkloadFrequency),
    ),
    Question(
        SOCIAL_SUPPORT, QuestionKind.CHOICE,
        "How would you rate your social support system?",
        options=tuple(label.value for label in SocialSupport),
    ),
    Question(
        EXERCISE, QuestionKind.CHOICE,
        "How often do you engage in physical exercise?",
        options=tuple(label.value for label in ExerciseFrequency),
    ),
    Question(FUTURE_ANXIETY, QuestionKind.BOOLEAN, "Do you often feel anxious about your future?"),
    Question(STRESSORS, QuestionKind.TEXT, "What are your main sources of stress? Please describe briefly."),
)

QUESTIONS_BY_ID: Dict[int, Question] = {q.id: q for q in QUESTIONS}


# =============================================================================
# ANSWERS
# =============================================================================

@dataclass(frozen=True)
class ScaleAnswer:
    value: float


@dataclass(frozen=True)
class ChoiceAnswer:
    label: str


@dataclass(frozen=True)
class BooleanAnswer:
    value: bool


@dataclass(frozen=True)
class TextAnswer:
    text: str


Answer = Union[ScaleAnswer, ChoiceAnswer, BooleanAnswer, TextAnswer]
AnswerSet = Dict[int, Answer]


def _parse_scale(value: Any) -> Optional[ScaleAnswer]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return ScaleAnswer(number)


def _parse_choice(value: Any) -> Optional[ChoiceAnswer]:
    if isinstance(value, Enum):
        value = value.value
    if not isinstance(value, str):
        return None
    return ChoiceAnswer(value)


def _parse_boolean(value: Any) -> Optional[BooleanAnswer]:
    if isinstance(value, bool):
        return BooleanAnswer(value)
    if isinstance(value, str):
        return BooleanAnswer(value.strip().lower() == "true")
    return None


def _parse_text(value: Any) -> Optional[TextAnswer]:
    if not isinstance(value, str):
        return None
    return TextAnswer(value)


_PARSERS = {
    QuestionKind.SCALE: _parse_scale,
    QuestionKind.CHOICE: _parse_choice,
    QuestionKind.BOOLEAN: _parse_boolean,
    QuestionKind.TEXT: _parse_text,
}


def parse_answers(raw: Mapping[Any, Any]) -> AnswerSet:
    """
    Convert an untyped {question id: value} mapping into an AnswerSet.

    Keys may be ints or numeric strings. Unknown question ids and values that
    do not fit the question kind are dropped with a warning, which leaves the
    scorer to apply that question's default.
    """
    answers: AnswerSet = {}
    for key, value in raw.items():
        try:
            question_id = int(key)
        except (TypeError, ValueError):
            logger.warning("Ignoring answer with non-numeric question id", extra={"question_id": key})
            continue

        question = QUESTIONS_BY_ID.get(question_id)
        if question is None:
            logger.warning("Ignoring answer for unknown question", extra={"question_id": question_id})
            continue
        if value is None:
            continue

        answer = _PARSERS[question.kind](value)
        if answer is None:
            logger.warning(
                "Ignoring malformed answer",
                extra={"question_id": question_id, "kind": question.kind.value, "value": repr(value)}
            )
            continue
        answers[question_id] = answer
    return answers
