"""
Mental health scoring engine.

`evaluate` turns an AnswerSet into a 0-100 score, a status tier, the tier's
recommendations and any lifestyle notes triggered by individual answers.
It is a pure function: no I/O, no clock, and it never raises. Missing or
unusable answers fall back to the defaults below.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from services.mental_health.questionnaire import (
    EXERCISE,
    EXERCISE_RANK,
    FUTURE_ANXIETY,
    SLEEP,
    SOCIAL_SUPPORT,
    SOCIAL_SUPPORT_RANK,
    STRESS,
    WORKLOAD,
    WORKLOAD_RANK,
    AnswerSet,
    BooleanAnswer,
    ChoiceAnswer,
    ExerciseFrequency,
    ScaleAnswer,
    SocialSupport,
    WorkloadFrequency,
)

logger = logging.getLogger(__name__)

DEFAULT_STRESS = 5
DEFAULT_SLEEP_HOURS = 7.0
DEFAULT_RANK = 2

ANXIOUS_WEIGHT = 3
CALM_WEIGHT = 1

OPTIMAL_SLEEP = (7.0, 9.0)

MIN_SCORE = 0
MAX_SCORE = 100


# =============================================================================
# TIERS
# =============================================================================

EXCELLENT = "Excellent Mental Health"
GOOD = "Good Mental Health"
FAIR = "Fair Mental Health - Some Attention Needed"
IMMEDIATE = "Immediate Attention Recommended"

# (inclusive lower bound, status), highest first
TIER_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (80, EXCELLENT),
    (60, GOOD),
    (40, FAIR),
    (MIN_SCORE, IMMEDIATE),
)

TIER_RECOMMENDATIONS: Dict[str, Tuple[str, ...]] = {
    EXCELLENT: (
        "Continue your current healthy practices",
        "Share your wellness strategies with peers",
        "Consider becoming a wellness mentor",
    ),
    GOOD: (
        "Maintain regular exercise and sleep schedule",
        "Practice stress management techniques",
        "Stay connected with your support system",
    ),
    FAIR: (
        "Consider speaking with a counselor",
        "Establish a regular sleep routine",
        "Increase physical activity",
        "Practice mindfulness or meditation",
    ),
    IMMEDIATE: (
        "Schedule an appointment with a mental health professional",
        "Talk to a trusted friend or family member",
        "Contact university counseling services",
        "Focus on basic self-care routines",
    ),
}

SLEEP_NOTE = "Improve sleep hygiene by maintaining a consistent sleep schedule"
ACTIVITY_NOTE = "Incorporate regular physical activity into your routine"
SOCIAL_NOTE = "Build stronger social connections through university clubs or study groups"


@dataclass(frozen=True)
class AssessmentResult:
    score: int
    status: str
    recommendations: Tuple[str, ...]
    lifestyle: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "status": self.status,
            "recommendations": list(self.recommendations),
            "lifestyle": list(self.lifestyle),
        }


# =============================================================================
# ANSWER ACCESS
# =============================================================================

def _scale(answers: AnswerSet, question_id: int) -> Optional[float]:
    answer = answers.get(question_id)
    return answer.value if isinstance(answer, ScaleAnswer) else None


def _choice(answers: AnswerSet, question_id: int, labels: Type[Enum]) -> Optional[Enum]:
    answer = answers.get(question_id)
    if not isinstance(answer, ChoiceAnswer):
        return None
    try:
        return labels(answer.label)
    except ValueError:
        return None


def _rank(label: Optional[Enum], table: Dict) -> int:
    return DEFAULT_RANK if label is None else table[label]


def status_for(score: int) -> str:
    for lower_bound, status in TIER_THRESHOLDS:
        if score >= lower_bound:
            return status
    return IMMEDIATE


# =============================================================================
# ENGINE
# =============================================================================

def evaluate(answers: AnswerSet) -> AssessmentResult:
    """
    Score a questionnaire submission.

    Score terms (summed, then clamped to 0..100):
        (10 - stress) * 2
        10 if 7 <= sleep <= 9 else 5
        (3 - workload rank) * 2
        (3 - social support rank) * 2
        (3 - exercise rank) * 2
        5 - anxiety weight (3 if anxious, else 1)

    Args:
        answers: Typed answers keyed by question id; any subset is accepted.

    Returns:
        AssessmentResult with the score, tier status, the tier's
        recommendations and the triggered lifestyle notes.
    """
    stress_value = _scale(answers, STRESS)
    stress = int(stress_value) if stress_value is not None else DEFAULT_STRESS

    sleep = _scale(answers, SLEEP)
    if sleep is None:
        sleep = DEFAULT_SLEEP_HOURS

    workload = _choice(answers, WORKLOAD, WorkloadFrequency)
    social = _choice(answers, SOCIAL_SUPPORT, SocialSupport)
    exercise = _choice(answers, EXERCISE, ExerciseFrequency)

    anxiety_answer = answers.get(FUTURE_ANXIETY)
    anxious = isinstance(anxiety_answer, BooleanAnswer) and anxiety_answer.value
    anxiety_weight = ANXIOUS_WEIGHT if anxious else CALM_WEIGHT

    low, high = OPTIMAL_SLEEP
    raw_score = (
        (10 - stress) * 2
        + (10 if low <= sleep <= high else 5)
        + (3 - _rank(workload, WORKLOAD_RANK)) * 2
        + (3 - _rank(social, SOCIAL_SUPPORT_RANK)) * 2
        + (3 - _rank(exercise, EXERCISE_RANK)) * 2
        + (5 - anxiety_weight)
    )
    score = min(MAX_SCORE, max(MIN_SCORE, raw_score))
    status = status_for(score)

    lifestyle = []
    if sleep < 7:
        lifestyle.append(SLEEP_NOTE)
    if exercise in (ExerciseFrequency.RARELY, ExerciseFrequency.NEVER):
        lifestyle.append(ACTIVITY_NOTE)
    if social in (SocialSupport.POOR, SocialSupport.FAIR):
        lifestyle.append(SOCIAL_NOTE)

    logger.debug("Assessment evaluated", extra={"score": score, "status": status})

    return AssessmentResult(
        score=score,
        status=status,
        recommendations=TIER_RECOMMENDATIONS[status],
        lifestyle=tuple(lifestyle),
    )
