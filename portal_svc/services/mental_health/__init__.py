"""
Mental health questionnaire, scoring engine and PDF report.
"""
from services.mental_health.questionnaire import (
    QUESTIONS,
    AnswerSet,
    BooleanAnswer,
    ChoiceAnswer,
    QuestionKind,
    ScaleAnswer,
    TextAnswer,
    parse_answers,
)
from services.mental_health.report import RenderedReport, render
from services.mental_health.scoring import AssessmentResult, evaluate

__all__ = [
    "QUESTIONS",
    "AnswerSet",
    "AssessmentResult",
    "BooleanAnswer",
    "ChoiceAnswer",
    "QuestionKind",
    "RenderedReport",
    "ScaleAnswer",
    "TextAnswer",
    "evaluate",
    "parse_answers",
    "render",
]
