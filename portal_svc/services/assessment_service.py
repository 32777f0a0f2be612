"""
Service layer for the mental health assessment.

Architecture:
    API Layer (routers) → AssessmentService → scoring engine (pure)
                                            → AssessmentRepository → RecordStore
                                            → report renderer (pure)

Anonymous callers get their result back without anything being stored;
signed-in callers also get an append-only Assessment Record.
"""
import logging
from typing import List, Optional

from core.exceptions import AssessmentNotFoundError
from core.middleware import get_metrics_collector
from models.user import SessionUser
from repositories import AssessmentRepository, ProfileRepository
from schemas import (
    AssessmentResponse,
    AssessmentResultResponse,
    AssessmentSubmission,
    QuestionResponse,
)
from services.mental_health import QUESTIONS, RenderedReport, TextAnswer, evaluate, parse_answers, render
from services.mental_health.questionnaire import STRESSORS

logger = logging.getLogger(__name__)


class AssessmentService:
    """Questionnaire, scoring, history and PDF reports."""

    def __init__(self, assessment_repository: AssessmentRepository, profile_repository: ProfileRepository):
        """
        Initialize the assessment service.

        Args:
            assessment_repository: Storage for assessment records.
            profile_repository: Used for the display name and the report's patient block.
        """
        self._repo = assessment_repository
        self._profiles = profile_repository

    def questions(self) -> List[QuestionResponse]:
        return [QuestionResponse.from_question(q) for q in QUESTIONS]

    def submit(self, submission: AssessmentSubmission, user: Optional[SessionUser] = None) -> AssessmentResultResponse:
        """
        Score a questionnaire submission and store it for signed-in users.

        The stored display name is the profile's full name, falling back to
        the account email.
        """
        answers = parse_answers(submission.answers)
        result = evaluate(answers)
        get_metrics_collector().record_event("assessment_scored")

        if user is None:
            return AssessmentResultResponse(**result.to_dict())

        profile = self._profiles.get(user.id)
        name = (profile.full_name if profile else None) or user.email
        stressors = answers.get(STRESSORS)

        row = self._repo.add(
            user_id=user.id,
            name=name,
            email=user.email,
            score=result.score,
            status=result.status,
            recommendations=list(result.recommendations),
            lifestyle=list(result.lifestyle),
            stressors=stressors.text if isinstance(stressors, TextAnswer) else None,
        )
        get_metrics_collector().record_event("assessment_saved")

        return AssessmentResultResponse(
            **result.to_dict(),
            saved=True,
            assessment=AssessmentResponse(**row),
        )

    def history(self, user: SessionUser, limit: Optional[int] = None) -> List[AssessmentResponse]:
        """The user's assessments, newest first."""
        return [AssessmentResponse(**row) for row in self._repo.list_for_user(user.id, limit=limit)]

    def get_assessment(self, user: SessionUser, assessment_id: str) -> AssessmentResponse:
        """
        Get one of the user's own assessments.

        Raises:
            AssessmentNotFoundError: If it does not exist or belongs to someone else.
        """
        row = self._repo.get_for_user(user.id, assessment_id)
        if row is None:
            raise AssessmentNotFoundError(assessment_id=assessment_id)
        return AssessmentResponse(**row)

    def report(self, user: SessionUser, assessment_id: str) -> RenderedReport:
        """
        Render the PDF report for one of the user's assessments.

        Raises:
            AssessmentNotFoundError: If it does not exist or belongs to someone else.
            ReportRenderError: If the PDF cannot be built.
        """
        row = self._repo.get_for_user(user.id, assessment_id)
        if row is None:
            raise AssessmentNotFoundError(assessment_id=assessment_id)

        report = render(row, self._profiles.get(user.id))
        get_metrics_collector().record_event("report_rendered")
        return report
