"""
Service layer for the student dashboard.
"""
import logging

from core.exceptions import OnboardingRequiredError, ProfileNotFoundError
from models.user import SessionUser
from repositories import AssessmentRepository, MedicalRecordRepository, ProfileRepository
from schemas import (
    AssessmentResponse,
    DashboardResponse,
    HealthMetrics,
    MedicalRecordResponse,
    ProfileResponse,
)
from services.bmi import body_mass_index, mental_status, physical_status

logger = logging.getLogger(__name__)

RECENT_ASSESSMENTS = 5


class DashboardService:
    """Aggregates profile, assessment and record data for the dashboard."""

    def __init__(
        self,
        profile_repository: ProfileRepository,
        assessment_repository: AssessmentRepository,
        medical_record_repository: MedicalRecordRepository,
    ):
        self._profiles = profile_repository
        self._assessments = assessment_repository
        self._records = medical_record_repository

    def get_dashboard(self, user: SessionUser) -> DashboardResponse:
        """
        Build the dashboard for a user who completed medical onboarding.

        The profile is fetched first; metrics are derived from it only after
        the onboarding gate passes.

        Raises:
            ProfileNotFoundError: If the user has no profile.
            OnboardingRequiredError: If medical details are not completed yet.
        """
        profile = self._profiles.get(user.id)
        if profile is None:
            raise ProfileNotFoundError(user_id=user.id)
        if not profile.medical_details_completed:
            logger.info("Dashboard requested before onboarding", extra={"user_id": user.id})
            raise OnboardingRequiredError()

        raw_bmi = None
        if profile.height and profile.weight and profile.height > 0 and profile.weight > 0:
            raw_bmi = body_mass_index(profile.height, profile.weight)

        assessments = self._assessments.list_for_user(user.id, limit=RECENT_ASSESSMENTS)
        records = self._records.list_for_user(user.id)
        score = assessments[0]["score"] if assessments else 0

        return DashboardResponse(
            profile=ProfileResponse(**profile.to_dict()),
            mental_health_score=score,
            recent_assessments=[AssessmentResponse(**row) for row in assessments],
            medical_records=[MedicalRecordResponse(**row) for row in records],
            health_metrics=HealthMetrics(
                bmi=round(raw_bmi, 1) if raw_bmi is not None else None,
                physical_health_status=physical_status(raw_bmi),
                mental_health_status=mental_status(score),
            ),
        )
