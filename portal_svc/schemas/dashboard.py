"""
Pydantic schemas for the student dashboard.
"""
from typing import List, Optional

from pydantic import BaseModel

from schemas.assessment import AssessmentResponse
from schemas.medical_record import MedicalRecordResponse
from schemas.profile import ProfileResponse


class HealthMetrics(BaseModel):
    bmi: Optional[float] = None
    physical_health_status: Optional[str] = None
    mental_health_status: str


class DashboardResponse(BaseModel):
    """
    Dashboard summary for a student who completed onboarding.

    `mental_health_score` is the latest assessment's score, or 0 without any.
    """
    profile: ProfileResponse
    mental_health_score: int
    recent_assessments: List[AssessmentResponse]
    medical_records: List[MedicalRecordResponse]
    health_metrics: HealthMetrics
