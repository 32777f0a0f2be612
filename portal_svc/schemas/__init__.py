"""
Pydantic schemas for API request/response validation.

This module contains all Pydantic models used at API boundaries.
"""
from schemas.auth import (
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
    UserResponse,
)
from schemas.profile import OnboardingRequest, ProfileResponse, ProfileUpdate
from schemas.bmi import BmiRecordResponse, BmiRequest, BmiResponse
from schemas.assessment import (
    AssessmentResponse,
    AssessmentResultResponse,
    AssessmentSubmission,
    QuestionResponse,
)
from schemas.medical_record import MedicalRecordResponse
from schemas.dashboard import DashboardResponse, HealthMetrics
from schemas.resources import (
    ChatRequest,
    ChatResponse,
    EmergencyAssistRequest,
    EmergencyAssistResponse,
    EmergencyResourcesResponse,
    PhysicalResourcesResponse,
)

__all__ = [
    # Auth schemas
    "SessionResponse",
    "SignInRequest",
    "SignUpRequest",
    "SignUpResponse",
    "UserResponse",
    # Profile schemas
    "OnboardingRequest",
    "ProfileResponse",
    "ProfileUpdate",
    # BMI schemas
    "BmiRecordResponse",
    "BmiRequest",
    "BmiResponse",
    # Assessment schemas
    "AssessmentResponse",
    "AssessmentResultResponse",
    "AssessmentSubmission",
    "QuestionResponse",
    # Medical record schemas
    "MedicalRecordResponse",
    # Dashboard schemas
    "DashboardResponse",
    "HealthMetrics",
    # Resource schemas
    "ChatRequest",
    "ChatResponse",
    "EmergencyAssistRequest",
    "EmergencyAssistResponse",
    "EmergencyResourcesResponse",
    "PhysicalResourcesResponse",
]
