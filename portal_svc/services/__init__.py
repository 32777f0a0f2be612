"""
Service layer for business logic.

This module contains all business logic and orchestration services.

Note: Collaborator adapters are not re-exported here. Import them directly
from their modules:
- from services.identity_gateway import LocalIdentityGateway, SupabaseIdentityGateway
- from services.blob_store import LocalBlobStore, SupabaseBlobStore
"""
from services.auth_service import AuthService
from services.profile_service import ProfileService
from services.bmi_service import BmiService
from services.assessment_service import AssessmentService
from services.medical_record_service import MedicalRecordService
from services.dashboard_service import DashboardService
from services.assistant_service import AssistantService

__all__ = [
    "AuthService",
    "ProfileService",
    "BmiService",
    "AssessmentService",
    "MedicalRecordService",
    "DashboardService",
    "AssistantService",
]
