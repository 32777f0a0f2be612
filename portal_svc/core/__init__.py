"""
Core module for application configuration, logging, and shared constants.

This module provides:
- Settings: Application configuration via pydantic-settings
- Dependency injection: FastAPI Depends() functions for services and repositories
- Exceptions: Domain-specific exception classes with HTTP status codes
- Datetime utilities: UTC-first datetime handling
- Content registry: Static health resources and assistant replies
"""
from core.config import settings, Settings

# Dependency injection - import functions for FastAPI Depends()
from core.dependencies import (
    get_record_store,
    get_blob_store,
    get_identity_gateway,
    get_profile_repository,
    get_bmi_repository,
    get_assessment_repository,
    get_medical_record_repository,
    get_auth_service,
    get_profile_service,
    get_bmi_service,
    get_assessment_service,
    get_medical_record_service,
    get_dashboard_service,
    get_assistant_service,
    reset_backends,
)

# Exception classes for consistent error handling
from core.exceptions import (
    PortalServiceError,
    InvalidInputError,
    AuthenticationError,
    DuplicateAccountError,
    ProfileNotFoundError,
    OnboardingRequiredError,
    AssessmentNotFoundError,
    MedicalRecordNotFoundError,
    RecordLimitReachedError,
    UploadError,
    InvalidFileTypeError,
    FileTooLargeError,
    FileTooSmallError,
    ReportRenderError,
    ExternalServiceError,
    RecordStoreError,
    RecordConflictError,
    BlobStoreError,
    IdentityProviderError,
    setup_exception_handlers,
)

# UTC datetime utilities
from core.datetime_utils import (
    utc_now,
    millis_now,
    to_utc,
    parse_datetime,
    parse_datetime_safe,
    format_iso,
    format_for_display,
)
from core.config import (
    DATABASE_PATH,
    API_HOST,
    API_PORT,
    API_RELOAD,
    UPLOAD_DIR,
    PUBLIC_BASE_URL,
    BACKEND,
)

# Content registry exports
from core.content_registry import (
    AssistantTopic,
    get_emergency_content,
    get_physical_content,
    get_assistant_topics,
    get_fallback_reply,
    get_emergency_assist_reply,
)

__all__ = [
    # Settings
    "settings",
    "Settings",
    # Dependency injection
    "get_record_store",
    "get_blob_store",
    "get_identity_gateway",
    "get_profile_repository",
    "get_bmi_repository",
    "get_assessment_repository",
    "get_medical_record_repository",
    "get_auth_service",
    "get_profile_service",
    "get_bmi_service",
    "get_assessment_service",
    "get_medical_record_service",
    "get_dashboard_service",
    "get_assistant_service",
    "reset_backends",
    # Exceptions
    "PortalServiceError",
    "InvalidInputError",
    "AuthenticationError",
    "DuplicateAccountError",
    "ProfileNotFoundError",
    "OnboardingRequiredError",
    "AssessmentNotFoundError",
    "MedicalRecordNotFoundError",
    "RecordLimitReachedError",
    "UploadError",
    "InvalidFileTypeError",
    "FileTooLargeError",
    "FileTooSmallError",
    "ReportRenderError",
    "ExternalServiceError",
    "RecordStoreError",
    "RecordConflictError",
    "BlobStoreError",
    "IdentityProviderError",
    "setup_exception_handlers",
    # Datetime utilities
    "utc_now",
    "millis_now",
    "to_utc",
    "parse_datetime",
    "parse_datetime_safe",
    "format_iso",
    "format_for_display",
    # Config constants
    "DATABASE_PATH",
    "API_HOST",
    "API_PORT",
    "API_RELOAD",
    "UPLOAD_DIR",
    "PUBLIC_BASE_URL",
    "BACKEND",
    # Content registry
    "AssistantTopic",
    "get_emergency_content",
    "get_physical_content",
    "get_assistant_topics",
    "get_fallback_reply",
    "get_emergency_assist_reply",
]
