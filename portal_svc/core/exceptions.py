"""
Shared exception classes and error handling utilities for the Student Health Portal API.

This module provides:
- Custom exception hierarchy for domain-specific errors
- Consistent error response formatting
- Exception handlers for FastAPI integration

Usage:
    from core.exceptions import ProfileNotFoundError, OnboardingRequiredError

    # In service layer - raise domain exceptions
    raise ProfileNotFoundError(user_id="...")

    # In FastAPI - register handlers via setup_exception_handlers(app)
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# =============================================================================
# BASE EXCEPTION CLASSES
# =============================================================================

class PortalServiceError(Exception):
    """
    Base exception for all portal domain errors.

    All custom exceptions should inherit from this class.
    Provides consistent error structure with status code and detail message.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "An unexpected error occurred"

    def __init__(
        self,
        detail: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs: Any
    ):
        """
        Initialize the exception.

        Args:
            detail: Human-readable error message. Uses class default if not provided.
            status_code: HTTP status code. Uses class default if not provided.
            **kwargs: Additional context to include in error response.
        """
        self.detail = detail or self.__class__.detail
        self.status_code = status_code or self.__class__.status_code
        self.context = kwargs
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        result = {"detail": self.detail}
        if self.context:
            result["context"] = self.context
        return result


class InvalidInputError(PortalServiceError):
    """Raised when user input fails a business rule not covered by schema validation."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid input"


# =============================================================================
# AUTHENTICATION EXCEPTIONS
# =============================================================================

class AuthenticationError(PortalServiceError):
    """Raised when credentials or session tokens are rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password. Please try again."


class DuplicateAccountError(PortalServiceError):
    """Raised when signing up with an email that already has an account."""

    status_code = status.HTTP_409_CONFLICT
    detail = "This email is already registered. Please login instead."

    def __init__(self, email: Optional[str] = None, **kwargs: Any):
        super().__init__(email=email, **kwargs)


# =============================================================================
# PROFILE EXCEPTIONS
# =============================================================================

class ProfileNotFoundError(PortalServiceError):
    """Raised when a user's profile does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Profile not found"

    def __init__(self, user_id: Optional[str] = None, **kwargs: Any):
        super().__init__(user_id=user_id, **kwargs)


class OnboardingRequiredError(PortalServiceError):
    """Raised when a feature needs completed medical details."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Medical details must be completed before accessing the dashboard"

    def __init__(self, **kwargs: Any):
        super().__init__(redirect_to="/medical-onboarding", **kwargs)


# =============================================================================
# RECORD EXCEPTIONS
# =============================================================================

class AssessmentNotFoundError(PortalServiceError):
    """Raised when a mental health assessment is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Assessment not found"

    def __init__(self, assessment_id: Optional[str] = None, **kwargs: Any):
        detail = f"Assessment '{assessment_id}' not found" if assessment_id else self.detail
        super().__init__(detail=detail, assessment_id=assessment_id, **kwargs)


class MedicalRecordNotFoundError(PortalServiceError):
    """Raised when a medical record is not found."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Medical record not found"

    def __init__(self, record_id: Optional[str] = None, **kwargs: Any):
        detail = f"Medical record '{record_id}' not found" if record_id else self.detail
        super().__init__(detail=detail, record_id=record_id, **kwargs)


class RecordLimitReachedError(PortalServiceError):
    """Raised when a user already stores the maximum number of medical records."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Maximum number of medical records reached"

    def __init__(self, limit: int, **kwargs: Any):
        detail = (
            f"Maximum limit of {limit} medical records reached. "
            "Please delete some records to upload more."
        )
        super().__init__(detail=detail, limit=limit, **kwargs)


# =============================================================================
# UPLOAD EXCEPTIONS
# =============================================================================

class UploadError(PortalServiceError):
    """Base exception for upload-related errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Upload failed"


class InvalidFileTypeError(UploadError):
    """Raised when uploaded file has invalid type."""

    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    detail = "Unsupported file type"


class FileTooLargeError(UploadError):
    """Raised when uploaded file exceeds size limit."""

    status_code = status.HTTP_413_CONTENT_TOO_LARGE
    detail = "File size must be less than 2MB"


class FileTooSmallError(UploadError):
    """Raised when uploaded file is below the minimum size."""

    detail = "File size must be at least 5KB"


# =============================================================================
# RENDERING EXCEPTIONS
# =============================================================================

class ReportRenderError(PortalServiceError):
    """Raised when the PDF report cannot be produced."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Failed to generate the assessment report"


# =============================================================================
# EXTERNAL SERVICE EXCEPTIONS
# =============================================================================

class ExternalServiceError(PortalServiceError):
    """Raised when an external collaborator call fails."""

    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "External service error"


class RecordStoreError(ExternalServiceError):
    """Raised when a record store operation fails."""

    detail = "Record store operation failed"

    def __init__(self, operation: Optional[str] = None, table: Optional[str] = None, **kwargs: Any):
        detail = f"Record store error during {operation} on {table}" if operation and table else self.detail
        super().__init__(detail=detail, operation=operation, table=table, **kwargs)


class RecordConflictError(RecordStoreError):
    """Raised when an insert violates a uniqueness constraint."""

    status_code = status.HTTP_409_CONFLICT
    detail = "Record already exists"


class BlobStoreError(ExternalServiceError):
    """Raised when a blob store operation fails."""

    detail = "File storage operation failed"

    def __init__(self, operation: Optional[str] = None, bucket: Optional[str] = None, **kwargs: Any):
        detail = f"File storage error during {operation} in {bucket}" if operation and bucket else self.detail
        super().__init__(detail=detail, operation=operation, bucket=bucket, **kwargs)


class IdentityProviderError(ExternalServiceError):
    """Raised when the identity provider fails for reasons other than bad credentials."""

    detail = "Identity provider error"


# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================

async def portal_service_exception_handler(
    request: Request,
    exc: PortalServiceError
) -> JSONResponse:
    """
    Handle PortalServiceError exceptions and return consistent JSON responses.

    This handler logs the error and returns a standardized JSON error response.
    """
    logger.warning(
        f"PortalServiceError: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
            "context": exc.context
        }
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=headers,
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions with a generic error response.

    Logs the full exception for debugging but returns a safe error message,
    so a failing request never takes the process down.
    """
    logger.exception(
        f"Unhandled exception: {exc}",
        extra={
            "path": request.url.path,
            "method": request.method
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal server error occurred"}
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Call this function during app initialization to enable consistent
    error handling across all endpoints.

    Args:
        app: The FastAPI application instance.

    Example:
        app = FastAPI()
        setup_exception_handlers(app)
    """
    app.add_exception_handler(PortalServiceError, portal_service_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
