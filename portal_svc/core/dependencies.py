"""
FastAPI Dependency Injection configuration for the Student Health Portal API.

This module wires the three collaborators (record store, blob store and
identity gateway) to the configured backend and builds repositories and
services on top of them.

Architecture Flow:
    API Layer (Routers)
         ↓ Depends()
    Service Layer (Business Logic)
         ↓ Injected
    Repository Layer (Data Access)
         ↓ Injected
    RecordStore (SQLite or Supabase) / BlobStore / IdentityGateway

Usage in Routers:
    from core.dependencies import get_bmi_service

    @router.post("/bmi")
    async def calculate(
        request: BmiRequest,
        bmi_service: BmiService = Depends(get_bmi_service)
    ):
        return bmi_service.calculate(request.height, request.weight)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_record_store] = lambda: test_store
"""
import logging
from typing import Optional

from core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# BACKEND SINGLETONS
# =============================================================================

# Lazy imports avoid circular dependencies with repositories and services
_supabase_client = None
_record_store: Optional["RecordStore"] = None
_blob_store: Optional["BlobStore"] = None
_identity_gateway: Optional["IdentityGateway"] = None


def get_supabase_client():
    """
    Get the shared Supabase client (only used with PORTAL_SVC_BACKEND=supabase).

    Returns:
        supabase.Client: Client created from SUPABASE_URL and SUPABASE_KEY.
    """
    global _supabase_client

    if _supabase_client is None:
        from supabase import create_client

        logger.info("Creating Supabase client", extra={"supabase_url": settings.supabase_url})
        _supabase_client = create_client(settings.supabase_url, settings.supabase_key)

    return _supabase_client


def get_record_store() -> "RecordStore":
    """
    Get the record store instance (singleton).

    SQLite is initialized with WAL mode and the portal schema; Supabase
    tables are expected to exist already.
    """
    global _record_store

    if _record_store is None:
        if settings.uses_supabase:
            from repositories.supabase_store import SupabaseRecordStore

            _record_store = SupabaseRecordStore(client=get_supabase_client())
            logger.info("Record store initialized (supabase)")
        else:
            from repositories.base import SQLiteRecordStore

            logger.info(f"Initializing record store: {settings.database_path}")
            _record_store = SQLiteRecordStore(
                db_path=settings.database_path,
                busy_timeout=settings.portal_svc_db_busy_timeout
            )

    return _record_store


def get_blob_store() -> "BlobStore":
    """Get the blob store for avatars and medical record files (singleton)."""
    global _blob_store

    if _blob_store is None:
        if settings.uses_supabase:
            from services.blob_store import SupabaseBlobStore

            _blob_store = SupabaseBlobStore(client=get_supabase_client())
        else:
            from services.blob_store import LocalBlobStore

            _blob_store = LocalBlobStore(
                root_dir=settings.portal_svc_upload_dir,
                base_url=settings.portal_svc_public_base_url
            )

    return _blob_store


def get_identity_gateway() -> "IdentityGateway":
    """Get the identity gateway (singleton)."""
    global _identity_gateway

    if _identity_gateway is None:
        if settings.uses_supabase:
            from services.identity_gateway import SupabaseIdentityGateway

            _identity_gateway = SupabaseIdentityGateway(client=get_supabase_client())
        else:
            from services.identity_gateway import LocalIdentityGateway

            _identity_gateway = LocalIdentityGateway(
                store=get_record_store(),
                session_ttl_minutes=settings.portal_svc_session_ttl_minutes
            )

    return _identity_gateway


def reset_backends() -> None:
    """
    Reset all backend singletons (for testing only).

    This allows tests to inject fresh stores.
    """
    global _supabase_client, _record_store, _blob_store, _identity_gateway
    _supabase_client = None
    _record_store = None
    _blob_store = None
    _identity_gateway = None


# =============================================================================
# REPOSITORY DEPENDENCIES
# =============================================================================

def get_profile_repository() -> "ProfileRepository":
    """Get a ProfileRepository with the record store injected."""
    from repositories import ProfileRepository

    return ProfileRepository(store=get_record_store())


def get_bmi_repository() -> "BmiRepository":
    from repositories import BmiRepository

    return BmiRepository(store=get_record_store())


def get_assessment_repository() -> "AssessmentRepository":
    from repositories import AssessmentRepository

    return AssessmentRepository(store=get_record_store())


def get_medical_record_repository() -> "MedicalRecordRepository":
    from repositories import MedicalRecordRepository

    return MedicalRecordRepository(store=get_record_store())


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_auth_service() -> "AuthService":
    """
    Get an AuthService with the identity gateway and profile repository injected.

    Returns:
        AuthService: Service for sign-up, sign-in and session lookup.
    """
    from services import AuthService

    return AuthService(
        identity_gateway=get_identity_gateway(),
        profile_repository=get_profile_repository()
    )


def get_profile_service() -> "ProfileService":
    from services import ProfileService

    return ProfileService(
        profile_repository=get_profile_repository(),
        blob_store=get_blob_store()
    )


def get_bmi_service() -> "BmiService":
    from services import BmiService

    return BmiService(bmi_repository=get_bmi_repository())


def get_assessment_service() -> "AssessmentService":
    """
    Get an AssessmentService.

    The profile repository is injected too; it supplies the display name of
    stored assessments and the patient block of PDF reports.
    """
    from services import AssessmentService

    return AssessmentService(
        assessment_repository=get_assessment_repository(),
        profile_repository=get_profile_repository()
    )


def get_medical_record_service() -> "MedicalRecordService":
    from services import MedicalRecordService

    return MedicalRecordService(
        medical_record_repository=get_medical_record_repository(),
        blob_store=get_blob_store()
    )


def get_dashboard_service() -> "DashboardService":
    from services import DashboardService

    return DashboardService(
        profile_repository=get_profile_repository(),
        assessment_repository=get_assessment_repository(),
        medical_record_repository=get_medical_record_repository()
    )


def get_assistant_service() -> "AssistantService":
    """AssistantService is stateless and serves canned content only."""
    from services import AssistantService

    return AssistantService()


# =============================================================================
# DEPENDENCY OVERRIDE HELPERS (FOR TESTING)
# =============================================================================

class DependencyOverrides:
    """
    Context manager for temporarily overriding dependencies in tests.

    Usage:
        with DependencyOverrides(app) as overrides:
            overrides.set(get_record_store, lambda: fake_store)
            # Run tests with overridden dependency
        # Dependencies restored after context exits
    """

    def __init__(self, app):
        self.app = app
        self._original_overrides = {}

    def __enter__(self):
        self._original_overrides = self.app.dependency_overrides.copy()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.app.dependency_overrides = self._original_overrides

    def set(self, dependency, override):
        """Set a dependency override."""
        self.app.dependency_overrides[dependency] = override

    def clear(self):
        """Clear all overrides."""
        self.app.dependency_overrides = self._original_overrides.copy()
