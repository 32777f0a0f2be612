"""
Shared pytest fixtures for API tests.

This module provides test fixtures that work with the dependency injection
architecture. Key patterns:

1. Store Isolation: Each test gets a fresh temporary SQLite record store and upload dir
2. DI Override: Use app.dependency_overrides to inject test dependencies
3. Local Backends: Accounts and sessions use the local identity gateway

Fixture Hierarchy:
    temp_store / blob_store → identity_gateway, repositories → services → test_app → client
"""
import os

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Force the local backends before any config import
os.environ["PORTAL_SVC_BACKEND"] = "local"
os.environ.pop("SUPABASE_URL", None)

from core import dependencies as deps
from core.exceptions import setup_exception_handlers
from repositories import (
    AssessmentRepository,
    BmiRepository,
    MedicalRecordRepository,
    ProfileRepository,
    SQLiteRecordStore,
)
from services import (
    AssessmentService,
    AssistantService,
    AuthService,
    BmiService,
    DashboardService,
    MedicalRecordService,
    ProfileService,
)
from services.blob_store import LocalBlobStore
from services.identity_gateway import LocalIdentityGateway

TEST_PASSWORD = "s3cret-pass"

# Smallest valid upload is 5 KB
PDF_BYTES = b"%PDF-1.4\n" + b"0" * (6 * 1024)
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"0" * (6 * 1024)

ONBOARDING_FORM = {
    "height": 170,
    "weight": 70,
    "blood_group": "O+",
    "allergies": ["Seasonal"],
    "chronic_conditions": ["None"],
    "medications": "",
    "exercise_frequency": "2-3 times a week",
    "sleep_hours": 7,
    "stress_level": 4,
    "diet_type": "Vegetarian",
}


@pytest.fixture
def temp_store(tmp_path):
    """
    Create a temporary record store for testing.

    Each test gets a fresh SQLite file under pytest's tmp_path.
    """
    return SQLiteRecordStore(db_path=str(tmp_path / "test.db"))


@pytest.fixture
def blob_store(tmp_path):
    """Filesystem blob store rooted in a temp dir."""
    return LocalBlobStore(root_dir=str(tmp_path / "uploads"), base_url="http://testserver/files")


@pytest.fixture
def identity_gateway(temp_store):
    return LocalIdentityGateway(store=temp_store, session_ttl_minutes=60)


@pytest.fixture
def profile_repo(temp_store):
    return ProfileRepository(store=temp_store)


@pytest.fixture
def bmi_repo(temp_store):
    return BmiRepository(store=temp_store)


@pytest.fixture
def assessment_repo(temp_store):
    return AssessmentRepository(store=temp_store)


@pytest.fixture
def medical_record_repo(temp_store):
    return MedicalRecordRepository(store=temp_store)


@pytest.fixture
def auth_service(identity_gateway, profile_repo):
    return AuthService(identity_gateway=identity_gateway, profile_repository=profile_repo)


@pytest.fixture
def profile_service(profile_repo, blob_store):
    return ProfileService(profile_repository=profile_repo, blob_store=blob_store)


@pytest.fixture
def bmi_service(bmi_repo):
    return BmiService(bmi_repository=bmi_repo)


@pytest.fixture
def assessment_service(assessment_repo, profile_repo):
    return AssessmentService(assessment_repository=assessment_repo, profile_repository=profile_repo)


@pytest.fixture
def medical_record_service(medical_record_repo, blob_store):
    return MedicalRecordService(medical_record_repository=medical_record_repo, blob_store=blob_store)


@pytest.fixture
def dashboard_service(profile_repo, assessment_repo, medical_record_repo):
    return DashboardService(
        profile_repository=profile_repo,
        assessment_repository=assessment_repo,
        medical_record_repository=medical_record_repo,
    )


@pytest.fixture
def test_app(
    temp_store,
    blob_store,
    identity_gateway,
    auth_service,
    profile_service,
    bmi_service,
    assessment_service,
    medical_record_service,
    dashboard_service,
):
    """
    Create a FastAPI test app with dependency overrides.

    Uses the real routers and the real bearer-token auth; only the backends
    and services are swapped for test instances.
    """
    from api.routers import (
        assessments_router,
        assistant_router,
        auth_router,
        bmi_router,
        dashboard_router,
        health_router,
        medical_records_router,
        profile_router,
        resources_router,
    )

    app = FastAPI(title="Student Health Portal API Test")

    # Register exception handlers (same as production)
    setup_exception_handlers(app)

    app.dependency_overrides[deps.get_record_store] = lambda: temp_store
    app.dependency_overrides[deps.get_blob_store] = lambda: blob_store
    app.dependency_overrides[deps.get_identity_gateway] = lambda: identity_gateway
    app.dependency_overrides[deps.get_auth_service] = lambda: auth_service
    app.dependency_overrides[deps.get_profile_service] = lambda: profile_service
    app.dependency_overrides[deps.get_bmi_service] = lambda: bmi_service
    app.dependency_overrides[deps.get_assessment_service] = lambda: assessment_service
    app.dependency_overrides[deps.get_medical_record_service] = lambda: medical_record_service
    app.dependency_overrides[deps.get_dashboard_service] = lambda: dashboard_service
    app.dependency_overrides[deps.get_assistant_service] = AssistantService

    for router in (
        health_router,
        auth_router,
        profile_router,
        bmi_router,
        assessments_router,
        medical_records_router,
        dashboard_router,
        resources_router,
        assistant_router,
    ):
        app.include_router(router)

    yield app

    # Cleanup: Clear dependency overrides
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the API."""
    return TestClient(test_app)


def sign_up(client, email="student@cuk.ac.in", full_name="Priya Sharma"):
    """Create an account through the API and return bearer headers for it."""
    response = client.post(
        "/api/v1/auth/sign-up",
        json={"email": email, "password": TEST_PASSWORD, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    token = response.json()["session"]["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    """Bearer headers for a freshly signed-up student."""
    return sign_up(client)


@pytest.fixture
def onboarded_headers(client, auth_headers):
    """Bearer headers for a student who completed medical onboarding."""
    response = client.put("/api/v1/profile/onboarding", json=ONBOARDING_FORM, headers=auth_headers)
    assert response.status_code == 200, response.text
    return auth_headers
