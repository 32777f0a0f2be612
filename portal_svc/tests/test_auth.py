"""
Tests for bearer-token authentication and the /api/v1/auth endpoints.
"""
from conftest import TEST_PASSWORD, sign_up


class TestSignUp:
    """Account creation."""

    def test_sign_up_returns_session_and_creates_profile(self, client):
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"email": "New.Student@CUK.ac.in", "password": TEST_PASSWORD, "full_name": "New Student"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "new.student@cuk.ac.in"
        assert data["session"]["token_type"] == "bearer"

        headers = {"Authorization": f"Bearer {data['session']['access_token']}"}
        profile = client.get("/api/v1/profile", headers=headers)
        assert profile.status_code == 200
        assert profile.json()["full_name"] == "New Student"
        assert profile.json()["medical_details_completed"] is False

    def test_duplicate_email_returns_409(self, client):
        sign_up(client)
        response = client.post(
            "/api/v1/auth/sign-up",
            json={"email": "student@cuk.ac.in", "password": "another-pass"},
        )
        assert response.status_code == 409

    def test_short_password_returns_422(self, client):
        response = client.post("/api/v1/auth/sign-up", json={"email": "a@b.co", "password": "123"})
        assert response.status_code == 422

    def test_malformed_email_returns_422(self, client):
        response = client.post("/api/v1/auth/sign-up", json={"email": "not-an-email", "password": TEST_PASSWORD})
        assert response.status_code == 422


class TestSignIn:
    """Email/password sign-in."""

    def test_sign_in_success(self, client):
        sign_up(client)
        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "student@cuk.ac.in", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["access_token"]
        assert data["user"]["email"] == "student@cuk.ac.in"

    def test_wrong_password_returns_401(self, client):
        sign_up(client)
        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "student@cuk.ac.in", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password. Please try again."
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_unknown_email_returns_401(self, client):
        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "nobody@cuk.ac.in", "password": TEST_PASSWORD},
        )
        assert response.status_code == 401

    def test_sign_in_recreates_missing_profile(self, client, temp_store):
        sign_up(client)
        profile = temp_store.select_one("profiles", {"email": "student@cuk.ac.in"})
        temp_store.delete("profiles", profile["id"])

        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "student@cuk.ac.in", "password": TEST_PASSWORD},
        )
        assert response.status_code == 200
        assert temp_store.select_one("profiles", {"id": profile["id"]}) is not None


class TestSession:
    """Token lookup and sign-out."""

    def test_session_returns_current_user(self, client, auth_headers):
        response = client.get("/api/v1/auth/session", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["email"] == "student@cuk.ac.in"
        assert response.json()["full_name"] == "Priya Sharma"

    def test_missing_token_returns_401(self, client):
        response = client.get("/api/v1/auth/session")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_invalid_token_returns_401(self, client):
        response = client.get("/api/v1/auth/session", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_sign_out_invalidates_token(self, client, auth_headers):
        response = client.post("/api/v1/auth/sign-out", headers=auth_headers)
        assert response.status_code == 204
        assert client.get("/api/v1/auth/session", headers=auth_headers).status_code == 401

    def test_protected_endpoints_require_auth(self, client):
        for method, url in [
            ("get", "/api/v1/profile"),
            ("get", "/api/v1/dashboard"),
            ("get", "/api/v1/assessments"),
            ("get", "/api/v1/medical-records"),
            ("delete", "/api/v1/medical-records/abc"),
        ]:
            assert getattr(client, method)(url).status_code == 401, url
