"""
Tests for profile, medical onboarding and avatar endpoints.
"""
import os

from conftest import ONBOARDING_FORM, PNG_BYTES


def test_get_profile(client, auth_headers):
    response = client.get("/api/v1/profile", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "student@cuk.ac.in"
    assert data["allergies"] == []
    assert data["avatar_url"] is None


def test_update_profile_changes_only_given_fields(client, auth_headers):
    response = client.patch(
        "/api/v1/profile",
        json={"course": "M.Sc. Computer Science", "age": 22},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["course"] == "M.Sc. Computer Science"
    assert data["age"] == 22
    assert data["full_name"] == "Priya Sharma"
    assert data["updated_at"] is not None


def test_update_profile_rejects_unknown_fields(client, auth_headers):
    response = client.patch(
        "/api/v1/profile",
        json={"medical_details_completed": True},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_update_profile_rejects_bad_age(client, auth_headers):
    response = client.patch("/api/v1/profile", json={"age": 0}, headers=auth_headers)
    assert response.status_code == 422


def test_onboarding_completes_profile(client, auth_headers):
    response = client.put("/api/v1/profile/onboarding", json=ONBOARDING_FORM, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["medical_details_completed"] is True
    assert data["blood_group"] == "O+"
    assert data["allergies"] == ["Seasonal"]
    assert data["height"] == 170
    assert data["stress_level"] == 4


def test_onboarding_rejects_out_of_range_stress(client, auth_headers):
    form = dict(ONBOARDING_FORM, stress_level=11)
    response = client.put("/api/v1/profile/onboarding", json=form, headers=auth_headers)
    assert response.status_code == 422


def test_onboarding_requires_blood_group(client, auth_headers):
    form = {k: v for k, v in ONBOARDING_FORM.items() if k != "blood_group"}
    response = client.put("/api/v1/profile/onboarding", json=form, headers=auth_headers)
    assert response.status_code == 422


class TestAvatar:
    """Avatar upload and replacement."""

    def upload(self, client, headers, content=PNG_BYTES, filename="me.png", content_type="image/png"):
        return client.post(
            "/api/v1/profile/avatar",
            files={"file": (filename, content, content_type)},
            headers=headers,
        )

    def test_upload_sets_avatar_url(self, client, auth_headers, blob_store):
        response = self.upload(client, auth_headers)
        assert response.status_code == 200
        url = response.json()["avatar_url"]
        assert url.startswith("http://testserver/files/avatars/avatars/")
        assert url.endswith(".png")

        stored = blob_store.root_dir / "avatars" / "avatars" / url.rsplit("/", 1)[-1]
        assert stored.read_bytes() == PNG_BYTES

    def test_replacing_avatar_removes_previous_file(self, client, auth_headers, blob_store):
        first = self.upload(client, auth_headers).json()["avatar_url"]
        first_file = blob_store.root_dir / "avatars" / "avatars" / first.rsplit("/", 1)[-1]
        assert first_file.exists()

        second = self.upload(client, auth_headers, filename="me.webp", content_type="image/webp")
        assert second.status_code == 200
        assert not first_file.exists()
        assert len(os.listdir(blob_store.root_dir / "avatars" / "avatars")) == 1

    def test_too_small_file_rejected(self, client, auth_headers):
        response = self.upload(client, auth_headers, content=b"tiny")
        assert response.status_code == 400

    def test_too_large_file_rejected(self, client, auth_headers):
        response = self.upload(client, auth_headers, content=b"0" * (2 * 1024 * 1024 + 1))
        assert response.status_code == 413

    def test_wrong_type_rejected(self, client, auth_headers):
        response = self.upload(client, auth_headers, filename="me.gif", content_type="image/gif")
        assert response.status_code == 415
        assert response.json()["detail"] == "Only JPG, PNG, and WebP images are allowed"

    def test_extension_must_match_declared_type(self, client, auth_headers, blob_store):
        response = self.upload(client, auth_headers, filename="me.svg", content_type="image/png")
        assert response.status_code == 415
        assert not (blob_store.root_dir / "avatars").exists()
        profile = client.get("/api/v1/profile", headers=auth_headers).json()
        assert profile["avatar_url"] is None
