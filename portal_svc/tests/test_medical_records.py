"""
Tests for medical record upload, listing and deletion.
"""
import pytest

from conftest import PDF_BYTES, sign_up

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def upload(client, headers, content=PDF_BYTES, filename="blood-test.pdf", content_type="application/pdf", **form):
    return client.post(
        "/api/v1/medical-records",
        files={"file": (filename, content, content_type)},
        data=form,
        headers=headers,
    )


def test_upload_pdf(client, auth_headers, blob_store):
    response = upload(client, auth_headers, description="Blood test", record_date="2026-02-14")
    assert response.status_code == 201
    data = response.json()
    assert data["file_name"] == "blood-test.pdf"
    assert data["file_type"] == "application/pdf"
    assert data["description"] == "Blood test"
    assert data["record_date"] == "2026-02-14"
    assert data["file_path"].startswith("medical_records/")
    assert data["file_path"].endswith(".pdf")
    assert (blob_store.root_dir / "medical_records" / data["file_path"]).read_bytes() == PDF_BYTES


@pytest.mark.parametrize("filename,content_type", [
    ("scan.jpg", "image/jpeg"),
    ("scan.png", "image/png"),
    ("letter.doc", "application/msword"),
    ("letter.docx", DOCX),
])
def test_allowed_types(client, auth_headers, filename, content_type):
    assert upload(client, auth_headers, filename=filename, content_type=content_type).status_code == 201


def test_disallowed_type_returns_415(client, auth_headers):
    response = upload(client, auth_headers, filename="notes.txt", content_type="text/plain")
    assert response.status_code == 415
    assert response.json()["detail"] == "Only PDF, JPG, PNG, DOC, and DOCX files are allowed"


def test_too_small_returns_400(client, auth_headers):
    assert upload(client, auth_headers, content=b"%PDF-1.4").status_code == 400


def test_too_large_returns_413(client, auth_headers):
    assert upload(client, auth_headers, content=b"0" * (2 * 1024 * 1024 + 1)).status_code == 413


def test_missing_file_returns_422(client, auth_headers):
    response = client.post("/api/v1/medical-records", data={"description": "x"}, headers=auth_headers)
    assert response.status_code == 422


def test_limit_of_fifteen_records(client, auth_headers, medical_record_repo):
    for _ in range(15):
        assert upload(client, auth_headers).status_code == 201

    response = upload(client, auth_headers)
    assert response.status_code == 409
    assert response.json()["context"]["limit"] == 15
    assert len(client.get("/api/v1/medical-records", headers=auth_headers).json()) == 15


def test_list_only_own_records_newest_first(client, auth_headers):
    first = upload(client, auth_headers, filename="first.pdf").json()["id"]
    second = upload(client, auth_headers, filename="second.pdf").json()["id"]
    other = sign_up(client, email="other@cuk.ac.in")
    upload(client, other, filename="theirs.pdf")

    records = client.get("/api/v1/medical-records", headers=auth_headers).json()
    assert [r["id"] for r in records] == [second, first]


def test_delete_removes_file_and_row(client, auth_headers, blob_store):
    record = upload(client, auth_headers).json()
    stored = blob_store.root_dir / "medical_records" / record["file_path"]
    assert stored.exists()

    response = client.delete(f"/api/v1/medical-records/{record['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert not stored.exists()
    assert client.get("/api/v1/medical-records", headers=auth_headers).json() == []


def test_delete_other_users_record_returns_404(client, auth_headers):
    record_id = upload(client, auth_headers).json()["id"]
    other = sign_up(client, email="other@cuk.ac.in")
    assert client.delete(f"/api/v1/medical-records/{record_id}", headers=other).status_code == 404
    assert len(client.get("/api/v1/medical-records", headers=auth_headers).json()) == 1


def test_delete_unknown_record_returns_404(client, auth_headers):
    assert client.delete("/api/v1/medical-records/missing", headers=auth_headers).status_code == 404


def test_extension_must_match_declared_type(client, auth_headers, blob_store):
    response = upload(
        client, auth_headers,
        content=b"<script>alert(1)</script>" + PDF_BYTES,
        filename="report.html",
        content_type="application/pdf",
    )
    assert response.status_code == 415
    assert response.json()["context"]["extension"] == "html"
    assert client.get("/api/v1/medical-records", headers=auth_headers).json() == []
    assert not (blob_store.root_dir / "medical_records").exists()


def test_name_without_extension_gets_canonical_one(client, auth_headers):
    response = upload(client, auth_headers, filename="blood-test")
    assert response.status_code == 201
    assert response.json()["file_path"].endswith(".pdf")
