"""
Tests for the mental health assessment endpoints.
"""
import pytest

BEST_ANSWERS = {"1": 1, "2": 8, "3": "Never", "4": "Excellent", "5": "Daily", "6": "false", "7": "Exams"}
WORST_ANSWERS = {"1": 10, "2": 8, "3": "Always", "4": "Poor", "5": "Never", "6": True}


def submit(client, answers, headers=None):
    return client.post("/api/v1/assessments", json={"answers": answers}, headers=headers or {})


# =============================================================================
# QUESTIONNAIRE
# =============================================================================

def test_questions_in_display_order(client):
    response = client.get("/api/v1/assessments/questions")
    assert response.status_code == 200
    questions = response.json()
    assert [q["id"] for q in questions] == [1, 2, 3, 4, 5, 6, 7]
    assert [q["kind"] for q in questions] == ["slider", "slider", "mcq", "mcq", "mcq", "boolean", "text"]
    assert questions[1]["min"] == 1 and questions[1]["max"] == 12 and questions[1]["step"] == 0.5
    assert questions[3]["options"] == ["Excellent", "Good", "Fair", "Poor"]


# =============================================================================
# SUBMISSION
# =============================================================================

def test_anonymous_submission_is_scored_but_not_saved(client, temp_store):
    response = submit(client, BEST_ANSWERS)
    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 50
    assert data["status"] == "Fair Mental Health - Some Attention Needed"
    assert data["saved"] is False
    assert data["assessment"] is None
    assert temp_store.select("mental_health_assessments") == []


def test_signed_in_submission_is_saved(client, auth_headers):
    response = submit(client, WORST_ANSWERS, auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["score"] == 12
    assert data["saved"] is True

    stored = data["assessment"]
    assert stored["name"] == "Priya Sharma"
    assert stored["email"] == "student@cuk.ac.in"
    assert stored["status"] == "Immediate Attention Recommended"
    assert len(stored["recommendations"]) == 4


def test_stressors_text_is_stored(client, auth_headers):
    data = submit(client, BEST_ANSWERS, auth_headers).json()
    assert data["assessment"]["stressors"] == "Exams"


def test_empty_submission_uses_defaults(client):
    response = submit(client, {})
    assert response.status_code == 200
    assert response.json()["score"] == 30


@pytest.mark.parametrize("answers", [
    {"99": 3},
    {"abc": 3},
    {"1": 11},
    {"1": "high"},
    {"1": True},
    {"2": 7.25},
    {"3": "Constantly"},
    {"6": "maybe"},
    {"7": 12},
])
def test_invalid_answers_return_422(client, answers):
    assert submit(client, answers).status_code == 422


def test_half_hour_sleep_step_accepted(client):
    assert submit(client, {"2": 6.5}).status_code == 200


# =============================================================================
# HISTORY AND REPORTS
# =============================================================================

def test_history_newest_first(client, auth_headers):
    first = submit(client, BEST_ANSWERS, auth_headers).json()["assessment"]["id"]
    second = submit(client, WORST_ANSWERS, auth_headers).json()["assessment"]["id"]

    response = client.get("/api/v1/assessments", headers=auth_headers)
    assert response.status_code == 200
    assert [a["id"] for a in response.json()] == [second, first]


def test_get_single_assessment(client, auth_headers):
    assessment_id = submit(client, BEST_ANSWERS, auth_headers).json()["assessment"]["id"]
    response = client.get(f"/api/v1/assessments/{assessment_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["score"] == 50


def test_other_users_assessment_is_not_found(client, auth_headers):
    from conftest import sign_up

    assessment_id = submit(client, BEST_ANSWERS, auth_headers).json()["assessment"]["id"]
    other = sign_up(client, email="other@cuk.ac.in", full_name="Other Student")

    assert client.get(f"/api/v1/assessments/{assessment_id}", headers=other).status_code == 404
    assert client.get(f"/api/v1/assessments/{assessment_id}/report", headers=other).status_code == 404


def test_report_download(client, auth_headers):
    assessment_id = submit(client, WORST_ANSWERS, auth_headers).json()["assessment"]["id"]

    response = client.get(f"/api/v1/assessments/{assessment_id}/report", headers=auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")
    assert "attachment" in response.headers["content-disposition"]
    assert "VitaliaAegis_Mental_Health_Report_" in response.headers["content-disposition"]


def test_unknown_assessment_returns_404(client, auth_headers):
    assert client.get("/api/v1/assessments/missing", headers=auth_headers).status_code == 404
