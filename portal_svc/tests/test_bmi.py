"""
Tests for the BMI helper and the /api/v1/bmi endpoints.
"""
import pytest

from services.bmi import calculate_bmi, category_for, mental_status, physical_status


# =============================================================================
# HELPER
# =============================================================================

def test_normal_weight():
    result = calculate_bmi(170, 70)
    assert result.bmi == 24.2
    assert result.category == "Normal weight"


def test_obese():
    result = calculate_bmi(160, 90)
    assert result.bmi == 35.2
    assert result.category == "Obese"


@pytest.mark.parametrize("bmi,category", [
    (18.4, "Underweight"),
    (18.5, "Normal weight"),
    (24.99, "Normal weight"),
    (25.0, "Overweight"),
    (29.9, "Overweight"),
    (30.0, "Obese"),
])
def test_category_bands(bmi, category):
    assert category_for(bmi) == category


def test_category_uses_unrounded_value():
    # 24.96 rounds to 25.0 but is still Normal weight
    height = 100.0
    result = calculate_bmi(height, 24.96)
    assert result.bmi == 25.0
    assert result.category == "Normal weight"


@pytest.mark.parametrize("height,weight", [(0, 70), (170, 0), (-170, 70)])
def test_non_positive_input_raises(height, weight):
    with pytest.raises(ValueError):
        calculate_bmi(height, weight)


def test_dashboard_labels():
    assert physical_status(None) is None
    assert physical_status(22.0) == "Normal"
    assert physical_status(31.0) == "Obese"
    assert mental_status(85) == "Excellent"
    assert mental_status(50) == "Fair"
    assert mental_status(0) == "Needs Attention"


# =============================================================================
# API
# =============================================================================

def test_anonymous_calculation_is_not_saved(client):
    response = client.post("/api/v1/bmi", json={"height": 170, "weight": 70})
    assert response.status_code == 200
    data = response.json()
    assert data["bmi"] == 24.2
    assert data["category"] == "Normal weight"
    assert data["recommendation"]
    assert data["saved"] is False
    assert data["record"] is None


def test_signed_in_calculation_is_saved(client, auth_headers):
    response = client.post("/api/v1/bmi", json={"height": 160, "weight": 90}, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["saved"] is True
    assert data["record"]["bmi"] == 35.2

    history = client.get("/api/v1/bmi", headers=auth_headers)
    assert history.status_code == 200
    assert [r["bmi"] for r in history.json()] == [35.2]


def test_history_newest_first(client, auth_headers):
    client.post("/api/v1/bmi", json={"height": 170, "weight": 70}, headers=auth_headers)
    client.post("/api/v1/bmi", json={"height": 160, "weight": 90}, headers=auth_headers)

    records = client.get("/api/v1/bmi", headers=auth_headers).json()
    assert [r["category"] for r in records] == ["Obese", "Normal weight"]


def test_stale_token_still_calculates_without_saving(client):
    response = client.post(
        "/api/v1/bmi",
        json={"height": 170, "weight": 70},
        headers={"Authorization": "Bearer not-a-real-token"},
    )
    assert response.status_code == 200
    assert response.json()["saved"] is False


def test_history_requires_auth(client):
    assert client.get("/api/v1/bmi").status_code == 401


@pytest.mark.parametrize("body", [
    {"height": 0, "weight": 70},
    {"height": 170, "weight": -1},
    {"height": 170},
])
def test_invalid_input_returns_422(client, body):
    assert client.post("/api/v1/bmi", json=body).status_code == 422
