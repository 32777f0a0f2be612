"""
Tests for the PDF report renderer.
"""
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from core.exceptions import ReportRenderError
from models.profile import Profile
from services.mental_health import render
from services.mental_health.report import report_filename, report_id

ASSESSMENT = {
    "id": "a1",
    "user_id": "u1",
    "name": "Priya Sharma",
    "email": "student@cuk.ac.in",
    "score": 34,
    "status": "Immediate Attention Recommended",
    "recommendations": ["Talk to a trusted friend or family member", "Focus on basic self-care routines"],
    "lifestyle": ["Improve sleep hygiene by maintaining a consistent sleep schedule"],
    "stressors": "Exams & <deadlines>",
    "created_at": "2026-03-01T10:00:00.000000Z",
}


def test_render_produces_pdf():
    report = render(ASSESSMENT, Profile(id="u1", full_name="Priya Sharma", age=20))
    assert report.content.startswith(b"%PDF")
    assert report.media_type == "application/pdf"


def test_render_without_profile_or_lifestyle():
    report = render(dict(ASSESSMENT, lifestyle=[], name=None))
    assert report.content.startswith(b"%PDF")


def test_filename_uses_generation_date():
    generated_at = datetime(2026, 4, 2, 9, 30, tzinfo=timezone.utc)
    report = render(ASSESSMENT, generated_at=generated_at)
    assert report.filename == "VitaliaAegis_Mental_Health_Report_2026-04-02.pdf"
    assert report_filename(generated_at) == report.filename


def test_report_id_format():
    rid = report_id()
    assert rid.startswith("MH-")
    assert len(rid) == 9


def test_render_failure_raises_report_error():
    with patch("services.mental_health.report.SimpleDocTemplate.build", side_effect=RuntimeError("boom")):
        with pytest.raises(ReportRenderError):
            render(ASSESSMENT)
