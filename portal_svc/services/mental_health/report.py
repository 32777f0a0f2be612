"""
PDF report for a stored mental health assessment.

The document is an A4 page built with ReportLab platypus entirely in memory;
callers get the finished bytes or a ReportRenderError, never a partial file.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Any, Mapping, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.datetime_utils import format_for_display, millis_now, parse_datetime_safe, utc_now
from core.exceptions import ReportRenderError
from models.profile import Profile

logger = logging.getLogger(__name__)

BRAND = "VitaliaAegis"
TITLE = "Mental Health Assessment Report"
SUBTITLE = f"Generated by {BRAND} AI Health System"
REFERRED_BY = f"{BRAND} Health System"
DISCLAIMER = (
    f"This report is generated based on your responses to the {BRAND} mental health "
    "assessment. It is not a clinical diagnosis. Please consult with a mental health "
    "professional for a comprehensive evaluation."
)

ACCENT = colors.HexColor("#2563EB")
PDF_MEDIA_TYPE = "application/pdf"


@dataclass(frozen=True)
class RenderedReport:
    filename: str
    content: bytes
    media_type: str = PDF_MEDIA_TYPE


def report_filename(generated_at: datetime) -> str:
    return f"{BRAND}_Mental_Health_Report_{generated_at.strftime('%Y-%m-%d')}.pdf"


def report_id() -> str:
    return f"MH-{str(millis_now())[-6:]}"


def _styles():
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="MH_Title", fontName="Helvetica-Bold", fontSize=18, leading=22,
                              spaceAfter=4, textColor=ACCENT))
    styles.add(ParagraphStyle(name="MH_Subtitle", fontName="Helvetica", fontSize=10, leading=12,
                              textColor=colors.grey))
    styles.add(ParagraphStyle(name="MH_Heading", fontName="Helvetica-Bold", fontSize=12, leading=14,
                              spaceBefore=8, spaceAfter=4, textColor=ACCENT))
    styles.add(ParagraphStyle(name="MH_Body", fontName="Helvetica", fontSize=10, leading=13))
    styles.add(ParagraphStyle(name="MH_Score", fontName="Helvetica-Bold", fontSize=26, leading=30))
    styles.add(ParagraphStyle(name="MH_Small", fontName="Helvetica-Oblique", fontSize=8, leading=10,
                              textColor=colors.grey))
    return styles


def render(
    assessment: Mapping[str, Any],
    profile: Optional[Profile] = None,
    generated_at: Optional[datetime] = None,
) -> RenderedReport:
    """
    Render an assessment record as a one-page PDF.

    Args:
        assessment: Stored assessment row (score, status, recommendations,
            lifestyle, name, email, created_at).
        profile: The owner's profile, used for name and age when available.
        generated_at: Generation timestamp; defaults to now (UTC).

    Returns:
        RenderedReport with the PDF bytes and download filename.

    Raises:
        ReportRenderError: If the document cannot be built.
    """
    generated_at = generated_at or utc_now()

    name = (profile.full_name if profile else None) or assessment.get("name") or assessment.get("email") or "N/A"
    age = profile.age if profile and profile.age is not None else "N/A"
    assessed_at = parse_datetime_safe(assessment.get("created_at")) or generated_at
    recommendations = list(assessment.get("recommendations") or [])
    lifestyle = list(assessment.get("lifestyle") or [])

    try:
        buf = BytesIO()
        doc = SimpleDocTemplate(
            buf,
            pagesize=A4,
            leftMargin=18 * mm,
            rightMargin=18 * mm,
            topMargin=18 * mm,
            bottomMargin=18 * mm,
            title=TITLE,
            author=BRAND,
        )
        styles = _styles()

        flow = [
            Paragraph(TITLE, styles["MH_Title"]),
            Paragraph(SUBTITLE, styles["MH_Subtitle"]),
            Spacer(1, 4),
            Paragraph(
                f"Date: {format_for_display(generated_at)} &nbsp;&nbsp; Report ID: {report_id()}",
                styles["MH_Subtitle"],
            ),
            Spacer(1, 10),
        ]

        patient = Table(
            [
                ["Patient Name:", str(name), "Age:", str(age)],
                ["Assessment Date:", format_for_display(assessed_at), "Referred By:", REFERRED_BY],
            ],
            colWidths=[32 * mm, 55 * mm, 25 * mm, 62 * mm],
        )
        patient.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
            ("FONTNAME", (2, 0), (2, -1), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#F3F4F6")),
            ("BOX", (0, 0), (-1, -1), 0.25, colors.lightgrey),
            ("LEFTPADDING", (0, 0), (-1, -1), 6),
        ]))
        flow += [patient, Spacer(1, 12)]

        flow += [
            Paragraph("Assessment Score", styles["MH_Heading"]),
            Paragraph(f"{int(assessment['score'])}/100", styles["MH_Score"]),
            Paragraph(f"Status: {escape(str(assessment['status']))}", styles["MH_Body"]),
            Spacer(1, 8),
            Paragraph("Recommendations", styles["MH_Heading"]),
        ]
        for i, item in enumerate(recommendations, start=1):
            flow.append(Paragraph(f"{i}. {escape(str(item))}", styles["MH_Body"]))

        if lifestyle:
            flow.append(Paragraph("Lifestyle Adjustments", styles["MH_Heading"]))
            for item in lifestyle:
                flow.append(Paragraph(escape(str(item)), styles["MH_Body"], bulletText="•"))

        flow += [Spacer(1, 16), Paragraph(DISCLAIMER, styles["MH_Small"])]

        doc.build(flow)
        content = buf.getvalue()
    except Exception as e:
        logger.exception(
            "Failed to render assessment report",
            extra={"assessment_id": assessment.get("id"), "error": str(e)}
        )
        raise ReportRenderError() from e

    logger.info(
        "Assessment report rendered",
        extra={"assessment_id": assessment.get("id"), "size": len(content)}
    )
    return RenderedReport(filename=report_filename(generated_at), content=content)
