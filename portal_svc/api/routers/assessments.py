"""
Assessments router - the mental health questionnaire, results and PDF reports.

Architecture:
    HTTP Request → Router (this file) → AssessmentService → scoring engine
                                                          → AssessmentRepository
                                                          → report renderer

Submissions are accepted anonymously; only signed-in callers get a stored
assessment (and therefore history and reports).
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from core.auth import get_current_user, get_optional_user
from core.dependencies import get_assessment_service
from models.user import SessionUser
from schemas import (
    AssessmentResponse,
    AssessmentResultResponse,
    AssessmentSubmission,
    QuestionResponse,
)
from services import AssessmentService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/assessments",
    tags=["Mental Health Assessments"],
)


@router.get(
    "/questions",
    response_model=List[QuestionResponse],
    summary="Questionnaire",
    description="The seven questions in display order."
)
async def list_questions(
    assessment_service: AssessmentService = Depends(get_assessment_service)
):
    return assessment_service.questions()


@router.post(
    "",
    response_model=AssessmentResultResponse,
    summary="Submit answers",
    description="Score a questionnaire. Unanswered questions take default values. "
                "The result is stored only when the caller is signed in."
)
async def submit_assessment(
    submission: AssessmentSubmission,
    user: Optional[SessionUser] = Depends(get_optional_user),
    assessment_service: AssessmentService = Depends(get_assessment_service)
):
    """
    Submit questionnaire answers.

    - **answers**: object keyed by question id; values must match the question kind

    Raises:
    - 422 Unprocessable Entity: Unknown question id, or an answer out of range or not among the options
    """
    return assessment_service.submit(submission, user=user)


@router.get(
    "",
    response_model=List[AssessmentResponse],
    summary="Assessment history",
    description="The caller's stored assessments, newest first."
)
async def list_assessments(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of records to return"),
    user: SessionUser = Depends(get_current_user),
    assessment_service: AssessmentService = Depends(get_assessment_service)
):
    return assessment_service.history(user, limit=limit)


@router.get(
    "/{assessment_id}",
    response_model=AssessmentResponse,
    summary="Get one assessment"
)
async def get_assessment(
    assessment_id: str,
    user: SessionUser = Depends(get_current_user),
    assessment_service: AssessmentService = Depends(get_assessment_service)
):
    return assessment_service.get_assessment(user, assessment_id)


@router.get(
    "/{assessment_id}/report",
    summary="Download the PDF report",
    description="Render the assessment as a PDF document.",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_report(
    assessment_id: str,
    user: SessionUser = Depends(get_current_user),
    assessment_service: AssessmentService = Depends(get_assessment_service)
):
    """
    Download an assessment report.

    Raises:
    - 404 Not Found: If the assessment does not exist or belongs to someone else
    - 500 Internal Server Error: If the PDF cannot be rendered (ReportRenderError)
    """
    report = assessment_service.report(user, assessment_id)
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )
