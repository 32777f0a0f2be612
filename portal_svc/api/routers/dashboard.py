"""
Dashboard router.

Students who have not completed medical onboarding get a 409 whose context
carries `redirect_to` so the client can send them to the onboarding form.
"""
from fastapi import APIRouter, Depends

from core.auth import get_current_user
from core.dependencies import get_dashboard_service
from models.user import SessionUser
from schemas import DashboardResponse
from services import DashboardService

router = APIRouter(
    prefix="/api/v1/dashboard",
    tags=["Dashboard"],
)


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Student dashboard",
    description="Profile, latest mental health score, recent assessments, medical records and health metrics."
)
async def get_dashboard(
    user: SessionUser = Depends(get_current_user),
    dashboard_service: DashboardService = Depends(get_dashboard_service)
):
    """
    Raises:
    - 404 Not Found: No profile (ProfileNotFoundError)
    - 409 Conflict: Medical onboarding not completed (OnboardingRequiredError)
    """
    return dashboard_service.get_dashboard(user)
