"""
BMI router - calculator and history.

The calculator works anonymously; results are only saved to the history
when the request carries a valid bearer token.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.auth import get_current_user, get_optional_user
from core.dependencies import get_bmi_service
from models.user import SessionUser
from schemas import BmiRecordResponse, BmiRequest, BmiResponse
from services import BmiService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/bmi",
    tags=["BMI"],
)


@router.post(
    "",
    response_model=BmiResponse,
    summary="Calculate BMI",
    description="BMI from height (cm) and weight (kg), rounded to one decimal, with its category and advice."
)
async def calculate_bmi(
    request: BmiRequest,
    user: Optional[SessionUser] = Depends(get_optional_user),
    bmi_service: BmiService = Depends(get_bmi_service)
):
    return bmi_service.calculate(request.height, request.weight, user=user)


@router.get(
    "",
    response_model=List[BmiRecordResponse],
    summary="BMI history",
    description="The caller's saved BMI results, newest first."
)
async def bmi_history(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum number of records to return"),
    user: SessionUser = Depends(get_current_user),
    bmi_service: BmiService = Depends(get_bmi_service)
):
    return bmi_service.history(user, limit=limit)
