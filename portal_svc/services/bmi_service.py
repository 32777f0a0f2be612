"""
Service layer for BMI calculations and history.
"""
import logging
from typing import List, Optional

from models.user import SessionUser
from repositories import BmiRepository
from schemas import BmiRecordResponse, BmiResponse
from services.bmi import calculate_bmi

logger = logging.getLogger(__name__)


class BmiService:
    """Calculates BMI and keeps history for signed-in students."""

    def __init__(self, bmi_repository: BmiRepository):
        self._repo = bmi_repository

    def calculate(self, height: float, weight: float, user: Optional[SessionUser] = None) -> BmiResponse:
        """
        Calculate BMI, storing the result only when a user is signed in.

        Args:
            height: Height in cm.
            weight: Weight in kg.
            user: The signed-in user, or None for anonymous use.
        """
        result = calculate_bmi(height, weight)

        if user is None:
            return BmiResponse(bmi=result.bmi, category=result.category, recommendation=result.recommendation)

        row = self._repo.add(user.id, result.bmi, result.category, height, weight)
        logger.info(
            "BMI record stored",
            extra={"user_id": user.id, "bmi": result.bmi, "category": result.category}
        )
        return BmiResponse(
            bmi=result.bmi,
            category=result.category,
            recommendation=result.recommendation,
            saved=True,
            record=BmiRecordResponse(**row),
        )

    def history(self, user: SessionUser, limit: Optional[int] = None) -> List[BmiRecordResponse]:
        """The user's BMI records, newest first."""
        return [BmiRecordResponse(**row) for row in self._repo.list_for_user(user.id, limit=limit)]
