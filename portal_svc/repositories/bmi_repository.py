"""
Repository for BMI calculation history.
"""
import logging
from typing import Any, Dict, List, Optional

from core.datetime_utils import format_iso, utc_now
from repositories.base import RecordStore

logger = logging.getLogger(__name__)

TABLE = "bmi_records"


class BmiRepository:
    """Data access for the `bmi_records` table."""

    def __init__(self, store: RecordStore):
        self._store = store

    def add(self, user_id: str, bmi: float, category: str, height: float, weight: float) -> Dict[str, Any]:
        return self._store.insert(TABLE, {
            "user_id": user_id,
            "bmi": bmi,
            "category": category,
            "height": height,
            "weight": weight,
            "calculated_at": format_iso(utc_now()),
        })

    def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get a user's BMI records, newest first."""
        return self._store.select(
            TABLE,
            filters={"user_id": user_id},
            order_by="calculated_at",
            descending=True,
            limit=limit,
        )
