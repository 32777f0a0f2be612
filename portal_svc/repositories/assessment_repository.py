"""
Repository for mental health assessment records.

Assessment records are append-only: this repository exposes insert and read
operations but no update or delete.
"""
import logging
from typing import Any, Dict, List, Optional

from core.datetime_utils import format_iso, utc_now
from repositories.base import RecordStore

logger = logging.getLogger(__name__)

TABLE = "mental_health_assessments"


class AssessmentRepository:
    """Data access for the `mental_health_assessments` table."""

    def __init__(self, store: RecordStore):
        self._store = store

    def add(
        self,
        user_id: str,
        name: str,
        email: str,
        score: int,
        status: str,
        recommendations: List[str],
        lifestyle: List[str],
        stressors: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Store one assessment result and return the created row."""
        row = self._store.insert(TABLE, {
            "user_id": user_id,
            "name": name,
            "email": email,
            "score": score,
            "status": status,
            "recommendations": list(recommendations),
            "lifestyle": list(lifestyle),
            "stressors": stressors,
            "created_at": format_iso(utc_now()),
        })
        logger.info(
            "Assessment stored",
            extra={"user_id": user_id, "assessment_id": row["id"], "score": score}
        )
        return row

    def list_for_user(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get a user's assessments, newest first."""
        return self._store.select(
            TABLE,
            filters={"user_id": user_id},
            order_by="created_at",
            descending=True,
            limit=limit,
        )

    def get_for_user(self, user_id: str, assessment_id: str) -> Optional[Dict[str, Any]]:
        """Get one assessment if it belongs to user_id."""
        return self._store.select_one(TABLE, {"id": assessment_id, "user_id": user_id})
