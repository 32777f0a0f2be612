"""
Repository for uploaded medical record metadata.

The files themselves live in the Blob Store; this table keeps their URL,
blob path and descriptive fields.
"""
import logging
from typing import Any, Dict, List, Optional

from core.datetime_utils import format_iso, utc_now
from repositories.base import RecordStore

logger = logging.getLogger(__name__)

TABLE = "medical_records"


class MedicalRecordRepository:
    """Data access for the `medical_records` table."""

    def __init__(self, store: RecordStore):
        self._store = store

    def add(
        self,
        user_id: str,
        file_name: str,
        file_url: str,
        file_path: str,
        file_type: str,
        description: Optional[str] = None,
        record_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        return self._store.insert(TABLE, {
            "user_id": user_id,
            "file_name": file_name,
            "file_url": file_url,
            "file_path": file_path,
            "file_type": file_type,
            "description": description,
            "record_date": record_date,
            "uploaded_at": format_iso(utc_now()),
        })

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        """Get a user's medical records, newest upload first."""
        return self._store.select(
            TABLE,
            filters={"user_id": user_id},
            order_by="uploaded_at",
            descending=True,
        )

    def count_for_user(self, user_id: str) -> int:
        return len(self._store.select(TABLE, filters={"user_id": user_id}))

    def get_for_user(self, user_id: str, record_id: str) -> Optional[Dict[str, Any]]:
        """Get one record if it belongs to user_id."""
        return self._store.select_one(TABLE, {"id": record_id, "user_id": user_id})

    def delete(self, record_id: str) -> bool:
        removed = self._store.delete(TABLE, record_id)
        if removed:
            logger.info("Medical record row deleted", extra={"record_id": record_id})
        return removed
