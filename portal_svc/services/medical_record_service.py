"""
Service layer for uploaded medical records.

Architecture:
    API Layer (routers) → MedicalRecordService → BlobStore (file)
                                               → MedicalRecordRepository (metadata)
"""
import logging
from typing import List, Optional

from fastapi import UploadFile

from core.datetime_utils import millis_now
from core.exceptions import MedicalRecordNotFoundError, RecordLimitReachedError
from core.middleware import get_metrics_collector
from models.user import SessionUser
from repositories import MedicalRecordRepository
from schemas import MedicalRecordResponse
from services.blob_store import BlobStore
from services.validators import (
    MAX_MEDICAL_RECORDS,
    MEDICAL_RECORD_TYPE_MESSAGE,
    MEDICAL_RECORD_TYPES,
    validate_upload,
)

logger = logging.getLogger(__name__)

MEDICAL_RECORDS_BUCKET = "medical_records"
MEDICAL_RECORDS_FOLDER = "medical_records"


class MedicalRecordService:
    """Upload, list and delete a student's medical records."""

    def __init__(
        self,
        medical_record_repository: MedicalRecordRepository,
        blob_store: BlobStore,
        max_records: int = MAX_MEDICAL_RECORDS,
    ):
        self._repo = medical_record_repository
        self._blobs = blob_store
        self.max_records = max_records

    async def upload(
        self,
        user: SessionUser,
        file: UploadFile,
        description: Optional[str] = None,
        record_date: Optional[str] = None,
    ) -> MedicalRecordResponse:
        """
        Store a medical record file and its metadata.

        Raises:
            FileTooSmallError, FileTooLargeError, InvalidFileTypeError: On validation failure.
            RecordLimitReachedError: If the user already has max_records records.
            BlobStoreError, RecordStoreError: If storage fails.
        """
        content = await file.read()
        content_type, extension = validate_upload(file, content, MEDICAL_RECORD_TYPES, MEDICAL_RECORD_TYPE_MESSAGE)

        if self._repo.count_for_user(user.id) >= self.max_records:
            logger.warning("Medical record limit reached", extra={"user_id": user.id, "limit": self.max_records})
            raise RecordLimitReachedError(limit=self.max_records)

        path = f"{MEDICAL_RECORDS_FOLDER}/{user.id}-{millis_now()}.{extension}"
        public_url = self._blobs.upload(MEDICAL_RECORDS_BUCKET, path, content, content_type)

        row = self._repo.add(
            user_id=user.id,
            file_name=file.filename,
            file_url=public_url,
            file_path=path,
            file_type=content_type,
            description=description,
            record_date=record_date,
        )
        logger.info(
            "Medical record uploaded",
            extra={"user_id": user.id, "record_id": row["id"], "size": len(content)}
        )
        get_metrics_collector().record_event("medical_record_uploaded")
        return MedicalRecordResponse(**row)

    def list_records(self, user: SessionUser) -> List[MedicalRecordResponse]:
        """The user's medical records, newest upload first."""
        return [MedicalRecordResponse(**row) for row in self._repo.list_for_user(user.id)]

    def delete(self, user: SessionUser, record_id: str) -> None:
        """
        Delete one of the user's records: the stored file first, then the row.

        Raises:
            MedicalRecordNotFoundError: If it does not exist or belongs to someone else.
        """
        row = self._repo.get_for_user(user.id, record_id)
        if row is None:
            raise MedicalRecordNotFoundError(record_id=record_id)

        self._blobs.remove(MEDICAL_RECORDS_BUCKET, row["file_path"])
        self._repo.delete(record_id)
        logger.info("Medical record deleted", extra={"user_id": user.id, "record_id": record_id})
