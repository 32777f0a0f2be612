"""
Medical records router - upload, list and delete record files.

All endpoints require a bearer token. Files are stored in the blob store;
metadata rows in the record store.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from core.auth import get_current_user
from core.dependencies import get_medical_record_service
from models.user import SessionUser
from schemas import MedicalRecordResponse
from services import MedicalRecordService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/medical-records",
    tags=["Medical Records"],
    dependencies=[Depends(get_current_user)],
)


@router.get(
    "",
    response_model=List[MedicalRecordResponse],
    summary="List my medical records",
    description="Newest upload first."
)
async def list_medical_records(
    user: SessionUser = Depends(get_current_user),
    record_service: MedicalRecordService = Depends(get_medical_record_service)
):
    return record_service.list_records(user)


@router.post(
    "",
    response_model=MedicalRecordResponse,
    status_code=201,
    summary="Upload a medical record",
    description="PDF, JPG, PNG, DOC or DOCX between 5 KB and 2 MB. At most 15 records per student."
)
async def upload_medical_record(
    file: UploadFile = File(..., description="Medical record file"),
    description: Optional[str] = Form(None, max_length=500, description="What the document is"),
    record_date: Optional[str] = Form(None, description="Date on the document (YYYY-MM-DD)"),
    user: SessionUser = Depends(get_current_user),
    record_service: MedicalRecordService = Depends(get_medical_record_service)
):
    """
    Upload a medical record.

    Raises:
    - 400 Bad Request: No file, or a file smaller than 5 KB
    - 409 Conflict: The 15-record limit is reached (RecordLimitReachedError)
    - 413 Content Too Large: File larger than 2 MB
    - 415 Unsupported Media Type: Not an allowed document type
    """
    return await record_service.upload(user, file, description=description, record_date=record_date)


@router.delete(
    "/{record_id}",
    status_code=204,
    summary="Delete a medical record",
    description="Remove the stored file and its metadata."
)
async def delete_medical_record(
    record_id: str,
    user: SessionUser = Depends(get_current_user),
    record_service: MedicalRecordService = Depends(get_medical_record_service)
):
    record_service.delete(user, record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
