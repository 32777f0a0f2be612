"""
Pydantic schemas for uploaded medical records.
"""
from typing import Optional

from pydantic import BaseModel, Field


class MedicalRecordResponse(BaseModel):
    """Schema for a stored medical record."""
    id: str = Field(..., description="Record identifier")
    user_id: str
    file_name: str = Field(..., description="Original file name", examples=["blood_test.pdf"])
    file_url: str = Field(..., description="Public URL of the stored file")
    file_path: str = Field(..., description="Path of the file inside its storage bucket")
    file_type: str = Field(..., description="MIME type", examples=["application/pdf"])
    description: Optional[str] = None
    record_date: Optional[str] = Field(None, description="Date the record refers to (YYYY-MM-DD)")
    uploaded_at: str
