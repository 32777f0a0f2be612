"""
Validation utilities for services.
"""
from services.validators.upload_validator import (
    AVATAR_TYPE_MESSAGE,
    AVATAR_TYPES,
    MAX_FILE_SIZE,
    MAX_MEDICAL_RECORDS,
    MEDICAL_RECORD_TYPE_MESSAGE,
    MEDICAL_RECORD_TYPES,
    MIN_FILE_SIZE,
    file_extension,
    validate_content_type,
    validate_file_present,
    validate_file_size,
    validate_upload,
)

__all__ = [
    "AVATAR_TYPE_MESSAGE",
    "AVATAR_TYPES",
    "MAX_FILE_SIZE",
    "MAX_MEDICAL_RECORDS",
    "MEDICAL_RECORD_TYPE_MESSAGE",
    "MEDICAL_RECORD_TYPES",
    "MIN_FILE_SIZE",
    "file_extension",
    "validate_content_type",
    "validate_file_present",
    "validate_file_size",
    "validate_upload",
]
