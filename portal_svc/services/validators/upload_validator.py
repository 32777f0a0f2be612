"""
Validation utilities for file uploads.

Avatars and medical records share the same size window (5 KB to 2 MB) but
accept different content types. Checks run in the order students see the
messages: size first, then type.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from fastapi import UploadFile

from core.exceptions import FileTooLargeError, FileTooSmallError, InvalidFileTypeError, UploadError

logger = logging.getLogger(__name__)

MIN_FILE_SIZE = 5 * 1024
MAX_FILE_SIZE = 2 * 1024 * 1024

MAX_MEDICAL_RECORDS = 15

AVATAR_TYPES: Dict[str, List[str]] = {
    "image/jpeg": ["jpg", "jpeg"],
    "image/png": ["png"],
    "image/webp": ["webp"],
}
AVATAR_TYPE_MESSAGE = "Only JPG, PNG, and WebP images are allowed"

MEDICAL_RECORD_TYPES: Dict[str, List[str]] = {
    "application/pdf": ["pdf"],
    "image/jpeg": ["jpg", "jpeg"],
    "image/png": ["png"],
    "application/msword": ["doc"],
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": ["docx"],
}
MEDICAL_RECORD_TYPE_MESSAGE = "Only PDF, JPG, PNG, DOC, and DOCX files are allowed"


def validate_file_present(file: Optional[UploadFile]) -> None:
    """
    Validate that a file is provided in the upload request.

    Raises:
        UploadError: If no file (or a nameless file) is provided.
    """
    if not file or not file.filename:
        logger.error("No file provided in upload request")
        raise UploadError(detail="No file provided")


def validate_file_size(file_size: int, min_size: int = MIN_FILE_SIZE, max_size: int = MAX_FILE_SIZE) -> None:
    """
    Validate that the file size is inside the allowed window.

    Raises:
        FileTooSmallError: Below min_size.
        FileTooLargeError: Above max_size.
    """
    if file_size < min_size:
        logger.error(f"File size {file_size} below minimum {min_size}")
        raise FileTooSmallError(size=file_size)

    if file_size > max_size:
        logger.error(f"File size {file_size} exceeds maximum {max_size}")
        raise FileTooLargeError(size=file_size)


def validate_content_type(content_type: Optional[str], allowed: Dict[str, List[str]], message: str) -> str:
    """
    Validate the declared content type against an allow-list.

    Returns:
        str: The validated content type.

    Raises:
        InvalidFileTypeError: If the type is missing or not allowed.
    """
    if not content_type or content_type not in allowed:
        logger.error(f"Invalid content type: {content_type}")
        raise InvalidFileTypeError(detail=message, content_type=content_type)
    return content_type


def file_extension(filename: str, content_type: str, allowed: Dict[str, List[str]]) -> str:
    """
    Extension used when naming the stored blob.

    A name without an extension gets the content type's canonical one. An
    extension that does not belong to the declared type is rejected, so a
    stored file is never served under a different type than was checked.

    Raises:
        InvalidFileTypeError: If the extension does not match the content type.
    """
    extensions = allowed[content_type]
    suffix = Path(filename or "").suffix.lower().lstrip(".")
    if not suffix:
        return extensions[0]
    if suffix not in extensions:
        logger.error(f"Extension .{suffix} does not match content type {content_type}")
        raise InvalidFileTypeError(
            detail="File extension does not match its content type",
            content_type=content_type,
            extension=suffix,
        )
    return suffix


def validate_upload(
    file: Optional[UploadFile],
    content: bytes,
    allowed: Dict[str, List[str]],
    type_message: str,
) -> Tuple[str, str]:
    """
    Run all upload checks on an already-read file.

    Returns:
        Tuple[str, str]: (content_type, extension without dot).
    """
    validate_file_present(file)
    validate_file_size(len(content))
    content_type = validate_content_type(file.content_type, allowed, type_message)
    return content_type, file_extension(file.filename, content_type, allowed)
