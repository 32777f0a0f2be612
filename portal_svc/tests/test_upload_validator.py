"""
Tests for upload validation utilities.
"""
from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from core.exceptions import FileTooLargeError, FileTooSmallError, InvalidFileTypeError, UploadError
from services.validators import (
    AVATAR_TYPE_MESSAGE,
    AVATAR_TYPES,
    MAX_FILE_SIZE,
    MEDICAL_RECORD_TYPE_MESSAGE,
    MEDICAL_RECORD_TYPES,
    MIN_FILE_SIZE,
    file_extension,
    validate_file_size,
    validate_upload,
)


def make_upload(filename, content_type):
    return UploadFile(
        file=BytesIO(b""),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_size_window_is_inclusive():
    validate_file_size(MIN_FILE_SIZE)
    validate_file_size(MAX_FILE_SIZE)


def test_size_below_minimum():
    with pytest.raises(FileTooSmallError):
        validate_file_size(MIN_FILE_SIZE - 1)


def test_size_above_maximum():
    with pytest.raises(FileTooLargeError):
        validate_file_size(MAX_FILE_SIZE + 1)


def test_size_checked_before_type():
    upload = make_upload("x.gif", "image/gif")
    with pytest.raises(FileTooSmallError):
        validate_upload(upload, b"x", AVATAR_TYPES, AVATAR_TYPE_MESSAGE)


def test_missing_file():
    with pytest.raises(UploadError):
        validate_upload(None, b"", AVATAR_TYPES, AVATAR_TYPE_MESSAGE)


def test_type_not_allowed():
    upload = make_upload("x.pdf", "application/pdf")
    with pytest.raises(InvalidFileTypeError) as exc_info:
        validate_upload(upload, b"0" * MIN_FILE_SIZE, AVATAR_TYPES, AVATAR_TYPE_MESSAGE)
    assert exc_info.value.detail == AVATAR_TYPE_MESSAGE
    assert exc_info.value.status_code == 415


def test_valid_upload_returns_type_and_extension():
    upload = make_upload("Report.PDF", "application/pdf")
    result = validate_upload(upload, b"0" * MIN_FILE_SIZE, MEDICAL_RECORD_TYPES, MEDICAL_RECORD_TYPE_MESSAGE)
    assert result == ("application/pdf", "pdf")


def test_extension_falls_back_to_content_type():
    assert file_extension("scan", "image/jpeg", MEDICAL_RECORD_TYPES) == "jpg"


def test_extension_from_another_type_rejected():
    with pytest.raises(InvalidFileTypeError) as exc_info:
        file_extension("report.html", "application/pdf", MEDICAL_RECORD_TYPES)
    assert exc_info.value.context == {"content_type": "application/pdf", "extension": "html"}


def test_alternate_extension_of_same_type_kept():
    assert file_extension("photo.JPEG", "image/jpeg", AVATAR_TYPES) == "jpeg"
