"""
Profile router - the signed-in student's profile, medical onboarding and avatar.

All endpoints require a bearer token and only ever touch the caller's own
profile.

Architecture:
    HTTP Request → Router (this file) → ProfileService → ProfileRepository / BlobStore
"""
import logging

from fastapi import APIRouter, Depends, File, UploadFile

from core.auth import get_current_user
from core.dependencies import get_profile_service
from models.user import SessionUser
from schemas import OnboardingRequest, ProfileResponse, ProfileUpdate
from services import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/profile",
    tags=["Profile"],
    dependencies=[Depends(get_current_user)],
)


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Get my profile"
)
async def get_profile(
    user: SessionUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    Get the caller's profile.

    Raises:
    - 404 Not Found: If no profile exists yet (ProfileNotFoundError)
    """
    return profile_service.get_profile(user)


@router.patch(
    "",
    response_model=ProfileResponse,
    summary="Update my profile",
    description="Partial update; only the fields present in the body are changed."
)
async def update_profile(
    update: ProfileUpdate,
    user: SessionUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    return profile_service.update_profile(user, update)


@router.put(
    "/onboarding",
    response_model=ProfileResponse,
    summary="Complete medical onboarding",
    description="Store the medical details form and unlock the dashboard."
)
async def complete_onboarding(
    details: OnboardingRequest,
    user: SessionUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    return profile_service.complete_onboarding(user, details)


@router.post(
    "/avatar",
    response_model=ProfileResponse,
    summary="Upload a profile picture",
    description="JPG, PNG or WebP between 5 KB and 2 MB. Replaces any previous avatar."
)
async def upload_avatar(
    file: UploadFile = File(..., description="Avatar image (JPG, PNG or WebP)"),
    user: SessionUser = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    Upload a new avatar.

    Raises:
    - 400 Bad Request: File smaller than 5 KB (FileTooSmallError)
    - 413 Content Too Large: File larger than 2 MB (FileTooLargeError)
    - 415 Unsupported Media Type: Not a JPG, PNG or WebP image (InvalidFileTypeError)
    """
    return await profile_service.upload_avatar(user, file)
