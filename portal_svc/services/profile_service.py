"""
Service layer for profiles, medical onboarding and avatars.

Architecture:
    API Layer (routers) → ProfileService → ProfileRepository → RecordStore
                                         → BlobStore (avatars)
"""
import logging

from fastapi import UploadFile

from core.datetime_utils import millis_now
from core.exceptions import ProfileNotFoundError
from core.middleware import get_metrics_collector
from models.profile import Profile
from models.user import SessionUser
from repositories import ProfileRepository
from schemas import OnboardingRequest, ProfileResponse, ProfileUpdate
from services.blob_store import BlobStore, path_from_public_url
from services.validators import AVATAR_TYPE_MESSAGE, AVATAR_TYPES, validate_upload

logger = logging.getLogger(__name__)

AVATAR_BUCKET = "avatars"
AVATAR_FOLDER = "avatars"


class ProfileService:
    """
    Service layer for profile operations.

    All methods act on the profile of the SessionUser passed in; there is no
    way to read or change another user's profile.
    """

    def __init__(self, profile_repository: ProfileRepository, blob_store: BlobStore):
        self._repo = profile_repository
        self._blobs = blob_store

    def _require(self, user: SessionUser) -> Profile:
        profile = self._repo.get(user.id)
        if profile is None:
            raise ProfileNotFoundError(user_id=user.id)
        return profile

    def get_profile(self, user: SessionUser) -> ProfileResponse:
        """
        Get the caller's profile.

        Raises:
            ProfileNotFoundError: If the profile has not been created yet.
        """
        return ProfileResponse(**self._require(user).to_dict())

    def update_profile(self, user: SessionUser, update: ProfileUpdate) -> ProfileResponse:
        """Apply the fields present in `update` to the caller's profile."""
        self._require(user)
        patch = update.model_dump(exclude_unset=True, mode="json")
        profile = self._repo.update(user.id, patch)
        if profile is None:
            raise ProfileNotFoundError(user_id=user.id)

        logger.info("Profile updated", extra={"user_id": user.id, "fields": sorted(patch)})
        return ProfileResponse(**profile.to_dict())

    def complete_onboarding(self, user: SessionUser, details: OnboardingRequest) -> ProfileResponse:
        """
        Store the medical onboarding answers and unlock the dashboard.

        Sets medical_details_completed=True in the same update.
        """
        self._require(user)
        patch = details.model_dump(mode="json")
        patch["medical_details_completed"] = True

        profile = self._repo.update(user.id, patch)
        if profile is None:
            raise ProfileNotFoundError(user_id=user.id)

        logger.info("Medical onboarding completed", extra={"user_id": user.id})
        get_metrics_collector().record_event("onboarding_completed")
        return ProfileResponse(**profile.to_dict())

    async def upload_avatar(self, user: SessionUser, file: UploadFile) -> ProfileResponse:
        """
        Replace the caller's avatar.

        Steps:
        1. Validate size (5 KB to 2 MB) and type (JPEG, PNG, WebP)
        2. Remove the previous avatar file, if any
        3. Store the new file as avatars/<user id>-<millis>.<ext>
        4. Point the profile's avatar_url at the new file

        Raises:
            FileTooSmallError, FileTooLargeError, InvalidFileTypeError: On validation failure.
            BlobStoreError: If storage fails.
        """
        profile = self._require(user)
        content = await file.read()
        content_type, extension = validate_upload(file, content, AVATAR_TYPES, AVATAR_TYPE_MESSAGE)

        if profile.avatar_url:
            old_path = path_from_public_url(profile.avatar_url, AVATAR_FOLDER)
            self._blobs.remove(AVATAR_BUCKET, old_path)
            logger.info("Previous avatar removed", extra={"user_id": user.id, "path": old_path})

        path = f"{AVATAR_FOLDER}/{user.id}-{millis_now()}.{extension}"
        public_url = self._blobs.upload(AVATAR_BUCKET, path, content, content_type)

        updated = self._repo.update(user.id, {"avatar_url": public_url})
        if updated is None:
            raise ProfileNotFoundError(user_id=user.id)

        logger.info("Avatar updated", extra={"user_id": user.id, "path": path})
        return ProfileResponse(**updated.to_dict())
