"""
Repository for student profiles.

Architecture:
    ProfileRepository is the data access layer for the `profiles` table.
    It should be injected via core.dependencies.get_profile_repository().
"""
import logging
from typing import Any, Dict, Optional

from core.datetime_utils import format_iso, utc_now
from models.profile import Profile
from repositories.base import RecordStore

logger = logging.getLogger(__name__)

TABLE = "profiles"


class ProfileRepository:
    """
    Repository for profile reads and writes.

    Profiles share their id with the identity provider's user id and are
    never deleted.
    """

    def __init__(self, store: RecordStore):
        """
        Initialize the profile repository.

        Args:
            store: RecordStore instance for data access.
                Injected via core.dependencies.get_profile_repository().
        """
        self._store = store

    def get(self, user_id: str) -> Optional[Profile]:
        """Get a profile by user id, or None if it does not exist yet."""
        row = self._store.select_one(TABLE, {"id": user_id})
        return Profile.from_dict(row) if row else None

    def create(self, user_id: str, email: str, full_name: Optional[str] = None) -> Profile:
        """
        Create an empty profile for a new user.

        The profile starts with medical_details_completed=False, which keeps
        the dashboard locked until onboarding is done.
        """
        now = format_iso(utc_now())
        row = self._store.insert(TABLE, {
            "id": user_id,
            "email": email,
            "full_name": full_name,
            "medical_details_completed": False,
            "created_at": now,
            "updated_at": now,
        })
        logger.info("Profile created", extra={"user_id": user_id})
        return Profile.from_dict(row)

    def update(self, user_id: str, patch: Dict[str, Any]) -> Optional[Profile]:
        """
        Apply a partial update and bump updated_at.

        Returns:
            The updated Profile, or None if no profile exists for user_id.
        """
        values = dict(patch)
        values["updated_at"] = format_iso(utc_now())
        row = self._store.update(TABLE, user_id, values)
        return Profile.from_dict(row) if row else None
