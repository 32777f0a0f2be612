"""
Service layer for sign-up, sign-in and sessions.

Architecture:
    API Layer (routers) → AuthService → IdentityGateway
                                      → ProfileRepository → RecordStore

Every successful sign-in (and a sign-up that issues a session right away)
makes sure the user has a profile row, so the rest of the portal can rely on
one existing.
"""
import logging
from typing import Optional

from core.exceptions import RecordConflictError
from core.middleware import get_metrics_collector
from models.profile import Profile
from models.user import AuthSession, SessionUser
from repositories import ProfileRepository
from schemas import SessionResponse, SignUpResponse, UserResponse
from services.identity_gateway import IdentityGateway

logger = logging.getLogger(__name__)

SIGNED_UP_MESSAGE = "Account created successfully."
CONFIRM_EMAIL_MESSAGE = "Account created. Please check your email to confirm your account before signing in."


def _user_response(user: SessionUser) -> UserResponse:
    return UserResponse(id=user.id, email=user.email, full_name=user.full_name)


def _session_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        token_type=session.token_type,
        user=_user_response(session.user),
    )


class AuthService:
    """Session management on top of the Identity Gateway."""

    def __init__(self, identity_gateway: IdentityGateway, profile_repository: ProfileRepository):
        """
        Initialize the auth service.

        Args:
            identity_gateway: Identity provider adapter.
            profile_repository: Used to create the profile on first sign-in.
        """
        self._identity = identity_gateway
        self._profiles = profile_repository

    def ensure_profile(self, user: SessionUser) -> Profile:
        """Return the user's profile, creating an empty one if it does not exist."""
        profile = self._profiles.get(user.id)
        if profile is not None:
            return profile

        try:
            return self._profiles.create(user.id, email=user.email, full_name=user.full_name)
        except RecordConflictError:
            # Created concurrently by another request
            profile = self._profiles.get(user.id)
            if profile is None:
                raise
            return profile

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> SignUpResponse:
        """
        Create an account.

        Raises:
            DuplicateAccountError: If the email is already registered.
        """
        logger.info("Sign-up requested")
        result = self._identity.sign_up(email, password, full_name)
        get_metrics_collector().record_event("user_signed_up")

        if result.session is None:
            return SignUpResponse(user=_user_response(result.user), message=CONFIRM_EMAIL_MESSAGE)

        self.ensure_profile(result.user)
        return SignUpResponse(
            user=_user_response(result.user),
            session=_session_response(result.session),
            message=SIGNED_UP_MESSAGE,
        )

    def sign_in(self, email: str, password: str) -> SessionResponse:
        """
        Sign in with email and password.

        Raises:
            AuthenticationError: On bad credentials.
        """
        session = self._identity.sign_in(email, password)
        self.ensure_profile(session.user)
        logger.info("User signed in", extra={"user_id": session.user.id})
        get_metrics_collector().record_event("user_signed_in")
        return _session_response(session)

    def sign_out(self, access_token: str) -> None:
        self._identity.sign_out(access_token)
        logger.info("User signed out")

    def current_user(self, access_token: str) -> Optional[SessionUser]:
        """Resolve a bearer token to its user, or None."""
        return self._identity.get_user(access_token)
