"""
Identity Gateway adapters: sign-up, sign-in, sign-out and token lookup.

    SupabaseIdentityGateway  - Supabase Auth (email + password)
    LocalIdentityGateway     - accounts and sessions kept in the Record Store,
                               used for local development and tests

Both translate provider failures into the portal's exception hierarchy:
bad credentials -> AuthenticationError, existing email ->
DuplicateAccountError, anything else -> IdentityProviderError.
"""
import hashlib
import logging
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from passlib.context import CryptContext
from supabase import Client

from core.datetime_utils import format_iso, parse_datetime, utc_now
from core.exceptions import (
    AuthenticationError,
    DuplicateAccountError,
    IdentityProviderError,
    RecordConflictError,
)
from models.user import AuthSession, SessionUser
from repositories.base import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignUpResult:
    """A created account; `session` is None when the provider wants email confirmation first."""

    user: SessionUser
    session: Optional[AuthSession] = None


class IdentityGateway(ABC):
    """Email/password identity provider."""

    @abstractmethod
    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> SignUpResult:
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> AuthSession:
        ...

    @abstractmethod
    def sign_out(self, access_token: str) -> None:
        ...

    @abstractmethod
    def get_user(self, access_token: str) -> Optional[SessionUser]:
        """Resolve a token to its user, or None if the token is invalid or expired."""


# =============================================================================
# SUPABASE
# =============================================================================

def _session_user_from_supabase(user) -> SessionUser:
    metadata = getattr(user, "user_metadata", None) or {}
    return SessionUser(id=str(user.id), email=user.email or "", full_name=metadata.get("full_name"))


class SupabaseIdentityGateway(IdentityGateway):
    """Supabase Auth through supabase-py's `client.auth`."""

    def __init__(self, client: Client):
        self._client = client

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> SignUpResult:
        try:
            response = self._client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"full_name": full_name}} if full_name else {},
            })
        except Exception as e:
            if "already registered" in str(e).lower():
                raise DuplicateAccountError(email=email) from e
            logger.error("Supabase sign-up failed", extra={"error": str(e)})
            raise IdentityProviderError(detail=str(e)) from e

        if response.user is None:
            raise IdentityProviderError(detail="Sign-up did not return a user")

        user = _session_user_from_supabase(response.user)
        session = None
        if response.session is not None:
            session = AuthSession(access_token=response.session.access_token, user=user)
        return SignUpResult(user=user, session=session)

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self._client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            if "invalid login credentials" in str(e).lower():
                raise AuthenticationError() from e
            logger.error("Supabase sign-in failed", extra={"error": str(e)})
            raise IdentityProviderError(detail=str(e)) from e

        if response.session is None or response.user is None:
            raise AuthenticationError()

        return AuthSession(
            access_token=response.session.access_token,
            user=_session_user_from_supabase(response.user),
        )

    def sign_out(self, access_token: str) -> None:
        try:
            self._client.auth.admin.sign_out(access_token)
        except Exception as e:
            logger.error("Supabase sign-out failed", extra={"error": str(e)})
            raise IdentityProviderError(detail="Failed to sign out. Please try again.") from e

    def get_user(self, access_token: str) -> Optional[SessionUser]:
        try:
            response = self._client.auth.get_user(access_token)
        except Exception as e:
            logger.info("Supabase rejected access token", extra={"error": str(e)})
            return None
        if response is None or response.user is None:
            return None
        return _session_user_from_supabase(response.user)


# =============================================================================
# LOCAL
# =============================================================================

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def _token_key(access_token: str) -> str:
    """Sessions are stored under a digest of the token, never the token itself."""
    return hashlib.sha256(access_token.encode("utf-8")).hexdigest()


class LocalIdentityGateway(IdentityGateway):
    """
    Accounts in the `users` table, sessions in the `sessions` table.

    Passwords are hashed with passlib (pbkdf2_sha256); access tokens are
    opaque random strings valid for `session_ttl_minutes`.
    """

    def __init__(self, store: RecordStore, session_ttl_minutes: int = 60 * 24 * 7):
        self._store = store
        self.session_ttl = timedelta(minutes=session_ttl_minutes)

    def _prune_expired(self, now: datetime) -> int:
        """Delete every session past its expiry; returns how many were removed."""
        expired = [
            row["id"] for row in self._store.select("sessions")
            if parse_datetime(row["expires_at"]) <= now
        ]
        for session_id in expired:
            self._store.delete("sessions", session_id)
        if expired:
            logger.info("Pruned expired sessions", extra={"count": len(expired)})
        return len(expired)

    def _issue_session(self, user: SessionUser) -> AuthSession:
        token = secrets.token_urlsafe(32)
        now = utc_now()
        self._prune_expired(now)
        self._store.insert("sessions", {
            "id": _token_key(token),
            "user_id": user.id,
            "expires_at": format_iso(now + self.session_ttl),
            "created_at": format_iso(now),
        })
        return AuthSession(access_token=token, user=user)

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> SignUpResult:
        email = email.strip().lower()
        if self._store.select_one("users", {"email": email}):
            raise DuplicateAccountError(email=email)

        try:
            row = self._store.insert("users", {
                "email": email,
                "password_hash": pwd_context.hash(password),
                "full_name": full_name,
                "created_at": format_iso(utc_now()),
            })
        except RecordConflictError as e:
            raise DuplicateAccountError(email=email) from e

        user = SessionUser.from_dict(row)
        logger.info("Local account created", extra={"user_id": user.id})
        return SignUpResult(user=user, session=self._issue_session(user))

    def sign_in(self, email: str, password: str) -> AuthSession:
        row = self._store.select_one("users", {"email": email.strip().lower()})
        if row is None or not pwd_context.verify(password, row["password_hash"]):
            raise AuthenticationError()
        return self._issue_session(SessionUser.from_dict(row))

    def sign_out(self, access_token: str) -> None:
        self._store.delete("sessions", _token_key(access_token))

    def get_user(self, access_token: str) -> Optional[SessionUser]:
        session = self._store.select_one("sessions", {"id": _token_key(access_token)})
        if session is None:
            return None

        if parse_datetime(session["expires_at"]) <= utc_now():
            self._store.delete("sessions", session["id"])
            return None

        row = self._store.select_one("users", {"id": session["user_id"]})
        return SessionUser.from_dict(row) if row else None
