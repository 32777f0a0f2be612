"""
Authentication dependencies for the Student Health Portal API.

Clients send the access token issued at sign-in as a bearer token:

    Authorization: Bearer <access_token>

Protected endpoints depend on get_current_user; endpoints that also work
anonymously (BMI calculator, assessment submission) depend on
get_optional_user and only persist data when a user is present.
"""
import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.dependencies import get_auth_service
from core.exceptions import AuthenticationError
from models.user import SessionUser

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(
    auto_error=False,  # We'll handle the error ourselves for a consistent error body
    description="Access token returned by /api/v1/auth/sign-in.",
)

NOT_AUTHENTICATED = "Not authenticated"


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        AuthenticationError: 401 if the header is missing or not a bearer token.
    """
    if credentials is None or not credentials.credentials:
        logger.warning("API request without bearer token")
        raise AuthenticationError(NOT_AUTHENTICATED)
    return credentials.credentials


async def get_current_user(
    access_token: str = Depends(get_access_token),
    auth_service=Depends(get_auth_service),
) -> SessionUser:
    """
    Resolve the signed-in user for protected endpoints.

    Raises:
        AuthenticationError: 401 if the token is unknown or expired.
    """
    user = auth_service.current_user(access_token)
    if user is None:
        logger.warning("API request with invalid or expired token")
        raise AuthenticationError(NOT_AUTHENTICATED)
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth_service=Depends(get_auth_service),
) -> Optional[SessionUser]:
    """The signed-in user, or None for anonymous (or stale-token) callers."""
    if credentials is None or not credentials.credentials:
        return None
    return auth_service.current_user(credentials.credentials)
