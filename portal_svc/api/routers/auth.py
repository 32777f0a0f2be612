"""
Auth router - account creation and sessions.

Sign-up and sign-in are public; sign-out and the session lookup need the
bearer token returned by sign-in.

Architecture:
    HTTP Request → Router (this file) → AuthService → IdentityGateway
"""
import logging

from fastapi import APIRouter, Depends, Response, status

from core.auth import get_access_token, get_current_user
from core.dependencies import get_auth_service
from models.user import SessionUser
from schemas import SessionResponse, SignInRequest, SignUpRequest, SignUpResponse, UserResponse
from services import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/auth",
    tags=["Auth"],
)


@router.post(
    "/sign-up",
    response_model=SignUpResponse,
    status_code=201,
    summary="Create an account",
    description="Register with email and password. A profile is created on the first session."
)
async def sign_up(
    request: SignUpRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Create an account.

    Raises:
    - 409 Conflict: If the email is already registered (DuplicateAccountError)
    - 422 Unprocessable Entity: Malformed email or a password under 6 characters
    """
    return auth_service.sign_up(request.email, request.password, request.full_name)


@router.post(
    "/sign-in",
    response_model=SessionResponse,
    summary="Sign in",
    description="Exchange email and password for a bearer access token."
)
async def sign_in(
    request: SignInRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Sign in.

    Raises:
    - 401 Unauthorized: On a wrong email or password (AuthenticationError)
    """
    return auth_service.sign_in(request.email, request.password)


@router.post(
    "/sign-out",
    status_code=204,
    summary="Sign out",
    description="Invalidate the current access token."
)
async def sign_out(
    access_token: str = Depends(get_access_token),
    user: SessionUser = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service)
):
    auth_service.sign_out(access_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/session",
    response_model=UserResponse,
    summary="Current session",
    description="Return the user behind the bearer token."
)
async def current_session(user: SessionUser = Depends(get_current_user)):
    return UserResponse(id=user.id, email=user.email, full_name=user.full_name)
