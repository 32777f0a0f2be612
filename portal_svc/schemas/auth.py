"""
Pydantic schemas for sign-up, sign-in and session responses.
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class SignUpRequest(BaseModel):
    """Schema for creating an account with email and password."""
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254, description="Account email",
                       examples=["student@cuk.ac.in"])
    password: str = Field(..., min_length=6, max_length=128, description="Account password")
    full_name: Optional[str] = Field(None, max_length=200, description="Display name")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class SignInRequest(BaseModel):
    """Schema for email/password sign-in."""
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class UserResponse(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None


class SessionResponse(BaseModel):
    """An issued session. Send `access_token` as a Bearer token on protected endpoints."""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class SignUpResponse(BaseModel):
    """
    Result of sign-up.

    `session` is null when the identity provider requires email confirmation
    before the first sign-in.
    """
    user: UserResponse
    session: Optional[SessionResponse] = None
    message: str
