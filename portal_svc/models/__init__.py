"""
Domain models for the student health portal.

This module contains internal domain models shared between layers.
"""
from models.profile import Profile
from models.user import AuthSession, SessionUser

__all__ = ["AuthSession", "Profile", "SessionUser"]
