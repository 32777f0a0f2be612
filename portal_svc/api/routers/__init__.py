"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.auth import router as auth_router
from api.routers.profile import router as profile_router
from api.routers.bmi import router as bmi_router
from api.routers.assessments import router as assessments_router
from api.routers.medical_records import router as medical_records_router
from api.routers.dashboard import router as dashboard_router
from api.routers.resources import router as resources_router
from api.routers.assistant import router as assistant_router

__all__ = [
    "health_router",
    "auth_router",
    "profile_router",
    "bmi_router",
    "assessments_router",
    "medical_records_router",
    "dashboard_router",
    "resources_router",
    "assistant_router",
]
