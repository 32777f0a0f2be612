"""
FastAPI application entry point for the Student Health Portal API.

This module configures and creates the FastAPI application with:
- Structured JSON Logging: Request/response logging for Grafana/Loki
- Request ID Propagation: UUID-based request tracking across logs
- Dependency Injection: Services and repositories injected via Depends()
- Exception Handling: Consistent error responses via setup_exception_handlers()
- CORS Middleware: Allows the web client to call the API
- Lifespan Management: Record store initialization
- Metrics Collection: In-memory metrics for Prometheus/Grafana scraping

Architecture Overview:
    ┌─────────────────────────────────────────────────────────────┐
    │                     FastAPI Application                      │
    ├─────────────────────────────────────────────────────────────┤
    │  Middleware Stack (order matters!)                          │
    │    ├── LoggingMiddleware  - Request logging & metrics       │
    │    └── CORSMiddleware     - Cross-origin support            │
    ├─────────────────────────────────────────────────────────────┤
    │  Routers (api/routers/)                                     │
    │    ├── health.py          - /health, /ready, /metrics       │
    │    ├── auth.py            - Sign-up, sign-in, sessions      │
    │    ├── profile.py         - Profile, onboarding, avatar     │
    │    ├── bmi.py             - BMI calculator & history        │
    │    ├── assessments.py     - Questionnaire, results, PDFs    │
    │    ├── medical_records.py - Medical record files            │
    │    ├── dashboard.py       - Student dashboard               │
    │    ├── resources.py       - Emergency & physical resources  │
    │    └── assistant.py       - Health assistant chat           │
    ├─────────────────────────────────────────────────────────────┤
    │  Services (services/)     ← Injected via Depends()          │
    ├─────────────────────────────────────────────────────────────┤
    │  Repositories (repositories/)   ← Injected into Services    │
    ├─────────────────────────────────────────────────────────────┤
    │  RecordStore / BlobStore / IdentityGateway                  │
    │  (SQLite + filesystem, or Supabase)                         │
    └─────────────────────────────────────────────────────────────┘
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from core.config import API_HOST, API_PORT, API_RELOAD, settings
from core.dependencies import get_record_store
from core.exceptions import setup_exception_handlers
from core.logging_config import setup_logging
from core.middleware import LoggingMiddleware
from api.routers import (
    assessments_router,
    assistant_router,
    auth_router,
    bmi_router,
    dashboard_router,
    health_router,
    medical_records_router,
    profile_router,
    resources_router,
)

FILES_MOUNT_PATH = "/files"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application.

    Startup:
        - Configures structured JSON logging
        - Initializes the record store (creates the SQLite schema locally)

    Shutdown:
        - Logs shutdown message
    """
    # Configure structured logging FIRST (before any other logging)
    setup_logging(level="INFO", json_format=True)

    logger = logging.getLogger(__name__)
    logger.info("Starting Student Health Portal API...")

    get_record_store()
    logger.info(
        "Record store initialized",
        extra={"backend": settings.portal_svc_backend}
    )

    yield  # Application runs here

    logger.info("Student Health Portal API shutting down...")


app = FastAPI(
    title="Student Health Portal API",
    description="Backend for the student health portal: accounts and profiles, BMI calculator, "
                "mental health self-assessment with PDF reports, medical record uploads, "
                "a dashboard and static health resources.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================
# PortalServiceError and its subclasses are converted to HTTP responses.
setup_exception_handlers(app)

# =============================================================================
# MIDDLEWARE
# =============================================================================
# Middleware is executed in REVERSE order of registration.

# 1. CORS Middleware (innermost - closest to routes)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Logging Middleware (outermost - captures all requests)
app.add_middleware(LoggingMiddleware)

# =============================================================================
# ROUTERS
# =============================================================================
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(bmi_router)
app.include_router(assessments_router)
app.include_router(medical_records_router)
app.include_router(dashboard_router)
app.include_router(resources_router)
app.include_router(assistant_router)

# =============================================================================
# LOCAL FILE SERVING
# =============================================================================
# LocalBlobStore writes under the upload dir; public URLs point at this mount.
if not settings.uses_supabase:
    settings.ensure_directories()
    app.mount(
        FILES_MOUNT_PATH,
        StaticFiles(directory=settings.portal_svc_upload_dir),
        name="files"
    )


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD
    )
