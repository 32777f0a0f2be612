"""
Health, readiness, and metrics endpoints for operational visibility.

This module provides:
- /health: Liveness probe (is the app running?)
- /ready: Readiness probe (is the record store reachable?)
- /metrics: Prometheus-compatible metrics for Grafana scraping

No authentication is required on these endpoints.
"""
import logging
import time
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from core.config import settings
from core.datetime_utils import utc_now
from core.dependencies import get_record_store
from core.middleware import get_metrics_collector
from repositories.base import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health & Observability"])

SERVICE_NAME = "Student Health Portal API"
SERVICE_VERSION = "1.0.0"


def _timestamp() -> str:
    return utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class HealthResponse(BaseModel):
    """Response model for /health endpoint."""
    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str  # "ok", "unavailable"
    latency_ms: float | None = None
    message: str | None = None


class ReadyResponse(BaseModel):
    """Response model for /ready endpoint."""
    status: str  # "ready", "not_ready"
    dependencies: List[DependencyStatus]
    timestamp: str


class MetricsResponse(BaseModel):
    """Response model for JSON metrics endpoint."""
    http_requests_total: int
    http_requests_2xx_total: int
    http_requests_4xx_total: int
    http_requests_5xx_total: int
    http_request_duration_ms_p50: float
    http_request_duration_ms_p95: float
    http_request_duration_ms_p99: float
    events: Dict[str, int]


# =============================================================================
# HEALTH ENDPOINT (LIVENESS)
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Check if the application is running. Returns immediately without checking dependencies."
)
async def health_check() -> HealthResponse:
    """
    Liveness probe - is the application process alive?

    Always returns 200 if the app is running; dependencies are checked by /ready.
    """
    return HealthResponse(
        status="healthy",
        version=SERVICE_VERSION,
        timestamp=_timestamp()
    )


# =============================================================================
# READINESS ENDPOINT
# =============================================================================

def _check_record_store(store: RecordStore) -> DependencyStatus:
    """Run the store's lightweight ping and time it."""
    start = time.perf_counter()
    try:
        store.ping()
        latency_ms = (time.perf_counter() - start) * 1000
        return DependencyStatus(
            name="record_store",
            status="ok",
            latency_ms=round(latency_ms, 2),
            message=f"{settings.portal_svc_backend} record store healthy"
        )
    except Exception as e:
        latency_ms = (time.perf_counter() - start) * 1000
        logger.error("Record store health check failed", extra={"error": str(e)})
        return DependencyStatus(
            name="record_store",
            status="unavailable",
            latency_ms=round(latency_ms, 2),
            message=f"Connection failed: {type(e).__name__}"
        )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness probe",
    description="Check if the application is ready to serve requests. Returns 503 if the record store is unreachable."
)
async def readiness_check(
    response: Response,
    store: RecordStore = Depends(get_record_store)
) -> ReadyResponse:
    """
    Readiness probe - can the application handle requests?

    Returns:
    - 200 with status="ready" if the record store answers
    - 503 with status="not_ready" otherwise
    """
    dependencies = [_check_record_store(store)]

    if any(d.status == "unavailable" for d in dependencies):
        status = "not_ready"
        response.status_code = 503
    else:
        status = "ready"

    return ReadyResponse(
        status=status,
        dependencies=dependencies,
        timestamp=_timestamp()
    )


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Export metrics in Prometheus text format for Grafana scraping. "
                "Includes HTTP request counts, latency percentiles, and domain event counters."
)
async def get_metrics() -> Response:
    """
    Export metrics in Prometheus text format.

    Metrics exposed:
    - portal_http_requests_total: Total request count
    - portal_http_requests_by_status{status="2xx|4xx|5xx"}: Requests by status class
    - portal_http_request_duration_ms{quantile="0.5|0.95|0.99"}: Latency percentiles
    - portal_events_total{event="..."}: Domain events (sign-ins, assessments, uploads)
    """
    collector = get_metrics_collector()

    return Response(
        content=collector.get_prometheus_format(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@router.get(
    "/metrics/json",
    response_model=MetricsResponse,
    summary="JSON metrics",
    description="Export metrics in JSON format for custom dashboards or API consumers."
)
async def get_metrics_json() -> MetricsResponse:
    collector = get_metrics_collector()
    return MetricsResponse(**collector.get_summary())


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@router.get(
    "/",
    summary="API root",
    description="Root endpoint with basic API information."
)
async def root() -> Dict[str, Any]:
    """Service name, version, and links to documentation."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
        "metrics": "/metrics"
    }
