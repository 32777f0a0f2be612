"""
Request logging and in-memory portal metrics.

LoggingMiddleware tags every request with a short id (echoed as X-Request-ID
and attached to each log line), logs API traffic and feeds the
MetricsCollector that backs /metrics and /metrics/json.

Services bump named domain events on the same collector, e.g.
`get_metrics_collector().record_event("assessment_saved")`.
"""

import logging
import time
import uuid
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging_config import set_request_id, clear_request_id

logger = logging.getLogger(__name__)

# Number of recent requests kept for latency percentiles
LATENCY_WINDOW = 1000

STATUS_CLASSES = ("2xx", "4xx", "5xx")


# =============================================================================
# METRICS COLLECTOR
# =============================================================================

@dataclass
class RequestMetrics:
    """One completed request."""
    method: str
    path: str
    status_code: int
    duration_ms: float

    @property
    def status_class(self) -> str:
        return f"{self.status_code // 100}xx"


@dataclass
class MetricsCollector:
    """
    Process-local counters for HTTP traffic and portal domain events.

    Latencies are kept for the last LATENCY_WINDOW requests only.
    """

    total_requests: int = 0
    by_status: Counter = field(default_factory=Counter)
    events: Counter = field(default_factory=Counter)
    _durations: Deque[float] = field(default_factory=lambda: deque(maxlen=LATENCY_WINDOW))

    def record_request(self, metrics: RequestMetrics) -> None:
        self.total_requests += 1
        self.by_status[metrics.status_class] += 1
        self._durations.append(metrics.duration_ms)

    def record_event(self, name: str) -> None:
        """Bump a domain event counter."""
        self.events[name] += 1

    def latency_percentile(self, p: float) -> float:
        if not self._durations:
            return 0.0
        durations = sorted(self._durations)
        idx = min(int(len(durations) * p / 100), len(durations) - 1)
        return round(durations[idx], 2)

    def get_summary(self) -> Dict:
        """Summary served by /metrics/json."""
        return {
            "http_requests_total": self.total_requests,
            "http_requests_2xx_total": self.by_status["2xx"],
            "http_requests_4xx_total": self.by_status["4xx"],
            "http_requests_5xx_total": self.by_status["5xx"],
            "http_request_duration_ms_p50": self.latency_percentile(50),
            "http_request_duration_ms_p95": self.latency_percentile(95),
            "http_request_duration_ms_p99": self.latency_percentile(99),
            "events": dict(self.events),
        }

    def get_prometheus_format(self) -> str:
        """Render the counters in Prometheus text exposition format."""
        lines = [
            "# HELP portal_http_requests_total HTTP requests served by the portal API",
            "# TYPE portal_http_requests_total counter",
            f"portal_http_requests_total {self.total_requests}",
            "# HELP portal_http_requests_by_status HTTP requests by status class",
            "# TYPE portal_http_requests_by_status counter",
        ]
        lines += [
            f'portal_http_requests_by_status{{status="{cls}"}} {self.by_status[cls]}'
            for cls in STATUS_CLASSES
        ]
        lines += [
            "# HELP portal_http_request_duration_ms Request latency percentiles in milliseconds",
            "# TYPE portal_http_request_duration_ms gauge",
        ]
        lines += [
            f'portal_http_request_duration_ms{{quantile="{q}"}} {self.latency_percentile(p)}'
            for q, p in (("0.5", 50), ("0.95", 95), ("0.99", 99))
        ]
        lines += [
            "# HELP portal_events_total Portal domain events by name",
            "# TYPE portal_events_total counter",
        ]
        lines += [
            f'portal_events_total{{event="{name}"}} {count}'
            for name, count in sorted(self.events.items())
        ]
        return "\n".join(lines) + "\n"


metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    return metrics_collector


# =============================================================================
# LOGGING MIDDLEWARE
# =============================================================================

class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each API request with its request id and records its metrics.

    Probe and docs paths are counted but not logged.
    """

    QUIET_PATHS = {"/health", "/ready", "/metrics", "/metrics/json", "/docs", "/redoc", "/openapi.json"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        set_request_id(request_id)

        method = request.method
        path = request.url.path
        quiet = path in self.QUIET_PATHS or path.startswith("/files/")
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", extra={"method": method, "path": path})
            clear_request_id()
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        metrics_collector.record_request(RequestMetrics(method, path, response.status_code, duration_ms))

        if not quiet:
            logger.log(
                logging.WARNING if response.status_code >= 400 else logging.INFO,
                "Request completed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            )
        clear_request_id()

        response.headers["X-Request-ID"] = request_id
        return response
