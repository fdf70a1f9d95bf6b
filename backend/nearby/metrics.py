"""Prometheus metrics for monitoring and observability."""

from __future__ import annotations

import re
import time
from collections.abc import Callable
from functools import lru_cache

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    Info,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# ==============================================================================
# APPLICATION INFO
# ==============================================================================

app_info = Info("nearby_eats", "Nearby Eats API information")
app_info.info({"version": "0.1.0", "service": "nearby-eats-api"})

# ==============================================================================
# HTTP METRICS
# ==============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ==============================================================================
# UPSTREAM PROVIDER METRICS
# ==============================================================================

upstream_requests_total = Counter(
    "upstream_requests_total",
    "Outbound provider calls",
    ["provider", "result"],
)

upstream_request_duration_seconds = Histogram(
    "upstream_request_duration_seconds",
    "Outbound provider call duration in seconds",
    ["provider"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

# ==============================================================================
# STORE METRICS
# ==============================================================================

store_operations_total = Counter(
    "store_operations_total",
    "Restaurant store operations",
    ["operation"],
)

_ID_SEGMENT = re.compile(r"/api/restaurants/[^/]+")


@lru_cache(maxsize=2048)
def normalize_endpoint(path: str) -> str:
    """
    Collapse record IDs so the endpoint label stays low-cardinality.

        /api/restaurants/V1StGXR8 -> /api/restaurants/{id}
    """
    return _ID_SEGMENT.sub("/api/restaurants/{id}", path)


# ==============================================================================
# PROMETHEUS MIDDLEWARE
# ==============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to track HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = normalize_endpoint(request.url.path)
        start_time = time.perf_counter()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        finally:
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(
                time.perf_counter() - start_time
            )
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()


def get_metrics() -> Response:
    """Generate Prometheus metrics response."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "PrometheusMiddleware",
    "get_metrics",
    "http_requests_total",
    "http_request_duration_seconds",
    "upstream_requests_total",
    "upstream_request_duration_seconds",
    "store_operations_total",
    "normalize_endpoint",
]
