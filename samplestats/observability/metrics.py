"""Prometheus metrics & middleware for the statistics service.

Collects per-endpoint request count and latency plus per-statistic outcomes,
and exposes them on /metrics for Prometheus.
"""
from __future__ import annotations

import time
from typing import Optional

from fastapi import APIRouter, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    Counter,
    Histogram,
    generate_latest,
)

# Prometheus metric names as constants
REQUEST_COUNT_NAME = "samplestats_request_total"
REQUEST_LATENCY_NAME = "samplestats_request_duration_seconds"
REQUEST_ERROR_COUNT_NAME = "samplestats_request_errors_total"
STATISTIC_COUNT_NAME = "samplestats_statistic_total"

# -----------------------------------------------------------------------------
# Metric objects
# -----------------------------------------------------------------------------
# Prometheus metrics objects (module globals, thread-safe, registered once per process)
# REQUEST_COUNT: Counter for total HTTP requests, labeled by path, method, and status code.
REQUEST_COUNT = Counter(
    name=REQUEST_COUNT_NAME,
    documentation="Total HTTP requests",
    labelnames=["path", "method", "status"],
)

# REQUEST_LATENCY: Histogram for request duration (seconds), labeled by path and method.
# Prometheus exposes it as _bucket lines, one per upper bound, e.g.
# samplestats_request_duration_seconds_bucket{le="0.005",...} 12.0
# meaning "12 requests finished in <= 5 ms", plus _count and _sum series.
REQUEST_LATENCY = Histogram(
    name=REQUEST_LATENCY_NAME,
    documentation="Request latency in seconds",
    labelnames=["path", "method"],
)

# REQUEST_ERROR_COUNT: Counter for error responses (status >= 400)
REQUEST_ERROR_COUNT = Counter(
    name=REQUEST_ERROR_COUNT_NAME,
    documentation="Total HTTP error responses (status >= 400)",
    labelnames=["path", "method", "status"],
)

# STATISTIC_COUNT: Counter for statistics returned to clients, labeled by statistic name
# and outcome ("defined" for a number, "undefined" for null, e.g. the median of an empty sample).
# Requests rejected with 400 (overflowed results) are not counted.
STATISTIC_COUNT = Counter(
    name=STATISTIC_COUNT_NAME,
    documentation="Statistics computed, by outcome",
    labelnames=["statistic", "outcome"],
)


def record_statistic(name: str, value: Optional[float]) -> None:
    outcome = "undefined" if value is None else "defined"
    STATISTIC_COUNT.labels(name, outcome).inc()


# -----------------------------------------------------------------------------
# ASGI middleware
# -----------------------------------------------------------------------------
# Middleware to collect metrics per request.
# This middleware wraps every HTTP request and:
# - Records the start time.
# - On response start, increments the request (and error) counters and observes the latency.
# - Labels come from the route template if available, the HTTP method, and the status code.
class MetricsMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        # Only instrument HTTP requests (not websockets, lifespan, etc.)
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        req = Request(scope, receive)
        started_at = time.perf_counter()

        async def send_wrapper(message):
            # Intercept the response start to record metrics
            if message["type"] == "http.response.start":
                status_code = message["status"]
                # Use the route template (e.g. "/stats/{statistic}") so every statistic
                # name shares one label value; fall back to the raw path for unmatched routes
                route = scope.get("route")
                if route and hasattr(route, "path"):
                    path_template = route.path
                else:
                    path_template = scope.get("path", "")
                # Increment request counter with labels
                REQUEST_COUNT.labels(path_template, req.method, status_code).inc()
                # Increment error counter if status >= 400
                if int(status_code) >= 400:
                    REQUEST_ERROR_COUNT.labels(path_template, req.method, status_code).inc()
                # Observe request latency in seconds
                REQUEST_LATENCY.labels(path_template, req.method).observe(time.perf_counter() - started_at)
            await send(message)

        # Call the next middleware or route handler
        await self.app(scope, receive, send_wrapper)


# -----------------------------------------------------------------------------
# /metrics endpoint
# -----------------------------------------------------------------------------
# FastAPI router for /metrics endpoint.
# This endpoint exposes all Prometheus metrics in plaintext format for scraping.
metrics_router = APIRouter()


@metrics_router.get("/metrics")
async def metrics():
    # Expose Prometheus metrics in plaintext format (Prometheus scrapes this endpoint)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
