"""
Prometheus metrics for QR Selfie
"""

import time

from fastapi import FastAPI, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUESTS_TOTAL = Counter(
    "qrselfie_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"]
)

REQUEST_DURATION = Histogram(
    "qrselfie_http_request_seconds",
    "Request duration in seconds",
    ["method", "path"]
)

UPLOADS_TOTAL = Counter(
    "qrselfie_uploads_total",
    "Total photo uploads",
    ["status"]
)

QR_RENDERED = Counter(
    "qrselfie_qr_rendered_total",
    "Total QR codes rendered",
    ["status"]
)


def _route_path(request: Request) -> str:
    # Label by route template so per-photo ids don't explode cardinality
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def metrics_middleware(app: FastAPI, enabled: bool) -> None:
    """Add request metrics middleware to the app"""
    if not enabled:
        return

    @app.middleware("http")
    async def _metrics(request: Request, call_next):
        start = time.time()
        response = await call_next(request)

        path = _route_path(request)
        REQUESTS_TOTAL.labels(
            method=request.method,
            path=path,
            status=str(response.status_code)
        ).inc()

        REQUEST_DURATION.labels(
            method=request.method,
            path=path
        ).observe(time.time() - start)

        return response


def metrics_response(enabled: bool) -> Response:
    if not enabled:
        return Response(b"metrics disabled", media_type="text/plain")
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def record_upload(status: str):
    UPLOADS_TOTAL.labels(status=status).inc()


def record_qr(status: str):
    QR_RENDERED.labels(status=status).inc()
