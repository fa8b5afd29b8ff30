import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from qrselfie.config import Settings, settings as default_settings
from qrselfie.context import AppContext
from qrselfie.core.routes import collect_routes
from qrselfie.core.middleware import ErrorEnvelopeMiddleware, RequestIdMiddleware, SecurityHeadersMiddleware
from qrselfie.errors import register_error_handlers
from qrselfie.routers import build_router
from qrselfie.services.metrics import metrics_middleware, metrics_response
from qrselfie.services.observability import configure_logging, init_observability

logger = logging.getLogger(__name__)


def _log_registered_routes(app: FastAPI):
    routes = collect_routes(app)
    logger.info("Registered routes count: %s", len(routes))
    for r in routes:
        logger.debug("Route %s methods=%s name=%s", r["path"], r["methods"], r["name"])


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)
    ctx = AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting QR Selfie...")
        init_observability(settings)
        logger.info("Server running at http://localhost:%s", settings.PORT)
        logger.info("Accessible at %s", ctx.base_url)
        yield
        logger.info("Shutting down QR Selfie with %d photos recorded", len(ctx.manifest))

    app = FastAPI(
        title="QR Selfie API",
        description="Upload a photo and share it through a link and QR code",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.ctx = ctx

    register_error_handlers(app)
    app.include_router(build_router())

    @app.get("/metrics", include_in_schema=False)
    async def prometheus_metrics():
        return metrics_response(settings.METRICS_ENABLED)

    # Mount order matters: "/" catches everything not matched above
    app.mount("/uploads", StaticFiles(directory=settings.UPLOADS_DIR), name="uploads")
    app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True), name="public")

    # Middleware setup; the last one added runs outermost
    metrics_middleware(app, settings.METRICS_ENABLED)
    app.add_middleware(GZipMiddleware, minimum_size=1024)
    app.add_middleware(SecurityHeadersMiddleware, app_env=settings.APP_ENV)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ErrorEnvelopeMiddleware)
    app.add_middleware(RequestIdMiddleware)

    _log_registered_routes(app)
    return app


def run() -> None:
    uvicorn.run(
        create_app(default_settings),
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run()
