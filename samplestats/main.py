import logging
import math
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from samplestats.api import health, stats
from samplestats.config import Settings
from samplestats.observability.logging import setup_logging
from samplestats.observability.metrics import MetricsMiddleware, metrics_router

logger = logging.getLogger(__name__)

# READY_FLAG is used to indicate if the app is fully initialized and ready to serve traffic
READY_FLAG = False

# Lifespan handler for FastAPI: sets READY_FLAG True after startup, False on shutdown
@asynccontextmanager
async def app_lifespan(app: FastAPI):
    global READY_FLAG
    # Startup logic: nothing to connect or preload, the statistics are pure functions
    READY_FLAG = True  # Mark app as ready
    logger.info("%s ready", app.title)
    yield
    # Shutdown logic
    READY_FLAG = False  # Mark app as not ready


def serialize_error(err):
    # Validation errors may carry exceptions and non-finite inputs, neither of which is JSON
    if isinstance(err, Exception):
        return str(err)
    if isinstance(err, float) and not math.isfinite(err):
        return str(err)
    if isinstance(err, dict):
        return {k: serialize_error(v) for k, v in err.items()}
    if isinstance(err, (list, tuple)):
        return [serialize_error(e) for e in err]
    return err


# Factory function to create the FastAPI app
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.load()  # Fall back to SAMPLESTATS_* environment variables
    setup_logging(settings.logging.level)  # Handler once, level on every call
    app = FastAPI(
        title=settings.service.title,
        version=settings.service.version,
        lifespan=app_lifespan,  # Use custom lifespan for readiness
    )
    app.add_middleware(MetricsMiddleware)  # Add Prometheus metrics middleware
    app.include_router(metrics_router)     # Expose /metrics endpoint
    app.include_router(health.router)      # Expose /health and /ready endpoints
    app.include_router(stats.router)       # Expose /stats and /stats/{statistic} endpoints
    # Endpoints read limits (e.g. max_sample_size) from app.state.settings
    app.state.settings = settings
    # Expose a callable to check readiness from endpoints
    app.state.ready_flag = lambda: READY_FLAG

    # Custom exception handler for validation errors: always return 400
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        # Malformed input (wrong types, extra fields, NaN/inf numbers) is a 400, never FastAPI's default 422
        return JSONResponse(
            status_code=HTTP_400_BAD_REQUEST,
            content={"detail": serialize_error(exc.errors())},
        )

    return app

# Create the FastAPI app instance
app = create_app()
