"""Main FastAPI application module."""

from datetime import UTC, datetime

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from geocheck.api.v1.router import router as v1_router
from geocheck.core.config import Settings, settings
from geocheck.core.events import create_lifespan
from geocheck.core.geocoding.models import HealthResponse
from geocheck.middleware.correlation import CorrelationMiddleware
from geocheck.middleware.errors import ErrorHandlingMiddleware, register_error_handlers
from geocheck.middleware.metrics import MetricsMiddleware


def create_app(config: Settings = settings) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Application settings

    Returns:
        Configured application; the resolver is created on startup
    """
    app = FastAPI(
        title=config.app_name,
        description="Checks whether coordinates fall within Brazilian territory",
        version=config.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        default_response_class=JSONResponse,
        lifespan=create_lifespan(config),
    )

    # Add middleware in order (inside -> out):
    # 1. Error handling
    # 2. Metrics
    # 3. Correlation (adds request ID)
    # 4. CORS (outermost)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=config.cors_allow_credentials,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
        max_age=600,
    )
    register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Liveness probe."""
        return HealthResponse(timestamp=datetime.now(UTC).isoformat())

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose Prometheus metrics."""
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(v1_router, prefix=config.api_prefix)
    return app


app = create_app()
