"""Application startup and shutdown events."""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from prometheus_client import Counter

from geocheck.core.config import Settings, settings
from geocheck.core.geocoding.http_client import GeocodingHttpClient
from geocheck.core.geocoding.resolver import BrazilLocationResolver
from geocheck.core.logging import configure_logging, get_logger

# Prometheus metrics
REQUESTS_TOTAL = Counter(
    "app_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path"],
)

RESPONSES_TOTAL = Counter(
    "app_http_responses_total",
    "Total number of HTTP responses",
    labelnames=["status_code"],
)

logger = get_logger("geocheck.core.events")


def create_http_client(config: Settings) -> GeocodingHttpClient:
    """Create the process-wide geocoding HTTP client.

    Args:
        config: Application settings

    Returns:
        Shared client with rate limiting and retries configured
    """
    return GeocodingHttpClient(
        request_timeout=config.GEOCODING_REQUEST_TIMEOUT,
        max_requests=config.GEOCODING_RATE_LIMIT_REQUESTS,
        period_seconds=config.GEOCODING_RATE_LIMIT_PERIOD,
        max_retries=config.GEOCODING_MAX_RETRIES,
        retry_delay=config.GEOCODING_RETRY_DELAY,
        user_agent=config.GEOCODING_USER_AGENT,
    )


def create_resolver(
    config: Settings, http_client: GeocodingHttpClient
) -> BrazilLocationResolver:
    """Create the resolver used by request handlers."""
    return BrazilLocationResolver(
        http_client=http_client,
        opencage_api_key=config.OPENCAGE_API_KEY,
        provider_timeout=config.GEOCODING_PROVIDER_TIMEOUT,
    )


def create_start_app_handler(
    app: Any, config: Settings = settings
) -> Callable[[], Awaitable[None]]:
    """Create startup event handler.

    Args:
        app: FastAPI application instance
        config: Application settings

    Returns:
        Startup handler function
    """

    async def start_app() -> None:
        configure_logging(level=config.LOG_LEVEL, json_logs=config.JSON_LOGS)

        http_client = create_http_client(config)
        app.state.http_client = http_client
        app.state.resolver = create_resolver(config, http_client)

        logger.info(
            "application_startup_complete",
            providers=app.state.resolver.provider_names,
            provider_timeout=config.GEOCODING_PROVIDER_TIMEOUT,
        )

    return start_app


def create_stop_app_handler(app: Any) -> Callable[[], Awaitable[None]]:
    """Create shutdown event handler.

    Args:
        app: FastAPI application instance

    Returns:
        Shutdown handler function
    """

    async def stop_app() -> None:
        http_client: GeocodingHttpClient | None = getattr(
            app.state, "http_client", None
        )
        try:
            if http_client is not None:
                logger.info("Closing geocoding HTTP client...")
                await http_client.aclose()
            logger.info("application_shutdown_complete")
        except Exception as e:
            logger.error("shutdown_failed", error=str(e))
            raise

    return stop_app


def create_lifespan(
    config: Settings = settings,
) -> Callable[[Any], AbstractAsyncContextManager[None]]:
    """Create the application lifespan running the startup/shutdown handlers.

    Args:
        config: Application settings

    Returns:
        Lifespan factory for the FastAPI constructor
    """

    @asynccontextmanager
    async def lifespan(app: Any) -> AsyncIterator[None]:
        await create_start_app_handler(app, config)()
        try:
            yield
        finally:
            await create_stop_app_handler(app)()

    return lifespan
