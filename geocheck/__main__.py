"""Main entry point for the Brazil geolocation service."""

import sys

import uvicorn

from geocheck.core.config import settings
from geocheck.core.logging import configure_logging, get_logger

logger = get_logger("geocheck")


def main() -> None:
    """Run the HTTP server."""
    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
    logger.info(
        "server_starting",
        host=settings.HOST,
        port=settings.PORT,
        example=(
            f"http://localhost:{settings.PORT}{settings.api_prefix}"
            "/check-brazil?lat=-3.8196&lon=-32.4422"
        ),
    )
    uvicorn.run(
        "geocheck.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("server_stopped_by_user")
        sys.exit(0)
