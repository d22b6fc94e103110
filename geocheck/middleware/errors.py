"""Error handling middleware."""

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from starlette.types import ASGIApp

from geocheck.core.geocoding.exceptions import (
    CoordinateValidationError,
    GeolocationError,
    ResolutionExhaustedError,
)
from geocheck.core.logging import get_logger

logger = get_logger()

GENERIC_ERROR_MESSAGE = "An internal error occurred while processing your request."
INVALID_REQUEST_MESSAGE = "Invalid request parameters."


def get_error_detail(exc: Exception) -> tuple[str, int]:
    """Get the client-facing message and status code for an exception.

    Only validation messages and HTTP exception details are exposed;
    anything else becomes a generic 500.
    """
    if isinstance(exc, HTTPException):
        return str(exc.detail), exc.status_code
    if isinstance(exc, CoordinateValidationError):
        return exc.message, HTTP_400_BAD_REQUEST
    if isinstance(exc, RequestValidationError):
        return INVALID_REQUEST_MESSAGE, HTTP_400_BAD_REQUEST
    return GENERIC_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR


def create_error_response(
    detail: str, status_code: int, correlation_id: str | None
) -> JSONResponse:
    """Create JSON error response with optional correlation ID."""
    response = JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": detail,
            "correlation_id": correlation_id if correlation_id else "unknown",
        },
        media_type="application/json",
    )
    if correlation_id:
        response.headers["X-Request-ID"] = correlation_id
    return response


def log_error(request: Request, exc: Exception, status_code: int) -> None:
    """Log error details; server errors keep their full internal detail."""
    correlation_id = getattr(request.state, "correlation_id", None)
    context = {
        "error_type": exc.__class__.__name__,
        "error_message": str(exc),
        "status_code": status_code,
        "path": request.url.path,
        "method": request.method,
        "query": str(request.url.query),
        "correlation_id": correlation_id,
    }
    if isinstance(exc, ResolutionExhaustedError):
        context["failures"] = exc.failures

    if status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "request_error",
            exc_info=not isinstance(exc, GeolocationError),
            **context,
        )
    else:
        logger.warning("request_error", **context)


async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle any exception and return a JSON response.

    Args:
    ----
        request: The request that caused the exception
        exc: The exception to handle

    Returns:
    -------
        A JSON response with the error envelope
    """
    detail, status_code = get_error_detail(exc)
    log_error(request, exc, status_code)
    correlation_id = getattr(request.state, "correlation_id", None)
    return create_error_response(detail, status_code, correlation_id)


def register_error_handlers(app: FastAPI) -> None:
    """Register the JSON error envelope for known exception types."""
    app.add_exception_handler(GeolocationError, handle_exception)
    app.add_exception_handler(RequestValidationError, handle_exception)
    app.add_exception_handler(HTTPException, handle_exception)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware to handle errors and provide consistent error responses."""

    def __init__(self, app: ASGIApp) -> None:
        """
        Initialize middleware.

        Args:
        ----
            app: The ASGI application
        """
        super().__init__(app)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """
        Process the request/response cycle and handle uncaught errors.

        Args:
        ----
            request: The incoming request
            call_next: The next handler in the middleware chain

        Returns:
        -------
            The response from downstream handlers or error response
        """
        try:
            return await call_next(request)
        except Exception as exc:
            return await handle_exception(request, exc)
