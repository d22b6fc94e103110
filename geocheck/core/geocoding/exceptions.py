"""Exceptions raised while validating coordinates and querying providers."""

from typing import Any

from geopy.exc import GeocoderServiceError


class GeolocationError(Exception):
    """Base class for geolocation service errors."""


class CoordinateValidationError(GeolocationError, ValueError):
    """Raised when caller-supplied coordinates are unparseable or out of range."""

    def __init__(
        self,
        message: str,
        latitude_raw: Any = None,
        longitude_raw: Any = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.latitude_raw = latitude_raw
        self.longitude_raw = longitude_raw
        self.field = field


class ProviderTransientError(GeocoderServiceError):
    """Network failure, network timeout or 5xx answer from a provider.

    Subclasses geopy's ``GeocoderServiceError`` so the shared client's
    ``AsyncRateLimiter`` retries it.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderResponseError(GeolocationError):
    """Non-retryable HTTP status or a payload the provider adapter cannot read."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProviderTimeoutError(GeolocationError, TimeoutError):
    """A provider did not answer within the provider-level time bound."""

    def __init__(self, provider: str, timeout: float) -> None:
        super().__init__(f"{provider} did not respond within {timeout:g}s")
        self.provider = provider
        self.timeout = timeout


class ResolutionExhaustedError(GeolocationError):
    """Every configured provider failed or returned no country code."""

    def __init__(
        self,
        message: str = "all providers exhausted",
        failures: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.failures = failures or []
