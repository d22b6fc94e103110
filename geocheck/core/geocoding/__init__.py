"""Coordinate-in-Brazil resolution package.

This package provides:
- Coordinate validation
- A shared rate-limited, retrying HTTP client
- Reverse-geocoding provider adapters (OpenCage, Nominatim)
- The multi-provider resolver
"""

from geocheck.core.geocoding.exceptions import (
    CoordinateValidationError,
    GeolocationError,
    ProviderResponseError,
    ProviderTimeoutError,
    ProviderTransientError,
    ResolutionExhaustedError,
)
from geocheck.core.geocoding.http_client import GeocodingHttpClient
from geocheck.core.geocoding.models import (
    Coordinate,
    ProviderQueryResult,
    ResolutionOutcome,
)
from geocheck.core.geocoding.providers import (
    GeocodingProvider,
    NominatimProvider,
    OpenCageProvider,
    build_providers,
)
from geocheck.core.geocoding.resolver import BrazilLocationResolver
from geocheck.core.geocoding.validator import validate_coordinates

__all__ = [
    "BrazilLocationResolver",
    "Coordinate",
    "CoordinateValidationError",
    "GeocodingHttpClient",
    "GeocodingProvider",
    "GeolocationError",
    "NominatimProvider",
    "OpenCageProvider",
    "ProviderQueryResult",
    "ProviderResponseError",
    "ProviderTimeoutError",
    "ProviderTransientError",
    "ResolutionExhaustedError",
    "ResolutionOutcome",
    "build_providers",
    "validate_coordinates",
]
