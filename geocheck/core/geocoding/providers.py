"""Reverse-geocoding provider adapters.

Each adapter knows how to build its provider's request and how to read its
response shape. Retry and fallback decisions belong to the resolver.
"""

from abc import ABC, abstractmethod
from typing import Any

from geocheck.core.geocoding.exceptions import ProviderResponseError
from geocheck.core.geocoding.http_client import GeocodingHttpClient
from geocheck.core.geocoding.models import Coordinate, ProviderQueryResult

BRAZIL_FILTER = "br"


class GeocodingProvider(ABC):
    """Base class for reverse-geocoding providers.

    Subclasses declare ``name`` and ``base_url`` and implement request
    construction and response parsing.
    """

    name: str
    base_url: str
    requires_api_key: bool = False

    def __init__(
        self, http_client: GeocodingHttpClient, api_key: str | None = None
    ) -> None:
        """Initialize the provider.

        Args:
            http_client: Shared rate-limited client
            api_key: Provider credential, when the provider needs one
        """
        if self.requires_api_key and not api_key:
            raise ValueError(f"{self.name} requires an API key")
        self.http_client = http_client
        self._api_key = api_key

    @abstractmethod
    def build_params(self, coordinate: Coordinate) -> dict[str, Any]:
        """Build the query string for a reverse lookup."""
        raise NotImplementedError

    @abstractmethod
    def parse_response(self, payload: Any) -> ProviderQueryResult:
        """Normalize the provider payload.

        Raises:
            ProviderResponseError: If the payload has an unexpected shape
        """
        raise NotImplementedError

    async def query(self, coordinate: Coordinate) -> ProviderQueryResult:
        """Reverse geocode ``coordinate`` with this provider."""
        payload = await self.http_client.get_json(
            self.base_url, self.build_params(coordinate)
        )
        return self.parse_response(payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class OpenCageProvider(GeocodingProvider):
    """OpenCage Geocoding API (requires an API key)."""

    name = "OpenCage"
    base_url = "https://api.opencagedata.com/geocode/v1/json"
    requires_api_key = True

    def build_params(self, coordinate: Coordinate) -> dict[str, Any]:
        return {
            "q": f"{coordinate.latitude},{coordinate.longitude}",
            "key": self._api_key,
            "limit": 1,
            "countrycode": BRAZIL_FILTER,
        }

    def parse_response(self, payload: Any) -> ProviderQueryResult:
        if not isinstance(payload, dict):
            raise ProviderResponseError(f"{self.name} payload is not an object")

        results = payload.get("results")
        if not isinstance(results, list):
            raise ProviderResponseError(f"{self.name} payload has no results list")

        first = results[0] if results else {}
        if not isinstance(first, dict):
            raise ProviderResponseError(f"{self.name} result is not an object")

        components = first.get("components")
        if components is not None and not isinstance(components, dict):
            raise ProviderResponseError(f"{self.name} components is not an object")

        return ProviderQueryResult(
            provider_name=self.name,
            country_code=(components or {}).get("ISO_3166-1_alpha-2"),
            raw_payload=components,
        )


class NominatimProvider(GeocodingProvider):
    """OpenStreetMap Nominatim reverse endpoint (free, no key)."""

    name = "Nominatim"
    base_url = "https://nominatim.openstreetmap.org/reverse"

    def build_params(self, coordinate: Coordinate) -> dict[str, Any]:
        return {
            "lat": coordinate.latitude,
            "lon": coordinate.longitude,
            "format": "json",
            "accept-language": "en",
            "countrycodes": BRAZIL_FILTER,
        }

    def parse_response(self, payload: Any) -> ProviderQueryResult:
        if not isinstance(payload, dict):
            raise ProviderResponseError(f"{self.name} payload is not an object")

        # Points with no match (open ocean) come back as {"error": "..."}
        address = payload.get("address")
        if address is not None and not isinstance(address, dict):
            raise ProviderResponseError(f"{self.name} address is not an object")

        return ProviderQueryResult(
            provider_name=self.name,
            country_code=(address or {}).get("country_code"),
            raw_payload=address,
        )


def build_providers(
    http_client: GeocodingHttpClient, opencage_api_key: str | None = None
) -> tuple[GeocodingProvider, ...]:
    """Build the ordered provider list.

    OpenCage comes first when a key is configured; Nominatim is always the
    last resort.
    """
    providers: list[GeocodingProvider] = []
    if opencage_api_key:
        providers.append(OpenCageProvider(http_client, api_key=opencage_api_key))
    providers.append(NominatimProvider(http_client))
    return tuple(providers)
