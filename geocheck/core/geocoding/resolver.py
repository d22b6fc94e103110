"""Multi-provider resolution of "is this coordinate in Brazil?".

This module provides the resolver that:
- Validates coordinates before any network activity
- Tries providers strictly in order (keyed OpenCage first, Nominatim last)
- Bounds each provider, retries included, with a wall-clock timeout
- Accepts the first provider answer that carries a country code
- Raises ResolutionExhaustedError when no provider answers
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from geocheck.core.geocoding.exceptions import (
    ProviderTimeoutError,
    ProviderTransientError,
    ResolutionExhaustedError,
)
from geocheck.core.geocoding.http_client import GeocodingHttpClient
from geocheck.core.geocoding.metrics import PROVIDER_ATTEMPTS, RESOLUTIONS
from geocheck.core.geocoding.models import (
    Coordinate,
    ProviderQueryResult,
    ResolutionOutcome,
)
from geocheck.core.geocoding.providers import GeocodingProvider, build_providers
from geocheck.core.geocoding.validator import validate_coordinates
from geocheck.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PROVIDER_TIMEOUT = 5.0


class BrazilLocationResolver:
    """Resolves whether coordinates are inside Brazil using geocoding APIs."""

    def __init__(
        self,
        http_client: GeocodingHttpClient | None = None,
        opencage_api_key: str | None = None,
        provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        providers: Sequence[GeocodingProvider] | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            http_client: Shared client used by the default providers
            opencage_api_key: OpenCage key; without it only Nominatim is used
            provider_timeout: Seconds allowed per provider, retries included
            providers: Explicit ordered providers, overriding the defaults
        """
        if provider_timeout <= 0:
            raise ValueError("provider_timeout must be positive")

        self.http_client = http_client
        self.provider_timeout = provider_timeout

        if providers is not None:
            self.providers: tuple[GeocodingProvider, ...] = tuple(providers)
        else:
            if http_client is None:
                raise ValueError("http_client is required for the default providers")
            if not opencage_api_key:
                logger.warning(
                    "opencage_api_key_missing",
                    detail="Using Nominatim only, which has stricter rate limits",
                )
            self.providers = build_providers(http_client, opencage_api_key)

        if not self.providers:
            raise ValueError("At least one geocoding provider is required")

        logger.info("resolver_initialized", providers=self.provider_names)

    @property
    def provider_names(self) -> list[str]:
        """Names of the enabled providers in the order they are tried."""
        return [provider.name for provider in self.providers]

    async def is_within_brazil(self, latitude: Any, longitude: Any) -> ResolutionOutcome:
        """Validate raw coordinates and resolve them.

        Args:
            latitude: Raw latitude (string or number)
            longitude: Raw longitude (string or number)

        Returns:
            ResolutionOutcome from the first provider with a country code

        Raises:
            CoordinateValidationError: If the coordinates are invalid
            ResolutionExhaustedError: If no provider produced a country code
        """
        coordinate = validate_coordinates(latitude, longitude)
        return await self.resolve(coordinate)

    async def resolve(self, coordinate: Coordinate) -> ResolutionOutcome:
        """Query providers in order until one reports a country code.

        Args:
            coordinate: Validated coordinate

        Returns:
            ResolutionOutcome built from the accepted provider answer

        Raises:
            ResolutionExhaustedError: If every provider failed or had no answer
        """
        failures: list[dict[str, str]] = []

        for provider in self.providers:
            result = await self._query_provider(provider, coordinate, failures)
            if result is None:
                continue

            if result.country_code:
                outcome = ResolutionOutcome.from_provider_result(result)
                PROVIDER_ATTEMPTS.labels(provider=provider.name, outcome="success").inc()
                RESOLUTIONS.labels(
                    result="inside" if outcome.is_within_brazil else "outside"
                ).inc()
                logger.info(
                    "provider_succeeded",
                    provider=provider.name,
                    country_code=result.country_code,
                    is_within_brazil=outcome.is_within_brazil,
                )
                return outcome

            PROVIDER_ATTEMPTS.labels(
                provider=provider.name, outcome="no_country_code"
            ).inc()
            failures.append({"provider": provider.name, "reason": "no country code"})
            logger.info(
                "provider_no_country_code",
                provider=provider.name,
                latitude=coordinate.latitude,
                longitude=coordinate.longitude,
            )

        RESOLUTIONS.labels(result="exhausted").inc()
        logger.error(
            "resolution_exhausted",
            latitude=coordinate.latitude,
            longitude=coordinate.longitude,
            failures=failures,
        )
        raise ResolutionExhaustedError("all providers exhausted", failures=failures)

    async def _query_with_timeout(
        self, provider: GeocodingProvider, coordinate: Coordinate
    ) -> ProviderQueryResult:
        """Query ``provider``, bounding every attempt and retry delay together.

        Raises:
            ProviderTimeoutError: If the provider ran past ``provider_timeout``
        """
        try:
            return await asyncio.wait_for(
                provider.query(coordinate), timeout=self.provider_timeout
            )
        except asyncio.TimeoutError as e:
            raise ProviderTimeoutError(provider.name, self.provider_timeout) from e

    async def _query_provider(
        self,
        provider: GeocodingProvider,
        coordinate: Coordinate,
        failures: list[dict[str, str]],
    ) -> ProviderQueryResult | None:
        """Run one provider under the timeout bound.

        Returns None when the provider failed; the failure is logged and
        appended to ``failures``.
        """
        try:
            return await self._query_with_timeout(provider, coordinate)
        except ProviderTimeoutError as e:
            PROVIDER_ATTEMPTS.labels(provider=provider.name, outcome="timeout").inc()
            failures.append({"provider": provider.name, "reason": "timeout"})
            logger.warning(
                "provider_timeout",
                provider=provider.name,
                timeout=e.timeout,
                error=str(e),
            )
        except ProviderTransientError as e:
            PROVIDER_ATTEMPTS.labels(provider=provider.name, outcome="error").inc()
            failures.append({"provider": provider.name, "reason": str(e)})
            logger.warning(
                "provider_failed",
                provider=provider.name,
                error_type=type(e).__name__,
                error=str(e),
                detail="retries exhausted",
            )
        except Exception as e:
            PROVIDER_ATTEMPTS.labels(provider=provider.name, outcome="error").inc()
            failures.append({"provider": provider.name, "reason": str(e)})
            logger.warning(
                "provider_failed",
                provider=provider.name,
                error_type=type(e).__name__,
                error=str(e),
            )
        return None
