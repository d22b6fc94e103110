"""Shared outbound HTTP client for geocoding providers.

One instance is created per process and used by every provider adapter.
It owns the connection pool, the outbound rate limit and the retry policy
for transient failures.
"""

from typing import Any

import httpx
from geopy.extra.rate_limiter import AsyncRateLimiter

from geocheck.core.geocoding.exceptions import (
    ProviderResponseError,
    ProviderTransientError,
)
from geocheck.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_USER_AGENT = "ServicoGeolocalizacaoBR-Online/2.0 (contato@empresa.com)"


class GeocodingHttpClient:
    """Rate-limited, retrying JSON client shared by all providers."""

    def __init__(
        self,
        request_timeout: float = 5.0,
        max_requests: int = 10,
        period_seconds: float = 1.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the shared client.

        Args:
            request_timeout: Network timeout for each attempt in seconds
            max_requests: Requests allowed per ``period_seconds``
            period_seconds: Length of the rate limit window in seconds
            max_retries: Additional attempts after a transient failure
            retry_delay: Fixed delay between attempts in seconds
            user_agent: User-Agent header sent to providers
            transport: Optional httpx transport (used by tests)
        """
        if max_requests <= 0 or period_seconds <= 0:
            raise ValueError("Rate limit must allow at least one request per period")
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")

        self.min_delay_seconds = period_seconds / max_requests
        if retry_delay < self.min_delay_seconds:
            raise ValueError(
                f"retry_delay ({retry_delay:g}s) must be at least the rate limit "
                f"slot ({self.min_delay_seconds:g}s)"
            )

        self.request_timeout = request_timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self._client = httpx.AsyncClient(
            timeout=request_timeout,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
            transport=transport,
        )

        # Requests are spaced evenly across the window; excess requests wait
        # for their slot. Only ProviderTransientError is retried.
        self._get = AsyncRateLimiter(
            self._send,
            min_delay_seconds=self.min_delay_seconds,
            max_retries=max_retries,
            error_wait_seconds=retry_delay,
            swallow_exceptions=False,
        )

        logger.info(
            "geocoding_http_client_initialized",
            request_timeout=request_timeout,
            max_requests=max_requests,
            period_seconds=period_seconds,
            max_retries=max_retries,
            retry_delay=retry_delay,
        )

    async def get_json(self, url: str, params: dict[str, Any]) -> Any:
        """GET ``url`` and decode the JSON body.

        Args:
            url: Provider endpoint
            params: Query string parameters

        Returns:
            Decoded JSON document

        Raises:
            ProviderTransientError: Network failure, 429 or 5xx after all retries
            ProviderResponseError: Non-retryable status or invalid JSON
        """
        return await self._get(url, params)

    async def _send(self, url: str, params: dict[str, Any]) -> Any:
        """Perform a single attempt."""
        try:
            response = await self._client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise ProviderTransientError(
                f"Request to {url} timed out after {self.request_timeout:g}s"
            ) from e
        except httpx.TransportError as e:
            raise ProviderTransientError(f"Network error calling {url}: {e}") from e

        if response.status_code >= 500 or response.status_code == 429:
            raise ProviderTransientError(
                f"{url} answered HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if response.status_code >= 400:
            raise ProviderResponseError(
                f"{url} answered HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderResponseError(f"{url} returned malformed JSON") from e

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
