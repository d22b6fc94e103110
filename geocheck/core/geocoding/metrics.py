"""Prometheus metrics for provider resolution."""

from prometheus_client import Counter

PROVIDER_ATTEMPTS = Counter(
    "geocheck_provider_attempts_total",
    "Total number of reverse-geocoding provider attempts",
    ["provider", "outcome"],  # success, no_country_code, timeout, error
)

RESOLUTIONS = Counter(
    "geocheck_resolutions_total",
    "Total number of completed coordinate resolutions",
    ["result"],  # inside, outside, exhausted
)
