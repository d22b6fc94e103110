"""Coordinate validation.

Parses raw latitude/longitude input (query strings or numbers) into an
immutable :class:`Coordinate`. Runs before any provider is contacted.
"""

import math
from typing import Any

from geocheck.core.geocoding.exceptions import CoordinateValidationError
from geocheck.core.geocoding.models import Coordinate

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def _parse(value: Any, field: str, lat_raw: Any, lon_raw: Any) -> float:
    """Parse one raw value as a finite float."""
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise CoordinateValidationError(
            f"Invalid {field}: {value!r} is not a number",
            latitude_raw=lat_raw,
            longitude_raw=lon_raw,
            field=field,
        ) from None

    if not math.isfinite(parsed):
        raise CoordinateValidationError(
            f"Invalid {field}: {value!r} is not a finite number",
            latitude_raw=lat_raw,
            longitude_raw=lon_raw,
            field=field,
        )
    return parsed


def _check_range(
    value: float,
    bounds: tuple[float, float],
    field: str,
    raw: Any,
    lat_raw: Any,
    lon_raw: Any,
) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise CoordinateValidationError(
            f"Invalid {field}: {raw} (must be between {low:g} and {high:g})",
            latitude_raw=lat_raw,
            longitude_raw=lon_raw,
            field=field,
        )


def validate_coordinates(lat_raw: Any, lon_raw: Any) -> Coordinate:
    """Validate raw latitude and longitude.

    Args:
        lat_raw: Latitude as received (string, int or float)
        lon_raw: Longitude as received (string, int or float)

    Returns:
        Coordinate with both values parsed and range-checked

    Raises:
        CoordinateValidationError: If either value is unparseable,
            non-finite or out of range
    """
    latitude = _parse(lat_raw, "latitude", lat_raw, lon_raw)
    longitude = _parse(lon_raw, "longitude", lat_raw, lon_raw)

    _check_range(latitude, LATITUDE_RANGE, "latitude", lat_raw, lat_raw, lon_raw)
    _check_range(longitude, LONGITUDE_RANGE, "longitude", lon_raw, lat_raw, lon_raw)

    return Coordinate(latitude=latitude, longitude=longitude)
