"""API v1 router module."""

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from geocheck.core.geocoding.exceptions import CoordinateValidationError
from geocheck.core.geocoding.models import CheckBrazilResponse, ErrorResponse
from geocheck.core.geocoding.resolver import BrazilLocationResolver

MISSING_PARAMETERS_MESSAGE = "Parameters 'lat' and 'lon' are required."

router = APIRouter(default_response_class=JSONResponse)


def get_resolver(request: Request) -> BrazilLocationResolver:
    """Get the resolver created at application startup."""
    resolver: BrazilLocationResolver | None = getattr(
        request.app.state, "resolver", None
    )
    if resolver is None:
        raise RuntimeError("Geolocation resolver is not initialized")
    return resolver


@router.get(
    "/check-brazil",
    response_model=CheckBrazilResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def check_brazil(
    lat: str | None = Query(None, description="Latitude in decimal degrees"),
    lon: str | None = Query(None, description="Longitude in decimal degrees"),
    resolver: BrazilLocationResolver = Depends(get_resolver),
) -> CheckBrazilResponse:
    """
    Check whether a coordinate lies within Brazilian territory.

    Providers are queried in order (OpenCage when configured, then
    Nominatim) and the first one reporting a country code decides.

    Example: /api/v1/check-brazil?lat=-3.8196&lon=-32.4422
    """
    if not lat or not lon:
        raise CoordinateValidationError(
            MISSING_PARAMETERS_MESSAGE, latitude_raw=lat, longitude_raw=lon
        )

    outcome = await resolver.is_within_brazil(lat, lon)
    return CheckBrazilResponse(data=outcome)
