"""Pydantic models for coordinate checks."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

BRAZIL_COUNTRY_CODE = "BR"


class Coordinate(BaseModel):
    """Validated geographic coordinate"""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(
        ..., ge=-180, le=180, description="Longitude in decimal degrees"
    )


class ProviderQueryResult(BaseModel):
    """Normalized answer from a single reverse-geocoding provider"""

    provider_name: str
    country_code: str | None = None
    raw_payload: dict[str, Any] | None = None

    @field_validator("country_code", mode="before")
    @classmethod
    def normalize_country_code(cls, v: Any) -> str | None:
        """Uppercase ISO 3166-1 alpha-2 codes; blank codes mean no answer."""
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError(f"country code must be a string, got {type(v).__name__}")
        code = v.strip().upper()
        if not code:
            return None
        if len(code) != 2 or not code.isalpha():
            raise ValueError(f"invalid ISO 3166-1 alpha-2 country code: {v!r}")
        return code


class ResolutionOutcome(BaseModel):
    """Result of checking whether a coordinate lies in Brazil."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_within_brazil: bool
    check_method: Literal["api"] = "api"
    provider: str | None = None
    api_data: dict[str, Any] | None = None

    @classmethod
    def from_provider_result(cls, result: ProviderQueryResult) -> "ResolutionOutcome":
        """Build the outcome from the accepted provider answer."""
        return cls(
            is_within_brazil=result.country_code == BRAZIL_COUNTRY_CODE,
            provider=result.provider_name,
            api_data=result.raw_payload,
        )


class CheckBrazilResponse(BaseModel):
    """Success envelope for the check-brazil endpoint"""

    success: Literal[True] = True
    data: ResolutionOutcome


class ErrorResponse(BaseModel):
    """Error envelope shared by all endpoints"""

    success: Literal[False] = False
    error: str
    correlation_id: str = "unknown"


class HealthResponse(BaseModel):
    """Liveness probe payload"""

    status: Literal["ok"] = "ok"
    timestamp: str
