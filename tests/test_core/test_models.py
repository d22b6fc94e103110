"""Tests for geocoding result models."""

import pytest
from pydantic import ValidationError

from geocheck.core.geocoding.models import ProviderQueryResult, ResolutionOutcome


class TestProviderQueryResult:
    """Country code normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [("br", "BR"), ("BR", "BR"), (" ar ", "AR"), ("", None), ("   ", None), (None, None)],
    )
    def test_country_code_normalization(self, raw, expected):
        result = ProviderQueryResult(provider_name="Nominatim", country_code=raw)
        assert result.country_code == expected

    @pytest.mark.parametrize("raw", ["BRA", "B", "1A", 76])
    def test_invalid_country_code(self, raw):
        with pytest.raises(ValidationError):
            ProviderQueryResult(provider_name="Nominatim", country_code=raw)


class TestResolutionOutcome:
    """Outcome construction and serialization."""

    def test_brazil_result(self):
        result = ProviderQueryResult(
            provider_name="OpenCage",
            country_code="BR",
            raw_payload={"ISO_3166-1_alpha-2": "BR"},
        )

        outcome = ResolutionOutcome.from_provider_result(result)

        assert outcome.is_within_brazil is True
        assert outcome.check_method == "api"
        assert outcome.provider == "OpenCage"
        assert outcome.api_data == {"ISO_3166-1_alpha-2": "BR"}

    def test_other_country_result(self):
        result = ProviderQueryResult(provider_name="Nominatim", country_code="py")

        outcome = ResolutionOutcome.from_provider_result(result)

        assert outcome.is_within_brazil is False
        assert outcome.api_data is None

    def test_serializes_in_camel_case(self):
        outcome = ResolutionOutcome(
            is_within_brazil=True, provider="Nominatim", api_data={"country_code": "br"}
        )

        assert outcome.model_dump(by_alias=True) == {
            "isWithinBrazil": True,
            "checkMethod": "api",
            "provider": "Nominatim",
            "apiData": {"country_code": "br"},
        }
