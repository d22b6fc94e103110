"""Tests for metrics middleware."""

import pytest
from fastapi import FastAPI, HTTPException
from httpx import AsyncClient
from prometheus_client import REGISTRY


def sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.fixture(autouse=True)
def setup_test_routes(test_app: FastAPI) -> None:
    """Setup test routes for metrics tests."""

    @test_app.get("/api/v1/test-success", include_in_schema=False)
    async def _test_success() -> dict[str, str]:
        return {"status": "success"}

    @test_app.get("/api/v1/test-error", include_in_schema=False)
    async def _test_error() -> None:
        raise HTTPException(status_code=418, detail="Test error")


@pytest.mark.asyncio
async def test_successful_request_metrics(test_app_async_client: AsyncClient) -> None:
    requests_before = sample(
        "app_http_requests_total", {"method": "GET", "path": "/api/v1/test-success"}
    )
    responses_before = sample("app_http_responses_total", {"status_code": "200"})

    response = await test_app_async_client.get("/api/v1/test-success")

    assert response.status_code == 200
    assert (
        sample(
            "app_http_requests_total",
            {"method": "GET", "path": "/api/v1/test-success"},
        )
        == requests_before + 1
    )
    assert (
        sample("app_http_responses_total", {"status_code": "200"})
        >= responses_before + 1
    )


@pytest.mark.asyncio
async def test_error_response_metrics(test_app_async_client: AsyncClient) -> None:
    before = sample("app_http_responses_total", {"status_code": "418"})

    response = await test_app_async_client.get("/api/v1/test-error")

    assert response.status_code == 418
    assert sample("app_http_responses_total", {"status_code": "418"}) == before + 1
