"""API documentation endpoint tests."""

import pytest
from httpx import AsyncClient

from geocheck.core.config import Settings


@pytest.mark.asyncio
async def test_openapi_json(
    test_app_async_client: AsyncClient, test_settings: Settings
) -> None:
    """Test OpenAPI JSON schema endpoint."""
    response = await test_app_async_client.get("/openapi.json")
    assert response.status_code == 200

    data = response.json()
    assert data["openapi"].startswith("3.")
    assert data["info"]["title"] == test_settings.app_name
    assert data["info"]["version"] == test_settings.version

    paths = data["paths"]
    assert "/health" in paths
    assert "/api/v1/check-brazil" in paths
    assert "/metrics" not in paths

    parameters = {p["name"] for p in paths["/api/v1/check-brazil"]["get"]["parameters"]}
    assert parameters == {"lat", "lon"}


@pytest.mark.asyncio
async def test_docs_endpoint(test_app_async_client: AsyncClient) -> None:
    """Test Swagger UI docs endpoint."""
    response = await test_app_async_client.get("/docs")
    assert response.status_code == 200
    assert "swagger" in response.text.lower()


@pytest.mark.asyncio
async def test_cors_preflight(test_app_async_client: AsyncClient) -> None:
    response = await test_app_async_client.options(
        "/api/v1/check-brazil",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
