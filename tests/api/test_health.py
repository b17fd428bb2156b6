"""Tests for the health check endpoint."""
from httpx import AsyncClient


async def test_health_endpoint_returns_200(app_client: AsyncClient) -> None:
    """Test that the health endpoint returns 200 without a token."""
    response = await app_client.get("/health")
    assert response.status_code == 200


async def test_health_endpoint_returns_healthy_status(app_client: AsyncClient) -> None:
    """Test that the health endpoint reports a reachable database."""
    response = await app_client.get("/health")
    data = response.json()
    assert data == {"status": "healthy", "database": "healthy"}


async def test_health_endpoint_sets_security_headers(app_client: AsyncClient) -> None:
    """Test that security headers are added to responses."""
    response = await app_client.get("/health")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert "max-age" in response.headers["strict-transport-security"]
