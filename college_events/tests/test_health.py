"""Tests for health and root endpoints."""

from fastapi.testclient import TestClient


class TestHealth:
    """Test cases for GET /health and GET /."""

    def test_health_check(self, client: TestClient):
        """Test health endpoint reports ok."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "college-events-api"
        assert "version" in data

    def test_root(self, client: TestClient):
        """Test root endpoint points at the docs."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"
