"""Tests for health check endpoints."""

from fastapi.testclient import TestClient

from api import app
from shared.config import get_settings


client = TestClient(app)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self):
        """Health endpoint should return 200 with status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "2.0.0"

    def test_health_response_structure(self):
        response = client.get("/api/health")
        assert set(response.json().keys()) == {"status", "version"}

    def test_readiness_reports_missing_integrations(self):
        """The test environment has no Supabase URL or Stripe key."""
        response = client.get("/api/ready")
        assert response.status_code == 200
        assert response.json() == {
            "status": "degraded",
            "database": "missing",
            "stripe": "missing",
            "auth": "configured",
        }

    def test_readiness_when_configured(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test_123")
        get_settings.cache_clear()
        response = client.get("/api/ready")
        assert response.json()["status"] == "ready"
