"""Tests for clientlink.main FastAPI application."""

import pytest
from starlette.testclient import TestClient

from clientlink import main
from clientlink.main import app


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep the lifespan's database out of the working directory."""
    monkeypatch.setattr(main.settings, "DATABASE_DIR", str(tmp_path / "data"))


class TestHealthEndpoint:
    """GET /health returns 200 with {"status": "ok"}."""

    def test_health_returns_200(self):
        """GET /health returns HTTP 200."""
        with TestClient(app) as client:
            response = client.get("/health")
            assert response.status_code == 200

    def test_health_returns_ok_status(self):
        """GET /health returns JSON body with status 'ok'."""
        with TestClient(app) as client:
            response = client.get("/health")
            assert response.json() == {"status": "ok"}


class TestLifespan:
    """Startup wires the link store and matcher config onto app.state."""

    def test_state_populated(self, tmp_path):
        with TestClient(app):
            assert app.state.client_repo is not None
            assert app.state.target_repo is not None
            assert app.state.matcher_config.corporate_suffixes
        assert (tmp_path / "data" / "clientlink.db").exists()

    def test_end_to_end_propose(self):
        with TestClient(app) as client:
            client.post("/api/v1/clients", json={"name": "Globex Consultoria"})
            client.post("/api/v1/targets", json={"name": "GLOBEX", "tax_id": "999"})
            matches = client.post("/api/v1/matches/propose").json()["matches"]
            assert len(matches) == 1
            assert matches[0]["confidence"] == "high"


class TestCORSMiddleware:
    """CORS headers present on response when Origin header sent."""

    def test_cors_allows_configured_origin(self):
        """Response includes access-control-allow-origin for the configured FRONTEND_URL."""
        with TestClient(app) as client:
            response = client.get(
                "/health",
                headers={"Origin": "http://localhost:3000"},
            )
            assert response.headers.get("access-control-allow-origin") == "http://localhost:3000"

    def test_cors_rejects_unknown_origin(self):
        """Response does not include access-control-allow-origin for unknown origins."""
        with TestClient(app) as client:
            response = client.get(
                "/health",
                headers={"Origin": "http://evil.example.com"},
            )
            assert response.headers.get("access-control-allow-origin") is None
