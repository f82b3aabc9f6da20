"""
Tests for application wiring and configuration.
"""
from datetime import datetime

from config import DEFAULT_ORIGINS, AppConfig


class TestAppRoutes:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["message"] == "WordWanderer API is running"
        assert body["environment"] == "test"
        assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Welcome to WordWanderer API",
            "version": "1.0.0",
            "documentation": "/docs",
            "health": "/health",
        }

    def test_cors_preflight_allows_configured_origin(self, client):
        response = client.options(
            "/api/speech/score",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_cors_rejects_unknown_origin(self, client):
        response = client.post(
            "/api/speech/score",
            json={"expected": "ni3", "transcript": "ni3"},
            headers={"Origin": "http://evil.example"},
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers


class TestAppConfig:

    def _clear_env(self, monkeypatch):
        for name in ("APP_ENV", "LOG_LEVEL", "CORS_ORIGINS", "FRONTEND_URL", "API_VERSION", "PORT"):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self, monkeypatch):
        self._clear_env(monkeypatch)

        config = AppConfig.from_env()

        assert config.environment == "development"
        assert config.log_level == "DEBUG"
        assert config.version == "1.0.0"
        assert config.port == 5000
        assert config.cors_origins == DEFAULT_ORIGINS

    def test_reads_environment(self, monkeypatch):
        self._clear_env(monkeypatch)
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, ,https://b.example")
        monkeypatch.setenv("FRONTEND_URL", " https://app.example ")
        monkeypatch.setenv("PORT", "8080")

        config = AppConfig.from_env()

        assert config.environment == "production"
        assert config.log_level == "INFO"
        assert config.port == 8080
        assert config.cors_origins == [
            "https://a.example",
            "https://b.example",
            "https://app.example",
        ]

    def test_log_level_override(self, monkeypatch):
        self._clear_env(monkeypatch)
        monkeypatch.setenv("LOG_LEVEL", "warning")

        assert AppConfig.from_env().log_level == "WARNING"
