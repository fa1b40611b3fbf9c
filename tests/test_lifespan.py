# =============================================================================
# tests/test_lifespan.py - Application Lifespan Tests
# =============================================================================
# Tests for startup/shutdown wiring:
# - Temp directory creation and the cleanup scheduler lifecycle
# - Database connection triggered in the background, failures non-fatal
# - CORS configured for the frontend origin
# - The port announced only once uvicorn has bound the socket
# =============================================================================

import asyncio
import logging
import threading
from unittest.mock import patch

import uvicorn
from fastapi.testclient import TestClient

from app.main import MelodiaServer, create_app
from lib.supabase_client import SupabaseClientError


class TestLifespan:
    """Startup and shutdown."""

    def test_startup_creates_temp_dir_and_starts_scheduler(self, make_settings):
        settings = make_settings(TEMP_CLEANUP_ENABLED=True)
        app = create_app(settings)

        with patch("app.main.SupabaseClient"):
            with TestClient(app) as client:
                assert settings.TEMP_DIR.is_dir()
                scheduler = app.state.cleanup_scheduler
                assert scheduler.running
                assert scheduler.directory == settings.TEMP_DIR
                assert client.get("/api/health").status_code == 200

        assert not scheduler.running

    def test_scheduler_disabled(self, make_settings):
        app = create_app(make_settings(TEMP_CLEANUP_ENABLED=False))

        with patch("app.main.SupabaseClient"):
            with TestClient(app):
                assert app.state.cleanup_scheduler is None

    def test_database_connect_is_triggered(self, make_settings):
        connected = threading.Event()
        app = create_app(make_settings())

        with patch("app.main.SupabaseClient") as supabase:
            supabase.connect.side_effect = connected.set
            with TestClient(app):
                assert connected.wait(timeout=5)

    def test_database_failure_is_not_fatal(self, make_settings):
        attempted = threading.Event()
        app = create_app(make_settings())

        def failing_connect():
            attempted.set()
            raise SupabaseClientError("connection refused")

        with patch("app.main.SupabaseClient") as supabase:
            supabase.connect.side_effect = failing_connect
            with TestClient(app) as client:
                assert attempted.wait(timeout=5)
                assert client.get("/api/health").status_code == 200


class TestCors:
    """CORS for the frontend dev server."""

    def test_preflight_from_frontend_origin(self, client):
        response = client.options(
            "/api/songs",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_other_origin_not_allowed(self, client):
        response = client.options(
            "/api/songs",
            headers={
                "Origin": "https://evil.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert "access-control-allow-origin" not in response.headers


class TestServerStartup:
    """MelodiaServer announces the port after uvicorn's own startup."""

    def test_port_logged_once_bound(self, caplog):
        server = MelodiaServer(uvicorn.Config("app.main:app", port=5123))

        async def bound(self, sockets=None):
            self.started = True

        with patch.object(uvicorn.Server, "startup", bound):
            with caplog.at_level(logging.INFO, logger="app.main"):
                asyncio.run(server.startup())

        assert "Server is running on port 5123" in caplog.text

    def test_nothing_logged_when_startup_fails(self, caplog):
        server = MelodiaServer(uvicorn.Config("app.main:app", port=5123))

        async def failed(self, sockets=None):
            self.should_exit = True

        with patch.object(uvicorn.Server, "startup", failed):
            with caplog.at_level(logging.INFO, logger="app.main"):
                asyncio.run(server.startup())

        assert "Server is running" not in caplog.text
