# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds isolated apps from explicit Settings (one temp dir per test)
# - Signs bearer tokens with the test JWT secret
# =============================================================================

import os
import time
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# app.main builds the module-level app from the environment on import

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-unit-tests")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("DEBUG", "true")
# Mode and port come from Settings(...) arguments in tests
for name in ("NODE_ENV", "ENVIRONMENT", "PORT", "API_PORT"):
    os.environ.pop(name, None)

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.config import Settings
from app.main import create_app

JWT_SECRET = os.environ["SUPABASE_JWT_SECRET"]
ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def make_settings(tmp_path):
    """Factory for Settings rooted in the test's tmp_path."""

    def _make(**overrides) -> Settings:
        values = {
            "TEMP_DIR": tmp_path / "tmp",
            "FRONTEND_DIST_DIR": tmp_path / "frontend" / "dist",
            "TEMP_CLEANUP_ENABLED": False,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def make_client(make_settings):
    """Factory for a TestClient over a freshly built app (lifespan not run)."""

    def _make(**overrides) -> TestClient:
        app = create_app(make_settings(**overrides))
        return TestClient(app, raise_server_exceptions=False)

    return _make


@pytest.fixture
def client(make_client):
    """Development-mode client."""
    return make_client()


def make_token(
    sub: str | None = None,
    email: str | None = "listener@example.com",
    secret: str = JWT_SECRET,
    expires_in: int = 3600,
    audience: str = "authenticated",
) -> str:
    """Sign a Supabase-style HS256 access token."""
    now = int(time.time())
    claims = {
        "sub": sub or str(uuid4()),
        "aud": audience,
        "iat": now,
        "exp": now + expires_in,
    }
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_header(**kwargs) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(**kwargs)}"}


@pytest.fixture
def user_headers():
    return auth_header()


@pytest.fixture
def admin_headers():
    return auth_header(email=ADMIN_EMAIL)


@pytest.fixture
def sample_song_row():
    """Song row as returned by the database."""
    return {
        "id": "song-1",
        "title": "Midnight Drive",
        "artist": "The Night Owls",
        "image_url": "https://cdn.example.com/images/song-1.jpg",
        "audio_url": "https://cdn.example.com/songs/song-1.mp3",
        "duration": 215,
        "album_id": "album-1",
        "created_at": "2024-01-15T10:00:00Z",
    }


@pytest.fixture
def sample_album_row():
    """Album row as returned by the database."""
    return {
        "id": "album-1",
        "title": "After Hours",
        "artist": "The Night Owls",
        "image_url": "https://cdn.example.com/images/album-1.jpg",
        "release_year": 2023,
    }
