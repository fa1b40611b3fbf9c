# =============================================================================
# tests/test_frontend.py - Production Frontend Serving Tests
# =============================================================================
# Tests for the single-page app fallback:
# - Unknown paths serve index.html in production, 404 elsewhere
# - Real assets are served as-is
# - API routes still win over the catch-all
# =============================================================================

from unittest.mock import patch

import pytest

from app.frontend import resolve_frontend_file
from core.models.catalog import Song

INDEX_HTML = "<!doctype html><div id=\"root\"></div>"


@pytest.fixture
def dist_dir(tmp_path):
    dist = tmp_path / "frontend" / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text(INDEX_HTML)
    (dist / "assets" / "app.js").write_text("console.log('melodia');")
    (tmp_path / "secret.txt").write_text("do not serve")
    return dist


class TestProduction:
    """NODE_ENV=production."""

    def test_unknown_path_serves_index(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        response = client.get("/unknown/path")

        assert response.status_code == 200
        assert response.text == INDEX_HTML
        assert response.headers["content-type"].startswith("text/html")

    def test_root_serves_index(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        assert client.get("/").text == INDEX_HTML

    def test_asset_is_served(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        response = client.get("/assets/app.js")

        assert response.status_code == 200
        assert "melodia" in response.text

    def test_unmatched_api_path_serves_index(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        response = client.get("/api/playlists")

        assert response.status_code == 200
        assert response.text == INDEX_HTML

    def test_api_routes_take_precedence(self, make_client, dist_dir, sample_song_row):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        with patch("app.routers.songs.CatalogService") as catalog:
            catalog.list_songs.return_value = [Song(**sample_song_row)]
            response = client.get("/api/songs")

        assert response.status_code == 200
        assert response.json()[0]["id"] == "song-1"

    def test_missing_build_is_a_generic_500(self, make_client, tmp_path):
        dist = tmp_path / "srv" / "secret-layout"
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist)

        response = client.get("/some/page")

        assert response.status_code == 500
        assert response.json()["code"] == "INTERNAL_ERROR"
        assert "secret-layout" not in response.text

    def test_non_get_unmatched_path_is_404(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        assert client.post("/unknown/path").status_code == 404
        assert client.delete("/unknown/path").status_code == 404

    def test_head_serves_index(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="production", FRONTEND_DIST_DIR=dist_dir)

        assert client.head("/unknown/path").status_code == 200


class TestDevelopment:
    """Any mode other than production."""

    def test_unknown_path_is_404(self, make_client, dist_dir):
        client = make_client(ENVIRONMENT="development", FRONTEND_DIST_DIR=dist_dir)

        assert client.get("/unknown/path").status_code == 404


class TestResolveFrontendFile:
    """Path mapping inside the dist directory."""

    def test_existing_file(self, dist_dir):
        assert resolve_frontend_file(dist_dir, "assets/app.js") == (dist_dir / "assets" / "app.js").resolve()

    def test_directory_falls_back_to_index(self, dist_dir):
        assert resolve_frontend_file(dist_dir, "assets").name == "index.html"

    def test_traversal_falls_back_to_index(self, dist_dir):
        resolved = resolve_frontend_file(dist_dir, "../../secret.txt")

        assert resolved == (dist_dir / "index.html").resolve()
