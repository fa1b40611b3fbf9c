# =============================================================================
# tests/test_routing.py - Route Group Mounting Tests
# =============================================================================
# Tests that each of the six API prefixes dispatches only to its own router
# and that the thin route groups reach the catalog service.
# =============================================================================

from unittest.mock import patch

from fastapi.routing import APIRoute

from app.routers import ROUTE_GROUPS
from core.models.catalog import Album, Song, Stats, UserProfile


EXPECTED_PREFIXES = [
    "/api/users",
    "/api/admin",
    "/api/auth",
    "/api/songs",
    "/api/albums",
    "/api/stats",
]


def _group_for(path: str) -> list[str]:
    return [
        prefix for prefix, _, _ in ROUTE_GROUPS
        if path == prefix or path.startswith(prefix + "/")
    ]


class TestRouteTable:
    """The static prefix table."""

    def test_six_prefixes_in_order(self):
        assert [prefix for prefix, _, _ in ROUTE_GROUPS] == EXPECTED_PREFIXES

    def test_prefixes_do_not_overlap(self):
        for prefix, _, _ in ROUTE_GROUPS:
            assert _group_for(prefix) == [prefix]

    def test_each_route_belongs_to_exactly_its_group(self, client):
        endpoints_by_prefix = {
            prefix: {route.endpoint for route in router.routes}
            for prefix, router, _ in ROUTE_GROUPS
        }

        api_routes = [
            route for route in client.app.routes
            if isinstance(route, APIRoute) and _group_for(route.path)
        ]
        assert api_routes

        for route in api_routes:
            (prefix,) = _group_for(route.path)
            assert route.endpoint in endpoints_by_prefix[prefix], route.path
            for other, endpoints in endpoints_by_prefix.items():
                if other != prefix:
                    assert route.endpoint not in endpoints

    def test_every_group_is_mounted(self, client):
        mounted = {route.path for route in client.app.routes if isinstance(route, APIRoute)}
        for prefix in EXPECTED_PREFIXES:
            assert any(path == prefix or path.startswith(prefix + "/") for path in mounted), prefix


class TestDispatch:
    """Requests reach the right handler group."""

    def test_songs_prefix(self, client, sample_song_row):
        with patch("app.routers.songs.CatalogService") as catalog:
            catalog.list_songs.return_value = [Song(**sample_song_row)]

            response = client.get("/api/songs")

        assert response.status_code == 200
        assert response.json()[0]["title"] == "Midnight Drive"
        catalog.list_songs.assert_called_once_with()

    def test_song_detail(self, client, sample_song_row):
        with patch("app.routers.songs.CatalogService") as catalog:
            catalog.get_song.return_value = Song(**sample_song_row)

            response = client.get("/api/songs/song-1")

        assert response.status_code == 200
        catalog.get_song.assert_called_once_with("song-1")

    def test_albums_prefix(self, client, sample_album_row, sample_song_row):
        with patch("app.routers.albums.CatalogService") as catalog:
            catalog.get_album.return_value = Album(**sample_album_row, songs=[Song(**sample_song_row)])

            response = client.get("/api/albums/album-1")

        assert response.status_code == 200
        assert response.json()["songs"][0]["id"] == "song-1"

    def test_users_prefix_excludes_caller(self, client, user_headers):
        with patch("app.routers.users.CatalogService") as catalog:
            catalog.list_users.return_value = [UserProfile(id="other-user", full_name="Ada")]

            response = client.get("/api/users", headers=user_headers)

        assert response.status_code == 200
        assert response.json() == [
            {"id": "other-user", "email": None, "full_name": "Ada", "image_url": None}
        ]
        (kwargs,) = [call.kwargs for call in catalog.list_users.call_args_list]
        assert kwargs["exclude_id"] is not None

    def test_users_prefix_requires_auth(self, client):
        assert client.get("/api/users").status_code == 401

    def test_stats_prefix_requires_admin(self, client, user_headers, admin_headers):
        with patch("app.routers.stats.CatalogService") as catalog:
            catalog.get_stats.return_value = Stats(total_songs=3, total_albums=1, total_users=2, total_artists=2)

            anonymous = client.get("/api/stats")
            listener = client.get("/api/stats", headers=user_headers)
            admin = client.get("/api/stats", headers=admin_headers)

        assert anonymous.status_code == 401
        assert listener.status_code == 403
        assert admin.status_code == 200
        assert admin.json()["total_songs"] == 3
        catalog.get_stats.assert_called_once_with()

    def test_unknown_api_path_is_404_in_development(self, client):
        assert client.get("/api/playlists").status_code == 404

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["environment"] == "development"
