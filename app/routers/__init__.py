# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - users.py: Listener profiles
# - admin.py: Catalog management (admin only)
# - songs.py / albums.py: Public catalog reads
# - stats.py: Dashboard totals (admin only)
# - health.py: Health check endpoints
#
# The auth router lives in app/auth/routes.py.
# ROUTE_GROUPS is the fixed prefix table mounted by app.main, in order.
# =============================================================================

from fastapi import APIRouter

from app.auth import routes as auth
from . import admin, albums, health, songs, stats, users

ROUTE_GROUPS: tuple[tuple[str, APIRouter, str], ...] = (
    ("/api/users", users.router, "Users"),
    ("/api/admin", admin.router, "Admin"),
    ("/api/auth", auth.router, "Auth"),
    ("/api/songs", songs.router, "Songs"),
    ("/api/albums", albums.router, "Albums"),
    ("/api/stats", stats.router, "Stats"),
)

HEALTH_PREFIX = "/api/health"

__all__ = [
    "ROUTE_GROUPS",
    "HEALTH_PREFIX",
    "admin",
    "albums",
    "auth",
    "health",
    "songs",
    "stats",
    "users",
]
