# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - catalog.py: Song, Album, UserProfile and Stats read models
#
# These models define the "contract" between API and clients.
# =============================================================================

from .catalog import (
    Album,
    Song,
    SongCreate,
    Stats,
    UserProfile,
)

__all__ = [
    "Album",
    "Song",
    "SongCreate",
    "Stats",
    "UserProfile",
]
