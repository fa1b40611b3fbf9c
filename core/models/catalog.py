# =============================================================================
# core/models/catalog.py - Catalog Schemas
# =============================================================================
# Read models for the rows owned by the database collaborator:
# - Song / Album: the music catalog
# - UserProfile: a listener known to the app
# - Stats: counts shown on the admin dashboard
#
# Rows come back from Supabase as dicts; these models validate and shape them
# for API responses. Column names follow the database (snake_case).
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field


class Song(BaseModel):
    """A single track with its media URLs."""

    id: str = Field(..., description="Song identifier")
    title: str = Field(..., min_length=1)
    artist: str = Field(..., min_length=1)
    image_url: str = Field(..., description="Public URL of the cover image")
    audio_url: str = Field(..., description="Public URL of the audio file")
    duration: int = Field(default=0, ge=0, description="Length in seconds")
    album_id: str | None = Field(default=None)
    created_at: datetime | None = None


class SongCreate(BaseModel):
    """
    Fields of a new song, as submitted in the admin upload form.

    Media URLs are filled in after the staged files reach storage.
    """

    title: str = Field(..., min_length=1, max_length=255)
    artist: str = Field(..., min_length=1, max_length=255)
    duration: int = Field(default=0, ge=0)
    album_id: str | None = None


class Album(BaseModel):
    """An album; `songs` is only populated on the detail endpoint."""

    id: str
    title: str
    artist: str
    image_url: str
    release_year: int | None = None
    songs: list[Song] = Field(default_factory=list)


class UserProfile(BaseModel):
    """Profile row for a listener, keyed by the auth provider's user id."""

    id: str
    email: str | None = None
    full_name: str | None = None
    image_url: str | None = None


class Stats(BaseModel):
    """Catalog totals for the admin dashboard."""

    total_songs: int = 0
    total_albums: int = 0
    total_users: int = 0
    total_artists: int = 0
