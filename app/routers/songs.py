# =============================================================================
# app/routers/songs.py - Song Endpoints
# =============================================================================
# Mounted at /api/songs. Public read access to the catalog.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from core.models.catalog import Song
from core.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=list[Song])
def list_songs():
    """List all songs, newest first."""
    return CatalogService.list_songs()


@router.get("/{song_id}", response_model=Song)
def get_song(song_id: Annotated[str, Path(description="Song ID")]):
    """Get one song by ID."""
    return CatalogService.get_song(song_id)
