# =============================================================================
# app/routers/albums.py - Album Endpoints
# =============================================================================
# Mounted at /api/albums. Public read access to the catalog.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path

from core.models.catalog import Album
from core.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=list[Album])
def list_albums():
    return CatalogService.list_albums()


@router.get("/{album_id}", response_model=Album)
def get_album(album_id: Annotated[str, Path(description="Album ID")]):
    """Get an album with its songs."""
    return CatalogService.get_album(album_id)
