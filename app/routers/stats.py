# =============================================================================
# app/routers/stats.py - Dashboard Statistics
# =============================================================================
# Mounted at /api/stats. Admin only.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import require_admin
from core.models.catalog import Stats
from core.services.catalog_service import CatalogService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=Stats)
def get_stats():
    """Totals of songs, albums, users and distinct artists."""
    return CatalogService.get_stats()
