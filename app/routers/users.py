# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# Mounted at /api/users. All endpoints require authentication.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from core.models.catalog import UserProfile
from core.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=list[UserProfile])
def list_users(user: AuthUser = Depends(get_current_user)):
    """List every other listener (the caller is left out)."""
    return CatalogService.list_users(exclude_id=user.id)
