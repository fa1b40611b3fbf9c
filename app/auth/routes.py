# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Mounted at /api/auth.
#
# Note: Actual signup/login is handled by Supabase Auth client-side.
# These routes sync the profile row after sign-in and check token validity.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthCallbackRequest, AuthUser
from core.models.catalog import UserProfile
from core.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/callback", response_model=UserProfile)
def auth_callback(
    request: AuthCallbackRequest | None = None,
    user: AuthUser = Depends(get_current_user),
) -> UserProfile:
    """
    Create or refresh the caller's profile row after sign-in.

    Returns:
        UserProfile: The stored profile

    Raises:
        401: If not authenticated
    """
    request = request or AuthCallbackRequest()
    profile = UserProfile(
        id=str(user.id),
        email=user.email,
        full_name=request.full_name,
        image_url=request.image_url,
    )
    logger.info(f"Auth callback for user {user.id}")
    return CatalogService.upsert_user(profile)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
