# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Route-level enforcement on top of AuthContextMiddleware, which has already
# verified the token and stored the user on request.state.
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from app.auth.middleware import AUTH_STATE_KEY
from app.auth.models import AuthUser
from app.config import Settings
from app.dependencies import get_app_settings

logger = logging.getLogger(__name__)


async def get_current_user_optional(request: Request) -> Optional[AuthUser]:
    """
    The user attached by the auth middleware, or None for anonymous requests.

    Useful for endpoints that work with or without authentication.
    """
    return getattr(request.state, AUTH_STATE_KEY, None)


async def get_current_user(
    user: Optional[AuthUser] = Depends(get_current_user_optional),
) -> AuthUser:
    """
    Require an authenticated user.

    Raises:
        HTTPException: 401 if no valid token was presented
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - you must be logged in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(
    user: AuthUser = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
) -> AuthUser:
    """
    Require the configured admin account.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not the admin
    """
    admin_email = (settings.ADMIN_EMAIL or "").strip().lower()
    if not admin_email or (user.email or "").lower() != admin_email:
        logger.warning(f"Admin access denied for user {user.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized - you must be an admin",
        )
    return user
