# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Attaches the caller's identity from a Supabase JWT to each request and
# provides dependencies that enforce it.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user, get_current_user_optional, require_admin
from app.auth.middleware import AuthContextMiddleware, verify_token
from app.auth.models import AuthCallbackRequest, AuthUser

__all__ = [
    "get_current_user",
    "get_current_user_optional",
    "require_admin",
    "AuthContextMiddleware",
    "verify_token",
    "AuthCallbackRequest",
    "AuthUser",
]
