# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class AuthCallbackRequest(BaseModel):
    """
    Profile details sent by the frontend right after sign-in.

    The user id and email always come from the verified token, never
    from this body.
    """
    full_name: Optional[str] = None
    image_url: Optional[str] = None
