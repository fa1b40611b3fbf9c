# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings


def get_app_settings(request: Request) -> Settings:
    """
    Settings the running app was created with.

    create_app() stores them on app.state so every request sees the same
    explicit configuration rather than re-reading the environment.
    """
    return request.app.state.settings


# Type alias for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
