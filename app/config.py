# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.PORT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The app factory (app.main.create_app) takes a Settings instance explicitly,
# so tests can build isolated apps without touching the process environment.
# =============================================================================

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


MEBIBYTE = 1024 * 1024


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Database and media storage. URL and service key are required.

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str | None = Field(
        default=None,
        description="Legacy HS256 secret used to verify Supabase access tokens"
    )

    SUPABASE_MEDIA_BUCKET: str = Field(
        default="media",
        description="Storage bucket for song audio and cover images"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: str = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT"),
        description="Runtime mode; only 'production' changes behavior"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "API_PORT"),
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    ADMIN_EMAIL: str | None = Field(
        default=None,
        description="Email of the single account allowed to use /api/admin"
    )

    # -------------------------------------------------------------------------
    # Filesystem
    # -------------------------------------------------------------------------

    TEMP_DIR: Path = Field(
        default_factory=lambda: Path.cwd() / "tmp",
        description="Staging directory for uploaded files (emptied hourly)"
    )

    FRONTEND_DIST_DIR: Path = Field(
        default_factory=lambda: Path.cwd() / "frontend" / "dist",
        description="Built frontend bundle served in production"
    )

    # -------------------------------------------------------------------------
    # File Upload Settings
    # -------------------------------------------------------------------------

    UPLOAD_USE_TEMP_FILES: bool = Field(
        default=True,
        description="Stage uploaded files on disk instead of holding them in memory"
    )

    UPLOAD_CREATE_PARENT_PATH: bool = Field(
        default=True,
        description="Create missing parent directories when a staged file is moved"
    )

    UPLOAD_MAX_FILE_SIZE: int = Field(
        default=10 * MEBIBYTE,
        ge=1,
        description="Maximum size of a single uploaded file in bytes"
    )

    UPLOAD_MAX_FILES: int = Field(
        default=1000,
        ge=1,
        description="Maximum number of file parts per request"
    )

    UPLOAD_MAX_REQUEST_SIZE: int = Field(
        default=100 * MEBIBYTE,
        ge=1,
        description="Ceiling on a whole multipart body in bytes"
    )

    # -------------------------------------------------------------------------
    # Temp Cleanup
    # -------------------------------------------------------------------------

    TEMP_CLEANUP_ENABLED: bool = Field(
        default=True,
        description="Run the hourly temp directory cleanup"
    )

    TEMP_CLEANUP_MINUTE: int = Field(
        default=0,
        ge=0,
        le=59,
        description="Minute past each hour at which the cleanup fires"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        # Allow Settings(PORT=...) in code as well as the env aliases
        populate_by_name=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def max_request_size(self) -> int:
        """Upper bound on a multipart body; always fits one file at the limit plus form overhead."""
        return max(self.UPLOAD_MAX_REQUEST_SIZE, self.UPLOAD_MAX_FILE_SIZE + MEBIBYTE)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()
