# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every typed error carries its own status code; anything else falls through
# to the catch-all handler, which is the last line of defence for a request.
# =============================================================================

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class MelodiaException(Exception):
    """
    Base exception for the Melodia API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MELODIA_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result

    def to_response(self) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_dict())


# =============================================================================
# Catalog Exceptions
# =============================================================================

class SongNotFoundError(MelodiaException):
    """Raised when a song ID doesn't exist."""

    def __init__(self, song_id: str):
        super().__init__(
            message=f"Song not found: {song_id}",
            code="SONG_NOT_FOUND",
            status_code=404,
            suggestion="Check that the song_id is correct",
            details={"song_id": song_id}
        )


class AlbumNotFoundError(MelodiaException):
    """Raised when an album ID doesn't exist."""

    def __init__(self, album_id: str):
        super().__init__(
            message=f"Album not found: {album_id}",
            code="ALBUM_NOT_FOUND",
            status_code=404,
            suggestion="Check that the album_id is correct",
            details={"album_id": album_id}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class FileTooLargeError(MelodiaException):
    """Raised when an uploaded file exceeds the size limit."""

    def __init__(self, max_bytes: int, filename: str | None = None):
        max_mb = max_bytes / (1024 * 1024)
        super().__init__(
            message=f"File too large (max: {max_mb:g}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb:g}MB",
            details={"filename": filename, "max_bytes": max_bytes} if filename else {"max_bytes": max_bytes}
        )


class InvalidUploadError(MelodiaException):
    """Raised when a multipart body cannot be parsed or has too many files."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Invalid upload: {error}",
            code="INVALID_UPLOAD",
            status_code=400,
            suggestion="Send files as multipart/form-data",
            details={"error": error}
        )


class MissingUploadError(MelodiaException):
    """Raised when a required file field is absent from the form."""

    def __init__(self, fields: list[str]):
        super().__init__(
            message=f"Missing required files: {', '.join(fields)}",
            code="MISSING_UPLOAD",
            status_code=400,
            suggestion="Attach every required file to the multipart form",
            details={"fields": fields}
        )


class MediaUploadError(MelodiaException):
    """Raised when a staged file cannot be pushed to media storage."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to upload media to storage: {error}",
            code="MEDIA_UPLOAD_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"error": error}
        )


# =============================================================================
# Frontend Exceptions
# =============================================================================

class FrontendNotBuiltError(MelodiaException):
    """Raised when production mode has no built frontend to serve."""

    def __init__(self, path: str):
        super().__init__(
            message="Frontend build not found",
            code="FRONTEND_NOT_BUILT",
            status_code=500,
            suggestion="Run the frontend build so that index.html exists in the dist directory",
            details={"path": path}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def melodia_exception_handler(
    request: Request,
    exc: MelodiaException
) -> JSONResponse:
    """
    Convert MelodiaException to JSON response.

    Returns structured error with:
    - message: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return exc.to_response()


def unhandled_error_body(exc: Exception, production: bool) -> dict[str, str]:
    """Body returned for an unexpected error; production never leaks the message."""
    return {
        "message": GENERIC_ERROR_MESSAGE if production else str(exc),
        "code": "INTERNAL_ERROR",
    }


def register_exception_handlers(app: FastAPI, production: bool) -> None:
    """
    Install the typed-error handler and the catch-all on the app.

    The catch-all is an HTTP middleware, so it must be registered inside
    CORSMiddleware for error responses to carry CORS headers.
    """

    @app.exception_handler(MelodiaException)
    async def handle_melodia_exception(request: Request, exc: MelodiaException):
        """Handle custom Melodia exceptions; server faults are hidden in production."""
        if production and exc.status_code >= 500:
            logger.error(f"Unhandled error: {exc.message}", exc_info=exc)
            return JSONResponse(
                status_code=500,
                content=unhandled_error_body(exc, production),
            )
        return await melodia_exception_handler(request, exc)

    @app.middleware("http")
    async def handle_general_exception(request: Request, call_next):
        """Handle unexpected exceptions."""
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception(f"Unhandled error: {exc}")
            return JSONResponse(
                status_code=500,
                content=unhandled_error_body(exc, production),
            )
