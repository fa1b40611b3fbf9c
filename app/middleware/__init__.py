# =============================================================================
# app/middleware/ - ASGI Middleware
# =============================================================================
# - uploads.py: Stage multipart file parts in the temp directory
#
# The auth context middleware lives with the rest of auth in app/auth/.
# =============================================================================

from app.middleware.uploads import (
    StagedForm,
    StagedUpload,
    UploadMiddleware,
    get_staged_form,
)

__all__ = [
    "StagedForm",
    "StagedUpload",
    "UploadMiddleware",
    "get_staged_form",
]
