# =============================================================================
# app/frontend.py - Built Frontend Serving (production)
# =============================================================================
# Serves the single-page app bundle from FRONTEND_DIST_DIR. Any GET that no
# API route matched returns the requested asset if it exists in the bundle,
# and index.html otherwise, so client-side routes survive a page reload.
#
# Must be registered after every API router: it matches all paths.
# =============================================================================

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import FileResponse

from app.exceptions import FrontendNotBuiltError

logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"

# The bundle is only served to GET/HEAD; other methods on unmatched paths get 404
CATCH_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def resolve_frontend_file(dist_dir: Path, requested: str) -> Path:
    """
    Map a request path to a file inside the bundle.

    Falls back to index.html for directories, missing files, and any path
    that would escape the dist directory.
    """
    root = dist_dir.resolve()
    index = root / INDEX_DOCUMENT

    if requested:
        candidate = (root / requested).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate

    return index


def mount_frontend(app: FastAPI, dist_dir: Path) -> None:
    """Register the catch-all route that serves the bundle."""
    dist_dir = Path(dist_dir)
    if not (dist_dir / INDEX_DOCUMENT).is_file():
        logger.warning(f"Frontend build not found at {dist_dir}; page requests will fail")

    @app.api_route("/{full_path:path}", methods=CATCH_ALL_METHODS, include_in_schema=False)
    async def serve_frontend(request: Request, full_path: str):
        if request.method not in ("GET", "HEAD"):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

        path = resolve_frontend_file(dist_dir, full_path)
        if not path.is_file():
            raise FrontendNotBuiltError(str(dist_dir))
        return FileResponse(path)
