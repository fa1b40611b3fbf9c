# =============================================================================
# core/services/media_service.py - Supabase Storage Operations
# =============================================================================
# Pushes staged upload files (audio, cover images) to the media bucket and
# returns their public URLs.
# =============================================================================

import logging
import mimetypes
from pathlib import Path
from uuid import uuid4

from app.exceptions import MediaUploadError
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class MediaService:
    """
    Service for Supabase Storage operations.

    Handles uploading staged files to storage.
    """

    @staticmethod
    def build_storage_path(folder: str, filename: str | None) -> str:
        """
        Unique object path that keeps the original extension.

        Example: ("songs", "track.mp3") -> "songs/3f2a...9c.mp3"
        """
        suffix = Path(filename).suffix.lower() if filename else ""
        return f"{folder}/{uuid4().hex}{suffix}"

    @staticmethod
    def upload(
        bucket: str,
        folder: str,
        content: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        """
        Upload bytes to storage.

        Args:
            bucket: Storage bucket name
            folder: Folder inside the bucket ("songs", "images", ...)
            content: File bytes
            filename: Original filename, used for the extension
            content_type: MIME type; guessed from filename when omitted

        Returns:
            Public URL of the stored object

        Raises:
            MediaUploadError: If upload fails
        """
        client = SupabaseClient.get_client()
        path = MediaService.build_storage_path(folder, filename)
        if content_type is None:
            content_type = mimetypes.guess_type(filename or "")[0] or "application/octet-stream"

        try:
            storage = client.storage.from_(bucket)
            storage.upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "true"}
            )
            url = storage.get_public_url(path)
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise MediaUploadError(str(e))

        logger.info(f"Uploaded media to storage: {bucket}/{path}")
        return url
