# =============================================================================
# app/routers/admin.py - Admin Endpoints
# =============================================================================
# Mounted at /api/admin. Every endpoint requires the admin account.
#
# Song creation reads the multipart form staged by UploadMiddleware:
#   audioFile, imageFile  - required files
#   title, artist         - required text fields
#   duration, albumId     - optional text fields
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from app.auth import require_admin
from app.dependencies import SettingsDep
from app.exceptions import MissingUploadError
from app.middleware.uploads import StagedForm, get_staged_form
from core.models.catalog import Song, SongCreate
from core.services.catalog_service import CatalogService
from core.services.media_service import MediaService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])

# Form field name -> SongCreate field name
SONG_FORM_FIELDS = {
    "title": "title",
    "artist": "artist",
    "duration": "duration",
    "albumId": "album_id",
}


def _song_from_form(form: StagedForm) -> SongCreate:
    data = {
        model_field: form.fields[form_field]
        for form_field, model_field in SONG_FORM_FIELDS.items()
        if form.fields.get(form_field)
    }
    try:
        return SongCreate(**data)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


@router.get("/check")
async def check_admin():
    """Tell the frontend whether the caller is the admin."""
    return {"admin": True}


@router.post("/songs", response_model=Song, status_code=status.HTTP_201_CREATED)
def create_song(
    settings: SettingsDep,
    form: StagedForm = Depends(get_staged_form),
):
    """
    Create a song from an uploaded audio file and cover image.

    This endpoint:
    1. Validates the staged form (both files, title, artist)
    2. Uploads both files to the media bucket
    3. Inserts the song row with the public URLs
    """
    audio = form.file("audioFile")
    image = form.file("imageFile")

    try:
        missing = [name for name, upload in (("audioFile", audio), ("imageFile", image)) if upload is None]
        if missing:
            raise MissingUploadError(missing)

        song = _song_from_form(form)

        audio_url = MediaService.upload(
            settings.SUPABASE_MEDIA_BUCKET,
            "songs",
            audio.read_bytes(),
            filename=audio.filename,
            content_type=audio.content_type,
        )
        image_url = MediaService.upload(
            settings.SUPABASE_MEDIA_BUCKET,
            "images",
            image.read_bytes(),
            filename=image.filename,
            content_type=image.content_type,
        )
    finally:
        form.discard()

    return CatalogService.create_song(song, audio_url=audio_url, image_url=image_url)


@router.delete("/songs/{song_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_song(song_id: Annotated[str, Path(description="Song ID")]):
    CatalogService.delete_song(song_id)
