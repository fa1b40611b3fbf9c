# =============================================================================
# app/middleware/uploads.py - Multipart Upload Staging
# =============================================================================
# ASGI middleware that intercepts multipart/form-data requests, writes every
# file part into the temp directory, and rejects oversized files before the
# request reaches any router.
#
# Handlers read the parsed form through the get_staged_form dependency:
#
#   @router.post("/songs")
#   async def create(form: StagedForm = Depends(get_staged_form)):
#       audio = form.file("audioFile")
#
# Staged files are disposable: the hourly cleanup empties the temp directory
# regardless of whether a handler moved them elsewhere.
# =============================================================================

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from uuid import uuid4

from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import Headers, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.exceptions import FileTooLargeError, InvalidUploadError, MelodiaException

logger = logging.getLogger(__name__)

STATE_KEY = "staged_form"
TEMP_FILE_PREFIX = "tmp-"


# =============================================================================
# Staged Form Types
# =============================================================================

@dataclass
class StagedUpload:
    """
    One file part from a multipart request.

    With temp files enabled the content lives at `path`; otherwise it is
    held in memory in `data`.
    """
    field: str
    filename: str | None
    content_type: str | None
    size: int
    path: Path | None = None
    data: bytes | None = None
    create_parent_path: bool = True

    def read_bytes(self) -> bytes:
        if self.path is not None:
            return self.path.read_bytes()
        return self.data or b""

    def move_to(self, destination: str | Path) -> Path:
        """Persist the file at `destination`, creating parent directories if configured."""
        destination = Path(destination)
        if self.create_parent_path:
            destination.parent.mkdir(parents=True, exist_ok=True)

        if self.path is not None:
            shutil.move(str(self.path), str(destination))
        else:
            destination.write_bytes(self.data or b"")
            self.data = None

        self.path = destination
        return destination

    def discard(self) -> None:
        if self.path is not None:
            self.path.unlink(missing_ok=True)


@dataclass
class StagedForm:
    """Text fields and staged files of one multipart request."""
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, list[StagedUpload]] = field(default_factory=dict)

    def file(self, name: str) -> StagedUpload | None:
        """First file submitted under `name`, if any."""
        uploads = self.files.get(name)
        return uploads[0] if uploads else None

    def all_files(self) -> list[StagedUpload]:
        return [upload for uploads in self.files.values() for upload in uploads]

    def discard(self) -> None:
        for upload in self.all_files():
            upload.discard()


def get_staged_form(request: Request) -> StagedForm:
    """FastAPI dependency: the staged form, or an empty one for non-multipart requests."""
    return getattr(request.state, STATE_KEY, None) or StagedForm()


# =============================================================================
# Middleware
# =============================================================================

class _BodyTooLarge(Exception):
    """Raised from the receive wrapper once the body passes the request ceiling."""


def _is_multipart(scope: Scope) -> bool:
    content_type = Headers(scope=scope).get("content-type", "")
    return content_type.lower().startswith("multipart/form-data")


def _replay_empty_body(receive: Receive) -> Receive:
    """Hand the downstream app an empty body, then defer to the real channel."""
    sent = False

    async def wrapped() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        return await receive()

    return wrapped


class UploadMiddleware:
    """
    Stage multipart file parts on disk and enforce the per-file size limit.

    Args:
        app: The wrapped ASGI app
        temp_dir: Staging directory (created on demand)
        max_file_size: Largest accepted file part in bytes
        max_files: Most file parts accepted in one request
        max_request_size: Body ceiling; the stream is aborted past it
        use_temp_files: Stage to disk (True) or keep parts in memory
        create_parent_path: Passed to each StagedUpload for move_to()
    """

    def __init__(
        self,
        app: ASGIApp,
        temp_dir: Path,
        max_file_size: int,
        max_files: int = 1000,
        max_request_size: int | None = None,
        use_temp_files: bool = True,
        create_parent_path: bool = True,
    ):
        self.app = app
        self.temp_dir = Path(temp_dir)
        self.max_file_size = max_file_size
        self.max_files = max_files
        self.max_request_size = max_request_size or max_file_size * max_files
        self.use_temp_files = use_temp_files
        self.create_parent_path = create_parent_path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not _is_multipart(scope):
            await self.app(scope, receive, send)
            return

        try:
            staged = await self._stage_request(scope, receive)
        except MelodiaException as exc:
            logger.info(f"Upload rejected: {exc.message}")
            response = exc.to_response()
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})[STATE_KEY] = staged
        await self.app(scope, _replay_empty_body(receive), send)

    async def _stage_request(self, scope: Scope, receive: Receive) -> StagedForm:
        declared = Headers(scope=scope).get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_request_size:
            raise FileTooLargeError(self.max_file_size)

        request = Request(scope, self._limited_receive(receive))
        try:
            form = await request.form(max_files=self.max_files)
        except _BodyTooLarge:
            raise FileTooLargeError(self.max_file_size)
        except MultiPartException as e:
            raise InvalidUploadError(e.message)
        except StarletteHTTPException as e:
            # Starlette converts parser errors to HTTPException inside an app
            raise InvalidUploadError(str(e.detail))

        staged = StagedForm()
        try:
            for name, value in form.multi_items():
                if isinstance(value, UploadFile):
                    upload = await run_in_threadpool(self._stage_file, name, value)
                    staged.files.setdefault(name, []).append(upload)
                else:
                    staged.fields[name] = value
        except BaseException:
            staged.discard()
            raise
        finally:
            await form.close()

        return staged

    def _limited_receive(self, receive: Receive) -> Receive:
        received = 0

        async def wrapped() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_request_size:
                    raise _BodyTooLarge()
            return message

        return wrapped

    def _stage_file(self, field_name: str, upload: UploadFile) -> StagedUpload:
        if upload.size is not None and upload.size > self.max_file_size:
            raise FileTooLargeError(self.max_file_size, upload.filename)

        upload.file.seek(0)

        if not self.use_temp_files:
            data = upload.file.read()
            if len(data) > self.max_file_size:
                raise FileTooLargeError(self.max_file_size, upload.filename)
            return StagedUpload(
                field=field_name,
                filename=upload.filename,
                content_type=upload.content_type,
                size=len(data),
                data=data,
                create_parent_path=self.create_parent_path,
            )

        self.temp_dir.mkdir(parents=True, exist_ok=True)
        path = self.temp_dir / f"{TEMP_FILE_PREFIX}{uuid4().hex}"
        with path.open("wb") as out:
            shutil.copyfileobj(upload.file, out)

        size = path.stat().st_size
        if size > self.max_file_size:
            path.unlink(missing_ok=True)
            raise FileTooLargeError(self.max_file_size, upload.filename)

        logger.debug(f"Staged upload {upload.filename!r} ({size} bytes) at {path}")
        return StagedUpload(
            field=field_name,
            filename=upload.filename,
            content_type=upload.content_type,
            size=size,
            path=path,
            create_parent_path=self.create_parent_path,
        )
