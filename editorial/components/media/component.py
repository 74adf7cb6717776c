"""
Media library component - uploads into the blob store plus metadata rows.

Upload order: blob first, then the row. If the row insert fails the blob
is removed again so no object is left without metadata.

Delete order: blob first, then the row. If the blob delete fails the row
is kept so the object can still be found and the delete retried.
"""

from __future__ import annotations

import logging
import mimetypes
import secrets
from pathlib import PurePosixPath
from uuid import UUID

from editorial.components.query import MediaFilter, Page, media_query
from editorial.domain.entities import Media, Principal
from editorial.domain.errors import (
    DependencyFailureError,
    EngineError,
    InvalidInputError,
    NotFoundError,
)
from editorial.rules.loader import default_rules
from editorial.rules.models import MediaRules, Rules

from .models import UploadMediaInput
from .ports import BlobStorePort, ClockPort, UnitOfWorkPort

logger = logging.getLogger(__name__)


# --- Helper Functions ---


def file_extension(original_name: str, mime_type: str) -> str:
    """Extension for the stored object: the upload's own, else one guessed from MIME."""
    suffix = PurePosixPath(original_name).suffix.lower().lstrip(".")
    if suffix.isalnum():
        return suffix
    guessed = mimetypes.guess_extension(mime_type) or ".bin"
    return guessed.lstrip(".")


def generate_object_key(stamp_ms: int, extension: str) -> str:
    """
    Generate a unique blob key.

    Format: media/{epoch_ms}-{random hex}.{ext}
    """
    return f"media/{stamp_ms}-{secrets.token_hex(6)}.{extension}"


def validate_upload(inp: UploadMediaInput, rules: MediaRules) -> None:
    if not inp.original_name or not inp.original_name.strip():
        raise InvalidInputError("original_name is required", field="original_name")
    if not inp.data:
        raise InvalidInputError("Upload is empty", field="file")
    if len(inp.data) > rules.max_upload_bytes:
        raise InvalidInputError(
            f"File size {len(inp.data)} bytes exceeds maximum of {rules.max_upload_bytes} bytes",
            field="file",
        )
    if not any(inp.file_type.startswith(p) for p in rules.allowed_mime_prefixes):
        raise InvalidInputError(
            f"MIME type '{inp.file_type}' is not allowed", field="file_type"
        )


class MediaComponent:
    """Upload, list and delete media objects."""

    def __init__(
        self,
        uow: UnitOfWorkPort,
        blobs: BlobStorePort,
        clock: ClockPort,
        rules: Rules | None = None,
    ) -> None:
        self._uow = uow
        self._blobs = blobs
        self._clock = clock
        self._rules = rules or default_rules()

    def upload(self, inp: UploadMediaInput, principal: Principal) -> Media:
        validate_upload(inp, self._rules.media)

        now = self._clock.now_utc()
        key = generate_object_key(
            int(now.timestamp() * 1000), file_extension(inp.original_name, inp.file_type)
        )
        try:
            url = self._blobs.put(key, inp.data, inp.file_type)
        except OSError as e:
            raise DependencyFailureError(f"Blob store rejected {key}: {e}") from e

        media = Media(
            file_name=key,
            original_name=inp.original_name.strip(),
            file_url=url,
            file_type=inp.file_type,
            file_size=len(inp.data),
            alt_text=inp.alt_text,
            caption=inp.caption,
            uploaded_by=principal.id,
            created_at=now,
        )
        try:
            with self._uow as uow:
                uow.media.insert(media)
                uow.commit()
        except EngineError:
            self._discard_blob(key)
            raise

        logger.info("Uploaded media %s as %s (%d bytes)", media.id, key, media.file_size)
        return media

    def delete(self, media_id: UUID) -> None:
        media = self.get(media_id)
        try:
            self._blobs.delete(media.file_name)
        except OSError as e:
            raise DependencyFailureError(
                f"Could not delete blob {media.file_name}; media {media_id} kept: {e}"
            ) from e

        with self._uow as uow:
            uow.media.delete(media_id)
            uow.commit()
        logger.info("Deleted media %s", media_id)

    def get(self, media_id: UUID) -> Media:
        with self._uow as uow:
            media = uow.media.get_by_id(media_id)
        if media is None:
            raise NotFoundError("Media", media_id)
        return media

    def list(self, flt: MediaFilter) -> Page[Media]:
        spec = media_query(flt, self._rules.pagination)
        with self._uow as uow:
            items, total = uow.media.query(spec)
        return Page(items=items, total=total, offset=spec.offset, limit=spec.limit)

    def _discard_blob(self, key: str) -> None:
        try:
            self._blobs.delete(key)
        except OSError:
            logger.exception("Orphaned blob %s left behind after failed insert", key)
