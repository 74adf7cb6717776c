"""Media library input models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadMediaInput:
    """Raw upload as handed over by the transport layer."""

    original_name: str
    data: bytes
    file_type: str  # MIME type as declared by the uploader
    alt_text: str | None = None
    caption: str | None = None
