"""Media library - blob uploads with metadata rows."""

from .component import (
    MediaComponent,
    file_extension,
    generate_object_key,
    validate_upload,
)
from .models import UploadMediaInput

__all__ = [
    "MediaComponent",
    "file_extension",
    "generate_object_key",
    "validate_upload",
    "UploadMediaInput",
]
