"""
Serves uploaded media bytes at the URLs the blob store hands out.

Storage keys carry a timestamp and a random suffix and are never reused,
so responses are cacheable as immutable.
"""

import mimetypes

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from editorial.adapters.blobstore import FileSystemBlobStore
from editorial.api.deps import get_blob_store
from editorial.api.errors import PUBLIC_NOT_FOUND

router = APIRouter()

CACHE_CONTROL_IMMUTABLE = "public, max-age=31536000, immutable"


@router.get("/media/{key:path}")
def get_media_file(key: str, blobs: FileSystemBlobStore = Depends(get_blob_store)) -> Response:
    try:
        data = blobs.get(key)
    except (FileNotFoundError, PermissionError) as e:
        raise HTTPException(status_code=404, detail=PUBLIC_NOT_FOUND) from e

    media_type, _ = mimetypes.guess_type(key)
    return Response(
        content=data,
        media_type=media_type or "application/octet-stream",
        headers={"Cache-Control": CACHE_CONTROL_IMMUTABLE},
    )
