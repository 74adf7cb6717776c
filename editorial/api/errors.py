"""Maps engine errors onto HTTP responses for the admin surface."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from editorial.domain.errors import (
    ConflictError,
    DependencyFailureError,
    EngineError,
    InvalidInputError,
    NotFoundError,
    PartialWriteError,
)

logger = logging.getLogger(__name__)

PUBLIC_NOT_FOUND = "Content not available"

_STATUS_BY_ERROR: list[tuple[type[EngineError], int]] = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (InvalidInputError, 422),
    (DependencyFailureError, 503),
]


def status_for(exc: EngineError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return 500


def error_body(exc: EngineError) -> dict[str, Any]:
    body: dict[str, Any] = {"detail": str(exc), "code": exc.code}
    if isinstance(exc, InvalidInputError) and exc.field:
        body["field"] = exc.field
    if isinstance(exc, PartialWriteError):
        # The post exists; the caller re-issues only the failed steps
        body["post_id"] = str(exc.post.id)
        body["step"] = exc.step
        body["steps"] = list(exc.steps)
    return body


async def engine_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, EngineError):
        raise exc
    status_code = status_for(exc)
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content=error_body(exc))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EngineError, engine_error_handler)
