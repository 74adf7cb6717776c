import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from editorial import __version__
from editorial.adapters.sqlite import SQLiteMigrator
from editorial.api.deps import get_rules, get_settings
from editorial.api.errors import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Fail fast on a broken rules file, then bring the schema up to date."""
    settings = get_settings()
    rules = get_rules(settings)
    SQLiteMigrator(settings.db_path).run_migrations()
    logger.info("Editorial engine ready (rules %s)", rules.project.rules_version)
    yield


app = FastAPI(
    title="Editorial Engine API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

register_error_handlers(app)

# --- Routers ---
from editorial.api.routes import (  # noqa: E402
    admin_comments,
    admin_media,
    admin_posts,
    admin_profiles,
    admin_taxonomy,
    media_files,
    public,
)

app.include_router(admin_posts.router, prefix="/api/admin", tags=["Admin Posts"])
app.include_router(admin_comments.router, prefix="/api/admin", tags=["Admin Comments"])
app.include_router(admin_taxonomy.router, prefix="/api/admin", tags=["Admin Taxonomy"])
app.include_router(admin_media.router, prefix="/api/admin", tags=["Admin Media"])
app.include_router(admin_profiles.router, prefix="/api/admin", tags=["Admin Profiles"])
app.include_router(public.router, prefix="/api/public", tags=["Public"])
app.include_router(media_files.router, tags=["Media Files"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "editorial"}
