import os
from functools import lru_cache
from pathlib import Path
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from editorial.adapters.blobstore import FileSystemBlobStore
from editorial.adapters.clock import SystemClock
from editorial.adapters.sqlite import SQLiteUnitOfWork
from editorial.components.comments import CommentComponent
from editorial.components.media import MediaComponent
from editorial.components.posts import PostComponent
from editorial.components.profiles import ProfileComponent
from editorial.components.relations import RelationSyncComponent
from editorial.components.taxonomy import TaxonomyComponent
from editorial.domain.entities import Principal
from editorial.rules.loader import load_rules_or_default
from editorial.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self, data_dir: str | None = None, rules_path: str | None = None) -> None:
        self.data_dir = Path(data_dir or os.environ.get("EDITORIAL_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "editorial.db")
        self.media_dir = self.data_dir / "media"
        self.rules_path = Path(rules_path or os.environ.get("EDITORIAL_RULES_PATH", "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_rules_or_default(settings.rules_path)


# --- Adapters ---
_clock_instance: SystemClock | None = None


def get_clock() -> SystemClock:
    """Get clock singleton."""
    global _clock_instance
    if _clock_instance is None:
        _clock_instance = SystemClock()
    return _clock_instance


def get_uow(settings: Settings = Depends(get_settings)) -> SQLiteUnitOfWork:
    # One per request: a unit of work is not shared between concurrent blocks
    return SQLiteUnitOfWork(settings.db_path)


def get_blob_store(
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
) -> FileSystemBlobStore:
    return FileSystemBlobStore(str(settings.media_dir), rules.media.public_base_url)


# --- Components ---
def get_relations(
    uow: SQLiteUnitOfWork = Depends(get_uow),
    clock: SystemClock = Depends(get_clock),
) -> RelationSyncComponent:
    return RelationSyncComponent(uow, clock)


def get_post_component(
    uow: SQLiteUnitOfWork = Depends(get_uow),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
    relations: RelationSyncComponent = Depends(get_relations),
) -> PostComponent:
    return PostComponent(uow, clock, rules, relations=relations)


def get_comment_component(
    uow: SQLiteUnitOfWork = Depends(get_uow),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> CommentComponent:
    return CommentComponent(uow, clock, rules)


def get_taxonomy_component(
    uow: SQLiteUnitOfWork = Depends(get_uow),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> TaxonomyComponent:
    return TaxonomyComponent(uow, clock, rules)


def get_media_component(
    uow: SQLiteUnitOfWork = Depends(get_uow),
    blobs: FileSystemBlobStore = Depends(get_blob_store),
    clock: SystemClock = Depends(get_clock),
    rules: Rules = Depends(get_rules),
) -> MediaComponent:
    return MediaComponent(uow, blobs, clock, rules)


def get_profile_component(
    uow: SQLiteUnitOfWork = Depends(get_uow),
    clock: SystemClock = Depends(get_clock),
) -> ProfileComponent:
    return ProfileComponent(uow, clock)


# --- Principal ---
def get_principal(
    x_principal_id: str | None = Header(default=None),
    x_principal_role: str | None = Header(default=None),
) -> Principal:
    """
    Caller identity as forwarded by the upstream auth gateway.

    Only checked for shape; authorization policy is enforced upstream.
    """
    if not x_principal_id or not x_principal_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    if x_principal_role not in ("admin", "editor", "author"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown principal role",
        )
    try:
        principal_id = UUID(x_principal_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid principal id",
        ) from e
    return Principal(id=principal_id, role=x_principal_role)
