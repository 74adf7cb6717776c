"""
SQLite repositories.

Every repository works on the connection owned by SQLiteUnitOfWork; none
of them commits. Rows come back as dicts (dict_factory) and are validated
straight into the pydantic entities, which parse the ISO timestamps and
UUID strings stored in TEXT columns.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from editorial.components.query.models import QuerySpec
from editorial.domain.entities import (
    Category,
    Comment,
    CommentStatus,
    Media,
    Post,
    Profile,
    SEOSettings,
    Tag,
)

from .errors import translate_errors
from .query import compile_query, format_ts, to_db

M = TypeVar("M", bound=BaseModel)


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


def _placeholders(n: int) -> str:
    return ", ".join("?" * n)


class SQLiteRepoBase(Generic[M]):
    """Base class for SQLite repositories sharing one connection."""

    table: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    # Columns an ordinary update() must not overwrite
    protected_columns: ClassVar[frozenset[str]] = frozenset({"id", "created_at"})

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    @property
    def columns(self) -> list[str]:
        return list(self.model.model_fields)

    def _execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        with translate_errors(self.table):
            return self._conn.execute(sql, [to_db(p) for p in params])

    def _fetch_one(self, sql: str, params: Iterable[Any] = ()) -> dict[str, Any] | None:
        return self._execute(sql, params).fetchone()  # type: ignore[no-any-return]

    def _fetch_all(self, sql: str, params: Iterable[Any] = ()) -> list[dict[str, Any]]:
        return self._execute(sql, params).fetchall()

    def _map_row(self, row: dict[str, Any]) -> M:
        return self.model.model_validate(row)  # type: ignore[return-value]

    def _get(self, column: str, value: Any) -> M | None:
        row = self._fetch_one(f"SELECT * FROM {self.table} WHERE {column} = ?", (value,))
        return self._map_row(row) if row else None

    def _insert(self, item: M) -> M:
        data = item.model_dump()
        cols = self.columns
        self._execute(
            f"INSERT INTO {self.table} ({', '.join(cols)}) VALUES ({_placeholders(len(cols))})",
            [data[c] for c in cols],
        )
        return item

    def _update(self, item: M) -> M:
        data = item.model_dump()
        cols = [c for c in self.columns if c not in self.protected_columns]
        assignments = ", ".join(f"{c} = ?" for c in cols)
        self._execute(
            f"UPDATE {self.table} SET {assignments} WHERE id = ?",
            [*(data[c] for c in cols), data["id"]],
        )
        return item

    def _delete(self, item_id: UUID) -> bool:
        cur = self._execute(f"DELETE FROM {self.table} WHERE id = ?", (item_id,))
        return cur.rowcount > 0

    def _get_many(self, ids: Iterable[UUID]) -> list[M]:
        wanted = list(set(ids))
        if not wanted:
            return []
        rows = self._fetch_all(
            f"SELECT * FROM {self.table} WHERE id IN ({_placeholders(len(wanted))})", wanted
        )
        return [self._map_row(r) for r in rows]

    def _slug_exists(self, slug: str, exclude_id: UUID | None) -> bool:
        sql = f"SELECT 1 FROM {self.table} WHERE slug = ?"
        params: list[Any] = [slug]
        if exclude_id is not None:
            sql += " AND id != ?"
            params.append(exclude_id)
        return self._fetch_one(sql + " LIMIT 1", params) is not None

    def _query(self, spec: QuerySpec) -> tuple[list[M], int]:
        select_sql, params, count_sql, count_params = compile_query(spec, self.table, self.columns)
        total_row = self._fetch_one(count_sql, count_params)
        rows = self._fetch_all(select_sql, params)
        return [self._map_row(r) for r in rows], int(total_row["n"]) if total_row else 0


# -----------------------------------------------------------------------------
# Posts
# -----------------------------------------------------------------------------


class SQLitePostRepo(SQLiteRepoBase[Post]):
    table = "posts"
    model = Post
    # Counters only move through their own atomic statements
    protected_columns = frozenset({"id", "created_at", "author_id", "view_count", "like_count"})

    def get_by_id(self, post_id: UUID) -> Post | None:
        return self._get("id", post_id)

    def get_by_slug(self, slug: str) -> Post | None:
        return self._get("slug", slug)

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        return self._slug_exists(slug, exclude_id)

    def insert(self, post: Post) -> Post:
        return self._insert(post)

    def update(self, post: Post) -> Post:
        return self._update(post)

    def delete(self, post_id: UUID) -> bool:
        return self._delete(post_id)

    def increment_view_count(self, post_id: UUID) -> int:
        self._execute("UPDATE posts SET view_count = view_count + 1 WHERE id = ?", (post_id,))
        row = self._fetch_one("SELECT view_count FROM posts WHERE id = ?", (post_id,))
        return int(row["view_count"]) if row else 0

    def query(self, spec: QuerySpec) -> tuple[list[Post], int]:
        return self._query(spec)

    def list_scheduled_due(self, now_utc: datetime) -> list[Post]:
        rows = self._fetch_all(
            """
            SELECT * FROM posts
            WHERE status = 'scheduled' AND scheduled_for IS NOT NULL AND scheduled_for <= ?
            ORDER BY scheduled_for ASC, rowid ASC
            """,
            (format_ts(now_utc),),
        )
        return [self._map_row(r) for r in rows]

    def clear_category(self, category_id: UUID) -> int:
        cur = self._execute(
            "UPDATE posts SET category_id = NULL WHERE category_id = ?", (category_id,)
        )
        return cur.rowcount


class SQLitePostTagRepo:
    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def _execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        with translate_errors("post_tags"):
            return self._conn.execute(sql, [to_db(p) for p in params])

    def list_tag_ids(self, post_id: UUID) -> set[UUID]:
        rows = self._execute("SELECT tag_id FROM post_tags WHERE post_id = ?", (post_id,))
        return {UUID(r["tag_id"]) for r in rows.fetchall()}

    def list_tags(self, post_id: UUID) -> list[Tag]:
        rows = self._execute(
            """
            SELECT t.* FROM tags t
            JOIN post_tags pt ON pt.tag_id = t.id
            WHERE pt.post_id = ?
            ORDER BY t.name COLLATE NOCASE
            """,
            (post_id,),
        ).fetchall()
        return [Tag.model_validate(r) for r in rows]

    def add(self, post_id: UUID, tag_ids: Iterable[UUID]) -> int:
        added = 0
        for tag_id in tag_ids:
            cur = self._execute(
                "INSERT OR IGNORE INTO post_tags (post_id, tag_id) VALUES (?, ?)",
                (post_id, tag_id),
            )
            added += cur.rowcount
        return added

    def remove(self, post_id: UUID, tag_ids: Iterable[UUID]) -> int:
        ids = list(tag_ids)
        if not ids:
            return 0
        cur = self._execute(
            f"DELETE FROM post_tags WHERE post_id = ? AND tag_id IN ({_placeholders(len(ids))})",
            [post_id, *ids],
        )
        return cur.rowcount

    def delete_for_post(self, post_id: UUID) -> int:
        return self._execute("DELETE FROM post_tags WHERE post_id = ?", (post_id,)).rowcount

    def delete_for_tag(self, tag_id: UUID) -> int:
        return self._execute("DELETE FROM post_tags WHERE tag_id = ?", (tag_id,)).rowcount


class SQLiteSeoRepo(SQLiteRepoBase[SEOSettings]):
    table = "seo_settings"
    model = SEOSettings
    protected_columns = frozenset({"id", "post_id", "created_at"})

    def get_by_post(self, post_id: UUID) -> SEOSettings | None:
        return self._get("post_id", post_id)

    def insert(self, seo: SEOSettings) -> SEOSettings:
        return self._insert(seo)

    def update(self, seo: SEOSettings) -> SEOSettings:
        return self._update(seo)

    def delete_for_post(self, post_id: UUID) -> int:
        return self._execute("DELETE FROM seo_settings WHERE post_id = ?", (post_id,)).rowcount


# -----------------------------------------------------------------------------
# Comments
# -----------------------------------------------------------------------------


class SQLiteCommentRepo(SQLiteRepoBase[Comment]):
    table = "comments"
    model = Comment

    def get_by_id(self, comment_id: UUID) -> Comment | None:
        return self._get("id", comment_id)

    def insert(self, comment: Comment) -> Comment:
        return self._insert(comment)

    def set_status(self, comment_id: UUID, status: CommentStatus) -> bool:
        cur = self._execute("UPDATE comments SET status = ? WHERE id = ?", (status, comment_id))
        return cur.rowcount > 0

    def delete(self, comment_id: UUID) -> bool:
        return self._delete(comment_id)

    def delete_replies(self, parent_id: UUID) -> int:
        return self._execute("DELETE FROM comments WHERE parent_id = ?", (parent_id,)).rowcount

    def delete_for_post(self, post_id: UUID) -> int:
        # Replies first so the self-reference never dangles mid-statement
        replies = self._execute(
            "DELETE FROM comments WHERE post_id = ? AND parent_id IS NOT NULL", (post_id,)
        ).rowcount
        roots = self._execute("DELETE FROM comments WHERE post_id = ?", (post_id,)).rowcount
        return replies + roots

    def list_roots(self, post_id: UUID, status: CommentStatus | None = None) -> list[Comment]:
        sql = "SELECT * FROM comments WHERE post_id = ? AND parent_id IS NULL"
        params: list[Any] = [post_id]
        if status is not None:
            sql += " AND status = ?"
            params.append(status)
        rows = self._fetch_all(sql + " ORDER BY created_at DESC, rowid DESC", params)
        return [self._map_row(r) for r in rows]

    def list_replies(
        self, parent_ids: Iterable[UUID], status: CommentStatus | None = None
    ) -> list[Comment]:
        ids = list(parent_ids)
        if not ids:
            return []
        sql = f"SELECT * FROM comments WHERE parent_id IN ({_placeholders(len(ids))})"
        params: list[Any] = list(ids)
        if status is not None:
            sql += " AND status = ?"
            params.append(status)
        rows = self._fetch_all(sql + " ORDER BY created_at ASC, rowid ASC", params)
        return [self._map_row(r) for r in rows]

    def query(self, spec: QuerySpec) -> tuple[list[Comment], int]:
        return self._query(spec)


# -----------------------------------------------------------------------------
# Taxonomy
# -----------------------------------------------------------------------------


class SQLiteCategoryRepo(SQLiteRepoBase[Category]):
    table = "categories"
    model = Category

    def get_by_id(self, category_id: UUID) -> Category | None:
        return self._get("id", category_id)

    def get_many(self, category_ids: Iterable[UUID]) -> list[Category]:
        return self._get_many(category_ids)

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        return self._slug_exists(slug, exclude_id)

    def insert(self, category: Category) -> Category:
        return self._insert(category)

    def update(self, category: Category) -> Category:
        return self._update(category)

    def delete(self, category_id: UUID) -> bool:
        return self._delete(category_id)

    def list_with_counts(self) -> list[tuple[Category, int]]:
        rows = self._fetch_all(
            """
            SELECT c.*, COUNT(p.id) AS post_count
            FROM categories c
            LEFT JOIN posts p ON p.category_id = c.id
            GROUP BY c.id
            ORDER BY c.name COLLATE NOCASE, c.rowid
            """
        )
        return [(self._map_row(r), int(r.pop("post_count"))) for r in rows]


class SQLiteTagRepo(SQLiteRepoBase[Tag]):
    table = "tags"
    model = Tag

    def get_by_id(self, tag_id: UUID) -> Tag | None:
        return self._get("id", tag_id)

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        return self._slug_exists(slug, exclude_id)

    def existing_ids(self, tag_ids: Iterable[UUID]) -> set[UUID]:
        ids = list(tag_ids)
        if not ids:
            return set()
        rows = self._fetch_all(
            f"SELECT id FROM tags WHERE id IN ({_placeholders(len(ids))})", ids
        )
        return {UUID(r["id"]) for r in rows}

    def insert(self, tag: Tag) -> Tag:
        return self._insert(tag)

    def update(self, tag: Tag) -> Tag:
        return self._update(tag)

    def delete(self, tag_id: UUID) -> bool:
        return self._delete(tag_id)

    def list_all(self) -> list[Tag]:
        rows = self._fetch_all("SELECT * FROM tags ORDER BY name COLLATE NOCASE, rowid")
        return [self._map_row(r) for r in rows]


# -----------------------------------------------------------------------------
# Media / Profiles
# -----------------------------------------------------------------------------


class SQLiteMediaRepo(SQLiteRepoBase[Media]):
    table = "media"
    model = Media

    def get_by_id(self, media_id: UUID) -> Media | None:
        return self._get("id", media_id)

    def insert(self, media: Media) -> Media:
        return self._insert(media)

    def delete(self, media_id: UUID) -> bool:
        return self._delete(media_id)

    def query(self, spec: QuerySpec) -> tuple[list[Media], int]:
        return self._query(spec)


class SQLiteProfileRepo(SQLiteRepoBase[Profile]):
    table = "profiles"
    model = Profile

    def get_by_id(self, profile_id: UUID) -> Profile | None:
        return self._get("id", profile_id)

    def get_many(self, profile_ids: Iterable[UUID]) -> list[Profile]:
        return self._get_many(profile_ids)

    def get_by_email(self, email: str) -> Profile | None:
        return self._get("email", email)

    def insert(self, profile: Profile) -> Profile:
        return self._insert(profile)

    def update(self, profile: Profile) -> Profile:
        return self._update(profile)

    def list_all(self) -> list[Profile]:
        rows = self._fetch_all("SELECT * FROM profiles ORDER BY created_at DESC, rowid DESC")
        return [self._map_row(r) for r in rows]
