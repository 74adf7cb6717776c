from __future__ import annotations

import sqlite3
from typing import Any

from .errors import translate_errors
from .query import sql_casefold
from .repos import (
    SQLiteCategoryRepo,
    SQLiteCommentRepo,
    SQLiteMediaRepo,
    SQLitePostRepo,
    SQLitePostTagRepo,
    SQLiteProfileRepo,
    SQLiteSeoRepo,
    SQLiteTagRepo,
    dict_factory,
)


class SQLiteUnitOfWork:
    """
    SQLite Unit of Work implementation.

    Provides transaction management and access to all repositories.
    Uses a shared connection for all operations within a transaction.

    Each `with` block opens a fresh connection and drops the repositories
    bound to it on exit, so one instance can serve several sequential
    blocks. Blocks may not be nested.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._repos: dict[str, Any] = {}

    def __enter__(self) -> SQLiteUnitOfWork:
        if self._conn is not None:
            raise RuntimeError("SQLiteUnitOfWork blocks cannot be nested")
        with translate_errors("connect"):
            conn = sqlite3.connect(self.db_path)
            conn.row_factory = dict_factory
            conn.create_function("casefold", 1, sql_casefold, deterministic=True)
            conn.execute("PRAGMA foreign_keys = ON;")
        self._conn = conn
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if self._conn is None:
            return
        try:
            # Anything not committed is discarded
            self._conn.rollback()
        finally:
            self._conn.close()
            self._conn = None
            self._repos.clear()

    def commit(self) -> None:
        if self._conn is not None:
            with translate_errors("commit"):
                self._conn.commit()

    def rollback(self) -> None:
        if self._conn is not None:
            self._conn.rollback()

    def _repo(self, name: str, factory: type) -> Any:
        if self._conn is None:
            raise RuntimeError(f"uow.{name} used outside a 'with' block")
        if name not in self._repos:
            self._repos[name] = factory(self._conn)
        return self._repos[name]

    @property
    def posts(self) -> SQLitePostRepo:
        return self._repo("posts", SQLitePostRepo)  # type: ignore[no-any-return]

    @property
    def post_tags(self) -> SQLitePostTagRepo:
        return self._repo("post_tags", SQLitePostTagRepo)  # type: ignore[no-any-return]

    @property
    def seo(self) -> SQLiteSeoRepo:
        return self._repo("seo", SQLiteSeoRepo)  # type: ignore[no-any-return]

    @property
    def comments(self) -> SQLiteCommentRepo:
        return self._repo("comments", SQLiteCommentRepo)  # type: ignore[no-any-return]

    @property
    def categories(self) -> SQLiteCategoryRepo:
        return self._repo("categories", SQLiteCategoryRepo)  # type: ignore[no-any-return]

    @property
    def tags(self) -> SQLiteTagRepo:
        return self._repo("tags", SQLiteTagRepo)  # type: ignore[no-any-return]

    @property
    def media(self) -> SQLiteMediaRepo:
        return self._repo("media", SQLiteMediaRepo)  # type: ignore[no-any-return]

    @property
    def profiles(self) -> SQLiteProfileRepo:
        return self._repo("profiles", SQLiteProfileRepo)  # type: ignore[no-any-return]
