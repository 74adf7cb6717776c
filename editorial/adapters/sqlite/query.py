"""Compiles storage-neutral QuerySpec values into SQLite SQL."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Any
from uuid import UUID

from editorial.components.query.models import QuerySpec
from editorial.domain.state import as_utc


def to_db(value: Any) -> Any:
    """Python value -> SQLite parameter."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, datetime):
        return format_ts(value)
    return value


def format_ts(value: datetime) -> str:
    # Fixed-width UTC text so string comparison matches time order
    return as_utc(value).isoformat(timespec="microseconds")


def sql_casefold(value: Any) -> Any:
    """Registered as the SQL function casefold(); SQLite's LIKE folds ASCII letters only."""
    return value.casefold() if isinstance(value, str) else value


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_where(spec: QuerySpec, columns: Collection[str]) -> tuple[str, list[Any]]:
    """Build a WHERE clause (possibly empty). Unknown columns raise ValueError."""
    clauses: list[str] = []
    params: list[Any] = []

    for cond in spec.conditions:
        if cond.field not in columns:
            raise ValueError(f"Cannot filter on column {cond.field!r}")
        if cond.op == "eq":
            clauses.append(f"{cond.field} = ?")
            params.append(to_db(cond.value))
        elif cond.op == "is_null":
            clauses.append(f"{cond.field} IS NULL")
        elif cond.op == "prefix":
            clauses.append(f"{cond.field} LIKE ? ESCAPE '\\'")
            params.append(escape_like(str(cond.value)) + "%")
        else:
            raise ValueError(f"Unsupported operator {cond.op!r}")

    if spec.search_term:
        for name in spec.search_fields:
            if name not in columns:
                raise ValueError(f"Cannot search column {name!r}")
        if spec.search_fields:
            pattern = f"%{escape_like(spec.search_term.casefold())}%"
            ors = " OR ".join(
                f"casefold({name}) LIKE ? ESCAPE '\\'" for name in spec.search_fields
            )
            clauses.append(f"({ors})")
            params.extend([pattern] * len(spec.search_fields))

    where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


def compile_query(
    spec: QuerySpec, table: str, columns: Collection[str]
) -> tuple[str, list[Any], str, list[Any]]:
    """Return (select_sql, select_params, count_sql, count_params)."""
    if spec.order_by not in columns:
        raise ValueError(f"Cannot order by column {spec.order_by!r}")
    where, params = compile_where(spec, columns)
    direction = "DESC" if spec.descending else "ASC"
    select_sql = (
        f"SELECT * FROM {table}{where} "
        f"ORDER BY {spec.order_by} {direction}, rowid {direction} LIMIT ? OFFSET ?"
    )
    count_sql = f"SELECT COUNT(*) AS n FROM {table}{where}"
    return select_sql, [*params, spec.limit, spec.offset], count_sql, list(params)
