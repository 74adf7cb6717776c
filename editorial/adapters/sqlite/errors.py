"""Translation of sqlite3 failures into engine errors."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from editorial.domain.errors import ConflictError, DependencyFailureError, InvalidInputError


@contextmanager
def translate_errors(context: str) -> Iterator[None]:
    """
    UNIQUE violations -> ConflictError (a concurrent writer took the key)
    other constraint violations -> InvalidInputError
    anything else sqlite raises -> DependencyFailureError
    """
    try:
        yield
    except sqlite3.IntegrityError as e:
        if "UNIQUE" in str(e):
            raise ConflictError(f"{context}: {e}") from e
        raise InvalidInputError(f"{context}: {e}") from e
    except sqlite3.Error as e:
        raise DependencyFailureError(f"{context}: {e}") from e
