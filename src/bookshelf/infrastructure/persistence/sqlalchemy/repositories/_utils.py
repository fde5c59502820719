"""Shared utilities for SQLAlchemy repositories."""

from sqlalchemy.exc import IntegrityError


def is_unique_violation(error: IntegrityError, column: str | None = None) -> bool:
    """
    Check whether an IntegrityError comes from a unique constraint.

    SQLite reports ``UNIQUE constraint failed: table.column`` while
    PostgreSQL reports ``duplicate key value violates unique constraint``
    followed by the constraint name, which contains the column name.
    """
    message = str(error.orig if error.orig is not None else error).lower()
    if "unique" not in message and "duplicate key" not in message:
        return False
    return column is None or column.lower() in message
