"""
catalog_api.db.errors

Store-level error types.

Responsibilities:
- Give callers a backend-independent signal for unique-constraint violations.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError


class UniqueViolation(Exception):
    """A write collided with a UNIQUE constraint (e.g. a duplicate username)."""


def is_unique_violation(exc: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed"; Postgres: SQLSTATE 23505 "... violates unique constraint".
    if getattr(exc.orig, "sqlstate", None) == "23505":
        return True
    return "unique" in str(exc.orig).lower()
