"""Helpers for integrity errors raised by the database driver."""

from typing import Optional

from sqlalchemy.exc import IntegrityError


def violated_constraint(error: IntegrityError) -> Optional[str]:
    """Name of the constraint behind an ``IntegrityError``.

    SQLAlchemy's asyncpg adapter wraps the driver exception; asyncpg puts
    the name on ``constraint_name``.

    Args:
        error: Error raised by an insert or update

    Returns:
        Constraint name, or None if the driver did not report one
    """
    for candidate in (error.orig, getattr(error.orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name
    return None
