"""Translation of DBAPI integrity errors into persistence errors."""

from sqlalchemy.exc import IntegrityError

from core.exceptions import (
    ConstraintViolationError,
    ForeignKeyViolationError,
    PersistenceError,
    UniqueViolationError,
)

# PostgreSQL SQLSTATE codes (class 23 integrity, 22001 string too long)
_PG_UNIQUE = "23505"
_PG_FOREIGN_KEY = "23503"
_PG_CONSTRAINT = {"23502", "23514", "22001"}


def _sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    # asyncpg (via SQLAlchemy's adapter) exposes ``sqlstate``, psycopg ``pgcode``
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_integrity_error(exc: IntegrityError) -> PersistenceError:
    """Classify an IntegrityError raised during flush.

    PostgreSQL is classified by SQLSTATE; SQLite only offers the message.
    """
    detail = str(exc.orig)
    code = _sqlstate(exc)

    if code == _PG_UNIQUE:
        return UniqueViolationError(detail)
    if code == _PG_FOREIGN_KEY:
        return ForeignKeyViolationError(detail)
    if code in _PG_CONSTRAINT:
        return ConstraintViolationError(detail)

    lowered = detail.lower()
    if "unique constraint" in lowered:
        return UniqueViolationError(detail)
    if "foreign key constraint" in lowered:
        return ForeignKeyViolationError(detail)
    return ConstraintViolationError(detail)
