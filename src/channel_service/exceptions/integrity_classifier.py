r"""
Read the database-native error descriptor off a storage failure.

SQLAlchemy wraps every driver error in a `DBAPIError` (IntegrityError, ProgrammingError,
OperationalError, ...) and keeps the driver's own exception on `.orig`. That driver
exception is the only place where the database tells us *what* went wrong in its own
terms: a native error code and a human-readable message.

Where the descriptor lives, per driver:

| Driver            | Code attribute                   | Message                              |
| ----------------- | -------------------------------- | ------------------------------------ |
| asyncpg (via SA)  | `orig.sqlstate` / `orig.pgcode`  | `orig.__cause__.message`             |
| psycopg 3         | `orig.sqlstate`                  | `orig.diag.message_primary`          |
| psycopg2          | `orig.pgcode`                    | `orig.diag.message_primary`          |
| sqlite3 / aiosqlite | `orig.sqlite_errorname`        | `str(orig)`                          |

Failures that never reached the database (pool timeout, connection refused,
cancelled handshake) have no descriptor at all; `extract_native_error` returns None
for them.
"""
import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)


# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    UNIQUE_VIOLATION = "23505"
    NOT_NULL_VIOLATION = "23502"
    FOREIGN_KEY_VIOLATION = "23503"
    CHECK_VIOLATION = "23514"


# SQLSTATE class 23: integrity constraint violation
INTEGRITY_CONSTRAINT_CLASS = "23"

# sqlite3 extended result codes for constraints all share this prefix
SQLITE_CONSTRAINT_PREFIX = "SQLITE_CONSTRAINT"

CONSTRAINT_KIND = {
    PostgresErrorCodes.UNIQUE_VIOLATION.value: "unique",
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: "not_null",
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: "foreign_key",
    PostgresErrorCodes.CHECK_VIOLATION.value: "check",
    "SQLITE_CONSTRAINT_PRIMARYKEY": "unique",
    "SQLITE_CONSTRAINT_UNIQUE": "unique",
    "SQLITE_CONSTRAINT_NOTNULL": "not_null",
    "SQLITE_CONSTRAINT_FOREIGNKEY": "foreign_key",
    "SQLITE_CONSTRAINT_CHECK": "check",
}


@dataclass(frozen=True)
class NativeDbError:
    """Database-native error descriptor: what the database itself reported."""

    code: str
    message: str
    constraint_name: str | None = None

    @property
    def is_constraint_violation(self) -> bool:
        return (
            self.code.startswith(INTEGRITY_CONSTRAINT_CLASS) and len(self.code) == 5
        ) or self.code.startswith(SQLITE_CONSTRAINT_PREFIX)

    @property
    def constraint_kind(self) -> str | None:
        return CONSTRAINT_KIND.get(self.code)


def _driver_errors(exc: BaseException):
    """
    Yield the driver-level exceptions behind `exc`, most specific first.

    For SQLAlchemy errors that is `.orig`, followed by its `__cause__` (the asyncpg
    adapter chains the original asyncpg exception there). Raw driver exceptions
    are yielded as-is.
    """
    orig = exc.orig if isinstance(exc, DBAPIError) else exc
    if orig is None:
        return
    yield orig
    cause = getattr(orig, "__cause__", None)
    if cause is not None:
        yield cause


def _native_code(err: BaseException) -> str | None:
    for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
        value = getattr(err, attr, None)
        if isinstance(value, str) and value:
            return value
    return None


def _native_message(err: BaseException) -> str:
    diag = getattr(err, "diag", None)
    primary = getattr(diag, "message_primary", None) if diag is not None else None
    if primary:
        return primary
    text = str(err).strip()
    return text.splitlines()[0] if text else type(err).__name__


def _server_message(err: BaseException) -> str | None:
    # asyncpg exceptions carry the server text on `.message`
    message = getattr(err, "message", None)
    return message if isinstance(message, str) and message else None


def _constraint_name(err: BaseException) -> str | None:
    diag = getattr(err, "diag", None)
    name = getattr(diag, "constraint_name", None) if diag is not None else None
    return name or getattr(err, "constraint_name", None)


def extract_native_error(exc: BaseException) -> NativeDbError | None:
    """
    Return the database-native descriptor carried by `exc`, or None.
    """
    errors = list(_driver_errors(exc))

    code = next((c for c in map(_native_code, errors) if c), None)
    if code is None:
        return None

    # The asyncpg adapter error stringifies as "<class ...>: text"; the chained
    # asyncpg exception holds the clean server message.
    message = next((m for m in map(_server_message, reversed(errors)) if m), None)
    if message is None:
        message = _native_message(errors[0])

    native = NativeDbError(
        code=code,
        message=message,
        constraint_name=next((n for n in map(_constraint_name, errors) if n), None),
    )

    logger.debug(
        "Database-native error descriptor",
        extra={"sqlstate": native.code, "constraint_name": native.constraint_name},
    )
    return native
