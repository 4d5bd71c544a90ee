import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import extract_native_error
from .base import ConflictError, InternalError, RepositoryError

logger = logging.getLogger(__name__)


# -----------------------
# Classifier
# -----------------------

def classify_storage_error(exc: BaseException, model_name: str | None = None) -> RepositoryError:
    """
    Turn a failure raised by the storage layer into the client-visible taxonomy.

    - Constraint violation carrying a database-native descriptor -> ConflictError,
      with the database's own message and native code (sqlstate).
    - Anything else (pool timeout, lost connection, malformed statement, ...) ->
      InternalError with a fixed message; the cause is logged with its stack trace
      and never forwarded to the client.
    - Errors that are already classified are returned untouched.
    """
    if isinstance(exc, RepositoryError):
        return exc

    model_part = model_name or "Record"
    native = extract_native_error(exc)

    if native is not None and (native.is_constraint_violation or isinstance(exc, IntegrityError)):
        # INFO: conflicts are expected client-level outcomes (409)
        logger.info(
            "mapper.conflict_detected",
            extra={
                "model": model_part,
                "sqlstate": native.code,
                "constraint": native.constraint_name,
                "constraint_kind": native.constraint_kind,
            },
        )
        return ConflictError(native.message, sqlstate=native.code)

    logger.error(
        "mapper.internal_error",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "model": model_part,
            "error_type": type(exc).__name__,
            "sqlstate": native.code if native else None,
        },
    )
    return InternalError()


# -----------------------
# Async context manager to DRY error handling in repositories
# -----------------------
@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, "Channel"):
            ... exactly one statement + commit ...

    Rolls the session back on any failure and raises the classified app-level
    exception, chained to the original cause.
    """
    try:
        yield
    except RepositoryError:
        raise
    except Exception as exc:
        try:
            await db.rollback()
        except Exception:
            # The connection may already be gone; the original failure is what matters.
            logger.exception("Failed to rollback session after storage error", extra={"model": model_name})
        raise classify_storage_error(exc, model_name) from exc
