# channel_service/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter: stamps every LogRecord with the id of the HTTP request that
  produced it, read from a contextvar set by RequestIDMiddleware. contextvars
  follow asyncio tasks across `await`, unlike threading.local().
- RedactFilter: masks attributes whose names look like secrets before any
  handler formats them (the database password is part of the settings object).

The filter never drops records; both always return True.
"""

import logging
import re
from logging import LogRecord
import contextvars

# Request id for the current execution context; None means "not inside a request".
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute:
      - an explicit `extra={"request_id": ...}` wins,
      - otherwise the contextvar value,
      - otherwise the sentinel "-" (keeps `%(request_id)s` format strings safe).
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


# user:password@ inside a database URL
_DSN_PASSWORD = re.compile(r"(://[^:/@\s]+:)[^@\s]+(@)")


def _mask_dsn(value):
    return _DSN_PASSWORD.sub(r"\1***\2", value) if isinstance(value, str) else value


class RedactFilter(logging.Filter):
    """
    Masks secrets before formatting:
      - `extra` attributes with a sensitive name are replaced wholesale,
      - passwords embedded in database URLs are masked in the message and its args.
    """

    SENSITIVE = {"password", "secret", "token", "authorization", "postgres_password", "database_url"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"

        record.msg = _mask_dsn(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(_mask_dsn(arg) for arg in record.args)
        return True
