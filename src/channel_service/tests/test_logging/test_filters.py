# src/channel_service/tests/test_logging/test_filters.py
import logging
from channel_service.core.logging.filters import (
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


def test_request_id_filter_defaults_to_dash():
    rec = make_record()
    token = set_request_id(None)
    try:
        assert RequestIdFilter().filter(rec) is True
        assert rec.request_id == "-"  # fallback sentinel
    finally:
        reset_request_id(token)


def test_request_id_filter_uses_contextvar():
    rec = make_record()
    token = set_request_id("abc-123")
    try:
        RequestIdFilter().filter(rec)
        assert rec.request_id == "abc-123"
    finally:
        reset_request_id(token)


def test_request_id_filter_respects_record_extra():
    rec = make_record()
    rec.request_id = "explicit"
    token = set_request_id("context-id")
    try:
        RequestIdFilter().filter(rec)
        # explicit extra wins over the context
        assert rec.request_id == "explicit"
    finally:
        reset_request_id(token)


def test_reset_restores_previous_value():
    outer = set_request_id("outer")
    inner = set_request_id("inner")
    reset_request_id(inner)
    assert get_request_id() == "outer"
    reset_request_id(outer)
    assert get_request_id() is None


def test_redact_filter_masks_sensitive_extras():
    rec = make_record()
    rec.password = "hunter2"
    rec.Database_URL = "postgresql://u:p@h/db"
    rec.channel_id = 1

    assert RedactFilter().filter(rec) is True

    assert rec.password == "***REDACTED***"
    assert rec.Database_URL == "***REDACTED***"
    assert rec.channel_id == 1


def test_redact_filter_masks_database_url_passwords():
    rec = logging.LogRecord(
        "test", logging.INFO, __file__, 1,
        "connecting to postgresql+asyncpg://bot:s3cret@db:5432/channels", (), None,
    )
    rec_args = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "url=%s", ("postgresql://bot:s3cret@db/channels",), None,
    )

    RedactFilter().filter(rec)
    RedactFilter().filter(rec_args)

    assert rec.getMessage() == "connecting to postgresql+asyncpg://bot:***@db:5432/channels"
    assert rec_args.getMessage() == "url=postgresql://bot:***@db/channels"
