# src/channel_service/tests/test_logging/test_formatters.py
import json
import logging
import sys

from channel_service.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(level=logging.INFO, exc_info=None):
    return logging.LogRecord("channel_service", level, __file__, 10, "hello %s", ("tester",), exc_info)


def test_json_formatter_basic_fields():
    rec = make_record()
    rec.request_id = "req-1"
    fmt = JsonFormatter(env="testing", service="svc")

    data = json.loads(fmt.format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "channel_service"
    assert data["service"] == "svc"
    assert data["env"] == "testing"
    assert data["request_id"] == "req-1"
    assert "timestamp" in data
    assert "version" in data


def test_json_formatter_includes_extras_but_not_record_internals():
    logger = logging.getLogger("channel_service.tests.formatter")
    rec = logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, "repo.channel.create.success", (), None,
        extra={"model": "Channel", "id": 1, "duration_ms": 3},
    )

    data = json.loads(JsonFormatter(env="testing").format(rec))

    assert data["model"] == "Channel"
    assert data["id"] == 1
    assert data["duration_ms"] == 3
    for internal in ("args", "msg", "levelno", "threadName", "created"):
        assert internal not in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()
    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))
    # non-serializable obj should be stringified
    assert isinstance(data["obj"], str)


def test_json_formatter_renders_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        rec = make_record(logging.ERROR, sys.exc_info())

    data = json.loads(JsonFormatter().format(rec))

    assert "RuntimeError: boom" in data["exc_info"]


def test_color_formatter_wraps_level():
    rec = make_record(logging.WARNING)
    rec.request_id = "rid"

    line = ColorFormatter().format(rec)

    assert ColorFormatter.COLOR_CODES["WARNING"] in line
    assert line.endswith("| rid | hello tester")
