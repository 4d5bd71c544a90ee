# channel_service/core/logging/builder.py
"""
Logging builder: build a dictConfig mapping from Settings and apply it.

    setup_logging(settings)

Handler selection:
| LOG_TO_STDOUT | LOG_DIR set    | Active handlers                 |
| ------------- | -------------- | ------------------------------- |
| true          | doesn't matter | console + error_console         |
| false         | no             | console + error_console         |
| false         | yes            | console + file + error_file     |
"""

from __future__ import annotations

from pathlib import Path
import logging
import logging.config

from channel_service.config.settings import Settings
from channel_service.utils.logging import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def _text_formatter_class(settings: Settings) -> type[logging.Formatter]:
    # ANSI colors only make sense on a developer terminal
    if settings.LOG_FORMAT == "text" and settings.ENV == "development":
        return ColorFormatter
    return logging.Formatter


def _logger(level: str, handlers: list[str], propagate: bool = False) -> dict:
    return {"level": level, "handlers": handlers, "propagate": propagate}


def make_dict_config(settings: Settings) -> dict:
    """
    Translate Settings into a `logging.config.dictConfig` mapping.

    Formatters "standard" and "json" are both always defined: the error
    handlers emit JSON whatever LOG_FORMAT says. Filters "request_id" and
    "redact" run on every handler.

    Loggers:
      - root ("") and "channel_service": all active handlers at LOG_LEVEL.
      - "uvicorn.error" / "uvicorn.access": the server's own loggers, kept off root
        so they are not written twice.
      - "sqlalchemy.engine": WARNING unless ENABLE_SQL_LOGGING, since statement
        logs include bound channel ids and names.
    """
    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    active = list(handlers)
    sql_level = "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": _text_formatter_class(settings),
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
            },
            "json": {
                "()": JsonFormatter,
                "env": settings.ENV,
                "service": get_project_name(),
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": {
            "": _logger(settings.LOG_LEVEL, active, propagate=True),
            "channel_service": _logger(settings.LOG_LEVEL, [], propagate=True),
            "uvicorn.error": _logger(settings.LOG_LEVEL, active),
            "uvicorn.access": _logger("INFO", ["console"]),
            "sqlalchemy.engine": _logger(sql_level, ["console"]),
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Install the logging configuration for `settings`.

    Creates LOG_DIR first when file handlers are in use. After dictConfig, a
    RequestIdFilter is also put on the root logger itself, so handlers attached
    later (pytest's caplog, for one) still see `request_id` on every record.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
