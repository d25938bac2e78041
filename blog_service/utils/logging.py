"""
Logging setup shared by the server, the CLI client commands and the seed script.

Plain ``logging`` records rendered either as one human-readable line or as one
JSON object per line (``LOG_JSON=true``) for log collectors. Anything passed
through ``extra=`` becomes a top-level JSON key.

Usage:
    from blog_service.utils.logging import configure_logging, get_logger

    configure_logging(level="INFO", json_logs=False)
    log = get_logger(__name__)
    log.info("Blog service started", extra={"port": 50051})
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"

# Driver and transport loggers chatter at INFO/DEBUG; only let them through when debugging.
LIBRARY_LOGGERS = ("pymongo", "grpc")

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "extra"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Serialize ``record`` to a single JSON line."""
    payload: Dict[str, Any] = {
        "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    payload.update(
        (key, value)
        for key, value in vars(record).items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    )
    nested = getattr(record, "extra", None)
    if isinstance(nested, dict):
        payload.update(nested)
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    if record.stack_info:
        payload["stack_info"] = record.stack_info
    # ObjectId, datetimes and enums fall back to their str().
    return json.dumps(payload, default=str)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def _dict_config(level: str, json_logs: bool) -> Dict[str, Any]:
    library_level = level if level == "DEBUG" else "WARNING"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": CONSOLE_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
            "json": {"()": JsonFormatter},
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "json" if json_logs else "console",
            }
        },
        "loggers": {name: {"level": library_level} for name in LIBRARY_LOGGERS},
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    force: bool = True,
) -> None:
    """
    Install the process-wide logging configuration.

    Parameters
    ----------
    level : str
        Root level name, case-insensitive ("debug", "INFO", ...).
    json_logs : bool
        Emit JSON lines instead of the console format.
    force : bool
        Replace an existing configuration. With False, a root logger that
        already has handlers is left untouched.
    """
    if not force and logging.getLogger().handlers:
        return
    logging.config.dictConfig(_dict_config(level.upper(), json_logs))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the named logger, or the root logger when ``name`` is None."""
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
