"""Structured Logging — formatters and one-shot logging setup for the catalog API.

Invariants:
    - Every record carries timestamp (from the record, UTC), level, logger, message
    - Any attribute passed through ``extra=`` is emitted; None values are dropped
    - "json" emits one JSON object per line; "text" appends product_id and
      operation to the message when present
    - sqlalchemy.engine logs at WARNING unless the catalog itself runs at DEBUG

Design Decisions:
    - Extras found by diffing against a bare LogRecord: new context keys
      (error_code, path, ...) need no formatter change
    - dictConfig with disable_existing_loggers=False: uvicorn loggers keep working
"""

import json
import logging
import logging.config
from datetime import datetime, timezone

_RESERVED = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> dict:
    """Attributes added to the record through ``extra=``, minus empty ones."""
    return {
        key: value for key, value in vars(record).items()
        if key not in _RESERVED and value is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(record_extras(record))
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines with the product context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in ("product_id", "operation")
            if getattr(record, key, None) is not None
        )
        return f"{line} [{context}]" if context else line


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging once on startup."""
    level = level.upper()
    formatter = "json" if fmt == "json" else "text"
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JSONFormatter},
            "text": {"()": ContextTextFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
            },
        },
        "loggers": {
            "sqlalchemy.engine": {
                "level": "INFO" if level == "DEBUG" else "WARNING",
            },
        },
        "root": {"level": level, "handlers": ["console"]},
    })
