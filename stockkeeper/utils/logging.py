"""
Structured logging.

Application events are logged as short snake_case names (``transfer_completed``,
``collection_written``) with their data passed through ``extra=``. Both
formatters render those fields: ``JsonFormatter`` as top-level keys,
``KeyValueFormatter`` as trailing ``key=value`` pairs.
"""
import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict

_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


def event_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Fields attached to ``record`` through ``extra=``."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        payload.update(event_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class KeyValueFormatter(logging.Formatter):

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        fields = event_fields(record)
        if not fields:
            return line
        return line + " " + " ".join(f"{key}={value}" for key, value in fields.items())


def configure_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    level = log_level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "text": {
                    "()": "stockkeeper.utils.logging.KeyValueFormatter",
                    "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                },
                "json": {
                    "()": "stockkeeper.utils.logging.JsonFormatter",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if log_format.lower() == "json" else "text",
                }
            },
            "loggers": {
                "stockkeeper": {"level": level},
            },
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        }
    )
