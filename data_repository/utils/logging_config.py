import json
import logging
import logging.config
from datetime import datetime
from typing import Any, Dict, Optional

from data_repository.config.settings import Settings, get_settings
from data_repository.utils.trace_id import trace_id_var

# Extra attributes the repository attaches to its records
_EXTRA_FIELDS = ("operation", "item_type", "error_family")


class TraceIdFilter(logging.Filter):
    """Copy the current trace ID onto every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "trace_id", None) is None:
            record.trace_id = trace_id_var.get()
        return True


class JSONFormatter(logging.Formatter):
    """
    Custom formatter to output log records as a JSON string.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_object: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "trace_id": getattr(record, 'trace_id', None),
        }
        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_object[field] = value
        # Add exception info if it exists
        if record.exc_info:
            log_object['exc_info'] = self.formatException(record.exc_info)

        return json.dumps(log_object, default=str)


def build_logging_config(settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "trace_id": {
                "()": "data_repository.utils.logging_config.TraceIdFilter",
            },
        },
        "formatters": {
            "json": {
                "()": "data_repository.utils.logging_config.JSONFormatter",
            },
            "plain": {
                "format": "%(asctime)s %(levelname)s %(name)s [%(trace_id)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": settings.LOG_FORMAT,
                "filters": ["trace_id"],
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "data_repository": {
                "level": settings.LOG_LEVEL,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Install the package's logging configuration."""
    logging.config.dictConfig(build_logging_config(settings))
