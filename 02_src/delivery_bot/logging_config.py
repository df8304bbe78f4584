"""JSON logging for the delivery chatbot.

Every record is one JSON object per line. Structured fields travel in
``extra={"context": {...}}``; a ``request_id`` found there is also promoted
to the top level so one message can be followed through the pipeline.
"""

import json
import logging
import logging.config
from datetime import datetime, timezone
from pathlib import Path

from .config import DEFAULT_LOG_PATH

SERVICE_NAME = "delivery-bot"

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Renders a LogRecord as a single JSON line."""

    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        context = getattr(record, "context", None)
        if context:
            if "request_id" in context:
                entry["request_id"] = context["request_id"]
            entry["context"] = context

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def build_logging_config(log_level: str, log_file: str | None) -> dict:
    """
    Build the dictConfig for the service.

    A falsy ``log_file`` logs to stdout only.
    """
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "stream": "ext://sys.stdout",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file,
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "json",
            "encoding": "utf-8",
        }

    loggers = {name: {"level": "WARNING"} for name in _QUIET_LOGGERS}
    # Route uvicorn through the root handlers instead of its own formatters
    for name in ("uvicorn", "uvicorn.error"):
        loggers[name] = {"handlers": [], "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "delivery_bot.logging_config.JSONFormatter"},
        },
        "handlers": handlers,
        "root": {"level": log_level.upper(), "handlers": list(handlers)},
        "loggers": loggers,
    }


def setup_logging(log_level: str = "INFO", log_file: str | None = None) -> None:
    """
    Configure JSON logging to stdout and a rotating file.

    Args:
        log_level: Root log level name
        log_file: Log file path; None means 04_logs/chatbot.log, "" disables
            the file handler
    """
    if log_file is None:
        log_file = str(DEFAULT_LOG_PATH)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(log_level, log_file))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
