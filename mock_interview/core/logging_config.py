"""
Logging Configuration

Plain-text logging for development and JSON logging for production, with
helpers for structured session lifecycle events.
"""

import json
import logging
import sys
from datetime import datetime
from logging import LogRecord
from typing import Any, Dict, Optional

_RESERVED_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "message", "pathname", "process",
    "processName", "relativeCreated", "thread", "threadName", "exc_info",
    "exc_text", "stack_info", "taskName",
}


class JSONFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Fields passed through ``extra=`` are merged into the top-level object.
    """

    def format(self, record: LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps({key: value})
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        return json.dumps(log_data)


def setup_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines instead of the plain development format
        log_file: Optional file path; file output is always JSON

    Example:
        setup_logging(level="DEBUG", json_format=True)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)

    if json_format:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        )

    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_session_event(
    logger: logging.Logger,
    session_id: str,
    event_type: str,
    level: int = logging.INFO,
    **extra
) -> None:
    """
    Log a session lifecycle event.

    Args:
        logger: The logger instance
        session_id: Session identifier
        event_type: started, device_unavailable, question_changed, expired,
            ended, abandoned, unmounted or handed_off
        level: Log level for the record
        **extra: Additional fields

    Example:
        log_session_event(
            logger,
            session_id="abc123",
            event_type="question_changed",
            question_id=2,
            elapsed_seconds=20,
        )
    """
    log_data = {
        "event": "session_event",
        "session_id": session_id,
        "event_type": event_type,
    }
    log_data.update(extra)

    logger.log(level, f"Session {session_id}: {event_type}", extra=log_data)
