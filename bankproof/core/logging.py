import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bankproof.core.config import settings
from bankproof.core.error_handling import request_id_var

SILENT_LOGGER_NAME = "bankproof.silent"

module_logger = logging.getLogger(__name__)


class RequestIDFilter(logging.Filter):
    """
    Inject the current request_id (from ContextVar) into log records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = request_id_var.get()
        record.request_id = request_id if request_id else ""
        return True


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if settings.LOG_INCLUDE_REQUEST_ID and getattr(record, "request_id", ""):
            log_obj["request_id"] = record.request_id

        # Add extra fields if present
        if hasattr(record, "extra_fields"):
            log_obj.update(record.extra_fields)

        # Add exception info if present
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def setup_logging() -> None:
    """
    Configure logging for the application.
    Uses JSON logging if configured, otherwise standard text logging.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)

    if settings.LOG_FORMAT.lower() == "json":
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s" + (
                " - request_id=%(request_id)s" if settings.LOG_INCLUDE_REQUEST_ID else ""
            )
        )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for h in root_logger.handlers[:]:
        root_logger.removeHandler(h)

    root_logger.addHandler(handler)

    if settings.LOG_INCLUDE_REQUEST_ID:
        handler.addFilter(RequestIDFilter())

    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)  # Reduce noise from httpx


def get_silent_logger() -> logging.Logger:
    """Logger that discards everything; the default when a caller passes none."""
    silent = logging.getLogger(SILENT_LOGGER_NAME)
    if not silent.handlers:
        silent.addHandler(logging.NullHandler())
    silent.propagate = False
    return silent


def resolve_logger(logger: Optional[logging.Logger]) -> logging.Logger:
    return logger if logger is not None else get_silent_logger()


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """
    Emit a structured event.

    Fields land in ``extra_fields`` so JSONFormatter merges them into the
    emitted object; the text formatter shows them after the event name.
    A handler or filter that raises is reported here and never reaches the
    caller.
    """
    if not logger.isEnabledFor(level):
        return
    message = event
    if fields:
        message = f"{event} " + " ".join(f"{k}={v}" for k, v in fields.items())
    try:
        logger.log(level, message, extra={"extra_fields": {"event": event, **fields}})
    except Exception as e:
        module_logger.warning(f"Dropped log event {event} on {logger.name}: {e!r}")
