"""
Structured logging for case book, graph and export events.

Components log a short event name (``case_created``, ``store_malformed``,
``dangling_edge_dropped``, ``artifact_written`` ...) plus keyword fields such
as ``case_id`` or ``path``. With JSON output each record becomes one JSON
object per line; otherwise the fields follow the event as ``key=value``.
"""
import json
import logging
import sys
from datetime import datetime
from typing import Any, Dict, Optional, Union

ROOT_LOGGER_NAME = "caseflow"

# Attributes every LogRecord carries; anything else was passed as an event field
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {'message', 'asctime'}


def event_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Keyword fields attached to a record by :class:`StructuredLogger`."""
    return {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class StructuredFormatter(logging.Formatter):
    """Formats each record as one JSON line.

    Core keys are ``timestamp``, ``level``, ``event``, ``logger`` and
    ``component`` (the logger name below ``caseflow``); event fields follow.
    Values that JSON cannot encode, such as paths, are written as strings.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
            "component": _component(record.name),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        for key, value in event_fields(record).items():
            entry[key] = _json_safe(value)
        return json.dumps(entry, ensure_ascii=False)


class KeyValueFormatter(logging.Formatter):
    """Plain text formatter appending structured fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = f"{record.levelname:<7} {record.name}: {record.getMessage()}"
        fields = [f"{key}={value}" for key, value in event_fields(record).items()]
        if fields:
            base = f"{base} " + " ".join(fields)
        if record.exc_info:
            base = f"{base}\n{self.formatException(record.exc_info)}"
        return base


def _component(logger_name: str) -> str:
    prefix = f"{ROOT_LOGGER_NAME}."
    return logger_name[len(prefix):] if logger_name.startswith(prefix) else logger_name


class StructuredLogger:
    """Logs named events with keyword fields.

    ``get_logger("case_book").info("case_created", case_id="TC-1")`` emits the
    event ``case_created`` on ``caseflow.case_book`` with a ``case_id`` field.
    """

    def __init__(self, name: str = ROOT_LOGGER_NAME):
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, event: str, **kwargs: Any) -> None:
        self._logger.debug(event, extra=kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        """Log a completed mutation or a written artifact."""
        self._logger.info(event, extra=kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log recoverable bad data, e.g. a malformed store or a dangling edge."""
        self._logger.warning(event, extra=kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        """Log a failure that is re-raised to the caller."""
        self._logger.error(event, extra=kwargs)


def get_logger(component: str) -> StructuredLogger:
    """Structured logger for a caseflow component."""
    return StructuredLogger(f"{ROOT_LOGGER_NAME}.{component}")


def configure_logging(
    level: Union[int, str] = logging.WARNING,
    json_output: bool = False,
    log_file: Optional[str] = None
) -> logging.Logger:
    """Attach handlers to the ``caseflow`` logger.

    Args:
        level: Logging level (number or name)
        json_output: Emit JSON lines instead of key=value text
        log_file: Also write to this file

    Returns:
        The configured ``caseflow`` logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = []  # Clear existing handlers

    formatter = StructuredFormatter() if json_output else KeyValueFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
