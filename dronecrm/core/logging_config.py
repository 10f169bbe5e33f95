"""JSON logging setup and the in-memory buffer behind ``GET /api/logs``."""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from pythonjsonlogger import jsonlogger

from dronecrm.core.config import settings

_CONFIGURED = False


class _ServiceNameFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


class LogBuffer(logging.Handler):
    """Ring buffer of recent records, newest first.

    Entries keep the numeric level so readers can filter by severity, and
    carry the formatted traceback when the record had one.
    """

    def __init__(self, capacity: int) -> None:
        super().__init__()
        self._entries: deque[dict] = deque(maxlen=capacity)
        self._traceback = logging.Formatter()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = {
                "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
                "level": record.levelname,
                "levelno": record.levelno,
                "name": record.name,
                "message": record.getMessage(),
            }
            if record.exc_info:
                entry["exception"] = self._traceback.formatException(record.exc_info)
            self._entries.appendleft(entry)
        except Exception:
            self.handleError(record)

    def entries(self, limit: Optional[int] = None, min_level: int = logging.NOTSET) -> list[dict[str, str]]:
        selected = [
            {key: value for key, value in entry.items() if key != "levelno"}
            for entry in list(self._entries)
            if entry["levelno"] >= min_level
        ]
        return selected if limit is None else selected[:limit]


LOG_BUFFER = LogBuffer(capacity=settings.log_buffer_size)


def setup_logging(service_name: Optional[str] = None, level: Optional[str] = None) -> None:
    """Send JSON lines to stderr and keep recent records in ``LOG_BUFFER``."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s %(service)s")
    )
    handler.addFilter(_ServiceNameFilter(service_name or settings.service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.addHandler(LOG_BUFFER)
    root.setLevel((level or settings.log_level).upper())
    logging.captureWarnings(True)
    _CONFIGURED = True


def get_log_buffer(limit: Optional[int] = 100, min_level: int = logging.NOTSET) -> list[dict[str, str]]:
    return LOG_BUFFER.entries(limit=limit, min_level=min_level)


__all__ = ["LOG_BUFFER", "LogBuffer", "get_log_buffer", "setup_logging"]
