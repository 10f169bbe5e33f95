"""Operator-facing notices: weather lookups that loaded or failed.

Notices live in memory only. The dashboard polls ``GET /api/notifications``
and shows them as toasts, newest first.
"""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Deque, Optional

from dronecrm.core.config import settings


class NoticeLevel(str, Enum):
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    level: NoticeLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    context: Optional[dict[str, Any]] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "message": self.message,
            "created_at": self.created_at.isoformat().replace("+00:00", "Z"),
            "context": self.context,
        }


class NotificationLog:
    """Capped, newest-first list of notices; safe to share across request threads."""

    def __init__(self, max_items: int = 50) -> None:
        self.max_items = max_items
        self._items: Deque[Notification] = deque(maxlen=max_items)
        self._lock = threading.Lock()

    def add(self, level: NoticeLevel | str, message: str, context: dict | None = None) -> Notification:
        note = Notification(level=NoticeLevel(level), message=message, context=context)
        with self._lock:
            self._items.appendleft(note)
        return note

    def info(self, message: str, context: dict | None = None) -> Notification:
        return self.add(NoticeLevel.INFO, message, context)

    def error(self, message: str, context: dict | None = None) -> Notification:
        return self.add(NoticeLevel.ERROR, message, context)

    def recent(self, limit: int | None = None, level: NoticeLevel | str | None = None) -> list[Notification]:
        with self._lock:
            items = list(self._items)
        if level is not None:
            wanted = NoticeLevel(level)
            items = [note for note in items if note.level is wanted]
        return items if limit is None else items[:limit]

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


NOTIFICATIONS = NotificationLog(max_items=settings.notifications_max_items)

__all__ = ["NOTIFICATIONS", "NoticeLevel", "Notification", "NotificationLog"]
