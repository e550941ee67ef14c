"""Transient user-facing notifications (the toast channel)."""
from __future__ import annotations

import logging
import threading
from collections import deque
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)


class NotificationVariant(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    variant: NotificationVariant
    title: str
    description: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        return {
            "variant": self.variant.value,
            "title": self.title,
            "description": self.description,
            "created_at": self.created_at.isoformat(),
        }


Listener = Callable[[Notification], None]

_captured: ContextVar[Optional[list[Notification]]] = ContextVar("captured_notifications", default=None)


class Notifier:
    """
    Fan out notifications to listeners and keep a bounded history.
    `capture()` collects what one caller (an HTTP request) caused, and nothing
    from concurrent callers.
    """

    def __init__(self, history_limit: int = 50) -> None:
        self._lock = threading.Lock()
        self._history: deque[Notification] = deque(maxlen=history_limit)
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def notify(self, variant: NotificationVariant, title: str, description: Optional[str] = None) -> Notification:
        note = Notification(variant=variant, title=title, description=description)
        with self._lock:
            self._history.append(note)
            listeners = list(self._listeners)
        bucket = _captured.get()
        if bucket is not None:
            bucket.append(note)
        for listener in listeners:
            listener(note)
        return note

    def success(self, title: str, description: Optional[str] = None) -> Notification:
        return self.notify(NotificationVariant.SUCCESS, title, description)

    def error(self, title: str, description: Optional[str] = None) -> Notification:
        return self.notify(NotificationVariant.ERROR, title, description)

    @contextmanager
    def capture(self) -> Iterator[list[Notification]]:
        """Collect notifications sent from this context, including asyncio.to_thread calls, inside the block."""
        bucket: list[Notification] = []
        token = _captured.set(bucket)
        try:
            yield bucket
        finally:
            _captured.reset(token)

    @property
    def history(self) -> list[Notification]:
        with self._lock:
            return list(self._history)

    @property
    def last(self) -> Optional[Notification]:
        with self._lock:
            return self._history[-1] if self._history else None
