"""Durable client-side key/value storage (string values, like browser localStorage)."""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional, Protocol

logger = logging.getLogger(__name__)


class ClientStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage; used in tests and when no file is configured."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """All keys in one JSON object on disk; rewritten on every change."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError):
            logger.warning("Unreadable client storage at %s; starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(k, str) and isinstance(v, str)}

    def _save(self, items: dict[str, str]) -> None:
        # Readers see the old file or the new one, never a partial write
        fd, tmp_path = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(items, handle, indent=2)
            os.replace(tmp_path, self._path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._load()
            items[key] = value
            self._save(items)

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._load()
            if key in items:
                del items[key]
                self._save(items)


class ScopedStorage:
    """View of another storage with every key under `namespace/`; one per HTTP client."""

    def __init__(self, storage: ClientStorage, namespace: str) -> None:
        self._storage = storage
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}/{key}"

    def get_item(self, key: str) -> Optional[str]:
        return self._storage.get_item(self._key(key))

    def set_item(self, key: str, value: str) -> None:
        self._storage.set_item(self._key(key), value)

    def remove_item(self, key: str) -> None:
        self._storage.remove_item(self._key(key))
