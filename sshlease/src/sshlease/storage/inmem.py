"""In-process storage adapter."""
from __future__ import annotations

import threading
from typing import Dict, Optional

import structlog

from .base import StorageEntry

logger = structlog.get_logger(__name__)


class InmemStorage:
    """Thread-safe dictionary storage, mainly for tests and ephemeral runs."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, bytes] = {}

    def get(self, key: str) -> Optional[StorageEntry]:
        with self._lock:
            value = self._data.get(key)
        if value is None:
            return None
        return StorageEntry(key=key, value=bytes(value))

    def put(self, entry: StorageEntry) -> None:
        with self._lock:
            self._data[entry.key] = bytes(entry.value)
        logger.debug("storage_put", key=entry.key, size=len(entry.value))


__all__ = ["InmemStorage"]
