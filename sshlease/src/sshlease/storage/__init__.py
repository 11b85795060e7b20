"""Storage exports."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .base import Storage, StorageEntry, storage_entry_json
from .file import FileStorage
from .inmem import InmemStorage

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..config import AppConfig


def open_storage(config: "AppConfig") -> Storage:
    """Build the storage adapter selected by ``config.storage``."""
    backend = config.storage.resolved_backend()
    if backend == "memory":
        return InmemStorage()
    return FileStorage(config.storage.resolved_path())


__all__ = [
    "FileStorage",
    "InmemStorage",
    "Storage",
    "StorageEntry",
    "open_storage",
    "storage_entry_json",
]
