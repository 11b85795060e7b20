"""Filesystem-backed storage adapter."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

import structlog

from ..errors import StorageError
from ..utils.validation import ensure_storage_key, resolve_and_check_path
from .base import StorageEntry

logger = structlog.get_logger(__name__)

_TMP_PREFIX = ".tmp-"


class FileStorage:
    """One file per key beneath ``root``.

    Layout:
      - ``config/lease`` -> ``<root>/config/lease``
      - in-flight writes use ``<dir>/.tmp-*`` siblings and are renamed into place
    """

    def __init__(self, root: Path | str) -> None:
        try:
            self.root = resolve_and_check_path(root, require_file=False)
            self.root.mkdir(parents=True, exist_ok=True)
        except (OSError, ValueError) as exc:
            raise StorageError(f"could not prepare storage root {root}: {exc}") from exc

    def _path_for(self, key: str) -> Path:
        try:
            ensure_storage_key(key)
            return resolve_and_check_path(self.root / key, allowed_roots=[self.root])
        except ValueError as exc:
            raise StorageError(str(exc)) from exc

    def get(self, key: str) -> Optional[StorageEntry]:
        path = self._path_for(key)
        try:
            value = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"could not read {key!r}: {exc}") from exc
        return StorageEntry(key=key, value=value)

    def put(self, entry: StorageEntry) -> None:
        path = self._path_for(entry.key)
        tmp_name: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb", dir=path.parent, prefix=_TMP_PREFIX, delete=False
            ) as handle:
                tmp_name = handle.name
                handle.write(entry.value)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            raise StorageError(f"could not write {entry.key!r}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
        logger.debug("storage_put", key=entry.key, path=str(path), size=len(entry.value))


__all__ = ["FileStorage"]
