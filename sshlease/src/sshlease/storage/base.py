"""Storage abstraction shared by the lease store and its adapters."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

from ..errors import DecodeError, EncodingError

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class StorageEntry:
    """A single value held by a :class:`Storage` under ``key``."""

    key: str
    value: bytes

    def decode_json(self, model: Type[ModelT]) -> ModelT:
        """Validate the entry value as JSON for ``model``.

        Raises
        ------
        DecodeError
            If the value is not valid JSON or does not match ``model``.
        """

        try:
            return model.model_validate_json(self.value)
        except ValidationError as exc:
            raise DecodeError(f"could not decode entry {self.key!r}: {exc}") from exc


def storage_entry_json(key: str, payload: Any) -> StorageEntry:
    """Encode ``payload`` as JSON and wrap it in a :class:`StorageEntry`."""
    try:
        if isinstance(payload, BaseModel):
            raw = payload.model_dump_json(by_alias=True)
        else:
            raw = json.dumps(payload, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"could not encode entry {key!r}: {exc}") from exc
    return StorageEntry(key=key, value=raw.encode("utf-8"))


@runtime_checkable
class Storage(Protocol):
    """Durable key-value store addressed by slash-separated string keys."""

    def get(self, key: str) -> Optional[StorageEntry]: ...

    def put(self, entry: StorageEntry) -> None: ...


__all__ = ["Storage", "StorageEntry", "storage_entry_json"]
