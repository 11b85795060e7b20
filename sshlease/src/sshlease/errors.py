"""Central exception hierarchy"""
from __future__ import annotations

from .duration import DurationError


class LeaseStoreError(Exception):
    """Base exception for all server-side failures"""


class RequestError(LeaseStoreError):
    """Raised when a request cannot be routed to a handler"""


class UnsupportedPath(RequestError):
    def __init__(self, path: str) -> None:
        super().__init__(f"unsupported path: {path}")
        self.path = path


class UnsupportedOperation(RequestError):
    def __init__(self, path: str, operation: str) -> None:
        super().__init__(f"unsupported operation {operation!r} on path {path}")
        self.path = path
        self.operation = operation


class StorageError(LeaseStoreError):
    """Raised when the backing storage cannot be read or written"""


class EncodingError(LeaseStoreError):
    """Raised when a record cannot be serialized for storage"""


class DecodeError(LeaseStoreError):
    """Raised when a stored record is corrupt or from an incompatible version"""


__all__ = [
    "DecodeError",
    "DurationError",
    "EncodingError",
    "LeaseStoreError",
    "RequestError",
    "StorageError",
    "UnsupportedOperation",
    "UnsupportedPath",
]
