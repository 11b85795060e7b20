"""Lease configuration store for dynamically issued SSH credentials."""
from .backend import Backend
from .duration import Duration, DurationError
from .errors import (
    DecodeError,
    EncodingError,
    LeaseStoreError,
    RequestError,
    StorageError,
    UnsupportedOperation,
    UnsupportedPath,
)
from .lease import CONFIG_LEASE_KEY, read_lease_config, write_lease_config
from .models import LeaseConfig
from .version import __version__

__all__ = [
    "Backend",
    "CONFIG_LEASE_KEY",
    "DecodeError",
    "Duration",
    "DurationError",
    "EncodingError",
    "LeaseConfig",
    "LeaseStoreError",
    "RequestError",
    "StorageError",
    "UnsupportedOperation",
    "UnsupportedPath",
    "__version__",
    "read_lease_config",
    "write_lease_config",
]
