"""Lease configuration: validated writes and the unconfigured-aware read."""
from __future__ import annotations

from typing import Optional

import structlog

from .duration import Duration, DurationError
from .errors import DecodeError, StorageError
from .framework import FieldData, FieldSchema, Operation, Path, Request, Response, error_response
from .models import LeaseConfig, LeaseRecord
from .storage import Storage, storage_entry_json

CONFIG_LEASE_KEY = "config/lease"

logger = structlog.get_logger(__name__)


def _reject(field_name: str, message: str) -> Response:
    logger.warning("lease_config_rejected", field=field_name, reason=message)
    return error_response(message)


def write_lease_config(
    storage: Storage,
    lease_raw: str,
    lease_max_raw: str,
    *,
    require_positive: bool = True,
) -> Optional[Response]:
    """Validate both durations and replace the stored lease configuration.

    Returns ``None`` on success or an error :class:`Response` for invalid
    input, in which case storage is left untouched. Encoding and storage
    failures raise :class:`~sshlease.errors.LeaseStoreError` subclasses.
    """

    if not lease_raw:
        return _reject("lease", "Missing lease")
    if not lease_max_raw:
        return _reject("lease_max", "Missing lease_max")

    parsed: dict[str, Duration] = {}
    for name, raw in (("lease", lease_raw), ("lease_max", lease_max_raw)):
        try:
            parsed[name] = Duration.parse(raw)
        except DurationError as exc:
            return _reject(name, f"Invalid '{name}': {exc}")

    if require_positive:
        for name, value in parsed.items():
            if not value.is_positive():
                return _reject(name, f"Invalid '{name}': duration must be positive, got {value}")

    config = LeaseConfig(lease=parsed["lease"], lease_max=parsed["lease_max"])
    entry = storage_entry_json(CONFIG_LEASE_KEY, config.to_record())
    try:
        storage.put(entry)
    except OSError as exc:
        raise StorageError(f"could not store lease configuration: {exc}") from exc

    logger.info(
        "lease_config_written",
        lease=str(config.lease),
        lease_max=str(config.lease_max),
    )
    return None


def read_lease_config(storage: Storage) -> Optional[LeaseConfig]:
    """Return the stored :class:`LeaseConfig`, or ``None`` when unconfigured."""
    try:
        entry = storage.get(CONFIG_LEASE_KEY)
    except OSError as exc:
        raise StorageError(f"could not read lease configuration: {exc}") from exc

    if entry is None:
        return None

    record = entry.decode_json(LeaseRecord)
    try:
        return record.to_config()
    except (DurationError, TypeError) as exc:
        raise DecodeError(f"stored lease configuration is out of range: {exc}") from exc


def path_config_lease(*, require_positive: bool = True) -> Path:
    """Build the ``config/lease`` path with its write callback."""

    def handle_write(request: Request, data: FieldData) -> Optional[Response]:
        return write_lease_config(
            request.storage,
            data.get("lease"),
            data.get("lease_max"),
            require_positive=require_positive,
        )

    return Path(
        pattern=CONFIG_LEASE_KEY,
        fields={
            "lease": FieldSchema(description="[Required] Default lease for roles."),
            "lease_max": FieldSchema(description="[Required] Maximum time a credential is valid for."),
        },
        callbacks={Operation.WRITE: handle_write},
        help_synopsis=PATH_CONFIG_LEASE_HELP_SYN,
        help_description=PATH_CONFIG_LEASE_HELP_DESC,
    )


PATH_CONFIG_LEASE_HELP_SYN = """
Configure the default and maximum lease for dynamic SSH keys.
"""

PATH_CONFIG_LEASE_HELP_DESC = """
Sets how long SSH keys issued by this backend stay valid. "lease" is
the validity granted when no other value is requested and "lease_max"
is the longest validity any credential may receive.

Both values are durations written as a number (integer or decimal)
followed by a unit, e.g. "1h", "90m" or "1h30m". The largest unit is
the hour.
"""


__all__ = [
    "CONFIG_LEASE_KEY",
    "PATH_CONFIG_LEASE_HELP_DESC",
    "PATH_CONFIG_LEASE_HELP_SYN",
    "path_config_lease",
    "read_lease_config",
    "write_lease_config",
]
