"""Backend wiring the lease store into a path registry."""
from __future__ import annotations

from typing import Any, Dict, Optional

import structlog

from .config import AppConfig
from .framework import Operation, PathRegistry, Request, Response
from .lease import path_config_lease, read_lease_config
from .models import LeaseConfig
from .storage import Storage

logger = structlog.get_logger(__name__)


class Backend:
    """Mounts the ``config/lease`` path and serves the lease accessor."""

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self._registry = PathRegistry()
        self._registry.register(
            path_config_lease(require_positive=self.config.lease.require_positive)
        )

    @property
    def paths(self) -> list[str]:
        return self._registry.patterns()

    def handle_request(self, request: Request) -> Optional[Response]:
        logger.debug("request_received", path=request.path, operation=request.operation.value)
        return self._registry.dispatch(request)

    def write(self, storage: Storage, path: str, data: Dict[str, Any]) -> Optional[Response]:
        return self.handle_request(Request(operation=Operation.WRITE, path=path, storage=storage, data=data))

    def help(self, path: str) -> Response:
        """Describe ``path`` without touching storage."""
        return self._registry.lookup(path).help_response()

    def lease(self, storage: Storage) -> Optional[LeaseConfig]:
        """Return the configured lease bounds, or ``None`` when unconfigured."""
        return read_lease_config(storage)


__all__ = ["Backend"]
