"""Shared filesystem path helpers for sshlease."""
from __future__ import annotations

import os
import sys
from pathlib import Path

from platformdirs import PlatformDirs

_APP_NAME = "SSH Lease"
_LINUX_APP_NAME = "sshlease"
STORE_ENV = "SSHLEASE_STORE_DIR"


def _platform_dirs() -> PlatformDirs:
    if sys.platform in ("win32", "darwin"):
        return PlatformDirs(appname=_APP_NAME, appauthor=None, roaming=True)
    return PlatformDirs(appname=_LINUX_APP_NAME, appauthor=None, roaming=False)


def runtime_config_dir() -> Path:
    """Return the per-user runtime configuration directory."""
    return Path(_platform_dirs().user_config_path)


def default_store_dir() -> Path:
    """Return the storage root, honouring ``SSHLEASE_STORE_DIR`` when set."""
    value = os.getenv(STORE_ENV)
    if value:
        return Path(value).expanduser()
    return Path(_platform_dirs().user_data_path) / "store"
