"""Utility exports."""
from .validation import ensure_storage_key, resolve_and_check_path

__all__ = ["ensure_storage_key", "resolve_and_check_path"]
