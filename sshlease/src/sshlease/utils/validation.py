"""Validation helpers for storage keys and filesystem paths."""
from __future__ import annotations

from pathlib import Path
from typing import Sequence


def ensure_storage_key(key: str) -> str:
    """Ensure ``key`` is a relative, slash-separated storage key.

    Parameters
    ----------
    key:
        Logical key such as ``"config/lease"``.

    Returns
    -------
    str
        The key unchanged.

    Raises
    ------
    ValueError
        If ``key`` is empty, absolute, contains empty, ``.`` or ``..``
        segments, or contains a backslash or NUL character.
    """

    if not key:
        raise ValueError("Storage key must not be empty")
    if key.startswith("/"):
        raise ValueError(f"Storage key must be relative: {key!r}")
    if "\\" in key or "\x00" in key:
        raise ValueError(f"Storage key contains forbidden characters: {key!r}")
    for segment in key.split("/"):
        if segment in {"", ".", ".."}:
            raise ValueError(f"Storage key has an invalid segment: {key!r}")
    return key


def _normalise_path(path: Path | str) -> Path:
    return Path(path).expanduser().resolve(strict=False)


def _is_relative_to(path: Path, root: Path) -> bool:
    try:
        path.relative_to(root)
    except ValueError:
        return False
    return True


def resolve_and_check_path(
    path: Path | str,
    *,
    allowed_roots: Sequence[Path] | None = None,
    must_exist: bool = False,
    require_file: bool | None = None,
) -> Path:
    """Resolve ``path`` safely and enforce optional constraints.

    The function expands user tildes, resolves symlinks for existing parents, and
    rejects relative paths containing ``..`` components to prevent directory
    traversal. When ``allowed_roots`` is supplied, the resolved path must reside
    within one of the permitted roots.
    """

    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        if any(part == ".." for part in candidate.parts):
            raise ValueError(f"Path traversal is not allowed: {path}")
        resolved = _normalise_path(Path.cwd() / candidate)
    else:
        resolved = _normalise_path(candidate)

    if allowed_roots:
        normalised_roots = [_normalise_path(root) for root in allowed_roots]
        if not any(_is_relative_to(resolved, root) for root in normalised_roots):
            roots_display = ", ".join(str(root) for root in normalised_roots)
            raise ValueError(f"Path '{resolved}' is outside permitted locations: {roots_display}")

    if must_exist and not resolved.exists():
        raise ValueError(f"Path does not exist: {resolved}")

    if require_file is True and resolved.exists() and not resolved.is_file():
        raise ValueError(f"Expected file path but found directory: {resolved}")
    if require_file is False and resolved.exists() and not resolved.is_dir():
        raise ValueError(f"Expected directory path but found file: {resolved}")

    return resolved


__all__ = ["ensure_storage_key", "resolve_and_check_path"]
