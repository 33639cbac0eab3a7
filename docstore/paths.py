from __future__ import annotations

from pathlib import Path

from .errors import InvalidInputError


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def normalize_prefix(prefix: str | None) -> str:
    out = (prefix or "").strip("/")
    if ".." in out.split("/"):
        raise InvalidInputError(f"Invalid prefix {prefix!r}")
    return out


def key_to_path(root: Path, key: str, extension: str) -> Path:
    # Keys are used verbatim; slashes become nested directories.
    return root / f"{validate_key(key)}{extension}"


def path_to_key(root: Path, path: Path, extension: str) -> str:
    rel = path.relative_to(root).as_posix()
    return rel[: -len(extension)] if extension else rel


def validate_key(key: str) -> str:
    """Reject keys that are empty or would step outside the store root."""
    if not isinstance(key, str) or not key:
        raise InvalidInputError("Key must be a non-empty string")
    if key.startswith("/") or any(part in ("", ".", "..") for part in key.split("/")):
        raise InvalidInputError(f"Invalid key {key!r}")
    return key
