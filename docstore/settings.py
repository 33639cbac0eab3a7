from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Storage
    root_dir: str
    extension: str
    json_indent: int

    # Scratch cache
    cache_dir: str

    # Debug
    debug_log_scans: bool


def get_settings() -> Settings:
    root_dir = os.getenv("DOCSTORE_ROOT", "data")

    extension = os.getenv("DOCSTORE_EXTENSION", ".json").strip() or ".json"
    if not extension.startswith("."):
        extension = f".{extension}"

    json_indent = _env_int("DOCSTORE_JSON_INDENT", 4)

    # Shared scratch location, mirrors sys_get_temp_dir()/document-store.
    cache_dir = os.getenv("DOCSTORE_CACHE_DIR", os.path.join(tempfile.gettempdir(), "document-store"))

    debug_log_scans = _env_bool("DOCSTORE_DEBUG_LOG_SCANS", False)

    return Settings(
        root_dir=root_dir,
        extension=extension,
        json_indent=json_indent,
        cache_dir=cache_dir,
        debug_log_scans=debug_log_scans,
    )


def load_settings(env_file: str | None = "local.env") -> Settings:
    """
    Load an optional dotenv file into the environment, then build Settings.

    Variables already present in the environment win over the file.
    """
    if env_file:
        load_dotenv(env_file)
    return get_settings()
