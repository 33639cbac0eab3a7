from __future__ import annotations

import logging
import os
from pathlib import Path

from .document import Document
from .errors import InvalidInputError
from .json_store import atomic_write_text, dumps_json, read_json
from .paths import ensure_dir, key_to_path
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class DocumentCache:
    """
    Scratch cache of Documents, one JSON file per key under a root directory.

    - No eviction: entries live until deleted or cleared.
    - A missing or unreadable entry is a cache miss (get returns None).
    - Writes are atomic, same as the store.
    """

    EXTENSION = ".json"

    def __init__(self, root: str | os.PathLike[str]):
        self._root = ensure_dir(Path(root).expanduser().resolve())

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "DocumentCache":
        return cls((settings or get_settings()).cache_dir)

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, key: str) -> Path:
        return key_to_path(self._root, key, self.EXTENSION)

    def set(self, key: str, document: Document) -> bool:
        path = self._path(key)
        try:
            payload = dumps_json(document.to_dict())
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Document for {key} is not JSON serializable: {e}") from e

        try:
            atomic_write_text(path, payload)
        except OSError:
            logger.warning("Failed to cache document %s", key, exc_info=True)
            return False
        return True

    def get(self, key: str) -> Document | None:
        try:
            raw = read_json(self._path(key))
        except (FileNotFoundError, IsADirectoryError):
            return None
        except ValueError:
            logger.debug("Ignoring unreadable cache entry %s", key)
            return None
        return Document(raw, key=key) if isinstance(raw, dict) else None

    def has(self, key: str) -> bool:
        return self._path(key).is_file()

    def delete(self, key: str) -> bool:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            return False
        return True

    def clear(self) -> None:
        for path in self._root.rglob(f"*{self.EXTENSION}"):
            if path.is_file():
                path.unlink(missing_ok=True)
