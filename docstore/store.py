from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .conditions import ConditionSet
from .document import Document
from .errors import (
    CorruptDataError,
    InvalidInputError,
    NotFoundError,
    StorageNotWritableError,
    UnsupportedOperationError,
)
from .json_store import atomic_write_text, dumps_json, read_json
from .paths import ensure_dir, key_to_path, normalize_prefix, path_to_key
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


class FindMode(str, Enum):
    FIRST = "first"
    ALL = "all"
    LIST = "list"
    COUNT = "count"


class FindParams(BaseModel):
    """Options accepted by `DocumentStore.find`; unknown options are rejected."""

    model_config = ConfigDict(extra="forbid")

    prefix: str = ""
    conditions: dict[str, Any] = Field(default_factory=dict)
    limit: int | None = Field(default=None, gt=0)
    offset: int = Field(default=0, ge=0)


_ACCUMULATORS: dict[FindMode, Callable[[Iterator[Document]], Any]] = {
    FindMode.FIRST: lambda docs: next(docs, None),
    FindMode.ALL: list,
    FindMode.LIST: lambda docs: [d.key for d in docs],
    FindMode.COUNT: lambda docs: sum(1 for _ in docs),
}


class DocumentStore:
    """
    Stores each Document as a pretty-printed JSON file under a root directory.

    - The key maps to `<root>/<key><extension>`; slashes in the key create
      nested directories on demand.
    - Writes go to a temp file next to the target and are renamed into place,
      so readers never see a half-written document.
    - No locking: two writers to the same key race and the last rename wins.
      Scans are not snapshots; a document removed mid-scan is skipped.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        extension: str = ".json",
        json_indent: int | None = 4,
        debug_log_scans: bool = False,
    ):
        path = Path(root).expanduser().resolve()
        try:
            ensure_dir(path)
        except OSError as e:
            raise StorageNotWritableError(f"Cannot create storage directory {path}") from e
        if not os.access(path, os.W_OK):
            raise StorageNotWritableError(f"Storage directory {path} is not writable")

        self._root = path
        self._extension = extension
        self._json_indent = json_indent
        self._debug_log_scans = debug_log_scans

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "DocumentStore":
        s = settings or load_settings()
        return cls(
            s.root_dir,
            extension=s.extension,
            json_indent=s.json_indent,
            debug_log_scans=s.debug_log_scans,
        )

    @property
    def root(self) -> Path:
        return self._root

    @property
    def extension(self) -> str:
        return self._extension

    def path_for(self, key: str) -> Path:
        return key_to_path(self._root, key, self._extension)

    def get(self, key: str) -> Document:
        path = self.path_for(key)
        try:
            raw = read_json(path)
        except (FileNotFoundError, IsADirectoryError) as e:
            raise NotFoundError(key) from e
        except ValueError as e:
            raise CorruptDataError(key, str(e)) from e
        if not isinstance(raw, dict):
            raise CorruptDataError(key, f"expected a JSON object, got {type(raw).__name__}")
        return Document(raw, key=key)

    def set(self, key: str, document: Document) -> bool:
        """
        Save the Document atomically.

        Returns False when the write or the rename fails; the previous version
        of the file (if any) is left untouched.
        """
        if not isinstance(document, Document):
            raise InvalidInputError(f"Expected a Document, got {type(document).__name__}")
        path = self.path_for(key)
        try:
            payload = dumps_json(document.to_dict(), indent=self._json_indent)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Document for {key} is not JSON serializable: {e}") from e

        try:
            atomic_write_text(path, payload)
        except OSError:
            logger.warning("Failed to write document %s to %s", key, path, exc_info=True)
            return False
        return True

    def has(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def delete(self, key: str) -> bool:
        path = self.path_for(key)
        if not path.is_file():
            raise NotFoundError(key)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise NotFoundError(key) from e
        except OSError:
            logger.warning("Failed to delete document %s", key, exc_info=True)
            return False
        return True

    def list(self, prefix: str = "", recursive: bool = True) -> list[str]:
        """
        List stored keys under `prefix`, depth first.

        Entries within a directory are visited in name order, so a subdirectory
        is walked at the position its name sorts to.
        """
        base = self._root / normalize_prefix(prefix)
        if not base.is_dir():
            return []
        return [*self._walk(base, recursive)]

    def _walk(self, directory: Path, recursive: bool) -> Iterator[str]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except FileNotFoundError:
            # Removed while we were walking.
            return

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                if recursive:
                    yield from self._walk(Path(entry.path), recursive)
            elif entry.name.endswith(self._extension) and entry.is_file():
                yield path_to_key(self._root, Path(entry.path), self._extension)

    def find(
        self,
        mode: FindMode | str,
        params: FindParams | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Any:
        """
        Scan documents under a prefix and return them according to `mode`:

        - first: the first matching Document or None
        - all:   list of matching Documents
        - list:  list of matching keys
        - count: number of matches (after offset, capped at limit)

        Options are `prefix`, `conditions`, `limit` and `offset`, passed either
        as `params` or as keyword arguments.
        """
        find_mode = self._resolve_mode(mode)
        find_params = self._resolve_params(params, options)
        # Parsed up front so a bad condition fails before any file is read.
        condition_set = ConditionSet(find_params.conditions)
        return _ACCUMULATORS[find_mode](self._scan(find_params, condition_set))

    def search(
        self,
        prefix: str = "",
        conditions: Mapping[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Document]:
        return self.find(
            FindMode.ALL,
            {"prefix": prefix, "conditions": dict(conditions or {}), "limit": limit, "offset": offset},
        )

    @staticmethod
    def _resolve_mode(mode: FindMode | str) -> FindMode:
        if isinstance(mode, FindMode):
            return mode
        try:
            return FindMode(mode)
        except ValueError as e:
            raise UnsupportedOperationError(f"Unsupported find mode {mode!r}") from e

    @staticmethod
    def _resolve_params(
        params: FindParams | Mapping[str, Any] | None,
        options: Mapping[str, Any],
    ) -> FindParams:
        if isinstance(params, FindParams) and not options:
            return params
        base = params.model_dump() if isinstance(params, FindParams) else dict(params or {})
        try:
            return FindParams.model_validate({**base, **options})
        except ValidationError as e:
            raise InvalidInputError(f"Invalid find parameters: {e}") from e

    def _scan(self, params: FindParams, condition_set: ConditionSet) -> Iterator[Document]:
        log = logger.info if self._debug_log_scans else logger.debug
        log(
            "Scanning prefix=%r conditions=%d offset=%d limit=%s",
            params.prefix,
            len(condition_set),
            params.offset,
            params.limit,
        )

        matched = 0
        collected = 0
        for key in self.list(params.prefix):
            try:
                document = self.get(key)
            except NotFoundError:
                logger.debug("Document %s disappeared during scan", key)
                continue
            if not condition_set.matches(document):
                continue
            matched += 1
            if matched <= params.offset:
                continue
            yield document
            collected += 1
            if params.limit is not None and collected >= params.limit:
                return
