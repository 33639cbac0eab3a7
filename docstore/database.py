from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from .document import ID_FIELD, Document
from .errors import BatchWriteError, InvalidInputError, MissingIdentityError
from .object_id import generate_object_id
from .paths import normalize_prefix, validate_key
from .store import DocumentStore, FindMode, FindParams

logger = logging.getLogger(__name__)


class DocumentDatabase:
    """
    Adds auto-assigned identities on top of a DocumentStore.

    Inserted documents get a fresh `_id` which doubles as their storage key
    (optionally under a prefix such as `contacts` or `europe/contacts`).
    Batch operations stop at the first bad item; earlier writes stay on disk.
    """

    def __init__(self, store: DocumentStore, *, id_factory: Callable[[], str] = generate_object_id):
        self._store = store
        self._id_factory = id_factory

    @property
    def store(self) -> DocumentStore:
        return self._store

    def insert(self, document: Document, prefix: str | None = None) -> bool:
        """
        Insert a Document under a new identity.

        Returns False without writing anything if the document already has an
        identity, or if the write fails (the identity is then removed again so
        the insert can be retried).
        """
        if not isinstance(document, Document):
            raise InvalidInputError(f"Expected a Document, got {type(document).__name__}")
        if document.has(ID_FIELD):
            return False

        object_id = self._id_factory()
        path = normalize_prefix(prefix)
        key = validate_key(f"{path}/{object_id}" if path else object_id)
        document.identity(object_id)

        if self._store.set(key, document):
            logger.debug("Inserted document %s", key)
            return True
        document.unset(ID_FIELD)
        return False

    def insert_many(self, documents: Iterable[Document], prefix: str | None = None) -> bool:
        inserted = 0
        for i, document in enumerate(documents):
            if not isinstance(document, Document):
                raise InvalidInputError(f"Invalid Document (item {i})")
            if not self.insert(document, prefix):
                raise BatchWriteError("Error saving Document", index=i)
            inserted += 1
        return inserted > 0

    def update(self, document: Document) -> bool:
        """
        Write back a Document that already has an identity.

        A document read from the store is written to the key it came from,
        otherwise its identity is used as the key.
        """
        if not isinstance(document, Document):
            raise InvalidInputError(f"Expected a Document, got {type(document).__name__}")
        object_id = document.identity()
        if not object_id:
            return False
        return self._store.set(document.key or object_id, document)

    def update_many(self, documents: Iterable[Document]) -> bool:
        updated = 0
        for i, document in enumerate(documents):
            if not isinstance(document, Document):
                raise InvalidInputError(f"Invalid Document (item {i})")
            if not document.identity():
                raise MissingIdentityError(f"Document has no identity (item {i})")
            if not self.update(document):
                raise BatchWriteError("Error updating Document", index=i)
            updated += 1
        return updated > 0

    def get(self, key: str) -> Document:
        return self._store.get(key)

    def has(self, key: str) -> bool:
        return self._store.has(key)

    def delete(self, key: str) -> bool:
        return self._store.delete(key)

    def list(self, prefix: str = "", recursive: bool = True) -> list[str]:
        return self._store.list(prefix, recursive)

    def find(
        self,
        mode: FindMode | str,
        params: FindParams | Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Any:
        return self._store.find(mode, params, **options)

    def search(
        self,
        prefix: str = "",
        conditions: Mapping[str, Any] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Document]:
        return self._store.search(prefix, conditions, limit, offset)
