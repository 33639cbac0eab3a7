from __future__ import annotations


class DocumentStoreError(Exception):
    """Base class for every error raised by the document store."""


class NotFoundError(DocumentStoreError):
    """Raised when reading or deleting a key that has no backing file."""

    def __init__(self, key: str):
        super().__init__(f"Document not found: {key}")
        self.key = key


class CorruptDataError(DocumentStoreError):
    """Raised when a stored file does not decode to a JSON object."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Corrupt document {key}: {reason}")
        self.key = key


class InvalidConditionError(DocumentStoreError):
    """Raised when a condition map cannot be parsed."""


class UnsupportedOperationError(DocumentStoreError):
    """Raised for an unknown find mode."""


class InvalidInputError(DocumentStoreError):
    """Raised when a value of the wrong type reaches the store."""


class MissingIdentityError(InvalidInputError):
    """Raised by batch updates when a document carries no identity."""


class BatchWriteError(DocumentStoreError):
    """
    Raised when a document in a batch insert/update could not be written.

    Documents written before the failing one stay on disk.
    """

    def __init__(self, message: str, *, index: int):
        super().__init__(f"{message} (item {index})")
        self.index = index


class StorageNotWritableError(DocumentStoreError):
    """Raised when the store root cannot be created or written to."""
