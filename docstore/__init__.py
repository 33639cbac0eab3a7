from __future__ import annotations

from .cache import DocumentCache
from .conditions import Condition, ConditionSet
from .database import DocumentDatabase
from .document import ID_FIELD, Document
from .errors import (
    BatchWriteError,
    CorruptDataError,
    DocumentStoreError,
    InvalidConditionError,
    InvalidInputError,
    MissingIdentityError,
    NotFoundError,
    StorageNotWritableError,
    UnsupportedOperationError,
)
from .object_id import generate_object_id
from .settings import Settings, get_settings, load_settings
from .store import DocumentStore, FindMode, FindParams

__all__ = [
    "Document",
    "ID_FIELD",
    "Condition",
    "ConditionSet",
    "DocumentStore",
    "FindMode",
    "FindParams",
    "DocumentDatabase",
    "DocumentCache",
    "generate_object_id",
    "Settings",
    "get_settings",
    "load_settings",
    "DocumentStoreError",
    "NotFoundError",
    "CorruptDataError",
    "InvalidConditionError",
    "UnsupportedOperationError",
    "InvalidInputError",
    "MissingIdentityError",
    "BatchWriteError",
    "StorageNotWritableError",
]
