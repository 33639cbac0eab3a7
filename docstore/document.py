from __future__ import annotations

import copy
import json
from typing import Any, Iterator, Mapping

from .errors import InvalidInputError
from .json_store import dumps_json

ID_FIELD = "_id"
PRETTY_INDENT = 4


class Document:
    """
    A schema-less bag of JSON-compatible values.

    Field order is preserved. `None` counts as "not set" for `has`/`get`, the
    same way an unset field does. The storage key is metadata held next to the
    bag, never inside it; only the reserved `_id` field lives in the bag.
    """

    def __init__(self, data: Mapping[str, Any] | None = None, *, key: str | None = None):
        self._data: dict[str, Any] = copy.deepcopy(dict(data or {}))
        self._key = key

    @property
    def key(self) -> str | None:
        """Key this document was read from, if it came from a store."""
        return self._key

    def get(self, field: str, default: Any = None) -> Any:
        value = self._data.get(field)
        return default if value is None else value

    def set(self, field: str | Mapping[str, Any], value: Any = None) -> None:
        data = field if isinstance(field, Mapping) else {field: value}
        for k, v in data.items():
            self._data[k] = v

    def has(self, field: str) -> bool:
        return self._data.get(field) is not None

    def unset(self, field: str) -> bool:
        if field in self._data:
            del self._data[field]
            return True
        return False

    def identity(self, value: str | None = None) -> str | None:
        """
        Get or set the document identity.

        Setting moves `_id` to the front of the bag so it is the first field
        written to disk.
        """
        if value:
            rest = {k: v for k, v in self._data.items() if k != ID_FIELD}
            self._data = {ID_FIELD: value, **rest}
        return self._data.get(ID_FIELD)

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def to_json(self, pretty: bool = False) -> str:
        return dumps_json(self._data, indent=PRETTY_INDENT if pretty else None)

    def serialize(self) -> bytes:
        return self.to_json().encode("utf-8")

    @classmethod
    def unserialize(cls, data: bytes | str) -> "Document":
        try:
            raw = json.loads(data)
        except ValueError as e:
            raise InvalidInputError(f"Cannot unserialize Document: {e}") from e
        if not isinstance(raw, dict):
            raise InvalidInputError("Serialized Document must be a JSON object")
        return cls(raw)

    def __getitem__(self, field: str) -> Any:
        return self.get(field)

    def __setitem__(self, field: str, value: Any) -> None:
        self.set(field, value)

    def __delitem__(self, field: str) -> None:
        self.unset(field)

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and self.has(field)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document(key={self._key!r}, data={self._data!r})"

    def __str__(self) -> str:
        return self.to_json(pretty=True)
