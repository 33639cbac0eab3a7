"""
Condition maps: the store's query language.

A condition map is a mapping from ``"field"`` or ``"field OPERATOR"`` to an
operand, for example::

    {"name": "Tony", "age >=": 30, "addresses.street LIKE": "%road"}

Every condition must hold for a document to match. Dotted fields walk into
nested objects; when a path reaches a list of objects, the rest of the path is
resolved against every element and the results are collected into a list.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping

from .document import Document
from .errors import InvalidConditionError

DEFAULT_OPERATOR = "="
LIKE_OPERATORS = frozenset({"LIKE", "NOT LIKE"})
OPERATORS = frozenset({"=", "!=", ">", "<", ">=", "<=", "IN", "NOT IN", "LIKE", "NOT LIKE"})

_NUMERIC_RE = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*")


@dataclass(frozen=True)
class Condition:
    field: str
    operator: str
    value: Any


def like_to_regex(like: str) -> re.Pattern[str]:
    """
    Convert a SQL LIKE pattern to an anchored regex.

    `%` matches any run of characters (including none), `_` exactly one.
    Everything else is literal.
    """
    out = []
    for ch in like:
        if ch == "%":
            out.append(".*")
        elif ch == "_":
            out.append(".")
        else:
            out.append(re.escape(ch))
    return re.compile("".join(out), re.DOTALL)


def resolve_field(data: Mapping[str, Any], field: str) -> Any:
    """Resolve a dotted field path; returns None when nothing is there."""
    return _resolve(data, field.split("."))


def _resolve(current: Any, parts: list[str]) -> Any:
    for i, part in enumerate(parts):
        if isinstance(current, list) and current:
            rest = parts[i:]
            values = [v for v in (_resolve(item, rest) for item in current) if v is not None]
            return values or None
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current


def _is_seq(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _equals(a: Any, b: Any) -> bool:
    # True == 1 in Python; stored booleans must not match numbers.
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    return a == b


def _contains(seq: Any, item: Any) -> bool:
    return any(_equals(x, item) for x in seq)


def _as_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and _NUMERIC_RE.fullmatch(value):
        s = value.strip()
        if any(c in s for c in ".eE"):
            return float(s)
        return int(s)
    return None


def _as_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _eq(value: Any, operand: Any) -> bool:
    if isinstance(value, list):
        if _is_seq(operand):
            return any(_contains(operand, v) for v in value)
        return _contains(value, operand)
    if _is_seq(operand):
        return _contains(operand, value)
    return _equals(value, operand)


def _ne(value: Any, operand: Any) -> bool:
    if isinstance(value, list):
        if _is_seq(operand):
            for v in value:
                if _contains(operand, v):
                    return False
            return True
        return not _contains(value, operand)
    if _is_seq(operand):
        return not _contains(operand, value)
    return not _equals(value, operand)


def _ordering(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def handler(value: Any, operand: Any) -> bool:
        left = _as_number(value)
        right = _as_number(operand)
        if left is None or right is None:
            return False
        return compare(left, right)

    return handler


def _like(value: Any, pattern: re.Pattern[str]) -> bool:
    items = value if isinstance(value, list) else ([] if value is None else [value])
    for item in items:
        text = _as_text(item)
        if text is not None and pattern.fullmatch(text):
            return True
    return False


def _not_like(value: Any, pattern: re.Pattern[str]) -> bool:
    return not _like(value, pattern)


_HANDLERS: dict[str, Callable[[Any, Any], bool]] = {
    "=": _eq,
    "IN": _eq,
    "!=": _ne,
    "NOT IN": _ne,
    ">": _ordering(lambda a, b: a > b),
    ">=": _ordering(lambda a, b: a >= b),
    "<": _ordering(lambda a, b: a < b),
    "<=": _ordering(lambda a, b: a <= b),
    "LIKE": _like,
    "NOT LIKE": _not_like,
}


def parse_conditions(conditions: Mapping[str, Any]) -> tuple[Condition, ...]:
    out = []
    for key, value in conditions.items():
        if not isinstance(key, str):
            raise InvalidConditionError(f"Condition key must be a string, got {type(key).__name__}")

        # ['id !=' => 1]: the operator is everything after the first space.
        field, _, operator = key.partition(" ")
        operator = operator or DEFAULT_OPERATOR
        if not field:
            raise InvalidConditionError(f"Missing field in condition {key!r}")
        if operator not in OPERATORS:
            raise InvalidConditionError(f"Invalid operator {operator}")

        if operator in LIKE_OPERATORS:
            if not isinstance(value, str):
                raise InvalidConditionError(f"Non-string value for {operator} on {field}")
            value = like_to_regex(value)
        elif isinstance(value, (list, tuple)):
            value = tuple(value)

        out.append(Condition(field=field, operator=operator, value=value))
    return tuple(out)


class ConditionSet:
    """Parsed, immutable conjunction of conditions."""

    def __init__(self, conditions: Mapping[str, Any] | None = None):
        self._conditions = parse_conditions(conditions or {})

    @property
    def conditions(self) -> tuple[Condition, ...]:
        return self._conditions

    def matches(self, document: Document | Mapping[str, Any]) -> bool:
        data = document.to_dict() if isinstance(document, Document) else document
        for condition in self._conditions:
            if not self.evaluate(condition, data):
                return False
        return True

    @staticmethod
    def evaluate(condition: Condition, data: Mapping[str, Any]) -> bool:
        value = resolve_field(data, condition.field)
        return _HANDLERS[condition.operator](value, condition.value)

    def __iter__(self) -> Iterator[Condition]:
        return iter(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)

    def __repr__(self) -> str:
        return f"ConditionSet({list(self._conditions)!r})"
