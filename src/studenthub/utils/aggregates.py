"""Reducers over already-fetched rows for dashboard statistics.

Rows can be ORM objects, pydantic models or plain mappings. None of the
helpers mutate their input, and all of them accept empty sequences.
"""

from __future__ import annotations

import enum
from collections import Counter
from typing import Any, Callable, Iterable, Mapping


def field_value(row: Any, name: str) -> Any:
    """Read ``name`` from a mapping or an attribute-style row."""

    if isinstance(row, Mapping):
        return row.get(name)
    return getattr(row, name, None)


def display_label(value: Any) -> str:
    """Capitalised display form of a category-like value."""

    if isinstance(value, enum.Enum):
        value = value.value
    text = str(value or "")
    return text[:1].upper() + text[1:]


def count(rows: Iterable[Any]) -> int:
    return sum(1 for _ in rows)


def count_where(rows: Iterable[Any], predicate: Callable[[Any], bool]) -> int:
    """Number of rows for which ``predicate`` holds."""

    return sum(1 for row in rows if predicate(row))


def field_equals(name: str, expected: Any) -> Callable[[Any], bool]:
    """Predicate comparing a row field with ``expected`` (enum members match their value)."""

    if isinstance(expected, enum.Enum):
        expected = expected.value

    def _predicate(row: Any) -> bool:
        value = field_value(row, name)
        if isinstance(value, enum.Enum):
            value = value.value
        return value == expected

    return _predicate


def sum_of(rows: Iterable[Any], name: str) -> int:
    """Sum a numeric field, treating missing values as zero."""

    return sum(int(field_value(row, name) or 0) for row in rows)


def category_histogram(rows: Iterable[Any], name: str = "category") -> dict[str, int]:
    """Map each capitalised label to the number of rows carrying it, sorted by label."""

    counter = Counter(display_label(field_value(row, name)) for row in rows)
    return {label: counter[label] for label in sorted(counter)}
