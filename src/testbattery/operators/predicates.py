"""Predicates behind the battery operators.

Single-value predicates are plain functions; the value-set evaluators wrap
them with the quantifier each operator needs.
"""

from __future__ import annotations

import math
from collections import UserString
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from testbattery.types import UNDEFINED

Predicate = Callable[[Any], bool]

_NUMBER = (int, float)


def _is_number(value: Any) -> bool:
    return isinstance(value, _NUMBER) and not isinstance(value, bool)


def _is_nullish(value: Any) -> bool:
    return value is None or value is UNDEFINED


def unbox(value: Any) -> Any:
    """Return the scalar inside a wrapper exposing ``item()`` (numpy style)."""
    if isinstance(value, (str, bytes, bool, list, tuple, Mapping)) or _is_number(value):
        return value
    item = getattr(value, "item", None)
    if not callable(item):
        return value
    try:
        return item()
    except (TypeError, ValueError):
        return value


def _kind(value: Any) -> Any:
    if isinstance(value, bool):
        return "boolean"
    if _is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    return type(value)


def _to_number(text: str) -> float:
    text = text.strip()
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return math.nan


def loosely_equal(a: Any, b: Any) -> bool:
    """Equality with coercion between primitives.

    ``None`` and ``UNDEFINED`` equal each other and nothing else, booleans
    compare as ``0``/``1`` and numeric strings compare as numbers.
    """
    if _is_nullish(a) or _is_nullish(b):
        return _is_nullish(a) and _is_nullish(b)
    if isinstance(a, bool):
        a = int(a)
    if isinstance(b, bool):
        b = int(b)
    if _is_number(a) and isinstance(b, str):
        b = _to_number(b)
    elif isinstance(a, str) and _is_number(b):
        a = _to_number(a)
    return bool(a == b)


def strictly_equal(a: Any, b: Any) -> bool:
    """Equality without coercion: values must be of the same kind."""
    return _kind(a) == _kind(b) and bool(a == b)


# Single-value predicates


def is_array(value: Any) -> bool:
    return isinstance(value, list)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_boxed_boolean(value: Any) -> bool:
    return isinstance(value, bool) or isinstance(unbox(value), bool)


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_boxed_string(value: Any) -> bool:
    return isinstance(value, (str, UserString))


def is_empty(value: Any) -> bool:
    """Empty collection, empty string, or an object without attributes."""
    if isinstance(value, (str, list, tuple, Mapping, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (bool, int, float, complex)) or _is_nullish(value):
        return False
    attributes = getattr(value, "__dict__", None)
    if attributes is None:
        return False
    return len(attributes) == 0


def is_empty_array(value: Any) -> bool:
    return isinstance(value, list) and len(value) == 0


def is_empty_object(value: Any) -> bool:
    if isinstance(value, (str, list, tuple, UserString)):
        return False
    return is_empty(value)


def is_empty_string(value: Any) -> bool:
    return is_boxed_string(value) and len(value) == 0


def is_true(value: Any) -> bool:
    return value is True or (not isinstance(value, bool) and unbox(value) is True)


def is_false(value: Any) -> bool:
    return value is False or (not isinstance(value, bool) and unbox(value) is False)


def is_truthy(value: Any) -> bool:
    return bool(value)


def is_falsey(value: Any) -> bool:
    return not value


def is_nil(value: Any) -> bool:
    return _is_nullish(value)


def is_null(value: Any) -> bool:
    return value is None


def is_undefined(value: Any) -> bool:
    return value is UNDEFINED


# Value-set evaluators


def every(predicate: Predicate) -> Callable[[Sequence[Any]], bool]:
    """Succeed when every value satisfies ``predicate`` (vacuously on none)."""

    def evaluate(values: Sequence[Any]) -> bool:
        return all(predicate(value) for value in values)

    evaluate.__name__ = f"every_{predicate.__name__}"
    return evaluate


def all_equal_to_first(
    compare: Callable[[Any, Any], bool],
) -> Callable[[Sequence[Any]], bool]:
    """Succeed when every value compares equal to the first one."""

    def evaluate(values: Sequence[Any]) -> bool:
        if not values:
            return True
        reference = values[0]
        return all(compare(reference, value) for value in values[1:])

    return evaluate


def in_list(term: Any, items: Sequence[Any], compare: Callable[[Any, Any], bool]) -> bool:
    """Search ``term`` among ``items``, descending into nested lists."""
    if not (isinstance(term, str) or _is_number(term)):
        raise TypeError(
            f"`in` and `in_strict` can only validate strings or numbers, got {type(term).__name__}"
        )
    for item in items:
        if isinstance(item, (list, tuple)):
            if in_list(term, item, compare):
                return True
        elif compare(term, item):
            return True
    return False


def first_in_rest(
    compare: Callable[[Any, Any], bool],
) -> Callable[[Sequence[Any]], bool]:
    """Succeed when the first value is found in any of the others."""

    def evaluate(values: Sequence[Any]) -> bool:
        return in_list(values[0], values[1:], compare)

    return evaluate


def always_fails(values: Sequence[Any]) -> bool:
    return False
