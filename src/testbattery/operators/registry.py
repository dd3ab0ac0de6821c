"""The closed operator vocabulary.

``OPERATORS`` is assembled once at import and exposed read-only; there is no
registration API.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from testbattery.errors import UnknownOperatorError
from testbattery.operators import filesystem, predicates
from testbattery.operators.base import Arity, Operator

logger = logging.getLogger(__name__)


def _build_operators() -> Mapping[str, Operator]:
    every = predicates.every
    operators = [
        Operator("array", every(predicates.is_array), Arity.any()),
        Operator("boolean", every(predicates.is_boolean), Arity.any()),
        Operator("directory", filesystem.is_directory, Arity.any()),
        Operator("empty", every(predicates.is_empty), Arity.any()),
        Operator("equal", predicates.all_equal_to_first(predicates.loosely_equal), Arity.at_least(2)),
        Operator("fail", predicates.always_fails, Arity.exact(0)),
        Operator("false", every(predicates.is_false), Arity.any()),
        Operator("falsey", every(predicates.is_falsey), Arity.any()),
        Operator("file", filesystem.is_file, Arity.any()),
        Operator("in", predicates.first_in_rest(predicates.loosely_equal), Arity.at_least(2)),
        Operator("in_strict", predicates.first_in_rest(predicates.strictly_equal), Arity.at_least(2)),
        Operator("nil", every(predicates.is_nil), Arity.any()),
        Operator("null", every(predicates.is_null), Arity.any()),
        Operator(
            "strictly_equal",
            predicates.all_equal_to_first(predicates.strictly_equal),
            Arity.at_least(2),
        ),
        Operator("string", every(predicates.is_string), Arity.any()),
        Operator("true", every(predicates.is_true), Arity.any()),
        Operator("truthy", every(predicates.is_truthy), Arity.any()),
        Operator("undefined", every(predicates.is_undefined), Arity.any()),
    ]
    return MappingProxyType({operator.name: operator for operator in operators})


OPERATORS: Mapping[str, Operator] = _build_operators()


async def _legacy_probe(value: Any, kind: filesystem.PathKind) -> bool:
    """Probe one path; any stat error counts as a failed check."""
    try:
        return await filesystem.probe_paths([value], kind)
    except OSError as exc:
        logger.debug("Stat of %r failed: %r", value, exc)
        return False


# Single-value predicates used by the deprecated simple-form methods. These
# keep the looser legacy contracts (boxed booleans and strings are accepted).
LEGACY_PREDICATES: Mapping[str, Callable[[Any], Any]] = MappingProxyType(
    {
        "array": predicates.is_array,
        "boolean": predicates.is_boxed_boolean,
        "directory": lambda value: _legacy_probe(value, filesystem.PathKind.DIRECTORY),
        "empty_array": predicates.is_empty_array,
        "empty_object": predicates.is_empty_object,
        "empty_string": predicates.is_empty_string,
        "equal": lambda pair: predicates.loosely_equal(*pair),
        "false": predicates.is_false,
        "falsey": predicates.is_falsey,
        "file": lambda value: _legacy_probe(value, filesystem.PathKind.FILE),
        "nil": predicates.is_nil,
        "null": predicates.is_null,
        "strictly_equal": lambda pair: predicates.strictly_equal(*pair),
        "string": predicates.is_boxed_string,
        "true": predicates.is_true,
        "truthy": predicates.is_truthy,
        "undefined": predicates.is_undefined,
    }
)


def get_operator(name: str) -> Operator:
    """Look up an operator by name.

    Raises:
        UnknownOperatorError: If ``name`` is not a registered operator.
    """
    try:
        return OPERATORS[name]
    except KeyError:
        available = ", ".join(sorted(OPERATORS))
        msg = f"Unknown operator: {name}. Available: {available}"
        raise UnknownOperatorError(msg) from None


__all__ = ["LEGACY_PREDICATES", "OPERATORS", "get_operator"]
