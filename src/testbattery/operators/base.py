"""Operator and arity definitions."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

Evaluator = Callable[[Sequence[Any]], "bool | Awaitable[bool]"]


class ArityKind(Enum):
    """How many values an operator takes."""

    EXACT = "exact"
    AT_LEAST = "at_least"
    ANY = "any"


@dataclass(frozen=True, slots=True)
class Arity:
    """Value-count contract of an operator."""

    kind: ArityKind
    count: int = 0

    @classmethod
    def exact(cls, count: int) -> Arity:
        return cls(ArityKind.EXACT, count)

    @classmethod
    def at_least(cls, count: int) -> Arity:
        return cls(ArityKind.AT_LEAST, count)

    @classmethod
    def any(cls) -> Arity:
        return cls(ArityKind.ANY, 0)

    @property
    def minimum(self) -> int:
        return self.count

    @property
    def maximum(self) -> int | None:
        """Largest accepted value count, or ``None`` when unbounded."""
        return self.count if self.kind is ArityKind.EXACT else None

    def __str__(self) -> str:
        match self.kind:
            case ArityKind.EXACT:
                return f"exactly {self.count}"
            case ArityKind.AT_LEAST:
                return f"at least {self.count}"
            case _:
                return "any number of"


@dataclass(frozen=True, slots=True)
class Operator:
    """A named predicate over the resolved values of a test.

    Attributes
    ----------
    name
        Registry key, e.g. ``"array"`` or ``"in_strict"``.
    evaluate
        Receives every resolved value in insertion order and returns a bool,
        or an awaitable resolving to one.
    arity
        How many values the operator accepts.
    """

    name: str
    evaluate: Evaluator
    arity: Arity

    @property
    def strict_minimum(self) -> int:
        """Value count required when empty value sets are not allowed."""
        if self.arity.kind is ArityKind.EXACT:
            return self.arity.count
        return max(1, self.arity.count)
