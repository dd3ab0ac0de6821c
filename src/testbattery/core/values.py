"""Value slots held by a test.

A slot is either :class:`Resolved` (an immediate value) or :class:`Pending`
(an awaitable). Slots are resolved together right before the operator runs.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeAlias

from testbattery.types import UNDEFINED

Key: TypeAlias = "str | int"
MemberPath: TypeAlias = "Key | Sequence[Key]"


def _normalize_path(path: MemberPath) -> tuple[Key, ...]:
    if isinstance(path, (str, int)):
        return (path,)
    return tuple(path)


def _lookup(container: Any, key: Key) -> Any:
    if isinstance(container, Mapping):
        return container.get(key, UNDEFINED)
    if isinstance(key, int) and not isinstance(key, bool):
        if isinstance(container, Sequence) and 0 <= key < len(container):
            return container[key]
        return UNDEFINED
    if isinstance(key, str):
        return getattr(container, key, UNDEFINED)
    return UNDEFINED


def deep_get(value: Any, path: MemberPath, default: Any = UNDEFINED) -> Any:
    """Follow ``path`` into ``value``, returning ``default`` when a step is missing.

    Each key is looked up as a mapping key, a sequence index or an attribute,
    in that order of preference.
    """
    result = value
    for key in _normalize_path(path):
        if result is None or result is UNDEFINED:
            return default
        result = _lookup(result, key)
    return default if result is UNDEFINED else result


@dataclass(frozen=True, slots=True)
class Resolved:
    value: Any

    async def resolve(self) -> Any:
        return self.value

    def project(self, path: MemberPath, default: Any) -> Resolved:
        return Resolved(deep_get(self.value, path, default))


@dataclass(frozen=True, slots=True)
class Pending:
    awaitable: Awaitable[Any]
    projections: tuple[tuple[MemberPath, Any], ...] = ()

    async def resolve(self) -> Any:
        value = await self.awaitable
        for path, default in self.projections:
            value = deep_get(value, path, default)
        return value

    def project(self, path: MemberPath, default: Any) -> Pending:
        return Pending(self.awaitable, (*self.projections, (path, default)))

    def close(self) -> None:
        """Close the awaitable if it is a coroutine that will never be awaited."""
        if inspect.iscoroutine(self.awaitable):
            self.awaitable.close()


ValueSlot: TypeAlias = "Resolved | Pending"


def slot_for(value: Any) -> ValueSlot:
    if inspect.isawaitable(value):
        return Pending(value)
    return Resolved(value)


async def resolve_slots(slots: Sequence[ValueSlot]) -> list[Any]:
    """Resolve every slot concurrently, keeping insertion order."""
    if all(isinstance(slot, Resolved) for slot in slots):
        return [slot.value for slot in slots]
    return list(await asyncio.gather(*(slot.resolve() for slot in slots)))
