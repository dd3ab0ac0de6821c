"""Tests for testbattery.core.values."""

import asyncio
import inspect
from types import SimpleNamespace

from testbattery import UNDEFINED
from testbattery.core.values import Pending, Resolved, deep_get, resolve_slots, slot_for


class TestDeepGet:
    def test_nested_keys_and_indexes(self):
        assert deep_get({"a": [{"b": 1}]}, ["a", 0, "b"]) == 1

    def test_single_key(self):
        assert deep_get({"a": 1}, "a") == 1

    def test_attributes(self):
        assert deep_get(SimpleNamespace(user=SimpleNamespace(id=7)), ["user", "id"]) == 7

    def test_missing_returns_undefined(self):
        assert deep_get({"a": 1}, "b") is UNDEFINED
        assert deep_get([1, 2], 5) is UNDEFINED

    def test_missing_returns_default(self):
        assert deep_get({"a": None}, ["a", "b"], default=0) == 0
        assert deep_get(None, "a", default="none") == "none"

    def test_present_none_is_kept(self):
        assert deep_get({"a": None}, "a", default=0) is None


class TestSlots:
    def test_slot_for(self, later):
        assert slot_for(1) == Resolved(1)
        slot = slot_for(later(1))
        assert isinstance(slot, Pending)
        slot.awaitable.close()

    def test_resolve_keeps_insertion_order(self, later):
        async def main():
            slots = [Pending(later("slow", 0.02)), Resolved("now"), Pending(later("fast"))]
            return await resolve_slots(slots)

        assert asyncio.run(main()) == ["slow", "now", "fast"]

    def test_project_pending(self, later):
        async def main():
            slot = Pending(later({"items": [3, 4]})).project(["items", 1], UNDEFINED)
            return await slot.resolve()

        assert asyncio.run(main()) == 4

    def test_project_resolved(self):
        assert Resolved({"a": 1}).project("b", "fallback") == Resolved("fallback")

    def test_close_pending_coroutine(self, later):
        awaitable = later(1)
        Pending(awaitable).project("a", None).close()
        assert inspect.getcoroutinestate(awaitable) == inspect.CORO_CLOSED
