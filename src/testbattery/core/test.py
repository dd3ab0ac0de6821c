"""A single assertion built with the fluent chain.

A test collects values, an optional negation and exactly one operator::

    battery.test("ids are listed").value(2).value([1, 2, 3]).in_
    battery.test("payload is empty").value(fetch()).member("items").is_.empty

Reading a terminal operator property selects the operator and completes the
test as soon as it holds enough values. Evaluation runs in an asyncio task, so
tests must be created while an event loop is running.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

from testbattery.config import TestOptions
from testbattery.core.values import MemberPath, Pending, ValueSlot, resolve_slots, slot_for
from testbattery.errors import (
    ArityError,
    MissingValueError,
    OperatorAlreadySelectedError,
    TestCompleteError,
)
from testbattery.operators.base import Operator
from testbattery.operators.registry import get_operator
from testbattery.types import UNDEFINED

logger = logging.getLogger(__name__)

DoneCallback = Callable[[str | None], None]
ExceptionCallback = Callable[[Exception], None]


def _terminal(name: str) -> property:
    def select(self: Test) -> Test:
        return self.select(name)

    select.__name__ = name
    select.__doc__ = f"Select the ``{name}`` operator and complete the test if possible."
    return property(select)


class Test:
    """One pending assertion.

    Parameters
    ----------
    done
        Called exactly once with ``None`` when the test passes or with the
        test message when it fails.
    message
        Human-readable description, reported on failure.
    options
        Polarity and empty-value-set policy inherited from the battery.
    on_exception
        Receives exceptions raised while resolving values or evaluating the
        operator. Without it they propagate out of the evaluation task.
    """

    __test__ = False

    def __init__(
        self,
        done: DoneCallback,
        message: str,
        options: TestOptions | None = None,
        *,
        on_exception: ExceptionCallback | None = None,
    ) -> None:
        self.message = message
        self.options = options or TestOptions()
        self.negative = False
        self.operator: Operator | None = None
        self.is_complete = False
        self._done = done
        self._on_exception = on_exception
        self._values: list[ValueSlot] = []
        self._task: asyncio.Task[None] | None = None

    def __repr__(self) -> str:
        operator = self.operator.name if self.operator else None
        return (
            f"Test({self.message!r}, values={len(self._values)}, operator={operator!r}, "
            f"negative={self.negative}, complete={self.is_complete})"
        )

    @property
    def values(self) -> tuple[ValueSlot, ...]:
        return tuple(self._values)

    @property
    def is_pending(self) -> bool:
        """``True`` while the test still waits for an operator or for operands."""
        return not self.is_complete and not self.options.dummy

    # Chain members

    def value(self, value: Any) -> Test:
        """Add a value; awaitables are awaited before the operator runs."""
        self._check_not_complete()
        if self.options.dummy:
            if inspect.iscoroutine(value):
                value.close()
            return self
        self._values.append(slot_for(value))
        if self.operator is not None:
            self._try_complete()
        return self

    def v(self, value: Any) -> Test:
        return self.value(value)

    def member(self, path: MemberPath, default: Any = UNDEFINED) -> Test:
        """Replace the last value with the member found at ``path``.

        ``path`` is a key or a sequence of keys; ``default`` is used when any
        step along it is missing.
        """
        self._check_not_complete()
        if self.options.dummy:
            return self
        if not self._values:
            msg = f'Test "{self.message}" member must follow a value'
            raise MissingValueError(msg)
        self._values[-1] = self._values[-1].project(path, default)
        return self

    @property
    def not_(self) -> Test:
        self._check_not_complete()
        self.negative = not self.negative
        return self

    @property
    def is_(self) -> Test:
        self._check_not_complete()
        return self

    @property
    def are(self) -> Test:
        self._check_not_complete()
        return self

    @property
    def a(self) -> Test:
        self._check_not_complete()
        return self

    @property
    def an(self) -> Test:
        self._check_not_complete()
        return self

    # Terminal operators

    array = _terminal("array")
    boolean = _terminal("boolean")
    directory = _terminal("directory")
    empty = _terminal("empty")
    equal = _terminal("equal")
    fail = _terminal("fail")
    false = _terminal("false")
    falsey = _terminal("falsey")
    file = _terminal("file")
    in_ = _terminal("in")
    in_strict = _terminal("in_strict")
    nil = _terminal("nil")
    null = _terminal("null")
    strictly_equal = _terminal("strictly_equal")
    string = _terminal("string")
    true = _terminal("true")
    truthy = _terminal("truthy")
    undefined = _terminal("undefined")

    def select(self, name: str) -> Test:
        """Select the operator called ``name``."""
        self._check_not_complete()
        operator = get_operator(name)
        if self.options.dummy:
            self.is_complete = True
            return self
        if self.operator is not None:
            msg = (
                f'Test "{self.message}" already uses operator "{self.operator.name}", '
                f'cannot select "{name}"'
            )
            raise OperatorAlreadySelectedError(msg)
        self.operator = operator
        self._try_complete()
        return self

    # Completion

    def expire(self) -> None:
        """Fail a test that never got an operator or enough values.

        The failure is reported whatever the polarity. Awaitable values are
        closed without being awaited.
        """
        if not self.is_pending:
            return
        self.is_complete = True
        for slot in self._values:
            if isinstance(slot, Pending):
                slot.close()
        if self.operator is None:
            reason = "no operator selected"
        else:
            reason = f"expects {self.operator.arity} values, got {len(self._values)}"
        logger.debug("Test %r expired: %s", self.message, reason)
        self._done(f"{self.message} ({reason})")

    def _check_not_complete(self) -> None:
        # Refused tests accept any chain, including `.equal.value(x)` after completion.
        if self.is_complete and not self.options.dummy:
            raise TestCompleteError(self.message)

    def _try_complete(self) -> None:
        operator = self.operator
        assert operator is not None
        count = len(self._values)

        maximum = operator.arity.maximum
        if maximum is not None and count > maximum:
            msg = (
                f'Test "{self.message}" expects {operator.arity} values for '
                f'"{operator.name}", got {count}'
            )
            raise ArityError(msg)

        if not self.options.allow_empty_value_set and count < operator.strict_minimum:
            logger.debug(
                "Test %r has %d of %d values required for %r; failing",
                self.message,
                count,
                operator.strict_minimum,
                operator.name,
            )
            self._finish(False)
            return

        if count < operator.arity.minimum:
            logger.debug(
                "Test %r waiting for %d more values",
                self.message,
                operator.arity.minimum - count,
            )
            return

        self.is_complete = True
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        assert self.operator is not None
        try:
            values = await resolve_slots(self._values)
            result = self.operator.evaluate(values)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            if self._on_exception is None:
                raise
            logger.debug("Test %r raised %r", self.message, exc)
            self._on_exception(exc)
            return
        self._finish(bool(result))

    def _finish(self, result: bool) -> None:
        self.is_complete = True
        if self.negative:
            result = not result
        if result == self.options.expected_to_pass:
            self._done(None)
        else:
            self._done(self.message)
