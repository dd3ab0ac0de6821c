"""Deprecated simple-form checks: ``battery.is_true(result, "should ...")``.

Each method evaluates one legacy predicate against one result and records
the outcome on the battery directly, without building a :class:`Test`. They
are kept for suites written before the fluent chain existed and can be
switched off with ``allow_deprecated=False``.
"""

from __future__ import annotations

import inspect
import logging
import warnings
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from testbattery.config import BatteryOptions
from testbattery.core.values import resolve_slots, slot_for
from testbattery.errors import DeprecatedMethodError
from testbattery.formatting import format_message
from testbattery.operators.predicates import always_fails
from testbattery.operators.registry import LEGACY_PREDICATES

logger = logging.getLogger(__name__)


class SimpleFormMixin:
    """Simple-form methods mixed into :class:`~testbattery.core.battery.Battery`."""

    _options: BatteryOptions
    _errors: list[str]
    _tests_refused: list[str]
    _tests_completed: int
    _refuse_tests: bool

    def _track(self, coroutine: Coroutine[Any, Any, None]) -> None:
        raise NotImplementedError

    def _allow_deprecated_methods(self, method: str) -> None:
        if not self._options.allow_deprecated:
            msg = f"Deprecated Battery methods are disabled (called {method})"
            raise DeprecatedMethodError(msg)
        warnings.warn(
            f"Battery.{method} is deprecated; use Battery.test(...) instead",
            DeprecationWarning,
            stacklevel=4,
        )

    def _record(self, outcome: Any, message: str) -> None:
        if (not outcome) == self._options.expected_to_pass:
            self._errors.append(message)
        self._tests_completed += 1

    async def _check_pending(
        self,
        predicate: Callable[[Any], Any],
        result: Awaitable[Any],
        message: str,
    ) -> None:
        outcome = predicate(await result)
        if inspect.isawaitable(outcome):
            outcome = await outcome
        self._record(outcome, message)

    async def _record_pending(self, outcome: Awaitable[Any], message: str) -> None:
        self._record(await outcome, message)

    def do_test(
        self,
        predicate: Callable[[Any], Any],
        result: Any,
        should: str,
        *params: Any,
    ) -> None:
        """Evaluate ``predicate`` on ``result`` and record the outcome.

        ``result`` may be awaitable, and ``predicate`` may return an
        awaitable; either way the check is tracked as outstanding work.
        """
        message = format_message(should, *params)
        if self._refuse_tests:
            logger.debug("Refusing simple-form test %r", message)
            self._tests_refused.append(message)
            if inspect.iscoroutine(result):
                result.close()
            return

        if inspect.isawaitable(result):
            self._track(self._check_pending(predicate, result, message))
            return

        outcome = predicate(result)
        if inspect.isawaitable(outcome):
            self._track(self._record_pending(outcome, message))
            return
        self._record(outcome, message)

    def _legacy(self, method: str, name: str, result: Any, should: str, params: tuple[Any, ...]) -> None:
        self._allow_deprecated_methods(method)
        self.do_test(LEGACY_PREDICATES[name], result, should, *params)

    def _legacy_pair(
        self, method: str, name: str, a: Any, b: Any, should: str, params: tuple[Any, ...]
    ) -> None:
        self._allow_deprecated_methods(method)
        if self._refuse_tests:
            for value in (a, b):
                if inspect.iscoroutine(value):
                    value.close()
            self.do_test(LEGACY_PREDICATES[name], None, should, *params)
            return
        slots = [slot_for(a), slot_for(b)]
        pair: Any = [a, b]
        if any(inspect.isawaitable(value) for value in (a, b)):
            pair = resolve_slots(slots)
        self.do_test(LEGACY_PREDICATES[name], pair, should, *params)

    def fail(self, should: str, *params: Any) -> None:
        """Record a check that always fails. Not gated by ``allow_deprecated``."""
        self.do_test(lambda _: always_fails(()), None, should, *params)

    def is_array(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_array", "array", result, should, params)

    def is_boolean(self, result: Any, should: str, *params: Any) -> None:
        """Accepts ``bool`` and boxed scalars whose ``item()`` is a ``bool``."""
        self._legacy("is_boolean", "boolean", result, should, params)

    def is_directory(self, result: Any, should: str, *params: Any) -> None:
        """``result`` is a path, or a list of path segments to join."""
        self._legacy("is_directory", "directory", result, should, params)

    def is_empty_array(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_empty_array", "empty_array", result, should, params)

    def is_empty_object(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_empty_object", "empty_object", result, should, params)

    def is_empty_string(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_empty_string", "empty_string", result, should, params)

    def is_equal(self, a: Any, b: Any, should: str, *params: Any) -> None:
        """Loose equality between ``a`` and ``b``."""
        self._legacy_pair("is_equal", "equal", a, b, should, params)

    def is_false(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_false", "false", result, should, params)

    def is_falsey(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_falsey", "falsey", result, should, params)

    def is_file(self, result: Any, should: str, *params: Any) -> None:
        """``result`` is a path, or a list of path segments to join."""
        self._legacy("is_file", "file", result, should, params)

    def is_nil(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_nil", "nil", result, should, params)

    def is_null(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_null", "null", result, should, params)

    def is_strictly_equal(self, a: Any, b: Any, should: str, *params: Any) -> None:
        self._legacy_pair("is_strictly_equal", "strictly_equal", a, b, should, params)

    def is_string(self, result: Any, should: str, *params: Any) -> None:
        """Accepts ``str`` and ``UserString``."""
        self._legacy("is_string", "string", result, should, params)

    def is_true(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_true", "true", result, should, params)

    def is_truthy(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_truthy", "truthy", result, should, params)

    def is_undefined(self, result: Any, should: str, *params: Any) -> None:
        self._legacy("is_undefined", "undefined", result, should, params)
