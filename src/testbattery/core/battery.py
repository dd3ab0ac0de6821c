"""Battery: collects many tests and reports every failure at once."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine, Mapping
from typing import Any

from testbattery.config import BatteryOptions, TestOptions
from testbattery.core.result import TestErrors
from testbattery.core.simple_form import SimpleFormMixin
from testbattery.core.test import Test
from testbattery.errors import BatteryFailedError
from testbattery.formatting import format_message

logger = logging.getLogger(__name__)

ResultCallback = Callable[[TestErrors | None], None]


def _ignore(_: str | None) -> None:
    return None


class Battery(SimpleFormMixin):
    """Accumulates the outcome of many tests.

    Example::

        async def check_user(user):
            battery = Battery("user record")
            battery.test("has an id").value(user).member("id").is_.truthy
            battery.test("name is %s", "alice").value(user.name).equal.value("alice")
            await battery.verify()

    Tests are evaluated in asyncio tasks, so ``test()`` must be called while an
    event loop is running. Nothing is raised for failing tests; they are
    collected and returned by :meth:`done` (or raised together by
    :meth:`verify`).
    """

    def __init__(
        self,
        name: str,
        options: BatteryOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> None:
        self._name = name
        self._options = BatteryOptions.coerce(options, **overrides)
        self._errors: list[str] = []
        self._tests_refused: list[str] = []
        self._tests_completed = 0
        self._refuse_tests = False
        self._live_tests: list[tuple[Test, asyncio.Future[None]]] = []
        self._tracked: list[asyncio.Task[None]] = []

    def __repr__(self) -> str:
        return (
            f"Battery({self._name!r}, completed={self._tests_completed}, "
            f"errors={len(self._errors)}, refused={len(self._tests_refused)}, "
            f"outstanding={sum(not f.done() for f in self._outstanding())})"
        )

    # Read-only state

    @property
    def name(self) -> str:
        return self._name

    @property
    def options(self) -> BatteryOptions:
        return self._options

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    @property
    def tests_refused(self) -> list[str]:
        return list(self._tests_refused)

    @property
    def tests_completed(self) -> int:
        return self._tests_completed

    @property
    def refuse_tests(self) -> bool:
        return self._refuse_tests

    @property
    def expected_to_pass(self) -> bool:
        return self._options.expected_to_pass

    @property
    def allow_deprecated(self) -> bool:
        return self._options.allow_deprecated

    @property
    def allow_empty_value_set(self) -> bool:
        return self._options.allow_empty_value_set

    # Tests

    def test(self, description: str, *params: Any) -> Test:
        """Start a new test; ``params`` are interpolated into ``description``."""
        message = format_message(description, *params)

        if self._refuse_tests:
            logger.debug("Battery %r refusing test %r", self._name, message)
            self._tests_refused.append(message)
            return Test(_ignore, message, TestOptions(dummy=True))

        future: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def on_done(error: str | None) -> None:
            if error is not None:
                self._errors.append(error)
            self._tests_completed += 1
            if not future.done():
                future.set_result(None)

        def on_exception(exc: Exception) -> None:
            if not future.done():
                future.set_exception(exc)

        options = TestOptions(
            expected_to_pass=self._options.expected_to_pass,
            allow_empty_value_set=self._options.allow_empty_value_set,
        )
        test = Test(on_done, message, options, on_exception=on_exception)
        self._live_tests.append((test, future))
        return test

    def _track(self, coroutine: Coroutine[Any, Any, None]) -> None:
        self._tracked.append(asyncio.get_running_loop().create_task(coroutine))

    def _outstanding(self) -> list[asyncio.Future[Any]]:
        """Futures of evaluating tests and simple-form checks.

        Tests still waiting for an operator or operands are left out; only
        :meth:`done` settles them.
        """
        futures: list[asyncio.Future[Any]] = [
            future for test, future in self._live_tests if not test.is_pending
        ]
        futures.extend(self._tracked)
        return futures

    # Waiting

    async def end_if_errors(self) -> None:
        """Wait for outstanding tests and stop accepting new ones if any failed.

        Tests created afterwards are recorded in ``tests_refused`` and never
        evaluated. Exceptions raised by outstanding tests propagate.
        """
        await asyncio.gather(*self._outstanding())
        if self._errors and not self._refuse_tests:
            logger.debug(
                "Battery %r has %d errors; refusing further tests",
                self._name,
                len(self._errors),
            )
            self._refuse_tests = True

    async def await_outstanding_tests(self) -> bool:
        """Wait for outstanding tests; return ``True`` when none has failed."""
        await asyncio.gather(*self._outstanding(), return_exceptions=True)
        return not self._errors

    async def done(self, callback: ResultCallback | None = None) -> TestErrors | None:
        """Wait for every outstanding test and build the report.

        Tests still waiting for an operator or for enough values are failed
        with the reason appended to their message. Returns ``None`` when
        nothing failed and nothing was refused. ``callback``, if given,
        receives the same value.
        """
        for test, _ in self._live_tests:
            test.expire()
        outcomes = await asyncio.gather(*self._outstanding(), return_exceptions=True)
        exception = next((o for o in outcomes if isinstance(o, BaseException)), None)

        result: TestErrors | None = None
        if self._errors or self._tests_refused or exception is not None:
            result = TestErrors(
                errors=list(self._errors),
                tests_refused=list(self._tests_refused) if self._refuse_tests else None,
                exception=exception,
            )
        if exception is not None:
            logger.warning("Battery %r captured an exception: %r", self._name, exception)

        if callback is not None:
            callback(result)
        return result

    async def verify(self) -> None:
        """Like :meth:`done`, but raise :class:`BatteryFailedError` on failure."""
        result = await self.done()
        if result is not None:
            raise BatteryFailedError(self._name, result)
