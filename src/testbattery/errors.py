"""Error types raised by the test battery."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from testbattery.core.result import TestErrors


class UsageError(Exception):
    """Raised when a test chain is malformed (a bug in the calling test code)."""


class TestCompleteError(UsageError):
    """Raised when a completed test is mutated."""

    __test__ = False

    def __init__(self, message: str) -> None:
        self.test_message = message
        super().__init__(f'test already complete: "{message}"')


class MissingValueError(UsageError):
    """Raised when ``member`` is called before any value was added."""


class ArityError(UsageError):
    """Raised when a test holds more values than its operator accepts."""


class OperatorAlreadySelectedError(UsageError):
    """Raised when a second operator is selected on a pending test."""


class UnknownOperatorError(UsageError, ValueError):
    """Raised when an operator name is not in the registry."""


class DeprecatedMethodError(UsageError):
    """Raised when a simple-form method is used on a battery that disallows them."""


class BatteryFailedError(AssertionError):
    """AssertionError with the battery report attached."""

    def __init__(self, battery_name: str, result: TestErrors) -> None:
        self.battery_name = battery_name
        self.result = result

        lines = [f'Battery "{battery_name}" failed']
        for error in result.errors:
            lines.append(f"  failed: {error}")
        for refused in result.tests_refused or []:
            lines.append(f"  refused: {refused}")
        if result.exception is not None:
            lines.append(f"  exception: {result.exception!r}")

        super().__init__("\n".join(lines))
