"""test-battery - fluent assertions collected into a single report."""

from .config import BatteryOptions, TestOptions
from .core import Battery, Test, TestErrors, is_test_errors
from .errors import (
    ArityError,
    BatteryFailedError,
    DeprecatedMethodError,
    MissingValueError,
    OperatorAlreadySelectedError,
    TestCompleteError,
    UnknownOperatorError,
    UsageError,
)
from .operators import OPERATORS, FileSystem, PathStat, filesystem_scope
from .types import UNDEFINED
from .version import __version__


__all__ = [
    # Core
    "Battery",
    "Test",
    "TestErrors",
    "is_test_errors",
    "UNDEFINED",
    # Options
    "BatteryOptions",
    "TestOptions",
    # Errors
    "UsageError",
    "ArityError",
    "DeprecatedMethodError",
    "MissingValueError",
    "OperatorAlreadySelectedError",
    "TestCompleteError",
    "UnknownOperatorError",
    "BatteryFailedError",
    # Operators
    "OPERATORS",
    "FileSystem",
    "PathStat",
    "filesystem_scope",
    "__version__",
]
