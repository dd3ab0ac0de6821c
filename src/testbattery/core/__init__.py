"""Tests, batteries and the report they produce."""

from .battery import Battery
from .result import TestErrors, is_test_errors
from .test import Test

__all__ = ["Battery", "Test", "TestErrors", "is_test_errors"]
