"""Battery report model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class TestErrors(BaseModel):
    """What went wrong in a battery.

    Attributes:
    ----------
    errors: list[str]
        Messages of the tests that failed, in completion order.
    tests_refused: list[str] | None
        Messages of the tests that were never evaluated because the battery
        was refusing tests. Only present once the battery started refusing.
    exception: Any | None
        First exception raised while resolving or evaluating a test.
    """

    __test__ = False

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    errors: list[str] = Field(default_factory=list)
    tests_refused: list[str] | None = Field(default=None, alias="testsRefused")
    exception: Any = None

    def __bool__(self) -> bool:
        return bool(self.errors or self.tests_refused or self.exception is not None)

    def to_dict(self, *, by_alias: bool = False) -> dict[str, Any]:
        """Dump the report, leaving out fields that are absent."""
        return self.model_dump(exclude_none=True, by_alias=by_alias)


def is_test_errors(value: Any) -> bool:
    """Return ``True`` if ``value`` has the shape of a battery report.

    Accepts a :class:`TestErrors` or a mapping with ``errors`` and
    ``tests_refused`` (or ``testsRefused``) as lists of strings, an optional
    ``exception``, and no other keys.
    """
    if isinstance(value, TestErrors):
        return True
    if not isinstance(value, Mapping):
        return False
    try:
        TestErrors.model_validate(dict(value))
    except ValidationError:
        return False
    return True
