"""Shared types for the test battery."""

from enum import Enum


class _Undefined(Enum):
    """Sentinel for a value that was never supplied.

    Distinct from ``None``: ``nil`` accepts both, ``null`` only ``None`` and
    ``undefined`` only this sentinel.
    """

    UNDEFINED = "undefined"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __str__(self) -> str:
        return "undefined"


UNDEFINED = _Undefined.UNDEFINED
Undefined = _Undefined

__all__ = ["UNDEFINED", "Undefined"]
