"""Battery and test configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ENV_PREFIX = "TEST_BATTERY_"


class BatteryOptions(BaseModel):
    """Options shared by every test created on a battery.

    Attributes:
    ----------
    allow_deprecated: bool
        Allow the simple-form ``is_*`` methods. Set to ``False`` to make them
        raise, e.g. when checking that a suite has been migrated.
    allow_empty_value_set: bool
        When ``False``, a test with fewer values than its operator needs
        fails instead of passing vacuously.
    expected_to_pass: bool
        When ``False`` every test is expected to fail. Used to test the
        battery itself.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    allow_deprecated: bool = True
    allow_empty_value_set: bool = True
    expected_to_pass: bool = True

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = ENV_PREFIX,
    ) -> BatteryOptions:
        """Build options from ``TEST_BATTERY_*`` environment variables.

        Unset variables keep their defaults. Values are parsed by pydantic, so
        ``1``/``0``, ``true``/``false`` and ``yes``/``no`` are all accepted.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{prefix}{name.upper()}")
            if raw is not None:
                values[name] = raw.strip()
        return cls.model_validate(values)

    @classmethod
    def coerce(
        cls,
        options: BatteryOptions | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> BatteryOptions:
        """Normalize the forms accepted by ``Battery(...)`` into one model."""
        if options is None:
            base: dict[str, Any] = {}
        elif isinstance(options, BatteryOptions):
            base = options.model_dump()
        else:
            base = dict(cls.model_validate(dict(options)).model_dump())
        base.update(overrides)
        return cls.model_validate(base)


@dataclass(frozen=True, slots=True)
class TestOptions:
    """Per-test options derived from the owning battery."""

    __test__ = False

    expected_to_pass: bool = True
    allow_empty_value_set: bool = True
    dummy: bool = False
