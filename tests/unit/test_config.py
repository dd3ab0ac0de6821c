"""Tests for testbattery.config."""

import pytest
from pydantic import ValidationError

from testbattery import BatteryOptions, TestOptions


class TestBatteryOptions:
    def test_defaults(self):
        options = BatteryOptions()
        assert options.allow_deprecated is True
        assert options.allow_empty_value_set is True
        assert options.expected_to_pass is True

    def test_camel_case_keys(self):
        options = BatteryOptions.coerce({"allowDeprecated": False, "expectedToPass": False})
        assert options.allow_deprecated is False
        assert options.expected_to_pass is False
        assert options.allow_empty_value_set is True

    def test_snake_case_keys(self):
        options = BatteryOptions.coerce({"allow_empty_value_set": False})
        assert options.allow_empty_value_set is False

    def test_overrides_win(self):
        base = BatteryOptions(allow_deprecated=False)
        options = BatteryOptions.coerce(base, expected_to_pass=False)
        assert options.allow_deprecated is False
        assert options.expected_to_pass is False

    def test_unknown_option_rejected(self):
        with pytest.raises(ValidationError):
            BatteryOptions.coerce({"allowEverything": True})

    def test_frozen(self):
        options = BatteryOptions()
        with pytest.raises(ValidationError):
            options.allow_deprecated = False

    def test_from_env(self):
        options = BatteryOptions.from_env(
            {
                "TEST_BATTERY_ALLOW_DEPRECATED": "0",
                "TEST_BATTERY_EXPECTED_TO_PASS": " false ",
                "UNRELATED": "1",
            }
        )
        assert options.allow_deprecated is False
        assert options.expected_to_pass is False
        assert options.allow_empty_value_set is True

    def test_from_env_rejects_garbage(self):
        with pytest.raises(ValidationError):
            BatteryOptions.from_env({"TEST_BATTERY_ALLOW_DEPRECATED": "maybe"})

    def test_from_env_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TEST_BATTERY_ALLOW_EMPTY_VALUE_SET", "no")
        assert BatteryOptions.from_env().allow_empty_value_set is False


def test_test_options_defaults():
    options = TestOptions()
    assert options.expected_to_pass is True
    assert options.allow_empty_value_set is True
    assert options.dummy is False
