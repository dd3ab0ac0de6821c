"""Shared fixtures for unit tests."""

import asyncio
import inspect

import pytest

from testbattery import Battery

class FakeFileSystem:
    """In-memory filesystem that records how many stats run at once."""

    def __init__(self, entries=None, errors=None):
        self.entries = dict(entries or {})
        self.errors = dict(errors or {})
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def stat(self, path):
        self.calls.append(path)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if path in self.errors:
                raise self.errors[path]
            return self.entries.get(path)
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Provide an empty fake filesystem."""
    return FakeFileSystem()

@pytest.fixture
def later():
    """Wrap a value in a coroutine that yields to the loop before returning it."""

    async def resolve(value, delay=0):
        await asyncio.sleep(delay)
        return value

    return resolve

@pytest.fixture
def failing():
    """Build a coroutine that raises ``exc`` once awaited."""

    async def raise_(exc):
        await asyncio.sleep(0)
        raise exc

    return raise_

@pytest.fixture
def run_battery():
    """Run ``body(battery)`` inside an event loop and return the battery and its report."""

    def run(body, name="battery", **options):
        async def main():
            battery = Battery(name, **options)
            outcome = body(battery)
            if inspect.isawaitable(outcome):
                await outcome
            return battery, await battery.done()

        return asyncio.run(main())

    return run

@pytest.fixture
def sample_tree(tmp_path):
    """Create a directory holding one file and one subdirectory."""
    (tmp_path / "notes.txt").write_text("hello")
    (tmp_path / "sub").mkdir()
    return tmp_path
