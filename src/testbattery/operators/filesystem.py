"""Filesystem probes for the ``file`` and ``directory`` operators.

The stat call goes through a :class:`FileSystem` looked up from a context
variable, so tests can swap in a fake with :func:`filesystem_scope`.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat as stat_module
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


@dataclass(frozen=True, slots=True)
class PathStat:
    """The parts of a stat result the probes care about."""

    is_file: bool
    is_directory: bool


class PathKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"

    def matches(self, stat: PathStat) -> bool:
        return stat.is_file if self is PathKind.FILE else stat.is_directory


class FileSystem(Protocol):
    """Stat capability used by the probes."""

    async def stat(self, path: str) -> PathStat | None:
        """Return the stat of ``path``, or ``None`` when it does not exist.

        Any other failure must be raised.
        """
        ...


class LocalFileSystem:
    """Stats the local filesystem in a worker thread."""

    async def stat(self, path: str) -> PathStat | None:
        try:
            result = await asyncio.to_thread(os.stat, path)
        except (FileNotFoundError, NotADirectoryError):
            return None
        return PathStat(
            is_file=stat_module.S_ISREG(result.st_mode),
            is_directory=stat_module.S_ISDIR(result.st_mode),
        )


FILESYSTEM: ContextVar[FileSystem] = ContextVar("filesystem", default=LocalFileSystem())


@contextmanager
def filesystem_scope(filesystem: FileSystem) -> Iterator[FileSystem]:
    token = FILESYSTEM.set(filesystem)
    try:
        yield filesystem
    finally:
        FILESYSTEM.reset(token)


def to_path(value: Any) -> str | None:
    """Turn a value into a path string; lists and tuples are joined as segments."""
    if isinstance(value, (list, tuple)):
        if not value or not all(isinstance(part, (str, os.PathLike)) for part in value):
            return None
        return os.fspath(os.path.join(*value))
    if isinstance(value, (str, os.PathLike)):
        path = os.fspath(value)
        return path if isinstance(path, str) else None
    return None


async def probe_paths(
    values: Sequence[Any],
    kind: PathKind,
    *,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> bool:
    """Check that every value names an existing path of ``kind``.

    Stats are dispatched by a pool of at most ``max_concurrency`` workers so
    a large value set never has more than that many stats in flight.
    """
    filesystem = FILESYSTEM.get()
    queue: asyncio.Queue[Any] = asyncio.Queue()
    for value in values:
        queue.put_nowait(value)

    results: list[bool] = []

    async def worker() -> None:
        while True:
            try:
                value = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            path = to_path(value)
            if path is None:
                logger.debug("Not a path: %r", value)
                results.append(False)
                continue
            stat = await filesystem.stat(path)
            results.append(stat is not None and kind.matches(stat))

    workers = [
        asyncio.create_task(worker())
        for _ in range(min(max_concurrency, len(values)))
    ]
    try:
        await asyncio.gather(*workers)
    except BaseException:
        for task in workers:
            task.cancel()
        raise

    return all(results)


async def is_file(values: Sequence[Any]) -> bool:
    return await probe_paths(values, PathKind.FILE)


async def is_directory(values: Sequence[Any]) -> bool:
    return await probe_paths(values, PathKind.DIRECTORY)
