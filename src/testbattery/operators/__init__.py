"""Operator registry and the predicates behind it."""

from .base import Arity, ArityKind, Operator
from .filesystem import (
    DEFAULT_MAX_CONCURRENCY,
    FILESYSTEM,
    FileSystem,
    LocalFileSystem,
    PathKind,
    PathStat,
    filesystem_scope,
    probe_paths,
)
from .registry import LEGACY_PREDICATES, OPERATORS, get_operator

__all__ = [
    "Arity",
    "ArityKind",
    "Operator",
    # Registry
    "OPERATORS",
    "LEGACY_PREDICATES",
    "get_operator",
    # Filesystem probes
    "DEFAULT_MAX_CONCURRENCY",
    "FILESYSTEM",
    "FileSystem",
    "LocalFileSystem",
    "PathKind",
    "PathStat",
    "filesystem_scope",
    "probe_paths",
]
