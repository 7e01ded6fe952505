"""Object-style paths over pluggable filesystem backends.

This package provides a Path value type bound to a filesystem backend, a
configurable directory walker, and symlink canonicalization that works
through any backend exposing the right capabilities.
"""

from importlib.metadata import PackageNotFoundError, version

from fspathlib.backends import FilesystemBackend, MemoryBackend, OsBackend
from fspathlib.glob import glob
from fspathlib.path import Path
from fspathlib.types import FileKind
from fspathlib.walk import Algorithm, ErrorAction, NodeDescriptor, Walk, WalkConfiguration, WalkSignal

try:
    __version__ = version("fspathlib")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "Algorithm",
    "ErrorAction",
    "FileKind",
    "FilesystemBackend",
    "MemoryBackend",
    "NodeDescriptor",
    "OsBackend",
    "Path",
    "Walk",
    "WalkConfiguration",
    "WalkSignal",
    "glob",
]
