"""Filesystem backends a Path can be bound to."""

from .base_backend import FilesystemBackend
from .file_info import Capability, FileIdentifier, FileInfo, LstatResult
from .memory_backend import MemoryBackend
from .os_backend import OsBackend

__all__ = [
    "Capability",
    "FileIdentifier",
    "FileInfo",
    "FilesystemBackend",
    "LstatResult",
    "MemoryBackend",
    "OsBackend",
]
