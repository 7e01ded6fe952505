"""Metadata records exchanged between backends and the rest of the package."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from fspathlib.types import FileKind


class Capability(str, Enum):
    """Optional operations a backend may or may not provide.

    Values:
        LSTAT: Non-dereferencing stat
        READLINK: Reading the target of a symlink
        SYMLINK: Creating symlinks
    """

    LSTAT = "lstat"
    READLINK = "readlink"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class FileIdentifier:
    """Class for uniquely identifying files and directories by their device and inode.

    The walker uses it to notice that a directory reached through a followed
    symlink is already being walked further up the current branch.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.

    Note:
        On Windows, inode numbers might be handled differently than on Unix systems,
        but Python's os.stat implementation provides values that can be used
        for uniquely identifying files.
    """

    device_id: int
    inode_number: int


@dataclass(frozen=True)
class FileInfo:
    """Metadata about one filesystem object, as reported by a backend.

    Attributes:
        name: Base name of the object.
        kind: What the object is. Only non-dereferencing stat reports SYMLINK.
        size: Size in bytes. Meaningful for files; backend-defined otherwise.
        mtime: Modification time, timezone-aware (UTC).
        mode: Permission bits.
        identity: Device/inode pair, if the backend can provide one.
    """

    name: str
    kind: FileKind
    size: int
    mtime: datetime
    mode: int = 0
    identity: Optional[FileIdentifier] = None

    @property
    def is_file(self) -> bool:
        return self.kind is FileKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is FileKind.SYMLINK


@dataclass(frozen=True)
class LstatResult:
    """Outcome of a non-dereferencing stat request.

    ``supported=False`` means the backend cannot tell symlinks apart at all,
    which is different from "this path is not a symlink". Failures are raised
    as ``OSError`` rather than reported here.
    """

    info: Optional[FileInfo]
    supported: bool
