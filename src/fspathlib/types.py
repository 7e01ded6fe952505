from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

DEFAULT_FILE_MODE = 0o644
DEFAULT_DIR_MODE = 0o755

# Linux MAXSYMLINKS
MAX_SYMLINK_HOPS = 40


class FileKind(Enum):
    """Enumeration of filesystem object kinds reported by a backend.

    Attributes:
        FILE: Regular file
        DIRECTORY: Directory
        SYMLINK: Symbolic link (only reported by non-dereferencing metadata)
        OTHER: Anything else an OS can hold, such as fifos, sockets and devices
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"
