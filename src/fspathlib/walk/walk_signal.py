"""Values exchanged between the walker and a visitor."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from fspathlib.backends.file_info import FileIdentifier
from fspathlib.types import FileKind

if TYPE_CHECKING:
    from fspathlib.path import Path


class WalkSignal(Enum):
    """Instruction a visitor returns to the walker.

    Returning None is the same as CONTINUE. Raising an exception from the
    visitor aborts the walk and the exception propagates unchanged.

    Values:
        CONTINUE: Keep walking.
        STOP: Abandon the rest of the walk. The walk still counts as successful.
        SKIP_SUBTREE: List the directory just visited and visit its files, but
            leave its subdirectories unvisited and unentered. Only the
            pre-order algorithm can honour it; the others descend before the
            visit and accept the signal without effect.
    """

    CONTINUE = "continue"
    STOP = "stop"
    SKIP_SUBTREE = "skip_subtree"


@dataclass(frozen=True)
class NodeDescriptor:
    """What the walker knows about one discovered filesystem object.

    Attributes:
        path: Location of the object.
        kind: Classification, taken from non-dereferencing metadata unless
            symlinks are followed.
        size: Size in bytes as reported by the backend.
        mtime: Modification time.
        depth: Number of components below the walk root (the root's
            children are at depth 1).
        identity: Device/inode pair, when the backend provides one.
        error: Set only when a directory could not be read and the walk is
            configured to report rather than raise.
    """

    path: "Path"
    kind: FileKind
    size: int
    mtime: datetime
    depth: int
    identity: Optional[FileIdentifier] = None
    error: Optional[OSError] = None

    @property
    def is_file(self) -> bool:
        return self.kind is FileKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is FileKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is FileKind.SYMLINK
