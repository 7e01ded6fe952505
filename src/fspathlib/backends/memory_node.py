"""Node representation for objects held by the in-memory backend."""

import itertools
from datetime import datetime, timezone
from typing import Any, Optional

from anytree import Node

from fspathlib.types import DEFAULT_FILE_MODE, FileKind

_inode_numbers = itertools.count(1)


class MemoryNode(Node):  # type: ignore
    """Node class representing a file, directory or symlink held in memory.

    Extends anytree.Node with the content and metadata the in-memory backend
    needs. Tree structure (parent, children, names) is managed by anytree.

    Attributes:
        name (str): The base name of the object.
        parent (Optional[MemoryNode]): The containing directory node.
        kind (FileKind): FILE, DIRECTORY or SYMLINK.
        data (bytearray): File content. Empty for directories and symlinks.
        link_target (Optional[str]): Stored target of a symlink.
        mode (int): Permission bits.
        mtime (datetime): Modification time.
        atime (datetime): Access time.
        inode (int): Process-unique number identifying the node.

    Example:
        >>> root = MemoryNode("/", kind=FileKind.DIRECTORY)
        >>> child = MemoryNode("notes.txt", parent=root, data=bytearray(b"hi"))
        >>> child.byte_size
        2
        >>> root.child("notes.txt") is child
        True
    """

    def __init__(
        self,
        name: str,
        parent: Optional["MemoryNode"] = None,
        kind: FileKind = FileKind.FILE,
        data: Optional[bytearray] = None,
        link_target: Optional[str] = None,
        mode: int = DEFAULT_FILE_MODE,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        now = datetime.now(timezone.utc)
        self.kind = kind
        self.data = data if data is not None else bytearray()
        self.link_target = link_target
        self.mode = mode
        self.mtime = now
        self.atime = now
        self.inode = next(_inode_numbers)

    @property
    def byte_size(self) -> int:
        if self.kind is FileKind.SYMLINK:
            return len(self.link_target or "")
        return len(self.data)

    def child(self, name: str) -> Optional["MemoryNode"]:
        """Return the immediate child with the given name, if any."""
        return next((node for node in self.children if node.name == name), None)

    def touch(self) -> None:
        self.mtime = datetime.now(timezone.utc)
