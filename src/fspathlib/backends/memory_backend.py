"""In-memory filesystem backend built on an anytree node tree."""

import errno
import io
import os
from collections import deque
from datetime import datetime
from typing import BinaryIO, List, Tuple, Type

from fspathlib import segments
from fspathlib.backends.base_backend import FilesystemBackend
from fspathlib.backends.file_info import Capability, FileIdentifier, FileInfo, LstatResult
from fspathlib.backends.memory_node import MemoryNode
from fspathlib.exceptions import CapabilityMissingError
from fspathlib.types import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, MAX_SYMLINK_HOPS, FileKind

_MODES = {"rb", "wb", "ab", "xb", "r+b", "w+b", "a+b", "x+b"}


def _os_error(error_class: Type[OSError], code: int, path: str) -> OSError:
    return error_class(code, os.strerror(code), path)


class _MemoryFile(io.BytesIO):
    """A file handle whose writes are copied back into its node on flush and close."""

    def __init__(self, node: MemoryNode, mode: str) -> None:
        super().__init__(bytes(node.data))
        self._node = node
        self._readable = mode.startswith("r") or "+" in mode
        self._writable = not mode.startswith("r") or "+" in mode
        if mode.startswith("a"):
            self.seek(0, io.SEEK_END)

    def readable(self) -> bool:
        return self._readable

    def writable(self) -> bool:
        return self._writable

    def read(self, size=-1):  # type: ignore[no-untyped-def]
        if not self._readable:
            raise io.UnsupportedOperation("not readable")
        return super().read(size)

    def write(self, data):  # type: ignore[no-untyped-def]
        if not self._writable:
            raise io.UnsupportedOperation("not writable")
        return super().write(data)

    def flush(self) -> None:
        super().flush()
        if self._writable and not self.closed:
            self._node.data = bytearray(self.getvalue())
            self._node.touch()

    def close(self) -> None:
        if not self.closed:
            self.flush()
        super().close()


class MemoryBackend(FilesystemBackend):
    """Filesystem backend that keeps a whole directory tree in process memory.

    The tree is a hierarchy of :class:`MemoryNode` objects rooted at ``"/"``.
    Relative paths are resolved against the root. Symlinks are stored as
    nodes holding their target text and are followed the way a POSIX kernel
    follows them, including ``..`` after a symlinked directory.

    Passing ``symlinks=False`` yields a backend without any of the optional
    symlink capabilities, which is how a store that cannot represent links
    (for example a plain object store) presents itself.

    Attributes:
        root (MemoryNode): The root directory node.

    Example:
        >>> backend = MemoryBackend()
        >>> backend.mkdir_all("/srv/data")
        >>> backend.symlink_if_supported("/srv/data", "/data")
        >>> backend.write_bytes("/data/file.txt", b"contents")
        >>> backend.read_dir("/srv/data")
        ['file.txt']
        >>> backend.readlink_if_supported("/data")
        '/srv/data'
    """

    def __init__(self, symlinks: bool = True) -> None:
        self._symlinks = symlinks
        self.root = MemoryNode(segments.SEP, kind=FileKind.DIRECTORY, mode=DEFAULT_DIR_MODE)

    def supports(self, capability: Capability) -> bool:
        return self._symlinks and super().supports(capability)

    def _resolve(self, path: str, follow_final: bool = True) -> MemoryNode:
        """Walk the tree to the node named by path, following symlinks on the way."""
        pending = deque(segments.split(path))
        if pending and pending[0] == segments.SEP:
            pending.popleft()
        current = self.root
        hops = 0
        while pending:
            name = pending.popleft()
            if name == "..":
                current = current.parent or current
                continue
            if current.kind is not FileKind.DIRECTORY:
                raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
            node = current.child(name)
            if node is None:
                raise _os_error(FileNotFoundError, errno.ENOENT, path)
            if node.kind is FileKind.SYMLINK and (pending or follow_final):
                hops += 1
                if hops > MAX_SYMLINK_HOPS:
                    raise _os_error(OSError, errno.ELOOP, path)
                target = segments.split(node.link_target or "")
                if target and target[0] == segments.SEP:
                    current = self.root
                    target = target[1:]
                pending.extendleft(reversed(target))
                continue
            current = node
        return current

    def _split_parent(self, path: str) -> Tuple[MemoryNode, str]:
        """Resolve the directory that holds path and return it with the final name."""
        parts = segments.split(path)
        if not parts or parts == [segments.SEP] or parts[-1] == "..":
            raise _os_error(FileExistsError, errno.EEXIST, path)
        parent = self._resolve(segments.from_parts(parts[:-1]))
        if parent.kind is not FileKind.DIRECTORY:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
        return parent, parts[-1]

    @staticmethod
    def _info(node: MemoryNode) -> FileInfo:
        return FileInfo(
            name=node.name,
            kind=node.kind,
            size=node.byte_size,
            mtime=node.mtime,
            mode=node.mode,
            identity=FileIdentifier(0, node.inode),
        )

    def stat(self, path: str) -> FileInfo:
        return self._info(self._resolve(path))

    def lstat_if_supported(self, path: str) -> LstatResult:
        if not self._symlinks:
            return LstatResult(info=None, supported=False)
        return LstatResult(info=self._info(self._resolve(path, follow_final=False)), supported=True)

    def read_dir(self, path: str) -> List[str]:
        node = self._resolve(path)
        if node.kind is not FileKind.DIRECTORY:
            raise _os_error(NotADirectoryError, errno.ENOTDIR, path)
        return sorted(child.name for child in node.children)

    def readlink_if_supported(self, path: str) -> str:
        if not self._symlinks:
            raise CapabilityMissingError(Capability.READLINK.value, self.name)
        node = self._resolve(path, follow_final=False)
        if node.kind is not FileKind.SYMLINK:
            raise _os_error(OSError, errno.EINVAL, path)
        return node.link_target or ""

    def symlink_if_supported(self, target: str, link_path: str) -> None:
        if not self._symlinks:
            raise CapabilityMissingError(Capability.SYMLINK.value, self.name)
        parent, name = self._split_parent(link_path)
        if parent.child(name) is not None:
            raise _os_error(FileExistsError, errno.EEXIST, link_path)
        MemoryNode(name, parent=parent, kind=FileKind.SYMLINK, link_target=target, mode=0o777)

    def open(self, path: str, mode: str = "rb", perm: int = DEFAULT_FILE_MODE) -> BinaryIO:
        if mode not in _MODES:
            raise ValueError(f"unsupported file mode: {mode!r}")
        creates = not mode.startswith("r")
        try:
            node = self._resolve(path)
        except FileNotFoundError:
            if not creates:
                raise
            parent, name = self._split_parent(path)
            if parent.child(name) is not None:
                # a dangling symlink sits where the file would go
                raise
            node = MemoryNode(name, parent=parent, kind=FileKind.FILE, mode=perm)
        else:
            if mode.startswith("x"):
                raise _os_error(FileExistsError, errno.EEXIST, path)
            if node.kind is FileKind.DIRECTORY:
                raise _os_error(IsADirectoryError, errno.EISDIR, path)
            if mode.startswith("w"):
                node.data = bytearray()
                node.touch()
        return _MemoryFile(node, mode)  # type: ignore[return-value]

    def mkdir(self, path: str, perm: int = DEFAULT_DIR_MODE) -> None:
        parent, name = self._split_parent(path)
        if parent.child(name) is not None:
            raise _os_error(FileExistsError, errno.EEXIST, path)
        MemoryNode(name, parent=parent, kind=FileKind.DIRECTORY, mode=perm)
        parent.touch()

    def mkdir_all(self, path: str, perm: int = DEFAULT_DIR_MODE) -> None:
        try:
            node = self._resolve(path)
        except FileNotFoundError:
            parent_path = segments.parent(segments.clean(path))
            if parent_path != segments.clean(path):
                self.mkdir_all(parent_path, perm)
            self.mkdir(path, perm)
            return
        if node.kind is not FileKind.DIRECTORY:
            raise _os_error(FileExistsError, errno.EEXIST, path)

    def remove(self, path: str) -> None:
        node = self._resolve(path, follow_final=False)
        if node is self.root:
            raise _os_error(OSError, errno.EBUSY, path)
        if node.kind is FileKind.DIRECTORY and node.children:
            raise _os_error(OSError, errno.ENOTEMPTY, path)
        parent = node.parent
        node.parent = None
        parent.touch()

    def remove_all(self, path: str) -> None:
        try:
            node = self._resolve(path, follow_final=False)
        except FileNotFoundError:
            return
        if node is self.root:
            node.children = ()
            return
        parent = node.parent
        node.parent = None
        parent.touch()

    def rename(self, old_path: str, new_path: str) -> None:
        node = self._resolve(old_path, follow_final=False)
        if node is self.root:
            raise _os_error(OSError, errno.EBUSY, old_path)
        parent, name = self._split_parent(new_path)
        if parent is node or node in parent.ancestors:
            raise _os_error(OSError, errno.EINVAL, new_path)
        existing = parent.child(name)
        if existing is node:
            return
        if existing is not None:
            if existing.kind is FileKind.DIRECTORY:
                if node.kind is not FileKind.DIRECTORY:
                    raise _os_error(IsADirectoryError, errno.EISDIR, new_path)
                if existing.children:
                    raise _os_error(OSError, errno.ENOTEMPTY, new_path)
            elif node.kind is FileKind.DIRECTORY:
                raise _os_error(NotADirectoryError, errno.ENOTDIR, new_path)
            existing.parent = None
        old_parent = node.parent
        node.parent = parent
        node.name = name
        old_parent.touch()
        parent.touch()

    def chmod(self, path: str, perm: int) -> None:
        self._resolve(path).mode = perm & 0o7777

    def chtimes(self, path: str, atime: datetime, mtime: datetime) -> None:
        node = self._resolve(path)
        node.atime = atime
        node.mtime = mtime
