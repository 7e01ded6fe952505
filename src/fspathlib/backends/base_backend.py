from abc import ABC, abstractmethod
from datetime import datetime
from typing import BinaryIO, List

from fspathlib.backends.file_info import Capability, FileInfo, LstatResult
from fspathlib.exceptions import CapabilityMissingError
from fspathlib.types import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE


class FilesystemBackend(ABC):
    """
    Abstract base class defining the interface every filesystem backend provides.

    A backend receives slash-delimited path strings and reports failures by
    raising ``OSError`` subclasses with ``errno`` set, the same way the ``os``
    module does. The core operations (stat, directory listing, file handles,
    directory and permission management) are mandatory. Symlink handling is a
    set of optional capabilities: backends that cannot represent symlinks keep
    the default implementations, which report the capability as missing rather
    than guessing.

    Example:
        >>> from fspathlib.backends.memory_backend import MemoryBackend
        >>> backend = MemoryBackend()
        >>> backend.mkdir_all("/data/logs")
        >>> backend.write_bytes("/data/logs/app.log", b"started")
        >>> backend.read_dir("/data")
        ['logs']
        >>> backend.stat("/data/logs/app.log").size
        7
        >>> backend.supports(Capability.READLINK)
        True
    """

    @property
    def name(self) -> str:
        """Human-readable backend name, used in error messages."""
        return self.__class__.__name__

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """
        Return metadata for the path, following symlinks to their final target.

        Raises:
            FileNotFoundError: If the path, or a symlink target along it, does not exist.
        """
        pass

    @abstractmethod
    def read_dir(self, path: str) -> List[str]:
        """
        Return the names of the directory's immediate children, sorted by name.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """
        pass

    @abstractmethod
    def open(self, path: str, mode: str = "rb", perm: int = DEFAULT_FILE_MODE) -> BinaryIO:
        """
        Open a file and return a binary file object.

        Args:
            path: File to open.
            mode: A binary mode as accepted by :func:`open` ("rb", "wb", "ab", "r+b", "w+b", "xb").
            perm: Permission bits applied when the file is created.
        """
        pass

    @abstractmethod
    def mkdir(self, path: str, perm: int = DEFAULT_DIR_MODE) -> None:
        """Create a single directory. Its parent must already exist."""
        pass

    @abstractmethod
    def mkdir_all(self, path: str, perm: int = DEFAULT_DIR_MODE) -> None:
        """Create a directory and any missing parents. Existing directories are fine."""
        pass

    @abstractmethod
    def remove(self, path: str) -> None:
        """Remove a file, a symlink or an empty directory."""
        pass

    @abstractmethod
    def remove_all(self, path: str) -> None:
        """Remove a path and everything below it. A missing path is not an error."""
        pass

    @abstractmethod
    def rename(self, old_path: str, new_path: str) -> None:
        """Move old_path to new_path, replacing a file already at new_path."""
        pass

    @abstractmethod
    def chmod(self, path: str, perm: int) -> None:
        """Change the permission bits of the path."""
        pass

    @abstractmethod
    def chtimes(self, path: str, atime: datetime, mtime: datetime) -> None:
        """Change the access and modification times of the path."""
        pass

    def lstat_if_supported(self, path: str) -> LstatResult:
        """
        Return metadata for the path without following a final symlink.

        Backends that cannot tell symlinks apart keep this default, which
        reports the capability as unsupported instead of raising.
        """
        return LstatResult(info=None, supported=False)

    def readlink_if_supported(self, path: str) -> str:
        """
        Return the target of the symlink at path, exactly as stored.

        Raises:
            CapabilityMissingError: If this backend cannot read symlinks.
        """
        raise CapabilityMissingError(Capability.READLINK.value, self.name)

    def symlink_if_supported(self, target: str, link_path: str) -> None:
        """
        Create a symlink at link_path pointing at target.

        Raises:
            CapabilityMissingError: If this backend cannot create symlinks.
        """
        raise CapabilityMissingError(Capability.SYMLINK.value, self.name)

    def supports(self, capability: Capability) -> bool:
        """Return whether this backend implements the given optional capability."""
        method_name = {
            Capability.LSTAT: "lstat_if_supported",
            Capability.READLINK: "readlink_if_supported",
            Capability.SYMLINK: "symlink_if_supported",
        }[capability]
        return getattr(type(self), method_name) is not getattr(FilesystemBackend, method_name)

    def create(self, path: str, perm: int = DEFAULT_FILE_MODE) -> BinaryIO:
        """Create or truncate a file and open it for reading and writing."""
        return self.open(path, "w+b", perm)

    def read_bytes(self, path: str) -> bytes:
        with self.open(path, "rb") as handle:
            return handle.read()

    def write_bytes(self, path: str, data: bytes, perm: int = DEFAULT_FILE_MODE) -> None:
        """Write data to a file, truncating it first and creating it with perm if needed."""
        with self.open(path, "wb", perm) as handle:
            handle.write(data)

    def exists(self, path: str) -> bool:
        """Return whether the path exists. Errors other than non-existence propagate."""
        try:
            self.stat(path)
        except FileNotFoundError:
            return False
        return True

    def is_dir(self, path: str) -> bool:
        """Return whether the path is a directory. Raises if the path does not exist."""
        return self.stat(path).is_dir

    def is_empty(self, path: str) -> bool:
        """Return whether a directory has no children or a file has no content."""
        info = self.stat(path)
        if info.is_dir:
            return not self.read_dir(path)
        return info.size == 0
