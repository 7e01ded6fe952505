"""The Path value type: a slash-delimited path bound to a filesystem backend."""

import io
import os
import shutil
from datetime import datetime
from typing import IO, TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Union

from fspathlib import resolver, segments
from fspathlib.backends.base_backend import FilesystemBackend
from fspathlib.backends.file_info import Capability, FileInfo
from fspathlib.backends.os_backend import OsBackend
from fspathlib.exceptions import CapabilityMissingError, MetadataAbsentError, RelativePathError
from fspathlib.types import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, PathType
from fspathlib.walk.walk import Walk

if TYPE_CHECKING:
    from fspathlib.walk.walk_options import WalkConfiguration
    from fspathlib.walk.walk_signal import NodeDescriptor, WalkSignal


class Path:
    """A path string bound to the filesystem backend that serves it.

    Paths are values: no method changes a Path, and operations that produce a
    different location (``join``, ``parent``, ``rename``...) return a new one
    bound to the same backend. Pure methods only manipulate the string; every
    other method forwards to the backend.

    Two paths are equal (``==``) when they share a backend and their
    normalized forms match, where normalization collapses repeated separators,
    a leading ``./`` and a trailing separator. Use :meth:`resolved_equals` to
    compare the locations after resolving symlinks.

    Attributes:
        backend (FilesystemBackend): The backend serving this path.

    Example:
        >>> from fspathlib.backends import MemoryBackend
        >>> backend = MemoryBackend()
        >>> reports = Path("/srv/reports", backend)
        >>> reports.mkdir_all()
        >>> (reports / "q1.csv").write_text("a,b\\n")
        >>> [child.name for child in reports.read_dir()]
        ['q1.csv']
        >>> Path("/srv//reports/", backend) == reports
        True
    """

    __slots__ = ("_path", "_backend")

    def __init__(self, path: PathType = ".", backend: Optional[FilesystemBackend] = None) -> None:
        """Create a path bound to backend, or to the OS filesystem if none is given."""
        self._path = os.fspath(path)
        self._backend = backend if backend is not None else OsBackend()

    @property
    def backend(self) -> FilesystemBackend:
        return self._backend

    @property
    def path(self) -> str:
        """The path string exactly as given."""
        return self._path

    def with_path(self, path: PathType) -> "Path":
        """Return a new path bound to the same backend."""
        return Path(path, self._backend)

    def with_parts(self, parts: Sequence[str]) -> "Path":
        return self.with_path(segments.from_parts(parts))

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"Path({self._path!r}, backend={self._backend.name})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._backend is other._backend and segments.lexical_form(self._path) == segments.lexical_form(
            other._path
        )

    def __hash__(self) -> int:
        return hash((segments.lexical_form(self._path), id(self._backend)))

    def __truediv__(self, other: Union[str, "Path"]) -> "Path":
        if isinstance(other, Path):
            return self.join_path(other)
        return self.join(other)

    # *******************************
    # * Lexical operations          *
    # *******************************

    @property
    def name(self) -> str:
        """The final path component."""
        return segments.base(self._path)

    @property
    def parent(self) -> "Path":
        """The path of the containing directory."""
        return self.with_path(segments.parent(self._path))

    @property
    def parts(self) -> List[str]:
        """The path's components, starting with ``"/"`` for an absolute path.

        Example:
            >>> Path("/path/to/thingy").parts
            ['/', 'path', 'to', 'thingy']
            >>> Path("./path/to/thingy").parts
            ['path', 'to', 'thingy']
        """
        return segments.split(self._path)

    def is_absolute(self) -> bool:
        return segments.is_absolute(self._path)

    def join(self, *elems: str) -> "Path":
        """Join elements onto this path and return the cleaned result.

        Example:
            >>> str(Path("./foo").join("bar", "baz"))
            'foo/bar/baz'
        """
        return self.with_path(segments.join(self._path, *elems))

    def join_path(self, other: "Path") -> "Path":
        """Join the components of another path onto this one."""
        return self.join(*other.parts)

    def clean(self) -> "Path":
        """Return the shortest lexically equivalent path, with ``.`` and ``..`` resolved."""
        return self.with_path(segments.clean(self._path))

    def relative_to(self, other: "Path") -> "Path":
        """Return this path relative to other, which must be a component prefix of it.

        Example:
            >>> str(Path("/cool/cats/write/cool/code/file.csv").relative_to(Path("/cool/cats/write")))
            'cool/code/file.csv'
            >>> str(Path("/").relative_to(Path("/")))
            '.'

        Raises:
            RelativePathError: If other is not a prefix of this path.
        """
        these_parts = self.parts
        other_parts = other.parts
        if len(other_parts) > len(these_parts) or these_parts[: len(other_parts)] != other_parts:
            raise RelativePathError(segments.normalize(self._path), segments.normalize(other._path))
        return self.with_path(segments.SEP.join(these_parts[len(other_parts) :]) or ".")

    def equals(self, other: "Path") -> bool:
        """Return whether both paths are lexically equal. Same as ``==``."""
        return self == other

    def resolved_equals(self, other: "Path") -> bool:
        """Return whether both paths name the same location once symlinks are resolved."""
        return self.resolve_all() == other.resolve_all()

    # *******************************
    # * Backend operations          *
    # *******************************

    def stat(self) -> FileInfo:
        return self._backend.stat(self._path)

    def lstat(self) -> FileInfo:
        """Return metadata for the path itself, without following a final symlink.

        Raises:
            CapabilityMissingError: If the backend has no non-dereferencing stat.
        """
        result = self._backend.lstat_if_supported(self._path)
        if not result.supported:
            raise CapabilityMissingError(Capability.LSTAT.value, self._backend.name)
        if result.info is None:
            raise MetadataAbsentError(self._path)
        return result.info

    def exists(self) -> bool:
        return self._backend.exists(self._path)

    def is_dir(self) -> bool:
        """Return whether the path is a directory. Raises if it does not exist."""
        return self._backend.is_dir(self._path)

    def dir_exists(self) -> bool:
        """Return whether the path exists and is a directory."""
        try:
            return self.stat().is_dir
        except FileNotFoundError:
            return False

    def is_file(self) -> bool:
        return self.stat().is_file

    def is_symlink(self) -> bool:
        return resolver.is_symlink(self)

    def is_empty(self) -> bool:
        return self._backend.is_empty(self._path)

    def mtime(self) -> datetime:
        return self.stat().mtime

    def size(self) -> int:
        return self.stat().size

    def read_dir(self) -> List["Path"]:
        """Return the immediate children of this directory, sorted by name."""
        return [self.join(name) for name in self._backend.read_dir(self._path)]

    def create(self, perm: int = DEFAULT_FILE_MODE) -> IO[bytes]:
        """Create or truncate the file and return a handle open for reading and writing."""
        return self._backend.create(self._path, perm)

    def open(self, mode: str = "rb", encoding: Optional[str] = None, perm: int = DEFAULT_FILE_MODE) -> IO[Any]:
        """Open the file. Modes without ``b`` return a text stream.

        Example:
            >>> from fspathlib.backends import MemoryBackend
            >>> notes = Path("/notes.txt", MemoryBackend())
            >>> with notes.open("w") as handle:
            ...     _ = handle.write("first line")
            >>> notes.read_bytes()
            b'first line'
        """
        if "b" in mode:
            return self._backend.open(self._path, mode, perm)
        handle = self._backend.open(self._path, mode.replace("t", "") + "b", perm)
        return io.TextIOWrapper(handle, encoding=encoding or "utf-8")  # type: ignore[arg-type]

    def read_bytes(self) -> bytes:
        return self._backend.read_bytes(self._path)

    def read_text(self, encoding: str = "utf-8") -> str:
        return self.read_bytes().decode(encoding)

    def write_bytes(self, data: bytes, perm: int = DEFAULT_FILE_MODE) -> None:
        """Write data to the file, truncating it first. perm applies if the file is created."""
        self._backend.write_bytes(self._path, data, perm)

    def write_text(self, text: str, encoding: str = "utf-8", perm: int = DEFAULT_FILE_MODE) -> None:
        self.write_bytes(text.encode(encoding), perm)

    def contains_bytes(self, *needles: bytes) -> bool:
        """Return whether the file's content contains any of the given byte strings."""
        data = self.read_bytes()
        return any(needle in data for needle in needles)

    def mkdir(self, perm: int = DEFAULT_DIR_MODE) -> None:
        """Create this directory. The parent must already exist."""
        self._backend.mkdir(self._path, perm)

    def mkdir_all(self, perm: int = DEFAULT_DIR_MODE) -> None:
        """Create this directory and any missing parents."""
        self._backend.mkdir_all(self._path, perm)

    def remove(self) -> None:
        self._backend.remove(self._path)

    def remove_all(self) -> None:
        self._backend.remove_all(self._path)

    def rename(self, target: Union[str, "Path"]) -> "Path":
        """Move this path to target and return the path at the new location.

        This Path is left unchanged and keeps naming the old location.
        """
        new_path = str(target)
        self._backend.rename(self._path, new_path)
        return self.with_path(new_path)

    def chmod(self, perm: int) -> None:
        self._backend.chmod(self._path, perm)

    def chtimes(self, atime: datetime, mtime: datetime) -> None:
        self._backend.chtimes(self._path, atime, mtime)

    def copy(self, target: "Path") -> "Path":
        """Copy this file's content to target, which may be bound to another backend.

        The target is created or truncated. Returns target.
        """
        with self.open("rb") as source, target.open("wb") as destination:
            shutil.copyfileobj(source, destination)
        return target

    def write_reader(self, stream: IO[bytes]) -> None:
        """Write everything readable from stream to this file.

        Missing parent directories are created first. An existing file is
        truncated.
        """
        self._write_stream(stream, "wb")

    def safe_write_reader(self, stream: IO[bytes]) -> None:
        """Like :meth:`write_reader`, but never overwrite an existing path.

        Raises:
            FileExistsError: If something already exists at this path.
        """
        self._write_stream(stream, "xb")

    def _write_stream(self, stream: IO[bytes], mode: str) -> None:
        self.parent.mkdir_all()
        with self.open(mode) as destination:
            shutil.copyfileobj(stream, destination)

    def get_latest(self) -> Optional["Path"]:
        """Return the child of this directory with the most recent modification time.

        Returns None for an empty directory. Children that disappear between
        listing the directory and reading their metadata are skipped.
        """
        latest: Optional[Path] = None
        latest_mtime: Optional[datetime] = None
        for child in self.read_dir():
            try:
                child_mtime = child.mtime()
            except FileNotFoundError:
                continue
            if latest_mtime is None or child_mtime > latest_mtime:
                latest, latest_mtime = child, child_mtime
        return latest

    def glob(self, pattern: str) -> List["Path"]:
        """Return the paths matching pattern, interpreted relative to this path."""
        from fspathlib.glob import glob

        return glob(self._backend, self.join(pattern).path)

    # *******************************
    # * Symlinks                    *
    # *******************************

    def symlink(self, target: Union[str, "Path"]) -> None:
        """Create a symlink at this path pointing at target.

        Raises:
            CapabilityMissingError: If the backend cannot create symlinks.
        """
        self._backend.symlink_if_supported(str(target), self._path)

    def readlink(self) -> str:
        """Return the stored target of this symlink as a string."""
        return self._backend.readlink_if_supported(self._path)

    def resolve(self) -> "Path":
        """Return the immediate target of this symlink. See :func:`fspathlib.resolver.resolve`."""
        return resolver.resolve(self)

    def resolve_all(self) -> "Path":
        """Canonicalize the path. See :func:`fspathlib.resolver.resolve_all`."""
        return resolver.resolve_all(self)

    # *******************************
    # * Walking                     *
    # *******************************

    def walk(
        self,
        visitor: Callable[["Path", "NodeDescriptor"], Optional["WalkSignal"]],
        config: Optional["WalkConfiguration"] = None,
        **overrides: Any,
    ) -> None:
        """Walk the tree below this directory. See :class:`fspathlib.walk.walk.Walk`."""
        Walk(self, config, **overrides).walk(visitor)
