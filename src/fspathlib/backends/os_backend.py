"""Backend serving paths from the operating system's filesystem."""

import os
import shutil
import stat as stat_module
from datetime import datetime, timezone
from typing import BinaryIO, List

from fspathlib.backends.base_backend import FilesystemBackend
from fspathlib.backends.file_info import FileIdentifier, FileInfo, LstatResult
from fspathlib.types import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE, FileKind

_OPEN_FLAGS = {
    "rb": os.O_RDONLY,
    "wb": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "ab": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "xb": os.O_WRONLY | os.O_CREAT | os.O_EXCL,
    "r+b": os.O_RDWR,
    "w+b": os.O_RDWR | os.O_CREAT | os.O_TRUNC,
    "a+b": os.O_RDWR | os.O_CREAT | os.O_APPEND,
    "x+b": os.O_RDWR | os.O_CREAT | os.O_EXCL,
}


def _file_kind(st_mode: int) -> FileKind:
    if stat_module.S_ISLNK(st_mode):
        return FileKind.SYMLINK
    if stat_module.S_ISDIR(st_mode):
        return FileKind.DIRECTORY
    if stat_module.S_ISREG(st_mode):
        return FileKind.FILE
    return FileKind.OTHER


def _to_file_info(path: str, stat_info: os.stat_result) -> FileInfo:
    return FileInfo(
        name=os.path.basename(path.rstrip("/")) or path,
        kind=_file_kind(stat_info.st_mode),
        size=stat_info.st_size,
        mtime=datetime.fromtimestamp(stat_info.st_mtime, tz=timezone.utc),
        mode=stat_module.S_IMODE(stat_info.st_mode),
        identity=FileIdentifier(stat_info.st_dev, stat_info.st_ino),
    )


class OsBackend(FilesystemBackend):
    """Filesystem backend that forwards every call to the ``os`` module.

    Relative paths are resolved against the process working directory, exactly
    as the ``os`` functions do. All three symlink capabilities are supported.

    Example:
        >>> import tempfile
        >>> backend = OsBackend()
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     backend.write_bytes(f"{tmpdir}/a.txt", b"hello")
        ...     backend.symlink_if_supported(f"{tmpdir}/a.txt", f"{tmpdir}/link")
        ...     backend.lstat_if_supported(f"{tmpdir}/link").info.kind
        ...     backend.stat(f"{tmpdir}/link").size
        <FileKind.SYMLINK: 'symlink'>
        5
    """

    def stat(self, path: str) -> FileInfo:
        return _to_file_info(path, os.stat(path))

    def lstat_if_supported(self, path: str) -> LstatResult:
        return LstatResult(info=_to_file_info(path, os.lstat(path)), supported=True)

    def read_dir(self, path: str) -> List[str]:
        return sorted(os.listdir(path))

    def readlink_if_supported(self, path: str) -> str:
        return os.readlink(path)

    def symlink_if_supported(self, target: str, link_path: str) -> None:
        os.symlink(target, link_path)

    def open(self, path: str, mode: str = "rb", perm: int = DEFAULT_FILE_MODE) -> BinaryIO:
        if mode not in _OPEN_FLAGS:
            raise ValueError(f"unsupported file mode: {mode!r}")
        descriptor = os.open(path, _OPEN_FLAGS[mode], perm)
        return os.fdopen(descriptor, mode)

    def mkdir(self, path: str, perm: int = DEFAULT_DIR_MODE) -> None:
        os.mkdir(path, perm)

    def mkdir_all(self, path: str, perm: int = DEFAULT_DIR_MODE) -> None:
        os.makedirs(path, perm, exist_ok=True)

    def remove(self, path: str) -> None:
        if os.path.isdir(path) and not os.path.islink(path):
            os.rmdir(path)
        else:
            os.remove(path)

    def remove_all(self, path: str) -> None:
        if os.path.islink(path) or os.path.isfile(path):
            os.remove(path)
        elif os.path.isdir(path):
            shutil.rmtree(path)

    def rename(self, old_path: str, new_path: str) -> None:
        os.replace(old_path, new_path)

    def chmod(self, path: str, perm: int) -> None:
        os.chmod(path, perm)

    def chtimes(self, path: str, atime: datetime, mtime: datetime) -> None:
        os.utime(path, (atime.timestamp(), mtime.timestamp()))
