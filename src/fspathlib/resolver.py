"""Symlink resolution for paths bound to any backend.

Two operations are provided. :func:`resolve` reads one symlink and returns
its target as stored. :func:`resolve_all` canonicalizes a path the way
``realpath``/``readlink -f`` does, by repeatedly replacing the first
symlinked prefix of the path with that link's target until no prefix is a
symlink.
"""

import logging
from typing import TYPE_CHECKING, Optional

from fspathlib.backends.file_info import Capability
from fspathlib.exceptions import CapabilityMissingError, MetadataAbsentError, SymlinkLoopError
from fspathlib.types import MAX_SYMLINK_HOPS

if TYPE_CHECKING:
    from fspathlib.path import Path

logger = logging.getLogger(__name__)


def resolve(path: "Path") -> "Path":
    """Return the target of the symlink at path, without resolving it further.

    The target is returned exactly as stored, so a relative target is relative
    to the link's parent directory, not to the working directory.

    Raises:
        CapabilityMissingError: If the backend cannot read symlinks.
        OSError: If path is missing or is not a symlink.
    """
    target = path.backend.readlink_if_supported(str(path))
    return path.with_path(target)


def is_symlink(path: "Path") -> bool:
    """Return whether path itself is a symlink, using non-dereferencing stat.

    Raises:
        CapabilityMissingError: If the backend has no non-dereferencing stat.
        MetadataAbsentError: If the backend reported neither metadata nor an error.
    """
    result = path.backend.lstat_if_supported(str(path))
    if not result.supported:
        raise CapabilityMissingError(Capability.LSTAT.value, path.backend.name)
    if result.info is None:
        raise MetadataAbsentError(str(path))
    return result.info.is_symlink


def _rewrite_first_symlink(path: "Path") -> Optional["Path"]:
    parts = path.parts
    for index in range(len(parts)):
        prefix = path.with_parts(parts[: index + 1])
        if not is_symlink(prefix):
            continue

        target = resolve(prefix)
        remainder = parts[index + 1 :]
        if target.is_absolute():
            return target.join(*remainder)
        return prefix.parent.join_path(target).join(*remainder)
    return None


def resolve_all(path: "Path") -> "Path":
    """Canonicalize path by resolving every symlinked component.

    Components are examined left to right. The first prefix that is a symlink
    is replaced by its target (joined onto the link's parent when the target
    is relative) followed by the components not yet examined, and the scan
    starts over on the rewritten path. When no prefix is a symlink the path is
    canonical and is returned unchanged.

    Args:
        path: The path to canonicalize.

    Returns:
        A path bound to the same backend in which no component is a symlink.

    Raises:
        CapabilityMissingError: If the backend cannot lstat or cannot read symlinks.
        SymlinkLoopError: If more than MAX_SYMLINK_HOPS rewrites are needed.
        OSError: If a component does not exist or cannot be examined.

    Example:
        >>> from fspathlib import MemoryBackend, Path
        >>> backend = MemoryBackend()
        >>> Path("/mnt/nfs/data/x", backend).mkdir_all()
        >>> Path("/mnt/nfs/symlinks", backend).mkdir_all()
        >>> Path("/mnt/nfs/symlinks/home", backend).symlink("../data")
        >>> Path("/home", backend).symlink("./mnt/nfs/symlinks/home")
        >>> str(resolve_all(Path("/home/x", backend)))
        '/mnt/nfs/data/x'
    """
    if not path.backend.supports(Capability.READLINK):
        raise CapabilityMissingError(Capability.READLINK.value, path.backend.name)

    current = path
    hops = 0
    while True:
        rewritten = _rewrite_first_symlink(current)
        if rewritten is None:
            return current
        hops += 1
        if hops > MAX_SYMLINK_HOPS:
            raise SymlinkLoopError(str(path), MAX_SYMLINK_HOPS, str(current))
        logger.debug("Resolved %s to %s", current, rewritten)
        current = rewritten
