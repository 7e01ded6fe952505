"""Wildcard matching of paths served by any backend."""

import logging
from typing import List

from pathspec import PathSpec

from fspathlib import segments
from fspathlib.backends.base_backend import FilesystemBackend
from fspathlib.path import Path
from fspathlib.walk.walk_options import Algorithm
from fspathlib.walk.walk_signal import NodeDescriptor

logger = logging.getLogger(__name__)

WILDCARD_CHARS = frozenset("*?[")


def has_wildcard(component: str) -> bool:
    """Return whether a path component contains a wildcard character.

    Example:
        >>> has_wildcard("*.csv"), has_wildcard("data"), has_wildcard("file[0-9]")
        (True, False, True)
    """
    return any(char in WILDCARD_CHARS for char in component)


def _matches_whole_path(spec: PathSpec, path: str) -> bool:
    """Return whether spec matches path itself, not just a directory above it.

    A gitignore pattern naming a directory also matches everything beneath
    it. Globbing wants the directory alone, so a match has to end where the
    path ends.
    """
    for pattern in spec.patterns:
        result = pattern.match_file(path)
        if result is not None and result.match.end() == len(path):
            return True
    return False


def glob(backend: FilesystemBackend, pattern: str) -> List[Path]:
    """Return the paths on backend matching a gitignore-style wildcard pattern.

    The leading components of the pattern that contain no wildcard select the
    directory to scan. The remaining components are matched against paths
    relative to that directory using .gitignore rules, so ``*`` stays inside
    one component and ``**`` crosses any number of them. Without ``**`` the
    scan goes no deeper than the pattern has components.

    Args:
        backend: The backend to search.
        pattern: Slash-delimited pattern such as ``/data/*.csv`` or ``src/**/test_*.py``.

    Returns:
        Matching paths sorted by their string form. A pattern without
        wildcards gives the path itself if it exists, otherwise nothing.

    Raises:
        BackendError: If a directory below the scanned one cannot be read.

    Example:
        >>> from fspathlib.backends import MemoryBackend
        >>> backend = MemoryBackend()
        >>> Path("/data/raw", backend).mkdir_all()
        >>> for name in ("a.csv", "b.csv", "raw/c.csv", "notes.txt"):
        ...     Path("/data", backend).join(name).write_text("x")
        >>> [str(path) for path in glob(backend, "/data/*.csv")]
        ['/data/a.csv', '/data/b.csv']
        >>> [str(path) for path in glob(backend, "/data/**/*.csv")]
        ['/data/a.csv', '/data/b.csv', '/data/raw/c.csv']
    """
    parts = segments.split(pattern)
    literal: List[str] = []
    for part in parts:
        if has_wildcard(part):
            break
        literal.append(part)
    wildcard = parts[len(literal) :]

    base = Path(segments.from_parts(literal), backend)
    if not wildcard:
        return [base] if base.exists() else []
    if not base.dir_exists():
        return []

    recursive = "**" in wildcard
    # A leading slash anchors the pattern to the scanned directory
    spec = PathSpec.from_lines("gitignore", [segments.SEP + segments.SEP.join(wildcard)])
    matches: List[Path] = []

    def collect(path: Path, node: NodeDescriptor) -> None:
        relative = path.relative_to(base)
        if not recursive and len(relative.parts) != len(wildcard):
            return
        if _matches_whole_path(spec, relative.path):
            matches.append(path)

    logger.debug("Globbing %s below %s", segments.SEP.join(wildcard), base)
    base.walk(
        collect,
        algorithm=Algorithm.PRE_ORDER_DEPTH_FIRST,
        max_depth=-1 if recursive else len(wildcard) - 1,
    )
    return sorted(matches, key=str)
