"""Unit tests for the QueryFilter class."""

from datetime import datetime, timezone

import pytest

from fspathlib import MemoryBackend, Path
from fspathlib.types import FileKind
from fspathlib.walk.query_filter import QueryFilter
from fspathlib.walk.walk_options import WalkConfiguration
from fspathlib.walk.walk_signal import NodeDescriptor


def test_everything_admitted_by_default():
    query = QueryFilter(WalkConfiguration())
    assert all(query.admits(kind, 0) for kind in FileKind)


@pytest.mark.parametrize(
    "size, admitted",
    [
        (9, False),
        (10, True),
        (15, True),
        (20, True),
        (21, False),
    ],
)
def test_size_boundaries(size, admitted):
    query = QueryFilter(WalkConfiguration(min_size=10, max_size=20))
    assert query.admits(FileKind.FILE, size) is admitted


def test_size_bounds_only_apply_to_files():
    query = QueryFilter(WalkConfiguration(min_size=10, max_size=20))
    assert query.admits(FileKind.DIRECTORY, 4096)
    assert query.admits(FileKind.SYMLINK, 1)


@pytest.mark.parametrize(
    "flag, kind",
    [
        ("visit_files", FileKind.FILE),
        ("visit_dirs", FileKind.DIRECTORY),
        ("visit_symlinks", FileKind.SYMLINK),
    ],
)
def test_visit_flags(flag, kind):
    query = QueryFilter(WalkConfiguration(**{flag: False}))
    assert not query.admits(kind, 0)
    assert all(query.admits(other, 0) for other in FileKind if other is not kind)


def test_other_kinds_always_admitted():
    query = QueryFilter(WalkConfiguration(visit_files=False, visit_dirs=False, visit_symlinks=False))
    assert query.admits(FileKind.OTHER, 0)


def test_admits_descriptor():
    query = QueryFilter(WalkConfiguration(max_size=3))
    node = NodeDescriptor(
        path=Path("/a.txt", MemoryBackend()),
        kind=FileKind.FILE,
        size=4,
        mtime=datetime.now(timezone.utc),
        depth=1,
    )
    assert not query.admits_descriptor(node)
