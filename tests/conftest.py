"""Test configuration and fixtures for fspathlib."""

from typing import Dict

import pytest

from fspathlib import MemoryBackend, OsBackend, Path


def build_tree(root: Path, files: Dict[str, str]) -> None:
    """Create the given files below root, with any parent directories they need."""
    for relative, content in files.items():
        path = root.join(relative)
        path.parent.mkdir_all()
        path.write_text(content)


@pytest.fixture
def make_tree():
    """The build_tree helper, for tests that lay out their own files."""
    return build_tree


@pytest.fixture
def memory_root():
    root = Path("/workspace", MemoryBackend())
    root.mkdir_all()
    return root


@pytest.fixture
def os_root(tmp_path):
    return Path(str(tmp_path), OsBackend())


@pytest.fixture(params=["memory", "os"])
def root(request):
    """An empty directory, once on the in-memory backend and once on the OS filesystem."""
    return request.getfixturevalue(f"{request.param}_root")


@pytest.fixture
def small_tree(root):
    """Two files at the root and a subdirectory holding two more."""
    build_tree(
        root,
        {
            "a.txt": "alpha",
            "b.txt": "bravo",
            "subdir/c.txt": "charlie",
            "subdir/d.txt": "delta",
        },
    )
    return root
