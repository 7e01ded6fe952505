"""Unit tests for wildcard matching."""

import warnings

import pytest

from fspathlib import MemoryBackend, OsBackend, Path
from fspathlib.glob import glob, has_wildcard


@pytest.fixture
def data_tree(root, make_tree):
    make_tree(
        root,
        {
            "data/a.csv": "1",
            "data/b.csv": "2",
            "data/notes.txt": "3",
            "data/raw/c.csv": "4",
            "data/raw/deep/d.csv": "5",
        },
    )
    return root


def relative_names(root, paths):
    return [str(path.relative_to(root)) for path in paths]


def test_has_wildcard():
    assert has_wildcard("*.csv")
    assert has_wildcard("file?.txt")
    assert has_wildcard("[ab].txt")
    assert not has_wildcard("plain.txt")


def test_glob_single_component(data_tree):
    matches = glob(data_tree.backend, data_tree.join("data", "*.csv").path)
    assert relative_names(data_tree, matches) == ["data/a.csv", "data/b.csv"]


def test_glob_does_not_cross_directories(data_tree):
    matches = glob(data_tree.backend, data_tree.join("data", "*").path)
    assert relative_names(data_tree, matches) == ["data/a.csv", "data/b.csv", "data/notes.txt", "data/raw"]


def test_glob_wildcard_directory_component(data_tree):
    matches = glob(data_tree.backend, data_tree.join("*", "raw", "*.csv").path)
    assert relative_names(data_tree, matches) == ["data/raw/c.csv"]


def test_glob_recursive(data_tree):
    matches = glob(data_tree.backend, data_tree.join("data", "**", "*.csv").path)
    assert relative_names(data_tree, matches) == [
        "data/a.csv",
        "data/b.csv",
        "data/raw/c.csv",
        "data/raw/deep/d.csv",
    ]


def test_glob_character_class(data_tree):
    matches = glob(data_tree.backend, data_tree.join("data", "[a]*").path)
    assert relative_names(data_tree, matches) == ["data/a.csv"]


def test_glob_without_wildcards(data_tree):
    existing = data_tree.join("data", "a.csv")
    assert glob(data_tree.backend, existing.path) == [existing]
    assert glob(data_tree.backend, data_tree.join("data", "z.csv").path) == []


def test_glob_missing_base_directory(data_tree):
    assert glob(data_tree.backend, data_tree.join("missing", "*.csv").path) == []


def test_path_glob_is_relative_to_path(data_tree):
    matches = data_tree.join("data").glob("raw/*.csv")
    assert relative_names(data_tree, matches) == ["data/raw/c.csv"]
    assert all(match.backend is data_tree.backend for match in matches)


def test_glob_directory_match_excludes_its_contents(data_tree):
    matches = glob(data_tree.backend, data_tree.join("data", "**", "raw").path)
    assert relative_names(data_tree, matches) == ["data/raw"]


def test_glob_directory_component_match_excludes_its_contents(data_tree):
    matches = glob(data_tree.backend, data_tree.join("*", "raw").path)
    assert relative_names(data_tree, matches) == ["data/raw"]


def test_glob_relative_pattern_memory():
    backend = MemoryBackend()
    for name in ("/a.csv", "/b.csv", "/notes.txt", "/sub/c.csv"):
        Path(name, backend).parent.mkdir_all()
        Path(name, backend).write_text("x")

    assert [str(path) for path in glob(backend, "*.csv")] == ["a.csv", "b.csv"]
    assert [str(path) for path in glob(backend, "**/*.csv")] == ["a.csv", "b.csv", "sub/c.csv"]


def test_glob_relative_pattern_os(tmp_path, monkeypatch, make_tree):
    make_tree(Path(str(tmp_path)), {"a.csv": "1", "b.csv": "2", "notes.txt": "3"})
    monkeypatch.chdir(tmp_path)

    assert [str(path) for path in glob(OsBackend(), "*.csv")] == ["a.csv", "b.csv"]
    assert [str(path) for path in Path(".").glob("*.csv")] == ["a.csv", "b.csv"]


def test_glob_emits_no_deprecation_warnings(data_tree):
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        matches = glob(data_tree.backend, data_tree.join("data", "*.csv").path)
    assert relative_names(data_tree, matches) == ["data/a.csv", "data/b.csv"]
