"""Unit tests for the lexical path helpers."""

import pytest

from fspathlib import segments


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/path/to/thingy", ["/", "path", "to", "thingy"]),
        ("./path/to/thingy", ["path", "to", "thingy"]),
        ("path/to/thingy/", ["path", "to", "thingy"]),
        ("/path//to///thingy", ["/", "path", "to", "thingy"]),
        ("/", ["/"]),
        ("", []),
        (".", []),
        ("a/./b", ["a", "b"]),
        ("/./a", ["/", "a"]),
    ],
)
def test_split(path, expected):
    assert segments.split(path) == expected


@pytest.mark.parametrize(
    "parts, expected",
    [
        (["/", "etc", "passwd"], "/etc/passwd"),
        (["etc", "passwd"], "etc/passwd"),
        (["/"], "/"),
        ([], "."),
    ],
)
def test_from_parts(parts, expected):
    assert segments.from_parts(parts) == expected


@pytest.mark.parametrize(
    "elems, expected",
    [
        (("/", "foo", "bar"), "/foo/bar"),
        (("./", "foo", "bar"), "foo/bar"),
        (("a", "/b"), "a/b"),
        (("a", "..", "b"), "b"),
        (("/a/", "", "b"), "/a/b"),
        (("", ""), ""),
    ],
)
def test_join(elems, expected):
    assert segments.join(*elems) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/path/to/foo.txt", "/path/to"),
        ("foo.txt", "."),
        ("/foo", "/"),
        ("/", "/"),
        ("a/b/", "a/b"),
    ],
)
def test_parent(path, expected):
    assert segments.parent(path) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/a/b.txt", "b.txt"),
        ("/a/b.txt/", "b.txt"),
        ("foo", "foo"),
        ("/", "/"),
        ("", "."),
    ],
)
def test_base(path, expected):
    assert segments.base(path) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("//a/b/../c/./", "/a/c"),
        ("a/../..", ".."),
        ("", "."),
        ("/..", "/"),
    ],
)
def test_clean(path, expected):
    assert segments.clean(path) == expected


def test_normalize_strips_whitespace_prefix_and_trailing_separator():
    assert segments.normalize("  ./foo/bar/ ") == "foo/bar"
    assert segments.normalize("/") == "/"


def test_lexical_form_collapses_separators():
    assert segments.lexical_form("/srv//reports/") == "/srv/reports"
    assert segments.lexical_form("./reports") == segments.lexical_form("reports")


def test_is_absolute():
    assert segments.is_absolute("/etc")
    assert not segments.is_absolute("etc")
    assert not segments.is_absolute("")
