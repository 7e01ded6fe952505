"""Lexical path helpers shared by Path, the walker and the symlink resolver.

Paths are always slash-delimited, independent of the host OS. None of these
helpers touch a backend.
"""

import posixpath
from typing import List, Sequence

SEP = "/"


def is_absolute(path: str) -> bool:
    """Return whether the path starts at the root.

    Example:
        >>> is_absolute("/etc"), is_absolute("./etc"), is_absolute(".")
        (True, False, False)
    """
    return path.startswith(SEP)


def normalize(path: str) -> str:
    """Strip surrounding whitespace, a leading ``./`` and a trailing separator."""
    path = path.strip()
    if path.startswith("./"):
        path = path[2:]
    if len(path) > 1 and path.endswith(SEP):
        path = path[:-1]
    return path


def split(path: str) -> List[str]:
    """Decompose a path into its components.

    Absolute paths start with a distinguished ``"/"`` component. Empty
    components produced by repeated separators are dropped, and so are ``.``
    components, which name the directory they appear in.

    Example:
        >>> split("/path/to//thingy/")
        ['/', 'path', 'to', 'thingy']
        >>> split("./path/to/thingy")
        ['path', 'to', 'thingy']
        >>> split("/")
        ['/']
        >>> split(".")
        []
    """
    parts = [SEP] if is_absolute(path) else []
    parts.extend(part for part in normalize(path).split(SEP) if part and part != ".")
    return parts


def from_parts(parts: Sequence[str]) -> str:
    """Rebuild a normalized path string from components produced by :func:`split`.

    Example:
        >>> from_parts(["/", "etc", "passwd"])
        '/etc/passwd'
        >>> from_parts([])
        '.'
    """
    if parts and parts[0] == SEP:
        return SEP + SEP.join(parts[1:])
    return SEP.join(parts) or "."


def lexical_form(path: str) -> str:
    """Return the form used for lexical equality: separators collapsed, root kept."""
    return from_parts(split(path))


def clean(path: str) -> str:
    """Return the shortest lexically equivalent path, resolving ``.`` and ``..``.

    Example:
        >>> clean("//a/b/../c/./")
        '/a/c'
        >>> clean("")
        '.'
    """
    cleaned = posixpath.normpath(path)
    # normpath keeps exactly two leading slashes, POSIX leaves their meaning open
    if cleaned.startswith("//"):
        cleaned = SEP + cleaned.lstrip(SEP)
    return cleaned


def join(*elems: str) -> str:
    """Join path elements with the separator and clean the result.

    Unlike :func:`posixpath.join`, an absolute element does not discard what
    came before it. Empty elements are ignored; joining nothing gives ``""``.

    Example:
        >>> join("/", "foo", "bar")
        '/foo/bar'
        >>> join("./", "foo", "bar")
        'foo/bar'
        >>> join("a", "/b")
        'a/b'
    """
    kept = [elem for elem in elems if elem]
    if not kept:
        return ""
    return clean(SEP.join(kept))


def parent(path: str) -> str:
    """Return everything but the last element of the path, cleaned.

    Example:
        >>> parent("/path/to/foo.txt"), parent("foo.txt"), parent("/")
        ('/path/to', '.', '/')
    """
    head = path[: path.rfind(SEP) + 1]
    return clean(head) if head else "."


def base(path: str) -> str:
    """Return the last element of the path, ignoring trailing separators.

    Example:
        >>> base("/a/b.txt/"), base("/"), base("")
        ('b.txt', '/', '.')
    """
    if not path:
        return "."
    stripped = path.rstrip(SEP)
    if not stripped:
        return SEP
    return stripped[stripped.rfind(SEP) + 1 :]
