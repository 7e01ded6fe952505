from typing import Optional


class PathlibError(Exception):
    """Base class for every error raised by fspathlib itself.

    Errors raised by a backend (``OSError`` and its subclasses) are not
    PathlibErrors on their own; the walker wraps them in :class:`BackendError`
    so that the failing path travels with the error.
    """


class CapabilityMissingError(PathlibError):
    """
    Exception raised when a backend lacks an optional capability.

    Backends may or may not support non-dereferencing stat, reading symlink
    targets or creating symlinks. Operations that need one of these fail with
    this error instead of silently pretending that no symlink is present.

    Attributes:
        capability (str): Name of the missing capability.
        backend_name (str): Name of the backend that lacks it.

    Example:
        >>> error = CapabilityMissingError("readlink", "MemoryBackend")
        >>> str(error)
        "backend 'MemoryBackend' does not support readlink"
    """

    def __init__(self, capability: str, backend_name: str) -> None:
        self.capability = capability
        self.backend_name = backend_name
        super().__init__(f"backend '{backend_name}' does not support {capability}")


class MetadataAbsentError(PathlibError):
    """
    Exception raised when a backend returns no metadata and no error.

    This is a broken backend contract rather than an I/O failure, and it always
    aborts the current operation.

    Example:
        >>> str(MetadataAbsentError("/tmp/x"))
        'backend returned no metadata and no error for /tmp/x'
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"backend returned no metadata and no error for {path}")


class InvalidConfigurationError(PathlibError):
    """Exception raised for an unusable walk configuration, such as a missing root."""


class InvalidAlgorithmError(InvalidConfigurationError):
    """
    Exception raised when a walk is asked to run an unknown algorithm.

    Example:
        >>> str(InvalidAlgorithmError("sideways"))
        "invalid walk algorithm: 'sideways'"
    """

    def __init__(self, algorithm: object) -> None:
        self.algorithm = algorithm
        super().__init__(f"invalid walk algorithm: {algorithm!r}")


class RelativePathError(PathlibError, ValueError):
    """
    Exception raised when one path cannot be made relative to another.

    Example:
        >>> str(RelativePathError("/etc/passwd", "/usr"))
        '/etc/passwd does not start with /usr'
    """

    def __init__(self, path: str, other: str) -> None:
        self.path = path
        self.other = other
        super().__init__(f"{path} does not start with {other}")


class BackendError(PathlibError):
    """
    Exception raised when a backend call fails during a walk.

    The original ``OSError`` is kept as ``__cause__`` and as ``error``.

    Attributes:
        path (str): Path whose backend call failed.
        error (OSError): The error raised by the backend.
    """

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"{path}: {error}")


class SymlinkLoopError(PathlibError):
    """
    Exception raised when canonicalizing a path takes too many symlink rewrites.

    Attributes:
        path (str): The path that was being canonicalized.
        hops (int): Number of rewrites performed before giving up.
    """

    def __init__(self, path: str, hops: int, last: Optional[str] = None) -> None:
        self.path = path
        self.hops = hops
        self.last = last
        message = f"too many levels of symbolic links resolving {path} ({hops} rewrites)"
        if last is not None:
            message += f", last seen {last}"
        super().__init__(message)
