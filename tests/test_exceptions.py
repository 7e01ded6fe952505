"""Tests for custom exceptions."""

import errno

import pytest

from fspathlib.exceptions import (
    BackendError,
    CapabilityMissingError,
    InvalidAlgorithmError,
    InvalidConfigurationError,
    MetadataAbsentError,
    PathlibError,
    RelativePathError,
    SymlinkLoopError,
)


class TestCapabilityMissingError:
    """Test CapabilityMissingError exception."""

    def test_capability_missing_error_creation(self):
        error = CapabilityMissingError("lstat", "MemoryBackend")

        assert error.capability == "lstat"
        assert error.backend_name == "MemoryBackend"
        assert str(error) == "backend 'MemoryBackend' does not support lstat"

    def test_capability_missing_error_is_pathlib_error(self):
        assert isinstance(CapabilityMissingError("readlink", "X"), PathlibError)


class TestRelativePathError:
    """Test RelativePathError exception."""

    def test_relative_path_error_attributes(self):
        error = RelativePathError("/a/b", "/c")
        assert error.path == "/a/b"
        assert error.other == "/c"
        assert str(error) == "/a/b does not start with /c"

    def test_relative_path_error_is_value_error(self):
        with pytest.raises(ValueError):
            raise RelativePathError("/a", "/b")


class TestBackendError:
    """Test BackendError exception."""

    def test_backend_error_keeps_original_error(self):
        original = FileNotFoundError(errno.ENOENT, "No such file or directory", "/missing")
        error = BackendError("/missing", original)

        assert error.path == "/missing"
        assert error.error is original
        assert str(error).startswith("/missing: ")


class TestRemainingExceptions:
    """Test the simpler exceptions and the hierarchy."""

    def test_invalid_algorithm_error_is_configuration_error(self):
        error = InvalidAlgorithmError("sideways")
        assert isinstance(error, InvalidConfigurationError)
        assert error.algorithm == "sideways"
        assert "sideways" in str(error)

    def test_metadata_absent_error(self):
        error = MetadataAbsentError("/tmp/x")
        assert error.path == "/tmp/x"
        assert "/tmp/x" in str(error)

    def test_symlink_loop_error(self):
        error = SymlinkLoopError("/a", 40, "/b")
        assert error.path == "/a"
        assert error.hops == 40
        assert error.last == "/b"
        assert "40 rewrites" in str(error)
        assert "/b" in str(error)

    def test_symlink_loop_error_without_last(self):
        assert "last seen" not in str(SymlinkLoopError("/a", 40))
