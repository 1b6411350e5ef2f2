"""
Unit tests for the custom exceptions module.

Tests the exception hierarchy and ensures all custom exceptions:
1. Can be raised and caught correctly
2. Inherit from the proper base classes
3. Store and display error messages correctly
"""

import builtins

import pytest

from genutil_pkg.exceptions import (
    GenutilError,
    ConfigurationError,
    FileNotFoundError,
    FileOpenError,
    CompressionError,
    FileStateError,
)


class TestGenutilErrorBase:
    """Tests for the base GenutilError exception."""

    def test_inherits_from_exception(self):
        """Test that GenutilError inherits from Exception."""
        assert issubclass(GenutilError, Exception)

    def test_stores_message(self):
        """Test that the message is kept."""
        with pytest.raises(GenutilError) as exc_info:
            raise GenutilError("Test error")
        assert str(exc_info.value) == "Test error"

    def test_without_message(self):
        """Test that GenutilError can be raised without a message."""
        with pytest.raises(GenutilError):
            raise GenutilError()


class TestHierarchy:
    """Tests for the documented hierarchy."""

    @pytest.mark.parametrize("exc_class", [
        ConfigurationError,
        FileNotFoundError,
        FileOpenError,
        CompressionError,
        FileStateError,
    ])
    def test_all_inherit_from_base(self, exc_class):
        """Test that every package exception is a GenutilError."""
        assert issubclass(exc_class, GenutilError)

    def test_compression_error_is_file_open_error(self):
        """Test that CompressionError can be caught as FileOpenError."""
        with pytest.raises(FileOpenError):
            raise CompressionError("corrupt header")

    def test_file_state_error_is_separate(self):
        """Test that FileStateError is not caught as FileOpenError."""
        assert not issubclass(FileStateError, FileOpenError)
        with pytest.raises(FileStateError):
            try:
                raise FileStateError("cannot remove prices.csv.gz")
            except FileOpenError:
                pytest.fail("FileStateError caught as FileOpenError")

    def test_file_not_found_shadows_builtin(self):
        """Test that the package FileNotFoundError is not the built-in one."""
        assert FileNotFoundError is not builtins.FileNotFoundError
        assert not issubclass(FileNotFoundError, OSError)

    def test_chained_cause_kept(self):
        """Test that wrapped OS errors stay reachable through __cause__."""
        cause = PermissionError("denied")
        with pytest.raises(FileOpenError) as exc_info:
            try:
                raise cause
            except OSError as e:
                raise FileOpenError("Failed to open prices.csv") from e
        assert exc_info.value.__cause__ is cause
