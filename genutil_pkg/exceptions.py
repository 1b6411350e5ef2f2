"""
Custom exceptions for the genutil package.

Exception hierarchy:
    GenutilError (base)
    ├── ConfigurationError (invalid settings or settings file)
    ├── FileNotFoundError (no readable variant of a file exists)
    ├── FileOpenError (a resolved file could not be opened)
    │   └── CompressionError (corrupt or unsupported compressed stream)
    └── FileStateError (broken deployment: unremovable variant, non-executable script)

Resolution itself never raises for a missing file: a missing file is reported
as ``ResolutionStatus.NOT_FOUND``. ``FileNotFoundError`` is only raised by
entry points whose return type cannot carry that status.

Usage:
    Catch FileOpenError to recover from files that resolve but cannot be read:

    try:
        stream = open_any_err("prices.csv")
    except FileOpenError as e:
        print(f"Cannot read prices: {e}")
"""


class GenutilError(Exception):
    """
    Base exception for all genutil errors.

    All custom exceptions in this package inherit from this.
    """
    pass


class ConfigurationError(GenutilError):
    """
    Raised when settings are invalid.

    Examples:
    - Non-positive read buffer size
    - Malformed JSON settings file
    - Unknown setting names
    """
    pass


class FileNotFoundError(GenutilError):
    """
    Raised when no variant of a requested file exists.

    Note: Inherits from GenutilError, not built-in FileNotFoundError
    to maintain our exception hierarchy.
    """
    pass


class FileOpenError(GenutilError):
    """
    Raised when a file was resolved but opening it failed.

    Examples:
    - Permission denied
    - Resolved path is a directory
    - Decompression tool could not be started
    """
    pass


class CompressionError(FileOpenError):
    """
    Raised when a compressed stream cannot be decoded or written.

    Examples:
    - Corrupted gzip header
    - Writing to a .xz or .zip target
    """
    pass


class FileStateError(GenutilError):
    """
    Raised when the filesystem contradicts an assumption the package relies on.

    These are not recoverable runtime conditions and are never caught inside
    the package.

    Examples:
    - A stale compression variant cannot be removed before writing
    - A .bash file exists without execute permission
    """
    pass
