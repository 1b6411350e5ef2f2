"""
General Utilities Package
=========================

Two small, independent helpers used across data-processing scripts:

- **Ordered projections of mappings:** the keys of a dict in a deterministic
  order, by key or by value (ascending, descending, raw or absolute value).
- **Compression-aware file access:** find whichever of ``name``,
  ``name.xz``, ``name.gz``, ``name.bz2`` or ``name.zip`` exists and read it
  as one buffered byte stream; clear stale variants before writing.

Quick Start
-----------

>>> from genutil_pkg import sorted_keys, SortOrder, open_any, count_lines
>>> sorted_keys({"p": -5.0, "q": 3.0, "r": -4.0}, SortOrder.BY_VALUE_ABS_DESCENDING)
['p', 'r', 'q']
>>>
>>> with open_any("prices.csv") as stream:      # reads prices.csv.gz if that is what exists
...     for line in stream:
...         process(line)
>>> count_lines("prices.csv")

Supported Files
---------------
- ``.xz``: piped through ``xzcat``
- ``.gz`` / ``.bz2``: decoded in-process
- ``.zip``: first entry piped through ``unzip -p archive entry``
- ``.bash``: executable script, its stdout is the content
- anything else: read directly

Error Handling
--------------
- GenutilError: base of all package exceptions
    - ConfigurationError: invalid settings
    - FileNotFoundError: no variant of a file exists
    - FileOpenError: a resolved file cannot be opened
        - CompressionError
    - FileStateError: unremovable variant or non-executable script

A missing file is not an error during resolution; it is reported as
``ResolutionStatus.NOT_FOUND``. ``open_any`` and ``count_lines`` abort the
process instead of raising; ``open_any_err`` raises FileOpenError for callers
that want to recover.
"""

__version__ = "0.1.0"
__license__ = "EUPL-1.2 license"

from genutil_pkg.utils.formats import AccessMethod, CodingType, CommentStyle, ResolutionStatus
from genutil_pkg.config import AccessSettings, load_settings, get_default_settings, setup_logging_from_settings
from genutil_pkg.sorting import SortOrder, sorted_keys, unique_keys, sorted_unique_keys
from genutil_pkg.utils.resolver import (
    Resolution,
    resolve_readable,
    resolve_writable,
    any_path_ok,
    compress_type,
    compression_basename,
    strip_compression_suffix,
    remove_compression_variants,
    readable_filename_command,
    readable_filename_timestamp,
    file_executable,
    file_size,
    path_ok,
    zip_first_member,
)
from genutil_pkg.utils.file_handler import (
    ProcessReader,
    open_any,
    open_any_err,
    count_lines,
    count_file_lines,
    is_comment_line,
    open_writer,
    write_string_to_file,
    write_string_to_gzip_file,
)
from genutil_pkg.exceptions import (
    GenutilError,
    ConfigurationError,
    FileNotFoundError,
    FileOpenError,
    CompressionError,
    FileStateError,
)
from genutil_pkg.logger import setup_logging, get_logger

__all__ = [
    # Ordering
    'SortOrder',
    'sorted_keys',
    'unique_keys',
    'sorted_unique_keys',

    # Resolution
    'Resolution',
    'AccessMethod',
    'CodingType',
    'ResolutionStatus',
    'resolve_readable',
    'resolve_writable',
    'any_path_ok',
    'compress_type',
    'compression_basename',
    'strip_compression_suffix',
    'remove_compression_variants',
    'readable_filename_command',
    'readable_filename_timestamp',
    'file_executable',
    'file_size',
    'path_ok',
    'zip_first_member',

    # Streams
    'ProcessReader',
    'CommentStyle',
    'open_any',
    'open_any_err',
    'count_lines',
    'count_file_lines',
    'is_comment_line',
    'open_writer',
    'write_string_to_file',
    'write_string_to_gzip_file',

    # Settings
    'AccessSettings',
    'load_settings',
    'get_default_settings',
    'setup_logging_from_settings',

    # Exceptions
    'GenutilError',
    'ConfigurationError',
    'FileNotFoundError',
    'FileOpenError',
    'CompressionError',
    'FileStateError',

    # Logging
    'setup_logging',
    'get_logger',

    # Version info
    '__version__',
    '__license__',
]
