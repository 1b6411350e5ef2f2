"""
Stream access to resolved files.

Provides unified utilities for:
- Reading any compression variant of a file as one buffered byte stream
- Counting lines of such streams without loading them into memory
- Writing files after clearing stale compression variants

Two calling styles exist for opening:
- open_any_err(): returns None for a missing file and raises FileOpenError
  when a resolved file cannot be opened, for callers that recover
- open_any(): aborts the process (SystemExit) on either condition

.gz and .bz2 content is decoded in-process; .xz, .zip and executable .bash
files are read from the stdout of a subprocess running concurrently with the
reader. There is no read timeout: a hung decompressor blocks the reader.
"""

import bz2
import gzip
import io
import os
import shutil
import subprocess
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional, Union

from genutil_pkg.config import AccessSettings, resolve_settings
from genutil_pkg.exceptions import (
    CompressionError,
    FileOpenError,
    FileNotFoundError as GenutilFileNotFoundError,
)
from genutil_pkg.logger import get_logger
from genutil_pkg.utils.formats import AccessMethod, CodingType, CommentStyle
from genutil_pkg.utils.resolver import Resolution, compress_type, resolve_readable, resolve_writable

PathLike = Union[str, Path]

# Installation hints for the external tools behind EXTERNAL_PIPE resolutions
_TOOL_INSTALL_HINTS = {
    CodingType.XZ: 'sudo apt-get install xz-utils',
    CodingType.ZIP: 'sudo apt-get install unzip',
}

# Cache for tool availability checks
_TOOL_CACHE = {}


def check_tool_available(tool_name: str) -> bool:
    """
    Check if an external tool is on PATH.

    Results are cached to avoid repeated lookups.

    Example:
        >>> if not check_tool_available('xzcat'):
        ...     print("install xz-utils to read .xz files")
    """
    if tool_name not in _TOOL_CACHE:
        _TOOL_CACHE[tool_name] = shutil.which(tool_name) is not None
    return _TOOL_CACHE[tool_name]


def _abort(message: str, **context):
    """Log a critical message and stop the process."""
    get_logger().critical(message, **context)
    raise SystemExit(message)


class ProcessReader(io.BufferedReader):
    """
    Buffered reader over the stdout of a subprocess.

    Closing the reader closes the pipe and reaps the subprocess. A child
    still writing when the reader is closed early ends with SIGPIPE, which is
    not treated as an error.
    """

    def __init__(self, process: subprocess.Popen, buffer_size: int = io.DEFAULT_BUFFER_SIZE):
        super().__init__(process.stdout, buffer_size)
        self.process = process

    @property
    def returncode(self) -> Optional[int]:
        return self.process.returncode

    def close(self):
        if self.closed:
            return
        try:
            super().close()
        finally:
            returncode = self.process.wait()
            if returncode > 0:
                get_logger().warning(
                    f"Subprocess {self.process.args[0]} exited with status {returncode}",
                    component="reader",
                )


def _open_pipe(resolution: Resolution, settings: AccessSettings) -> ProcessReader:
    argv = resolution.command(settings)
    if resolution.method == AccessMethod.SCRIPT_EXEC and os.sep not in argv[0]:
        # Run the script from the working directory, not from PATH
        argv[0] = os.path.join(os.curdir, argv[0])
    try:
        process = subprocess.Popen(argv, stdout=subprocess.PIPE, bufsize=0)
    except OSError as e:
        hint = _TOOL_INSTALL_HINTS.get(resolution.coding)
        if hint and not check_tool_available(argv[0]):
            raise FileOpenError(f"Cannot start {argv[0]} for {resolution.path} (install: {hint}): {e}") from e
        raise FileOpenError(f"Cannot start {' '.join(argv)}: {e}") from e
    return ProcessReader(process, settings.read_buffer_size)


def _open_decoder(resolution: Resolution, settings: AccessSettings) -> io.BufferedReader:
    opener = gzip.open if resolution.coding == CodingType.GZIP else bz2.open
    stream = io.BufferedReader(opener(resolution.path, 'rb'), buffer_size=settings.read_buffer_size)
    # Decode the first block now so a corrupt header fails at open time
    try:
        stream.peek(1)
    except (OSError, EOFError) as e:
        stream.close()
        raise CompressionError(f"Failed to decode {resolution.path}: {e}") from e
    return stream


def open_any_err(filename: PathLike, settings: Optional[AccessSettings] = None) -> Optional[BinaryIO]:
    """
    Open any compression variant of a file as a buffered byte stream.

    The returned stream supports readline(), read() and line iteration and is
    a context manager; the caller must close it.

    Args:
        filename: Logical filename (see resolve_readable)
        settings: Optional AccessSettings (defaults if None)

    Returns:
        Buffered binary reader, or None if no variant of the file exists

    Raises:
        FileOpenError: If the resolved file or its subprocess cannot be opened
        CompressionError: If a .gz/.bz2 stream is corrupt or a .zip archive
            is invalid or empty
        FileStateError: If a .bash file is not executable

    Example:
        >>> stream = open_any_err("prices.csv")
        >>> if stream is not None:
        ...     with stream:
        ...         header = stream.readline()
    """
    settings = resolve_settings(settings)
    resolution = resolve_readable(filename, settings)

    if not resolution.found:
        get_logger().debug("No readable variant found", component="reader", file_context=str(filename))
        return None

    try:
        if resolution.method.uses_subprocess:
            return _open_pipe(resolution, settings)
        if resolution.method == AccessMethod.IN_PROCESS_DECODE:
            return _open_decoder(resolution, settings)
        return open(resolution.path, 'rb', buffering=settings.read_buffer_size)
    except OSError as e:
        raise FileOpenError(f"Failed to open {filename} (resolved to {resolution.path}): {e}") from e


def open_any(filename: PathLike, settings: Optional[AccessSettings] = None) -> BinaryIO:
    """
    Like open_any_err(), but abort the process when the file is missing or unreadable.

    Raises:
        SystemExit: If no variant exists or the resolved file cannot be opened
    """
    try:
        stream = open_any_err(filename, settings)
    except FileOpenError as e:
        _abort(f"open_any: {e}", component="reader", file_context=str(filename))
    if stream is None:
        _abort(f"open_any: no readable variant of {filename}", component="reader", file_context=str(filename))
    return stream


def count_lines(filename: PathLike, settings: Optional[AccessSettings] = None) -> int:
    """
    Count the lines of any compression variant of a file.

    A final line without a trailing newline is counted. The content is
    streamed, never held in memory as a whole.

    Raises:
        SystemExit: If the file is missing or cannot be opened
    """
    with open_any(filename, settings) as stream:
        return sum(1 for _ in stream)


def _parse_comment_styles(comment_styles: Union[str, Iterable[Union[str, CommentStyle]], None]) -> List[CommentStyle]:
    if not comment_styles:
        return []
    if isinstance(comment_styles, str):
        comment_styles = [part.strip() for part in comment_styles.split(',') if part.strip()]
    return [CommentStyle(style) for style in comment_styles]


def is_comment_line(line: Union[bytes, str], comment_styles: Iterable[CommentStyle]) -> bool:
    """
    Check if a line (without its newline) is a comment under any of the styles.

    Example:
        >>> is_comment_line(b"   # note", [CommentStyle.WHITESPACE_HASH])
        True
        >>> is_comment_line(b"", [CommentStyle.WHITESPACE])
        False
    """
    if isinstance(line, str):
        line = line.encode('utf-8')
    for style in comment_styles:
        if style == CommentStyle.WHITESPACE:
            if len(line) > 0 and len(line.strip(b' ')) == 0:
                return True
        elif style == CommentStyle.WHITESPACE_HASH:
            stripped = line.lstrip(b' ')
            if stripped.startswith(b'#'):
                return True
    return False


def count_file_lines(
    filename: PathLike,
    comment_styles: Union[str, Iterable[Union[str, CommentStyle]], None] = (),
    settings: Optional[AccessSettings] = None
) -> int:
    """
    Count newline-terminated, non-comment lines of any variant of a file.

    Unlike count_lines(), a final line without a newline is not counted and
    failures are raised instead of aborting.

    Args:
        filename: Logical filename
        comment_styles: CommentStyle members or names, or a comma-separated
            string such as "Whitespace,WhitespaceHash"
        settings: Optional AccessSettings (defaults if None)

    Returns:
        Number of counted lines

    Raises:
        FileNotFoundError: If no variant exists (package exception)
        FileOpenError: If the resolved file cannot be opened
        ValueError: If a comment style is unknown
    """
    styles = _parse_comment_styles(comment_styles)
    stream = open_any_err(filename, settings)
    if stream is None:
        raise GenutilFileNotFoundError(f"No readable variant of {filename}")

    count = 0
    with stream:
        for line in stream:
            if not line.endswith(b'\n'):
                break
            if is_comment_line(line[:-1], styles):
                continue
            count += 1
    return count


def open_writer(filename: PathLike, mode: str = 'wt', settings: Optional[AccessSettings] = None):
    """
    Create a file for writing, removing a stale compression variant first.

    The stream compresses according to the filename: ``.gz`` is written with
    gzip, ``.bz2`` with bzip2, anything else uncompressed. Paths under /dev/
    are opened as they are, without touching other files.

    Args:
        filename: File to create
        mode: 'wt' (text, default) or 'wb' (binary)
        settings: Optional AccessSettings (defaults if None)

    Returns:
        Writable file object, to be used with the 'with' statement

    Raises:
        CompressionError: If the filename asks for .xz or .zip compression
        FileStateError: If a stale variant cannot be removed
        SystemExit: If the file cannot be created

    Example:
        >>> with open_writer("report.csv.gz") as f:
        ...     f.write("symbol,price\\n")
    """
    filename = str(filename)
    coding = compress_type(filename)
    if coding in (CodingType.XZ, CodingType.ZIP):
        raise CompressionError(f"Writing {coding.value} files is not supported: {filename}")

    if not filename.startswith('/dev/'):
        resolve_writable(filename, settings)

    try:
        if coding == CodingType.GZIP:
            return gzip.open(filename, mode)
        if coding == CodingType.BZIP2:
            return bz2.open(filename, mode)
        return open(filename, mode)
    except OSError as e:
        _abort(f"open_writer: cannot create {filename}: {e}", component="writer", file_context=filename)


def write_string_to_file(text: str, filename: PathLike, settings: Optional[AccessSettings] = None):
    """Write text to a file, compressed according to its suffix."""
    with open_writer(filename, 'wt', settings) as f:
        f.write(text)


def write_string_to_gzip_file(text: str, filename: PathLike, settings: Optional[AccessSettings] = None):
    """Write text gzip-compressed, whatever the suffix of the filename."""
    filename = str(filename)
    if not filename.startswith('/dev/'):
        resolve_writable(filename, settings)
    try:
        with gzip.open(filename, 'wt') as f:
            f.write(text)
    except OSError as e:
        _abort(f"write_string_to_gzip_file: cannot write {filename}: {e}", component="writer", file_context=filename)
