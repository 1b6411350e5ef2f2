"""
Resolution of logical filenames to physical files.

A logical filename such as ``prices.csv`` may be stored on disk as
``prices.csv``, ``prices.csv.xz``, ``prices.csv.gz``, ``prices.csv.bz2`` or
``prices.csv.zip``. The resolver picks the physical file and how its content
is obtained:

- resolve_readable(): read-only lookup, exact name first, then variants
- resolve_writable(): same lookup, removing the first match so that a freshly
  written file is never shadowed by a stale compressed sibling

Suffix priority is fixed: .xz, .gz, .bz2, .zip, then the bare base name.
Matching is case-sensitive; only compress_type() and the basename helpers
also accept .ZIP.
"""

import os
import re
import zipfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from genutil_pkg.config import AccessSettings, resolve_settings
from genutil_pkg.exceptions import CompressionError, FileStateError
from genutil_pkg.logger import get_logger
from genutil_pkg.utils.formats import AccessMethod, CodingType, ResolutionStatus

BASH_SUFFIX = ".bash"

# Order in which variants of a base name are tried
VARIANT_CODINGS = (
    CodingType.XZ,
    CodingType.GZIP,
    CodingType.BZIP2,
    CodingType.ZIP,
    CodingType.NONE,
)

_SUFFIX_CODINGS = (
    (".xz", CodingType.XZ),
    (".gz", CodingType.GZIP),
    (".bz2", CodingType.BZIP2),
    (".zip", CodingType.ZIP),
)

_ACCESS_METHODS = {
    CodingType.XZ: AccessMethod.EXTERNAL_PIPE,
    CodingType.GZIP: AccessMethod.IN_PROCESS_DECODE,
    CodingType.BZIP2: AccessMethod.IN_PROCESS_DECODE,
    CodingType.ZIP: AccessMethod.EXTERNAL_PIPE,
    CodingType.NONE: AccessMethod.DIRECT_READ,
}

PathLike = Union[str, Path]


@dataclass(frozen=True)
class Resolution:
    """
    Result of resolving a logical filename.

    Attributes:
        requested: Filename as the caller gave it
        path: Physical file chosen (the null device when nothing was found)
        method: How the content of ``path`` is obtained
        coding: Compression of ``path``
        status: EXACT, VARIANT or NOT_FOUND
    """
    requested: str
    path: str
    method: AccessMethod
    coding: CodingType
    status: ResolutionStatus

    @property
    def found(self) -> bool:
        return self.status != ResolutionStatus.NOT_FOUND

    def command(self, settings: Optional[AccessSettings] = None) -> List[str]:
        """
        Subprocess argv that writes the content of the resolved file to stdout.

        In-process decoders and direct reads have shell equivalents too, which
        keeps the output useful for logging and for readable_filename_command().
        A zip archive contributes its first entry only. An unresolved file has
        no command and yields an empty list.

        Raises:
            CompressionError: If a zip archive is invalid or empty
        """
        settings = resolve_settings(settings)
        if self.method == AccessMethod.NOT_FOUND:
            return []
        if self.method == AccessMethod.SCRIPT_EXEC:
            return [self.path]
        if self.coding == CodingType.ZIP:
            member = zip_first_member(self.path)
            return [settings.unzip_tool, '-p', self.path, _unzip_literal(member)]
        commands = {
            CodingType.XZ: [settings.xz_tool],
            CodingType.GZIP: ['gzip', '-dc'],
            CodingType.BZIP2: ['bzip2', '-dc'],
            CodingType.NONE: ['cat'],
        }
        return commands[self.coding] + [self.path]


def zip_first_member(path: PathLike) -> str:
    """
    Name of the first entry of a zip archive.

    Raises:
        CompressionError: If the file is not a zip archive or has no entries
    """
    try:
        with zipfile.ZipFile(path) as archive:
            names = archive.namelist()
    except zipfile.BadZipFile as e:
        raise CompressionError(f"Not a valid zip archive: {path}: {e}") from e
    if not names:
        raise CompressionError(f"Zip archive has no entries: {path}")
    return names[0]


def _unzip_literal(member: str) -> str:
    # unzip treats member arguments as wildcard patterns
    return re.sub(r'([\[*?])', r'[\1]', member)


def path_ok(path: PathLike) -> bool:
    """True if the path exists (file or directory)."""
    return os.path.exists(path)


def file_executable(path: PathLike) -> bool:
    """True if the path exists and any execute bit is set."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return (mode & 0o111) != 0


def file_size(path: PathLike) -> int:
    """Size of the file in bytes, or -1 if it does not exist."""
    try:
        return os.stat(path).st_size
    except FileNotFoundError:
        return -1


def compress_type(filename: PathLike) -> CodingType:
    """
    Compression indicated by the filename suffix.

    Examples:
        >>> compress_type("prices.csv.gz")
        <CodingType.GZIP: 'gzip'>
        >>> compress_type("ARCHIVE.ZIP")
        <CodingType.ZIP: 'zip'>
        >>> compress_type("prices.csv")
        <CodingType.NONE: 'none'>
    """
    filename = str(filename)
    for suffix, coding in _SUFFIX_CODINGS:
        if filename.endswith(suffix):
            return coding
    if filename.endswith(".ZIP"):
        return CodingType.ZIP
    return CodingType.NONE


def strip_compression_suffix(filename: PathLike) -> str:
    """Remove one trailing .xz/.gz/.bz2/.zip suffix (case-sensitive)."""
    filename = str(filename)
    for suffix, _ in _SUFFIX_CODINGS:
        if filename.endswith(suffix):
            return filename[:-len(suffix)]
    return filename


def compression_basename(filename: PathLike) -> str:
    """
    Uncompressed name of a file, stripping every compression suffix.

    Examples:
        >>> compression_basename("prices.csv.gz")
        'prices.csv'
        >>> compression_basename("prices.csv.gz.ZIP")
        'prices.csv'
    """
    filename = str(filename)
    while True:
        if filename.endswith(".ZIP"):
            stripped = filename[:-4]
        else:
            stripped = strip_compression_suffix(filename)
        if stripped == filename:
            return filename
        filename = stripped


def _found(requested: str, path: str, coding: CodingType, status: ResolutionStatus) -> Resolution:
    return Resolution(
        requested=requested,
        path=path,
        method=_ACCESS_METHODS[coding],
        coding=coding,
        status=status,
    )


def _not_found(requested: str, settings: AccessSettings) -> Resolution:
    return Resolution(
        requested=requested,
        path=settings.null_device,
        method=AccessMethod.NOT_FOUND,
        coding=CodingType.NONE,
        status=ResolutionStatus.NOT_FOUND,
    )


def _find_variant(filename: str) -> Optional[Resolution]:
    base = strip_compression_suffix(filename)
    for coding in VARIANT_CODINGS:
        candidate = base + coding.suffix
        if path_ok(candidate):
            return _found(filename, candidate, coding, ResolutionStatus.VARIANT)
    return None


def resolve_readable(filename: PathLike, settings: Optional[AccessSettings] = None) -> Resolution:
    """
    Find the physical file holding the content of a logical filename.

    Lookup order:
    1. The name exactly as given. A ``.bash`` file is run as a script and
       must be executable; anything else is read according to its suffix.
    2. The name with one compression suffix stripped, followed by
       ``.xz``, ``.gz``, ``.bz2``, ``.zip`` and finally nothing.
    3. Not found: the result points at the null device.

    Args:
        filename: Logical filename
        settings: Optional AccessSettings (defaults if None)

    Returns:
        Resolution describing the chosen file

    Raises:
        FileStateError: If a .bash file exists without execute permission

    Example:
        >>> # only prices.csv.gz exists
        >>> res = resolve_readable("prices.csv")
        >>> res.path, res.method
        ('prices.csv.gz', <AccessMethod.IN_PROCESS_DECODE: 'decode'>)
    """
    settings = resolve_settings(settings)
    logger = get_logger()
    filename = str(filename)

    if path_ok(filename):
        if filename.endswith(BASH_SUFFIX):
            if not file_executable(filename):
                raise FileStateError(f"bash file exists without execute permissions: {filename}")
            resolution = Resolution(
                requested=filename,
                path=filename,
                method=AccessMethod.SCRIPT_EXEC,
                coding=CodingType.NONE,
                status=ResolutionStatus.EXACT,
            )
        else:
            resolution = _found(filename, filename, compress_type(filename), ResolutionStatus.EXACT)
    else:
        resolution = _find_variant(filename) or _not_found(filename, settings)

    logger.debug(
        "Resolved readable file",
        component="resolver",
        file_context=filename,
        path=resolution.path,
        method=resolution.method.value,
        status=resolution.status.value,
    )
    return resolution


def path_remove_or_die(path: PathLike) -> bool:
    """
    Remove a file, treating failure as a broken deployment.

    Raises:
        FileStateError: If the file cannot be removed
    """
    try:
        os.remove(path)
    except OSError as e:
        raise FileStateError(f"Failed to remove {path}: {e}") from e
    return True


def resolve_writable(filename: PathLike, settings: Optional[AccessSettings] = None) -> Resolution:
    """
    Clear the way for writing a logical filename.

    Searches like resolve_readable() (without the script rule) and removes the
    first file found, so that a newly written ``prices.csv`` is not shadowed
    by an old ``prices.csv.gz``. Only the first match is removed; use
    remove_compression_variants() to remove every variant.

    Args:
        filename: Logical filename about to be written
        settings: Optional AccessSettings (defaults if None)

    Returns:
        Resolution describing the removed file, or NOT_FOUND if none existed

    Raises:
        FileStateError: If the matching file cannot be removed
    """
    settings = resolve_settings(settings)
    filename = str(filename)

    if path_ok(filename):
        resolution = _found(filename, filename, compress_type(filename), ResolutionStatus.EXACT)
    else:
        resolution = _find_variant(filename)

    if resolution is None:
        return _not_found(filename, settings)

    path_remove_or_die(resolution.path)
    get_logger().info(
        f"Removed existing file: {resolution.path}",
        component="resolver",
        file_context=filename,
        status=resolution.status.value,
    )
    return resolution


def remove_compression_variants(filename: PathLike, keep_base: bool = False) -> List[str]:
    """
    Remove every compression variant of a file.

    Args:
        filename: Any name of the file, compressed or not
        keep_base: If True, the uncompressed base file is left in place

    Returns:
        Paths that were removed

    Raises:
        FileStateError: If an existing variant cannot be removed
    """
    base = compression_basename(filename)
    removed = []
    for ext in ("", ".xz", ".gz", ".bz2", ".zip", ".ZIP"):
        if keep_base and ext == "":
            continue
        candidate = base + ext
        if path_ok(candidate):
            path_remove_or_die(candidate)
            removed.append(candidate)
    if removed:
        get_logger().info(f"Removed {len(removed)} compression variant(s) of {base}", component="resolver")
    return removed


def any_path_ok(filename: PathLike, settings: Optional[AccessSettings] = None) -> bool:
    """True if some readable variant of the file exists."""
    return resolve_readable(filename, settings).found


def readable_filename_command(filename: PathLike, settings: Optional[AccessSettings] = None) -> str:
    """
    Shell command that prints the content of the file, or "" if not found.

    Example:
        >>> readable_filename_command("prices.csv")  # only prices.csv.xz exists
        'xzcat prices.csv.xz'
    """
    return ' '.join(resolve_readable(filename, settings).command(settings))


def readable_filename_timestamp(filename: PathLike, settings: Optional[AccessSettings] = None) -> str:
    """
    Modification time of the resolved file, e.g. ``Mon 20240102 15:04:05 UTC``.

    Returns "" if no variant of the file exists.
    """
    resolution = resolve_readable(filename, settings)
    if not resolution.found:
        return ""
    try:
        mtime = os.stat(resolution.path).st_mtime
    except FileNotFoundError:
        return ""
    return datetime.fromtimestamp(mtime).astimezone().strftime("%a %Y%m%d %H:%M:%S %Z")
