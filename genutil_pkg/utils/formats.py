"""
Compression, access-method and comment-style enumerations.

Provides enums for:
    - CodingType: Compression formats recognized from filename suffixes
    - AccessMethod: How the bytes of a resolved file are obtained
    - ResolutionStatus: Whether and how a logical filename was found
    - CommentStyle: Comment-line recognizers used when counting lines

CommentStyle supports flexible names via _missing_.
"""

from enum import Enum


class CodingType(Enum):
    """
    Compression types recognized from filename suffixes.

    - XZ: .xz files, read through an external xzcat pipe
    - GZIP: .gz files, decoded in-process
    - BZIP2: .bz2 files, decoded in-process
    - ZIP: .zip archives, first entry read through an external unzip pipe
    - NONE: Anything else
    """
    XZ = "xz"
    GZIP = "gzip"
    BZIP2 = "bzip2"
    ZIP = "zip"
    NONE = "none"

    @property
    def suffix(self) -> str:
        """Canonical filename suffix, empty for NONE."""
        return _SUFFIXES[self]


_SUFFIXES = {
    CodingType.XZ: ".xz",
    CodingType.GZIP: ".gz",
    CodingType.BZIP2: ".bz2",
    CodingType.ZIP: ".zip",
    CodingType.NONE: "",
}


class AccessMethod(Enum):
    """How the content of a resolved file is obtained."""
    DIRECT_READ = "direct"
    IN_PROCESS_DECODE = "decode"
    EXTERNAL_PIPE = "pipe"
    SCRIPT_EXEC = "script"
    NOT_FOUND = "not_found"

    @property
    def uses_subprocess(self) -> bool:
        return self in (AccessMethod.EXTERNAL_PIPE, AccessMethod.SCRIPT_EXEC)


class ResolutionStatus(Enum):
    """Outcome of resolving a logical filename."""
    EXACT = "exact"
    VARIANT = "variant"
    NOT_FOUND = "not_found"


class CommentStyle(Enum):
    """
    Comment-line recognizers.

    - WHITESPACE: non-empty lines made only of spaces
    - WHITESPACE_HASH: lines whose first non-space character is '#'
    """
    WHITESPACE = "Whitespace"
    WHITESPACE_HASH = "WhitespaceHash"

    @classmethod
    def _missing_(cls, value):
        """
        Handle CommentStyle('whitespace'), CommentStyle('whitespace_hash'),
        CommentStyle('WHITESPACEHASH')
        """
        value_lower = str(value).lower().strip().replace('_', '').replace('-', '')
        for member in cls:
            if member.value.lower() == value_lower:
                return member
        raise ValueError(f"'{value}' is not a valid {cls.__name__}")
