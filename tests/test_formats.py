"""
Unit tests for the formats module.

Tests enums including:
- CodingType (compression types, suffixes)
- AccessMethod
- CommentStyle
"""

import pytest

from genutil_pkg.utils.formats import AccessMethod, CodingType, CommentStyle, ResolutionStatus


class TestCodingType:
    """Tests for CodingType enum."""

    def test_enum_values(self):
        """Test that enum values are correct."""
        assert CodingType.XZ.value == "xz"
        assert CodingType.GZIP.value == "gzip"
        assert CodingType.BZIP2.value == "bzip2"
        assert CodingType.ZIP.value == "zip"
        assert CodingType.NONE.value == "none"

    def test_suffixes(self):
        """Test canonical suffixes."""
        assert CodingType.XZ.suffix == ".xz"
        assert CodingType.GZIP.suffix == ".gz"
        assert CodingType.BZIP2.suffix == ".bz2"
        assert CodingType.ZIP.suffix == ".zip"
        assert CodingType.NONE.suffix == ""

    def test_lookup_by_value_only(self):
        """Test that only canonical values construct a member."""
        assert CodingType("gzip") == CodingType.GZIP
        with pytest.raises(ValueError):
            CodingType(".gz")


class TestAccessMethod:
    """Tests for AccessMethod enum."""

    def test_uses_subprocess(self):
        """Test which methods read from a subprocess."""
        assert AccessMethod.EXTERNAL_PIPE.uses_subprocess
        assert AccessMethod.SCRIPT_EXEC.uses_subprocess
        assert not AccessMethod.IN_PROCESS_DECODE.uses_subprocess
        assert not AccessMethod.DIRECT_READ.uses_subprocess
        assert not AccessMethod.NOT_FOUND.uses_subprocess

    def test_resolution_status_values(self):
        """Test ResolutionStatus members."""
        assert {s.value for s in ResolutionStatus} == {"exact", "variant", "not_found"}


class TestCommentStyle:
    """Tests for CommentStyle enum."""

    def test_camel_case_names(self):
        """Test construction from the CamelCase style names."""
        assert CommentStyle("Whitespace") == CommentStyle.WHITESPACE
        assert CommentStyle("WhitespaceHash") == CommentStyle.WHITESPACE_HASH

    @pytest.mark.parametrize("value,expected", [
        ("whitespace", CommentStyle.WHITESPACE),
        ("whitespace_hash", CommentStyle.WHITESPACE_HASH),
        ("WHITESPACE-HASH", CommentStyle.WHITESPACE_HASH),
    ])
    def test_flexible_names(self, value, expected):
        """Test _missing_ normalization."""
        assert CommentStyle(value) == expected

    def test_invalid_style_raises(self):
        """Test that unknown styles raise ValueError."""
        with pytest.raises(ValueError):
            CommentStyle("Semicolon")
