"""Tests for hex color parsing and formatting."""

import pytest

from pxl.core.color import Color, parse_hex, to_hex
from pxl.errors import ValidationError


class TestParseHex:
    """Tests for parse_hex."""

    def test_short_form(self):
        """#RGB doubles each digit."""
        assert parse_hex("#f00") == Color(255, 0, 0, 255)

    def test_long_form_without_hash(self):
        """The leading # is optional."""
        assert parse_hex("00ff00") == Color(0, 255, 0, 255)

    def test_with_alpha(self):
        assert parse_hex("#11223344") == Color(0x11, 0x22, 0x33, 0x44)

    @pytest.mark.parametrize("text", ["", "#", "#12345", "#zzz", "#1234567890"])
    def test_invalid(self, text):
        """Wrong lengths and non-hex digits are rejected."""
        with pytest.raises(ValidationError, match="Invalid hex color"):
            parse_hex(text)


class TestToHex:
    """Tests for to_hex."""

    def test_opaque_drops_alpha(self):
        assert to_hex(Color(255, 0, 16)) == "#ff0010"

    def test_translucent_keeps_alpha(self):
        assert to_hex(Color(255, 0, 0, 128)) == "#ff000080"

    def test_str_is_hex(self):
        assert str(Color(1, 2, 3)) == "#010203"
