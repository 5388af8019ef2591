"""
Unit tests for the RTF decoder.
"""

import pytest

from labfile.core.models import Color, FormatAttributes
from labfile.builder.rich.rtf import DecodeFailure, decode_rtf


class TestDecodeRtf:
    """Tests for decode_rtf function."""

    def test_decode_when_highlighter_output_then_text_matches_code(self, rich_code):
        doc = decode_rtf(rich_code)
        assert doc.text == 'int x = "a b";\nreturn x;'

    def test_decode_when_highlighter_output_then_blocks_carry_formatting(self, rich_code):
        doc = decode_rtf(rich_code)
        blocks = [(b.text, b.attributes) for b in doc.blocks]

        assert blocks[0] == ("int", FormatAttributes(bold=True, color_ref=1))
        assert ('"a b"', FormatAttributes(color_ref=2)) in blocks
        assert blocks[-1] == (" x;", FormatAttributes())

    def test_decode_when_color_table_then_auto_slot_skipped(self, rich_code):
        table = decode_rtf(rich_code).color_table

        assert table.lookup(0) is None
        assert table.lookup(1) == Color(0, 0, 255)
        assert table.lookup(2) == Color(163, 21, 21)

    def test_decode_when_font_table_then_not_in_text(self, rich_code):
        assert "Consolas" not in decode_rtf(rich_code).text

    def test_decode_when_toggle_off_then_attribute_cleared(self):
        doc = decode_rtf(r"{\rtf1 \b bold\b0 plain}")
        assert [(b.text, b.attributes.bold) for b in doc.blocks] == [("bold", True), ("plain", False)]

    def test_decode_when_plain_then_all_attributes_reset(self):
        doc = decode_rtf(r"{\rtf1 \i\ul\cf3 a\plain b}")
        assert doc.blocks[-1].attributes == FormatAttributes()

    def test_decode_when_escaped_symbols_then_literal(self):
        assert decode_rtf(r"{\rtf1 a\{b\}c\\d}").text == "a{b}c\\d"

    def test_decode_when_hex_escape_then_codepage_decoded(self):
        assert decode_rtf(r"{\rtf1\ansi\ansicpg1252 caf\'e9}").text == "café"

    def test_decode_when_unicode_escape_then_fallback_skipped(self):
        assert decode_rtf(r"{\rtf1 \u960?r}").text == "πr"

    def test_decode_when_tab_and_line_then_characters(self):
        assert decode_rtf(r"{\rtf1 a\tab b\line c}").text == "a\tb\nc"

    def test_decode_when_ignorable_destination_then_skipped(self):
        assert decode_rtf(r"{\rtf1 {\*\generator Pygments;}x}").text == "x"

    def test_decode_when_raw_newlines_then_ignored(self):
        assert decode_rtf("{\\rtf1 a\r\nb}").text == "ab"

    def test_decode_when_empty_document_then_no_blocks(self):
        assert decode_rtf(r"{\rtf1}").blocks == ()

    @pytest.mark.parametrize(
        "text",
        [
            "plain text",
            "",
            r"{\rtf1 never closed",
            r"{\rtf1 a}}",
            "{\\rtf1 a\\",
            r"{\rtf1 \'zz}",
            r"{\rtf1 \'-1}",
            r"{\rtf1 \'f}",
            r"{\rtf1 \u9999999 x}",
            r"{\rtf1 \u-70000 x}",
        ],
    )
    def test_decode_when_malformed_then_raises_decode_failure(self, text):
        with pytest.raises(DecodeFailure):
            decode_rtf(text)

    def test_decode_when_color_component_out_of_range_then_clamped(self):
        doc = decode_rtf(r"{\rtf1{\colortbl;\red-1\green300\blue7;}x}")
        assert doc.color_table.lookup(1) == Color(0, 255, 7)
