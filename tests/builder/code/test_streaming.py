"""
Unit tests for character-stream alignment.
"""

from labfile.core.models import FormatAttributes, RichBlock, RichDocument
from labfile.builder.code.streaming import align_stream

BOLD = FormatAttributes(bold=True)
PLAIN = FormatAttributes()


def make_doc(*blocks: RichBlock) -> RichDocument:
    return RichDocument(blocks=tuple(blocks))


class TestAlignStream:
    def test_align_when_identical_text_then_formats_replayed(self):
        doc = make_doc(RichBlock("int", BOLD), RichBlock(" x;\n"), RichBlock("int", BOLD))

        lines = align_stream("int x;\nint", doc)

        assert lines == [[("int", BOLD), (" x;", PLAIN)], [("int", BOLD)]]

    def test_align_when_rich_drops_characters_then_unmatched_get_none(self):
        doc = make_doc(RichBlock("ab", BOLD))
        assert align_stream("a#b", doc) == [[("a", BOLD), ("#", None), ("b", BOLD)]]

    def test_align_when_rich_has_extra_characters_then_resynced(self):
        doc = make_doc(RichBlock("a"), RichBlock("  ", BOLD), RichBlock("b"))
        assert align_stream("ab", doc) == [[("ab", PLAIN)]]

    def test_align_when_empty_line_then_empty_segment_list(self):
        lines = align_stream("a\n\nb", make_doc(RichBlock("a\n\nb")))
        assert lines[1] == []
        assert len(lines) == 3

    def test_align_when_any_input_then_text_lossless(self):
        code = 'String s = "x";\n\treturn s;'
        doc = make_doc(RichBlock("String", BOLD), RichBlock(' s = "x";\r\n    return s;'))

        lines = align_stream(code, doc)

        assert ["".join(t for t, _ in line) for line in lines] == code.split("\n")
