"""
Unit tests for the rich token index.
"""

from labfile.core.models import FormatAttributes, RichBlock, RichDocument
from labfile.builder.rich.index import RichIndex, build_rich_index

BOLD = FormatAttributes(bold=True)
ITALIC = FormatAttributes(italic=True)


def make_doc(*blocks: RichBlock) -> RichDocument:
    return RichDocument(blocks=tuple(blocks))


class TestBuildRichIndex:
    def test_build_when_compound_block_then_parts_and_whole_indexed(self):
        index = build_rich_index(make_doc(RichBlock("System.out.println(", ITALIC)))

        for key in ("System", "out", "println", ".", "(", "System.out.println("):
            assert index.get(key) == ITALIC

    def test_build_when_blank_block_then_skipped(self):
        index = build_rich_index(make_doc(RichBlock(" \r\n\t", BOLD)))
        assert len(index) == 0

    def test_build_when_newline_inside_block_then_treated_as_space(self):
        index = build_rich_index(make_doc(RichBlock("int\nx", BOLD)))
        assert "int x" in index
        assert "int" in index and "x" in index

    def test_build_when_key_repeated_then_later_block_wins(self):
        index = build_rich_index(make_doc(RichBlock("x", BOLD), RichBlock("x", ITALIC)))
        assert index.get("x") == ITALIC

    def test_items_when_key_overwritten_then_first_position_kept(self):
        index = RichIndex()
        index.add("a", BOLD)
        index.add("b", BOLD)
        index.add("a", ITALIC)

        assert [k for k, _ in index.items()] == ["a", "b"]

    def test_build_when_operators_then_not_split(self):
        index = build_rich_index(make_doc(RichBlock("a+b", BOLD)))
        assert "a+b" in index
        assert "a" not in index
