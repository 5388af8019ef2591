"""
Unit tests for document assembly.
"""

import pytest

from labfile.core.models import Entry, Paragraph, RichDocument
from labfile.builder.layout.assembler import (
    DEFAULT_STYLES,
    AssemblyOptions,
    assemble_document,
    render_entry,
)
from labfile.builder.layout.config import AlignmentStrategy, DocumentConfig
from labfile.builder.layout.runs import build_plain_code_paragraphs
from labfile.builder.rich.rtf import DecodeFailure


@pytest.fixture
def config() -> DocumentConfig:
    return DocumentConfig.from_dict(
        {
            "question": {"text": "Q{n}: {question}"},
            "solution": {"text": "{solution}", "title": {"text": "Solution"}},
            "output": {"text": "{output}", "title": {"text": "Output"}},
        }
    )


def make_entry(index: int, **overrides) -> Entry:
    fields = dict(index=index, question=f"q{index}", code=f"code{index}", output=f"out{index}")
    fields.update(overrides)
    return Entry(**fields)


def texts(paragraphs) -> list[str]:
    return [p.text for p in paragraphs]


class TestRenderEntry:
    def test_render_when_no_header_or_footer_then_sections_with_separators(self, config):
        paragraphs = render_entry(make_entry(0), config)

        assert texts(paragraphs) == ["Q1: q0", "", "Solution", "code0", "", "Output", "out0", ""]

    def test_render_when_header_and_footer_then_wrapped(self, config):
        from dataclasses import replace
        from labfile.builder.layout.config import SectionStyle

        config = replace(config, header=SectionStyle(text="Lab {n}"), footer=SectionStyle(text="end"))

        paragraphs = render_entry(make_entry(2), config)

        assert texts(paragraphs)[:3] == ["Lab 3", "", "Q3: q2"]
        assert texts(paragraphs)[-2:] == ["", "end"]

    def test_render_when_rich_code_then_highlighted_solution(self, config, rich_code):
        entry = make_entry(0, code='int x = "a b";\nreturn x;', rich_code=rich_code)

        paragraphs = render_entry(entry, config)

        solution = paragraphs[3:5]
        assert texts(solution) == ['int x = "a b";', "return x;"]
        assert solution[0].runs[0].style.bold

    def test_render_when_template_lacks_solution_placeholder_then_plain_template(self, rich_code):
        config = DocumentConfig.from_dict(
            {
                "question": {"text": "{question}"},
                "solution": {"text": "see attached", "title": {"text": "Solution"}},
                "output": {"text": "{output}", "title": {"text": "Output"}},
            }
        )
        paragraphs = render_entry(make_entry(0, rich_code=rich_code), config)

        assert texts(paragraphs)[3] == "see attached"

    def test_render_when_decode_fails_then_same_text_as_plain_fallback(self, config):
        warnings: list = []
        entry = make_entry(0, code="a = 1\nb = 2", rich_code="not rtf at all")

        paragraphs = render_entry(entry, config, warnings=warnings)

        fallback = build_plain_code_paragraphs(entry.code, style="Normal")
        assert paragraphs[3:5] == fallback
        assert len(warnings) == 1
        assert "Entry 1" in warnings[0]

    @pytest.mark.parametrize(
        "rich_code",
        [
            r"{\rtf1 \'-1}",
            r"{\rtf1 \u9999999 x}",
            r"{\rtf1{\colortbl;\red-1\green0\blue0;}\'g0}",
        ],
    )
    def test_render_when_rich_code_has_bad_escape_then_plain_fallback(self, config, rich_code):
        warnings: list = []
        entry = Entry(index=0, question="q", code="x", output="o", rich_code=rich_code)

        paragraphs = render_entry(entry, config, warnings=warnings)

        assert paragraphs[3] == build_plain_code_paragraphs("x", style="Normal")[0]
        assert len(warnings) == 1

    def test_render_when_output_has_ansi_then_cleaned(self, config):
        paragraphs = render_entry(make_entry(0, output="\x1b[31mHELLO\x1b[0m"), config)
        assert "HELLO" in texts(paragraphs)

    def test_render_when_custom_decoder_then_used(self, config):
        calls = []

        def decoder(text: str) -> RichDocument:
            calls.append(text)
            raise DecodeFailure("nope")

        render_entry(make_entry(0, rich_code="{\\rtf1 x}"), config, AssemblyOptions(decoder=decoder))

        assert calls == ["{\\rtf1 x}"]


class TestAssembleDocument:
    """Tests for assemble_document function."""

    def test_assemble_when_unordered_then_sorted_by_index(self, config):
        doc = assemble_document([make_entry(1), make_entry(0)], config)

        questions = [t for t in texts(doc.paragraphs) if t.startswith("Q")]
        assert questions == ["Q1: q0", "Q2: q1"]

    def test_assemble_when_two_entries_then_single_break_between(self, config):
        doc = assemble_document([make_entry(1), make_entry(0)], config)

        breaks = [i for i, p in enumerate(doc.paragraphs) if p.is_page_break]
        assert doc.page_break_count == 1
        assert breaks[0] == len(render_entry(make_entry(0), config))
        assert not doc.paragraphs[-1].is_page_break

    def test_assemble_when_single_entry_then_no_page_break(self, config):
        assert assemble_document([make_entry(0)], config).page_break_count == 0

    def test_assemble_when_no_entries_then_empty(self, config):
        doc = assemble_document([], config)
        assert doc.paragraphs == ()
        assert doc.styles == DEFAULT_STYLES

    def test_assemble_when_decode_fails_then_warning_recorded(self, config):
        doc = assemble_document([make_entry(0, rich_code="{\\rtf1 broken")], config)
        assert len(doc.warnings) == 1

    @pytest.mark.parametrize("strategy", list(AlignmentStrategy))
    def test_assemble_when_strategy_then_paragraph_per_code_line(self, config, rich_code, strategy):
        entry = make_entry(0, code='int x = "a b";\nreturn x;', rich_code=rich_code)
        doc = assemble_document([entry], config, AssemblyOptions(alignment=strategy))

        assert texts(doc.paragraphs)[3:5] == ['int x = "a b";', "return x;"]


class TestDefaultStyles:
    def test_styles_when_registered_then_heading_labels_spaced(self):
        labels = {s.style_id: s.label for s in DEFAULT_STYLES}
        assert labels["Heading1"] == "Heading 1"
        assert labels["Strong"] == "Strong"
        assert len(DEFAULT_STYLES) == 12
