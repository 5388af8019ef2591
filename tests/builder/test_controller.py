"""
Integration tests for the build controller.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from docx import Document
from pypdf import PdfReader

from labfile.builder.code.aligner import DEFAULT_KEYWORDS
from labfile.builder.config import BuilderConfig
from labfile.builder.controller import BuildError, _assembly_options, build_report
from labfile.builder.layout.config import AlignmentStrategy
from labfile.builder.loading.parser import parse_format


def docx_texts(path: Path) -> list[str]:
    return [p.text for p in Document(str(path)).paragraphs if p.text]


class TestBuilderConfig:
    def test_create_when_output_not_docx_then_raises(self, tmp_path: Path):
        with pytest.raises(ValueError, match=".docx"):
            BuilderConfig(work_dir=tmp_path, output_name="report.pdf")

    def test_create_when_output_has_directory_then_raises(self, tmp_path: Path):
        with pytest.raises(ValueError, match="bare file name"):
            BuilderConfig(work_dir=tmp_path, output_name="sub/report.docx")

    def test_paths_when_defaults_then_inside_work_dir(self, tmp_path: Path):
        config = BuilderConfig(work_dir=tmp_path)
        assert config.output_path == tmp_path / "labfile.docx"
        assert config.pdf_path == tmp_path / "labfile.pdf"


class TestBuildReport:
    """Tests for build_report function."""

    def test_build_when_valid_folder_then_docx_written_in_index_order(self, work_dir: Path):
        result = build_report(BuilderConfig(work_dir=work_dir))

        texts = docx_texts(result.docx_path)
        assert texts[0] == "Lab 1"
        assert texts.index("Q1: Declare a string") < texts.index("Q2: Print a greeting")
        assert 'int x = "a b";' in texts
        assert "hi" in texts
        assert result.entry_count == 2
        assert result.pdf_path is None
        assert result.warnings == ()

    def test_build_when_cleanup_default_then_entries_removed(self, work_dir: Path):
        build_report(BuilderConfig(work_dir=work_dir))
        assert not (work_dir / "output.json").exists()

    def test_build_when_cleanup_disabled_then_entries_kept(self, work_dir: Path):
        build_report(BuilderConfig(work_dir=work_dir, cleanup_entries=False))
        assert (work_dir / "output.json").exists()

    def test_build_when_pdf_requested_then_pdf_has_page_per_entry(self, work_dir: Path):
        result = build_report(BuilderConfig(work_dir=work_dir, export_pdf=True))

        assert result.pdf_path == work_dir / "labfile.pdf"
        assert len(PdfReader(str(result.pdf_path)).pages) == 2

    def test_build_when_rich_code_broken_then_warning_not_error(self, work_dir: Path, sample_records):
        sample_records[1]["code_rtf"] = "{\\rtf1 broken"
        (work_dir / "output.json").write_text(json.dumps(sample_records), encoding="utf-8")

        result = build_report(BuilderConfig(work_dir=work_dir))

        assert len(result.warnings) == 1
        assert "return x;" in docx_texts(result.docx_path)

    def test_build_when_format_missing_then_build_error(self, work_dir: Path):
        (work_dir / "format.toml").unlink()
        with pytest.raises(BuildError, match="Failed to load inputs"):
            build_report(BuilderConfig(work_dir=work_dir))

    def test_build_when_write_fails_then_build_error(self, work_dir: Path):
        with patch("labfile.builder.output.docx_writer.DocxSink.pack", side_effect=OSError("disk full")):
            with pytest.raises(BuildError, match="disk full"):
                build_report(BuilderConfig(work_dir=work_dir))
        assert (work_dir / "output.json").exists()


class TestAssemblyOptions:
    def test_options_when_config_overrides_then_config_wins(self, work_dir: Path):
        document_config = parse_format(work_dir / "format.toml")
        config = BuilderConfig(
            work_dir=work_dir,
            alignment=AlignmentStrategy.STREAM,
            keyword_assist=("def",),
        )

        options = _assembly_options(config, document_config)

        assert options.alignment is AlignmentStrategy.STREAM
        assert options.keywords == ("def",)

    def test_options_when_no_config_override_then_format_then_defaults(self, work_dir: Path):
        document_config = parse_format(work_dir / "format.toml")

        options = _assembly_options(BuilderConfig(work_dir=work_dir), document_config)

        assert options.alignment is AlignmentStrategy.HEURISTIC
        assert options.keywords == document_config.keywords
        assert options.keywords != DEFAULT_KEYWORDS
