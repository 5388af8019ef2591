"""
Unit tests for input file parsing.
"""

import json
from pathlib import Path

import pytest

from labfile.builder.layout.config import AlignmentStrategy
from labfile.builder.loading.parser import ParseError, parse_entries, parse_format, parse_format_from_dict


class TestParseFormat:
    """Tests for parse_format function."""

    def test_parse_when_valid_file_then_config(self, work_dir: Path):
        config = parse_format(work_dir / "format.toml")

        assert config.header.text == "Lab {n}"
        assert config.header.alignment == "center"
        assert config.solution.title.style == "Heading2"
        assert config.keywords == ("class", "public", "static", "void", "int")
        assert config.alignment is None

    def test_parse_when_missing_file_then_raises(self, tmp_path: Path):
        with pytest.raises(ParseError, match="not found"):
            parse_format(tmp_path / "format.toml")

    def test_parse_when_invalid_toml_then_raises(self, tmp_path: Path):
        path = tmp_path / "format.toml"
        path.write_text("[question\ntext = ", encoding="utf-8")
        with pytest.raises(ParseError, match="Invalid TOML"):
            parse_format(path)

    def test_parse_when_schema_violation_then_raises(self):
        with pytest.raises(ParseError, match="Invalid format configuration"):
            parse_format_from_dict({"question": {"text": "q"}})

    def test_parse_when_alignment_set_then_strategy(self):
        config = parse_format_from_dict(
            {
                "alignment": "stream",
                "question": {"text": "q"},
                "solution": {"text": "{solution}", "title": {"text": "S"}},
                "output": {"text": "{output}", "title": {"text": "O"}},
            }
        )
        assert config.alignment is AlignmentStrategy.STREAM


class TestParseEntries:
    """Tests for parse_entries function."""

    def test_parse_when_valid_file_then_entries(self, work_dir: Path):
        entries = parse_entries(work_dir / "output.json")
        assert {e.index for e in entries} == {0, 1}

    def test_parse_when_missing_file_then_raises(self, tmp_path: Path):
        with pytest.raises(ParseError, match="not found"):
            parse_entries(tmp_path / "output.json")

    def test_parse_when_invalid_json_then_raises(self, tmp_path: Path):
        path = tmp_path / "output.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ParseError, match="Invalid JSON"):
            parse_entries(path)

    def test_parse_when_duplicate_index_then_raises(self, tmp_path: Path, sample_records):
        sample_records[0]["index"] = 0
        path = tmp_path / "output.json"
        path.write_text(json.dumps(sample_records), encoding="utf-8")

        with pytest.raises(ParseError, match="Duplicate"):
            parse_entries(path)
