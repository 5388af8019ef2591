"""
Unit tests for entry deserialization.
"""

import json

import pytest

from labfile.core.models import Entry
from labfile.core.schemas.validator import ValidationError
from labfile.core.utils.serialization import deserialize_entries, load_entries


class TestDeserializeEntries:
    def test_deserialize_when_valid_then_file_order_kept(self, sample_records):
        entries = deserialize_entries(sample_records)
        assert [e.index for e in entries] == [1, 0]
        assert entries[1].rich_code.startswith("{\\rtf1")

    def test_deserialize_when_invalid_and_validating_then_raises(self):
        with pytest.raises(ValidationError):
            deserialize_entries([{"index": "zero"}])


class TestLoadEntries:
    def test_load_when_unicode_then_preserved(self, tmp_path):
        entry = Entry(index=0, question="π ≈ 3.14?", code="x = 'é'", output="ok")
        path = tmp_path / "output.json"
        path.write_text(json.dumps([entry.to_dict()], ensure_ascii=False), encoding="utf-8")

        assert load_entries(path) == [entry]

    def test_load_when_invalid_json_then_raises(self, tmp_path):
        path = tmp_path / "output.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_entries(path)
