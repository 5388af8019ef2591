import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import labfile
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


FORMAT_TOML = '''\
keywords = ["class", "public", "static", "void", "int"]

[header]
text = "Lab {n}"
size = 14
align = "center"
bold = true
style = "Heading1"

[question]
text = "Q{n}: {question}"
italic = true

[solution]
text = "{solution}"

[solution.title]
text = "Solution"
bold = true
style = "Heading2"

[output]
text = "{output}"

[output.title]
text = "Output"
bold = true
style = "Heading2"
'''

RICH_CODE = (
    r"{\rtf1\ansi\ansicpg1252"
    r"{\fonttbl{\f0\fmodern Consolas;}}"
    r"{\colortbl;\red0\green0\blue255;\red163\green21\blue21;}"
    r'\f0 {\cf1\b int} x = {\cf2 "a b"};\par '
    r"{\cf1\b return} x;}"
)


# Common test fixtures
@pytest.fixture
def sample_records() -> list[dict]:
    """Two output.json records, deliberately out of order."""
    return [
        {
            "index": 1,
            "question": "Print a greeting",
            "code": 'print("hi")',
            "code_rtf": None,
            "output_rtf": "\x1b[32mhi\x1b[0m\n",
            "extension": "py",
        },
        {
            "index": 0,
            "question": "Declare a string",
            "code": 'int x = "a b";\nreturn x;',
            "code_rtf": RICH_CODE,
            "output_rtf": "",
            "extension": "java",
        },
    ]


@pytest.fixture
def work_dir(tmp_path: Path, sample_records) -> Path:
    """Work folder with format.toml and output.json."""
    folder = tmp_path / "lab3"
    folder.mkdir()
    (folder / "format.toml").write_text(FORMAT_TOML, encoding="utf-8")
    (folder / "output.json").write_text(json.dumps(sample_records), encoding="utf-8")
    return folder


@pytest.fixture
def rich_code() -> str:
    """Highlighter RTF for 'int x = "a b";\\nreturn x;'."""
    return RICH_CODE
