"""Unit tests for reading aside blocks from uploaded files."""

from __future__ import annotations

from io import BytesIO

import pytest
from docx import Document

from aside_table.document_models import TableEntry
from aside_table.document_parser import parse_aside
from aside_table.document_processing import UnsupportedDocumentError, extract_aside_blocks, load_sources

NOTE = """# Character

Some prose.

```aside
!portrait.png|Portrait
#Stats
-HP:10
```

```python
print("not aside")
```

~~~~aside
#Second
-a:b
~~~~
"""


def _docx_payload(lines: list[str]) -> bytes:
    document = Document()
    for line in lines:
        document.add_paragraph(line)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def test_extract_fenced_blocks() -> None:
    assert extract_aside_blocks(NOTE) == [
        "!portrait.png|Portrait\n#Stats\n-HP:10",
        "#Second\n-a:b",
    ]


def test_custom_language() -> None:
    assert extract_aside_blocks(NOTE, language="python") == ['print("not aside")']


def test_unterminated_block_runs_to_end() -> None:
    assert extract_aside_blocks("```aside\n#G\n-a:b") == ["#G\n-a:b"]


def test_shorter_fence_does_not_close_block() -> None:
    assert extract_aside_blocks("````aside\n```\n````") == ["```"]


def test_load_markdown() -> None:
    assert len(load_sources("note.md", NOTE.encode("utf-8"))) == 2


def test_load_plain_text_as_one_block() -> None:
    assert load_sources("card.aside", "#G\n-a:b".encode("utf-8")) == ["#G\n-a:b"]


def test_load_docx_without_fences() -> None:
    payload = _docx_payload(["#Stats", "-HP:10"])

    (source,) = load_sources("card.docx", payload)

    assert source.strip() == "#Stats\n-HP:10"


def test_load_docx_with_fences() -> None:
    payload = _docx_payload(["Intro", "```aside", "#Stats", "-HP:10", "```"])

    (source,) = load_sources("card.docx", payload)

    assert source.strip() == "#Stats\n-HP:10"


def test_unsupported_suffix() -> None:
    with pytest.raises(UnsupportedDocumentError):
        load_sources("image.png", b"\x89PNG")


def test_markdown_without_blocks_raises_value_error() -> None:
    with pytest.raises(ValueError):
        load_sources("note.md", b"# Just a note")


def test_blank_text_file_raises_value_error() -> None:
    with pytest.raises(ValueError):
        load_sources("empty.txt", b"   \n")


@pytest.mark.parametrize("separator", ["\u2028", "\x0b", "\x1c", "\x85"])
def test_blocks_split_on_newlines_only(separator: str) -> None:
    text = f"```aside\n#G\n-Note:a{separator}b\n```"

    (block,) = extract_aside_blocks(text)
    (group,) = parse_aside(block).groups

    assert group.entries == (TableEntry("Note", f"a{separator}b"),)


def test_crlf_markdown_blocks() -> None:
    assert extract_aside_blocks("```aside\r\n#G\r\n-a:b\r\n```\r\n") == ["#G\n-a:b"]
