"""Utility helpers for reading uploaded files into aside markup blocks."""
from __future__ import annotations

import logging
import re
from io import BytesIO
from pathlib import Path

from docx import Document

from .document_parser import source_lines

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^(?P<fence>`{3,}|~{3,})\s*(?P<info>[^\s`]*)")

MARKDOWN_SUFFIXES = {".md", ".markdown"}
PLAIN_SUFFIXES = {".txt", ".aside"}
DOCX_SUFFIXES = {".docx"}


class UnsupportedDocumentError(RuntimeError):
    """Raised when a document cannot be parsed."""


def extract_aside_blocks(text: str, language: str = "aside") -> list[str]:
    """Return the bodies of fenced code blocks tagged with ``language``.

    A fence closes on a line made of the same fence character, at least as
    long as the opening one. An unterminated block runs to the end of the text.
    """

    blocks: list[str] = []
    current: list[str] | None = None
    opening = ""

    for line in source_lines(text):
        if current is None:
            match = _FENCE_RE.match(line)
            if match and match.group("info") == language:
                opening = match.group("fence")
                current = []
            continue

        stripped = line.strip()
        if stripped and set(stripped) == {opening[0]} and len(stripped) >= len(opening):
            blocks.append("\n".join(current))
            current = None
            continue
        current.append(line)

    if current is not None:
        logger.debug("Unterminated '%s' block, reading to end of text", language)
        blocks.append("\n".join(current))
    return blocks


def _docx_to_text(payload: bytes) -> str:
    """Return the paragraphs of a DOCX document joined by newlines."""

    document = Document(BytesIO(payload))
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def _decode(payload: bytes) -> str:
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError:
        return payload.decode("cp1251", errors="ignore")


def load_sources(filename: str, payload: bytes, language: str = "aside") -> list[str]:
    """Load the aside markup blocks contained in an uploaded file.

    Markdown notes contribute every fenced ``language`` block, plain text files
    are one block as a whole, DOCX files are read paragraph by paragraph and
    handled like markdown when they hold fences, like plain text otherwise.
    """

    suffix = Path(filename or "").suffix.lower()
    if suffix in MARKDOWN_SUFFIXES:
        sources = extract_aside_blocks(_decode(payload), language)
    elif suffix in PLAIN_SUFFIXES:
        text = _decode(payload)
        sources = [text] if text.strip() else []
    elif suffix in DOCX_SUFFIXES:
        text = _docx_to_text(payload)
        sources = extract_aside_blocks(text, language) or ([text] if text.strip() else [])
    else:
        raise UnsupportedDocumentError("Supported file types are MD, TXT, ASIDE and DOCX")

    if not sources:
        raise ValueError(f"No '{language}' blocks found in {filename or 'the document'}")
    logger.info("Loaded %s '%s' block(s) from %s", len(sources), language, filename)
    return sources


__all__ = ["UnsupportedDocumentError", "extract_aside_blocks", "load_sources"]
