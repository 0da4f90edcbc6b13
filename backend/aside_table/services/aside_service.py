"""Service tying the aside parser to its resolvers and render sinks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from aside_table.core.config import Settings
from aside_table.document_exporter import build_docx, export_aside_to_docx
from aside_table.document_models import AsideDocument, SkippedLine
from aside_table.document_parser import parse_aside
from aside_table.document_processing import load_sources
from aside_table.html_renderer import render_html
from aside_table.links import IdentityResolver, LinkResolver

logger = logging.getLogger(__name__)


class ExportNotConfiguredError(RuntimeError):
    """Raised when storing an export is requested without an export directory."""


@dataclass
class ParseResult:
    """Parsed document with the lines the parser dropped."""

    document: AsideDocument
    skipped_lines: List[SkippedLine] = field(default_factory=list)


class AsideTableService:
    """Parse aside markup and hand it to the HTML or DOCX renderer."""

    def __init__(
        self,
        settings: Settings,
        *,
        note_resolver: Optional[LinkResolver] = None,
        image_resolver: Optional[LinkResolver] = None,
    ) -> None:
        self._settings = settings
        self._note_resolver = note_resolver or IdentityResolver()
        self._image_resolver = image_resolver or IdentityResolver()

    # ------------------------------------------------------------------
    def parse(self, text: str) -> AsideDocument:
        return parse_aside(text, image_resolver=self._image_resolver)

    def parse_with_diagnostics(self, text: str) -> ParseResult:
        """Parse ``text`` and collect every line that was skipped."""

        skipped: List[SkippedLine] = []
        document = parse_aside(text, image_resolver=self._image_resolver, diagnostics=skipped)
        if skipped:
            logger.info("Parser skipped %s line(s)", len(skipped))
        return ParseResult(document=document, skipped_lines=skipped)

    def parse_file(self, filename: str, payload: bytes) -> List[AsideDocument]:
        """Parse every aside block of an uploaded file."""

        sources = load_sources(filename, payload, self._settings.code_block_language)
        return [self.parse(source) for source in sources]

    # ------------------------------------------------------------------
    @property
    def default_header_color(self) -> str:
        return self._settings.header_color

    def _header_color(self, override: Optional[str]) -> str:
        return override or self._settings.header_color

    def render_html(self, text: str, *, header_color: Optional[str] = None) -> str:
        document = self.parse(text)
        color = self._header_color(header_color)
        logger.debug(
            "Rendering %s thumbnail(s) and %s group(s) with header color %s",
            len(document.thumbnails),
            len(document.groups),
            color,
        )
        return render_html(document, header_color=color, note_resolver=self._note_resolver)

    def export_docx(self, text: str, *, header_color: Optional[str] = None) -> Optional[bytes]:
        """Return the DOCX rendering of ``text``, or ``None`` when nothing was parsed."""

        document = self.parse(text)
        if document.is_empty:
            logger.info("Nothing to export, document is empty")
            return None
        return build_docx(
            document,
            header_color=self._header_color(header_color),
            note_resolver=self._note_resolver,
        )

    def save_docx(
        self,
        text: str,
        *,
        source_filename: Optional[str] = None,
        header_color: Optional[str] = None,
    ) -> Optional[Path]:
        """Store the DOCX rendering of ``text`` in the configured export directory."""

        if self._settings.export_dir is None:
            raise ExportNotConfiguredError("Storing exports requires ASIDE_TABLE_EXPORT_DIR to be set")
        result = export_aside_to_docx(
            self.parse(text),
            header_color=self._header_color(header_color),
            note_resolver=self._note_resolver,
            source_filename=source_filename,
            export_dir=self._settings.export_dir,
        )
        if result is None:
            return None
        path, _ = result
        logger.info("Saved aside export to %s", path)
        return path
