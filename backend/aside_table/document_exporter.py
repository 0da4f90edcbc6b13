"""Utilities for exporting aside documents into standalone DOCX files."""
from __future__ import annotations

import re
from io import BytesIO
from pathlib import Path

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.table import _Cell

from .document_models import AsideDocument, Group, TableEntry
from .links import IdentityResolver, LinkResolver, parse_link

def _sanitize_stem(value: str) -> str:
    """Return a filesystem-safe stem for the generated document."""

    sanitized = re.sub(r"[^0-9A-Za-z_-]+", "_", value).strip("._")
    return sanitized or "aside"


def _ensure_export_dir(path: Path) -> Path:
    export_dir = Path(path)
    export_dir.mkdir(parents=True, exist_ok=True)
    return export_dir


def _remove_placeholder_paragraph(document: Document) -> None:
    """Remove the placeholder paragraph that python-docx creates by default."""

    if document.paragraphs:
        paragraph = document.paragraphs[0]
        element = paragraph._element  # type: ignore[attr-defined]
        parent = element.getparent()
        if parent is not None:
            parent.remove(element)


def _shade_cell(cell: _Cell, color: str) -> None:
    """Fill ``cell`` with a solid background color given as ``#rrggbb``/``#rgb``."""

    fill = color.lstrip("#")
    if len(fill) == 3:
        fill = "".join(char * 2 for char in fill)
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill.upper())
    cell._tc.get_or_add_tcPr().append(shading)  # type: ignore[attr-defined]


def _fill_value_cell(cell: _Cell, entry: TableEntry, note_resolver: LinkResolver) -> None:
    if isinstance(entry.value, tuple):
        cell.text = ""
        first, *rest = entry.value
        cell.paragraphs[0].text = first
        cell.paragraphs[0].style = "List Bullet"
        for item in rest:
            cell.add_paragraph(item, style="List Bullet")
        return

    link = parse_link(entry.value)
    if link is None:
        cell.text = entry.value
        return
    note = note_resolver.resolve(link.target)
    cell.text = link.label if link.label is not None else note


def _append_group(document: Document, group: Group, header_color: str, note_resolver: LinkResolver) -> None:
    docx_table = document.add_table(rows=1 + len(group.entries), cols=2)
    docx_table.style = "Table Grid"

    header = docx_table.cell(0, 0).merge(docx_table.cell(0, 1))
    header.text = group.name
    _shade_cell(header, header_color)

    for row_index, entry in enumerate(group.entries, start=1):
        key_cell = docx_table.cell(row_index, 0)
        key_cell.text = ""
        key_cell.paragraphs[0].add_run(entry.key).bold = True
        _fill_value_cell(docx_table.cell(row_index, 1), entry, note_resolver)


def build_docx(
    aside: AsideDocument,
    *,
    header_color: str,
    note_resolver: LinkResolver | None = None,
) -> bytes:
    """Return the DOCX rendering of ``aside``."""

    resolver = note_resolver or IdentityResolver()
    document = Document()
    _remove_placeholder_paragraph(document)

    for thumbnail in aside.thumbnails:
        text = f"{thumbnail.url} ({thumbnail.description})" if thumbnail.description else thumbnail.url
        document.add_paragraph(text, style="List Number")

    for group in aside.groups:
        _append_group(document, group, header_color, resolver)
        document.add_paragraph()

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def pick_filename(source_name: str | None, stem_fallback: str) -> str:
    stem = Path(source_name or "").stem or stem_fallback
    sanitized = _sanitize_stem(stem)
    return f"{sanitized}_aside.docx"


def _next_available_path(directory: Path, filename: str) -> Path:
    candidate = directory / filename
    if not candidate.exists():
        return candidate

    stem = candidate.stem
    suffix = candidate.suffix
    counter = 1
    while True:
        updated = directory / f"{stem}_{counter}{suffix}"
        if not updated.exists():
            return updated
        counter += 1


def export_aside_to_docx(
    aside: AsideDocument,
    *,
    header_color: str,
    note_resolver: LinkResolver | None = None,
    source_filename: str | None = None,
    export_dir: Path,
) -> tuple[Path, bytes] | None:
    """Write a DOCX file with the thumbnails and groups of ``aside``."""

    if aside.is_empty:
        return None

    payload = build_docx(aside, header_color=header_color, note_resolver=note_resolver)

    export_directory = _ensure_export_dir(export_dir)
    fallback = aside.groups[0].name if aside.groups else "aside"
    filename = pick_filename(source_filename, fallback)
    target_path = _next_available_path(export_directory, filename)
    target_path.write_bytes(payload)

    return target_path, payload


__all__ = ["build_docx", "export_aside_to_docx", "pick_filename"]
