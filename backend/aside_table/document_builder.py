"""Helpers for converting parser results into API schemas."""
from __future__ import annotations

from .document_models import AsideDocument, Group, SkippedLine, TableEntry, Thumbnail
from .schemas.aside import (
    AsideDocumentSchema,
    GroupSchema,
    SkippedLineSchema,
    TableEntrySchema,
    ThumbnailSchema,
)


def _make_thumbnail(thumbnail: Thumbnail) -> ThumbnailSchema:
    return ThumbnailSchema(url=thumbnail.url, description=thumbnail.description)


def _make_entry(entry: TableEntry) -> TableEntrySchema:
    value = list(entry.value) if isinstance(entry.value, tuple) else entry.value
    return TableEntrySchema(key=entry.key, value=value)


def _make_group(group: Group) -> GroupSchema:
    return GroupSchema(name=group.name, entries=[_make_entry(entry) for entry in group.entries])


def build_document_response(document: AsideDocument) -> AsideDocumentSchema:
    """Convert an :class:`AsideDocument` to an API response schema."""

    return AsideDocumentSchema(
        thumbnails=[_make_thumbnail(thumbnail) for thumbnail in document.thumbnails],
        groups=[_make_group(group) for group in document.groups],
    )


def build_skipped_lines(skipped: list[SkippedLine]) -> list[SkippedLineSchema]:
    return [
        SkippedLineSchema(line_number=line.line_number, text=line.text, reason=line.reason)
        for line in skipped
    ]


__all__ = ["build_document_response", "build_skipped_lines"]
