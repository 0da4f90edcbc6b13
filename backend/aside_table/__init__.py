"""Parser and renderers for aside markup blocks."""
from __future__ import annotations

from .document_models import AsideDocument, Group, SkippedLine, TableEntry, Thumbnail
from .document_parser import parse_aside

__all__ = ["AsideDocument", "Group", "SkippedLine", "TableEntry", "Thumbnail", "parse_aside"]
