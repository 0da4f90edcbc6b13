"""Service layer for the application."""

from aside_table.services.aside_service import AsideTableService, ExportNotConfiguredError, ParseResult

__all__ = [
    "AsideTableService",
    "ExportNotConfiguredError",
    "ParseResult",
]
