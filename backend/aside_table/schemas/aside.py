"""Schemas for aside parsing and rendering endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from aside_table.core.config import validate_hex_color


class ThumbnailSchema(BaseModel):
    url: str = Field(..., description="Resolved image reference")
    description: Optional[str] = Field(default=None, description="Caption, absent when the line has none")


class TableEntrySchema(BaseModel):
    key: str
    value: str | List[str] = Field(..., description="Single value or a list of two or more values")


class GroupSchema(BaseModel):
    name: str
    entries: List[TableEntrySchema] = Field(default_factory=list)


class AsideDocumentSchema(BaseModel):
    thumbnails: List[ThumbnailSchema] = Field(default_factory=list)
    groups: List[GroupSchema] = Field(default_factory=list)


class SkippedLineSchema(BaseModel):
    line_number: int = Field(..., description="1-based line number in the submitted text")
    text: str
    reason: str


class ParseRequest(BaseModel):
    text: str = Field(..., description="Aside markup to parse")
    include_diagnostics: bool = Field(
        default=False,
        description="If true, lines dropped by the parser are listed in the response.",
    )


class ParseResponse(BaseModel):
    document: AsideDocumentSchema
    skipped_lines: Optional[List[SkippedLineSchema]] = Field(
        default=None,
        description="Dropped lines, present only when diagnostics were requested.",
    )


class RenderRequest(BaseModel):
    text: str = Field(..., description="Aside markup to render")
    header_color: Optional[str] = Field(
        default=None,
        description="Overrides the configured group header color.",
    )

    @field_validator("header_color")
    @classmethod
    def _check_header_color(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_hex_color(value)


class RenderResponse(BaseModel):
    html: str
    header_color: str


class FileParseResponse(BaseModel):
    filename: str = Field(..., description="Original uploaded file name")
    documents: List[AsideDocumentSchema] = Field(
        default_factory=list,
        description="One document per aside block found in the file.",
    )


class RenderSettingsResponse(BaseModel):
    header_color: str
    code_block_language: str


class ExportRequest(RenderRequest):
    filename: Optional[str] = Field(
        default=None,
        description="Name used for the downloaded file and the stored copy.",
    )
    store: bool = Field(
        default=False,
        description="If true, a copy is also written to the server export directory.",
    )
