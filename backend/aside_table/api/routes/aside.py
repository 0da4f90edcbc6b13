"""Endpoints that expose the aside parser and renderers."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from aside_table.api.deps import get_aside_service
from aside_table.document_builder import build_document_response, build_skipped_lines
from aside_table.document_exporter import pick_filename
from aside_table.document_processing import UnsupportedDocumentError
from aside_table.schemas.aside import (
    ExportRequest,
    FileParseResponse,
    ParseRequest,
    ParseResponse,
    RenderRequest,
    RenderResponse,
)
from aside_table.services.aside_service import AsideTableService, ExportNotConfiguredError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/aside", tags=["aside"])

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@router.post("/parse", response_model=ParseResponse)
def parse(
    payload: ParseRequest,
    service: AsideTableService = Depends(get_aside_service),
) -> ParseResponse:
    if not payload.include_diagnostics:
        return ParseResponse(document=build_document_response(service.parse(payload.text)))
    result = service.parse_with_diagnostics(payload.text)
    return ParseResponse(
        document=build_document_response(result.document),
        skipped_lines=build_skipped_lines(result.skipped_lines),
    )


@router.post("/render", response_model=RenderResponse)
def render(
    payload: RenderRequest,
    service: AsideTableService = Depends(get_aside_service),
) -> RenderResponse:
    header_color = payload.header_color or service.default_header_color
    html = service.render_html(payload.text, header_color=header_color)
    return RenderResponse(html=html, header_color=header_color)


@router.post("/parse-file", response_model=FileParseResponse)
async def parse_file(
    file: UploadFile = File(...),
    service: AsideTableService = Depends(get_aside_service),
) -> FileParseResponse:
    contents = await file.read()
    try:
        documents = service.parse_file(file.filename or "", contents)
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=415, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:  # pragma: no cover - defensive logging
        logger.exception("Failed to read aside blocks from '%s'", file.filename)
        raise HTTPException(status_code=400, detail="Could not read the uploaded document") from exc
    return FileParseResponse(
        filename=file.filename or "aside.md",
        documents=[build_document_response(document) for document in documents],
    )


@router.post("/export")
def export(
    payload: ExportRequest,
    service: AsideTableService = Depends(get_aside_service),
) -> Response:
    if payload.store:
        try:
            path = service.save_docx(
                payload.text,
                source_filename=payload.filename,
                header_color=payload.header_color,
            )
        except ExportNotConfiguredError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        content = path.read_bytes() if path is not None else None
    else:
        content = service.export_docx(payload.text, header_color=payload.header_color)
    if content is None:
        raise HTTPException(status_code=404, detail="The aside block has no thumbnails or groups")

    download_name = pick_filename(payload.filename, "aside")
    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{download_name}"'},
    )
