"""Health check endpoints."""

from fastapi import APIRouter, Depends

from aside_table.api.deps import get_app_settings
from aside_table.core.config import Settings
from aside_table.schemas.aside import RenderSettingsResponse

router = APIRouter()


@router.get("/health", tags=["system"])
def healthcheck() -> dict[str, str]:
    """Simple readiness probe."""

    return {"status": "ok"}


@router.get("/settings", response_model=RenderSettingsResponse, tags=["system"])
def render_settings(settings: Settings = Depends(get_app_settings)) -> RenderSettingsResponse:
    """Expose the settings a client needs to display aside blocks."""

    return RenderSettingsResponse(
        header_color=settings.header_color,
        code_block_language=settings.code_block_language,
    )
