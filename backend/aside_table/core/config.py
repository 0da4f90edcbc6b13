"""Application configuration and settings management."""

import re
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def validate_hex_color(value: str) -> str:
    """Return ``value`` stripped if it is a ``#rgb`` or ``#rrggbb`` color."""

    value = value.strip()
    if not _HEX_COLOR_RE.match(value):
        raise ValueError(f"Expected a hex color like #1000ff, got {value!r}")
    return value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ASIDE_TABLE_", extra="ignore")

    app_name: str = Field(default="Aside Table API", description="Human readable application name.")
    environment: Literal["local", "development", "staging", "production"] = Field(
        default="local",
        description="Deployment environment name.",
    )
    log_level: str = Field(default="INFO", description="Root logging level.")
    header_color: str = Field(
        default="#1000ff",
        description="Background color of the group headers.",
    )
    code_block_language: str = Field(
        default="aside",
        description="Info string of the fenced code blocks that hold aside markup.",
    )
    vault_root: Path | None = Field(
        default=None,
        description="Directory with notes and images used to resolve links. Links echo as-is when unset.",
    )
    image_base_url: str = Field(
        default="/vault",
        description="URL prefix prepended to vault-relative image paths.",
    )
    vault_refresh_seconds: float = Field(
        default=5.0,
        ge=0,
        description="Minimum age of the vault file index before a failed lookup rebuilds it.",
    )
    export_dir: Path | None = Field(
        default=None,
        description="Directory where stored DOCX exports are written. Storing is disabled when unset.",
    )

    @field_validator("header_color")
    @classmethod
    def _check_header_color(cls, value: str) -> str:
        return validate_hex_color(value)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


settings = get_settings()
