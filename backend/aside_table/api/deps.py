"""Common dependency functions for API routes."""

from functools import lru_cache
from typing import Generator

from fastapi import Depends

from aside_table.core.config import Settings, get_settings
from aside_table.links import IdentityResolver, LinkResolver, VaultResolver
from aside_table.services.aside_service import AsideTableService


@lru_cache
def get_note_resolver() -> LinkResolver:
    settings = get_settings()
    if settings.vault_root is None:
        return IdentityResolver()
    return VaultResolver(settings.vault_root, "note", refresh_interval=settings.vault_refresh_seconds)


@lru_cache
def get_image_resolver() -> LinkResolver:
    settings = get_settings()
    if settings.vault_root is None:
        return IdentityResolver()
    return VaultResolver(
        settings.vault_root,
        "image",
        image_base_url=settings.image_base_url,
        refresh_interval=settings.vault_refresh_seconds,
    )


def get_app_settings() -> Generator:
    yield get_settings()


def get_aside_service(
    settings: Settings = Depends(get_app_settings),
    note_resolver: LinkResolver = Depends(get_note_resolver),
    image_resolver: LinkResolver = Depends(get_image_resolver),
) -> AsideTableService:
    return AsideTableService(settings, note_resolver=note_resolver, image_resolver=image_resolver)
