"""Reusable FastAPI dependency providers."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.core.config import Settings, get_settings
from sellerhub.core.container import get_container
from sellerhub.infrastructure.database import get_session
from sellerhub.modules.assets import AssetHostClient
from sellerhub.modules.logo import LogoService
from sellerhub.modules.products import ProductService


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_asset_client() -> AssetHostClient:
    return get_container().asset_client


def get_product_service(
    db: AsyncSession = Depends(get_db_session),
    client: AssetHostClient = Depends(get_asset_client),
    settings: Settings = Depends(get_settings),
) -> ProductService:
    return ProductService.with_session(db, client, settings)


def get_logo_service(
    db: AsyncSession = Depends(get_db_session),
    client: AssetHostClient = Depends(get_asset_client),
    settings: Settings = Depends(get_settings),
) -> LogoService:
    return LogoService.with_session(db, client, settings)


__all__ = [
    "get_asset_client",
    "get_db_session",
    "get_logo_service",
    "get_product_service",
]
