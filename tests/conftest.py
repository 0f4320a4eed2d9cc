"""
Shared fixtures: an in-memory asset host and an in-memory SQLite database.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from sellerhub.core.config import AssetHostSettings, Settings
from sellerhub.db import models  # noqa: F401
from sellerhub.infrastructure.database.base import Base
from sellerhub.modules.assets import (
    AssetRecord,
    AssetReference,
    DeleteError,
    ListError,
    UploadedAsset,
    UploadError,
)

ENDPOINT = "https://ik.example.io/acct"


class FakeAssetHost:
    """In-memory stand-in for the media host, recording every call."""

    def __init__(self) -> None:
        self.records: list[AssetRecord] = []
        self.list_calls: list[Optional[str]] = []
        self.delete_calls: list[str] = []
        self.uploads: list[dict] = []
        self.fail_listing = False
        self.fail_upload_after: Optional[int] = None
        self.raise_on_delete: set[str] = set()
        self.refuse_delete: set[str] = set()
        self.timeout_on_delete: set[str] = set()
        self._counter = 0

    def add(self, path: str, *, remote_id: Optional[str] = None, url: Optional[str] = None) -> AssetRecord:
        self._counter += 1
        record = AssetRecord(
            remote_id=remote_id or f"file_{self._counter}",
            name=path.rsplit("/", 1)[-1],
            path=path,
            url=url if url is not None else f"{ENDPOINT}{path}",
        )
        self.records.append(record)
        return record

    def reference(self, record: AssetRecord, *, with_id: bool = False) -> AssetReference:
        return AssetReference(
            url=record.url,
            remote_id=record.remote_id if with_id else None,
            path=record.path,
        )

    async def upload(
        self,
        data: bytes,
        file_name: str,
        folder: str,
        *,
        tags: Sequence[str] = (),
    ) -> UploadedAsset:
        if self.fail_upload_after is not None and len(self.uploads) >= self.fail_upload_after:
            raise UploadError("quota exceeded")
        self.uploads.append({"file_name": file_name, "folder": folder, "tags": tuple(tags), "size": len(data)})
        record = self.add(f"{folder.rstrip('/')}/{file_name}")
        return UploadedAsset(
            url=record.url,
            remote_id=record.remote_id,
            path=record.path,
            name=record.name,
            size=len(data),
            mime_type="image/png",
        )

    async def list_assets(self, folder: Optional[str] = None, *, limit: int = 1000) -> list[AssetRecord]:
        self.list_calls.append(folder)
        if self.fail_listing:
            raise ListError("host unavailable")
        if folder is None:
            return self.records[:limit]
        prefix = folder.rstrip("/") + "/"
        return [record for record in self.records if record.path.startswith(prefix)][:limit]

    async def delete(self, remote_id: str) -> bool:
        self.delete_calls.append(remote_id)
        if remote_id in self.raise_on_delete:
            raise DeleteError(f"unknown file id {remote_id}")
        if remote_id in self.timeout_on_delete:
            raise TimeoutError("socket timed out")
        if remote_id in self.refuse_delete:
            return False
        self.records = [record for record in self.records if record.remote_id != remote_id]
        return True


@pytest.fixture
def fake_host() -> FakeAssetHost:
    return FakeAssetHost()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        asset_host=AssetHostSettings(url_endpoint=ENDPOINT, private_key="private_test"),
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
