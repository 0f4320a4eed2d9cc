"""Client protocol for the remote asset host and upload helpers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import AsyncIterator, Iterable, Optional, Protocol, Sequence

from .models import AssetRecord, UploadedAsset


class AssetHostClient(Protocol):
    """Capabilities consumed from the media host."""

    async def upload(
        self,
        data: bytes,
        file_name: str,
        folder: str,
        *,
        tags: Sequence[str] = (),
    ) -> UploadedAsset:
        ...

    async def list_assets(self, folder: Optional[str] = None, *, limit: int = 1000) -> list[AssetRecord]:
        ...

    async def delete(self, remote_id: str) -> bool:
        ...


@dataclass(slots=True)
class UploadSource:
    data: bytes
    original_name: Optional[str] = None
    content_type: Optional[str] = None


def numbered_file_name(base_name: str, index: int, original_name: Optional[str]) -> str:
    """Build ``{base}-{n}.{ext}`` with a 1-based index and the source extension."""
    suffix = PurePosixPath(original_name or "").suffix.lstrip(".")
    return f"{base_name}-{index + 1}.{suffix or 'jpg'}"


async def iter_uploads(
    client: AssetHostClient,
    sources: Iterable[UploadSource],
    base_name: str,
    folder: str,
    *,
    tags: Sequence[str] = (),
    start: int = 0,
) -> AsyncIterator[UploadedAsset]:
    # One upload in flight at a time.
    for index, source in enumerate(sources, start=start):
        file_name = numbered_file_name(base_name, index, source.original_name)
        yield await client.upload(source.data, file_name, folder, tags=tags)


async def upload_many(
    client: AssetHostClient,
    sources: Iterable[UploadSource],
    base_name: str,
    folder: str,
    *,
    tags: Sequence[str] = (),
    start: int = 0,
) -> list[UploadedAsset]:
    return [
        asset
        async for asset in iter_uploads(client, sources, base_name, folder, tags=tags, start=start)
    ]
