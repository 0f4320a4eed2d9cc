"""ImageKit REST client implementing the asset host protocol."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from sellerhub.core.config import AssetHostSettings
from sellerhub.modules.assets.exceptions import DeleteError, ListError, UploadError
from sellerhub.modules.assets.models import AssetRecord, UploadedAsset

logger = logging.getLogger(__name__)


class ImageKitClient:
    def __init__(
        self,
        *,
        private_key: str,
        upload_url: str,
        api_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._auth = (private_key, "")
        self._upload_url = upload_url
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: AssetHostSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ImageKitClient":
        return cls(
            private_key=settings.private_key,
            upload_url=settings.upload_url,
            api_url=settings.api_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        async with httpx.AsyncClient(
            auth=self._auth, timeout=self._timeout, transport=self._transport
        ) as client:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response

    async def upload(
        self,
        data: bytes,
        file_name: str,
        folder: str,
        *,
        tags: Sequence[str] = (),
    ) -> UploadedAsset:
        form = {"fileName": file_name, "folder": folder, "useUniqueFileName": "true"}
        if tags:
            form["tags"] = ",".join(tags)
        files = {"file": (file_name, data)}

        try:
            response = await self._request("POST", self._upload_url, data=form, files=files)
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise UploadError(
                f"upload of {file_name} rejected with {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise UploadError(f"upload of {file_name} failed: {exc}") from exc

        try:
            return UploadedAsset(
                url=payload["url"],
                remote_id=payload["fileId"],
                path=payload.get("filePath") or "",
                name=payload.get("name") or file_name,
                size=int(payload.get("size") or len(data)),
                mime_type=payload.get("mime") or payload.get("fileType"),
                width=payload.get("width"),
                height=payload.get("height"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UploadError(f"unexpected upload response for {file_name}: {payload!r}") from exc

    async def list_assets(self, folder: Optional[str] = None, *, limit: int = 1000) -> list[AssetRecord]:
        params: dict[str, Any] = {"limit": limit}
        if folder:
            params["path"] = folder

        try:
            response = await self._request("GET", f"{self._api_url}/files", params=params)
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise ListError(f"listing {folder or 'all files'} failed: {exc}") from exc

        return [_to_record(item) for item in _unwrap_listing(payload)]

    async def delete(self, remote_id: str) -> bool:
        if not remote_id:
            logger.warning("Delete requested without a remote id")
            return False

        url = f"{self._api_url}/files/{quote(remote_id, safe='')}"
        try:
            await self._request("DELETE", url)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise DeleteError(f"unknown file id {remote_id}") from exc
            raise DeleteError(
                f"delete of {remote_id} rejected with {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise DeleteError(f"delete of {remote_id} failed: {exc}") from exc
        return True


def _unwrap_listing(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        items = payload.get("results") or payload.get("data") or payload.get("files") or []
        if not items and payload.get("fileId"):
            items = [payload]
    else:
        items = []
    return [item for item in items if isinstance(item, dict)]


def _to_record(item: dict[str, Any]) -> AssetRecord:
    return AssetRecord(
        remote_id=item.get("fileId"),
        name=item.get("name") or item.get("fileName") or "",
        path=item.get("filePath") or item.get("path") or "",
        url=item.get("url") or "",
    )
