"""Routes for managing the application logo hosted on the asset host."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.api.deps import get_db_session, get_logo_service
from sellerhub.core.config import Settings, get_settings
from sellerhub.modules.assets import UploadError
from sellerhub.modules.logo import (
    InvalidLogoError,
    LogoConflictError,
    LogoNotFoundError,
    LogoReplacement,
    LogoService,
    decode_logo_base64,
    resolve_logo_file_name,
)
from sellerhub.schemas import LogoBase64Upload, LogoDeleteResponse, LogoResponse, LogoUploadResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=LogoUploadResponse, summary="Upload the logo as a file")
async def upload_logo(
    logo: UploadFile = File(...),
    file_name: Optional[str] = Form(None),
    service: LogoService = Depends(get_logo_service),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> LogoUploadResponse:
    try:
        if not (logo.content_type or "").startswith("image/"):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are allowed")
        data = await logo.read(settings.uploads.logo_max_bytes + 1)
    finally:
        await logo.close()

    name = resolve_logo_file_name(file_name, original_name=logo.filename)
    return await _replace_logo(service, db, data, name, settings.uploads.logo_max_bytes)


@router.post(
    "/upload/base64",
    response_model=LogoUploadResponse,
    summary="Upload the logo as a base64 string",
)
async def upload_logo_base64(
    payload: LogoBase64Upload,
    service: LogoService = Depends(get_logo_service),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> LogoUploadResponse:
    try:
        data = decode_logo_base64(payload.logo_base64)
    except InvalidLogoError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    name = resolve_logo_file_name(payload.file_name, base64_payload=payload.logo_base64)
    return await _replace_logo(service, db, data, name, settings.uploads.logo_max_bytes)


@router.get("", response_model=LogoResponse, summary="Get the current logo")
async def get_logo(service: LogoService = Depends(get_logo_service)) -> LogoResponse:
    try:
        slot = await service.get_logo()
    except LogoNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No logo has been uploaded yet") from exc
    assert slot.reference is not None
    return LogoResponse(
        url=slot.reference.url,
        remote_id=slot.reference.remote_id,
        path=slot.reference.path,
        version=slot.version,
        updated_at=slot.updated_at,
    )


@router.delete("", response_model=LogoDeleteResponse, summary="Delete the current logo")
async def delete_logo(
    service: LogoService = Depends(get_logo_service),
    db: AsyncSession = Depends(get_db_session),
) -> LogoDeleteResponse:
    try:
        removal = await service.delete_logo()
    except LogoNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No logo to delete") from exc
    except LogoConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    await db.commit()
    await service.cleanup_removed(removal)
    return LogoDeleteResponse(deleted_url=removal.previous.url)


async def _replace_logo(
    service: LogoService,
    db: AsyncSession,
    data: bytes,
    file_name: str,
    max_bytes: int,
) -> LogoUploadResponse:
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Logo exceeds {max_bytes} bytes",
        )
    try:
        replacement = await service.upload_logo(data, file_name)
    except InvalidLogoError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except LogoConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except UploadError as exc:
        logger.error("Logo upload failed: %s", exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to upload logo") from exc
    await db.commit()
    await service.cleanup_previous(replacement)
    return _to_upload_response(replacement)


def _to_upload_response(replacement: LogoReplacement) -> LogoUploadResponse:
    uploaded = replacement.uploaded
    return LogoUploadResponse(
        url=uploaded.url,
        remote_id=uploaded.remote_id,
        path=uploaded.path,
        name=uploaded.name,
        size=uploaded.size,
        width=uploaded.width,
        height=uploaded.height,
        version=replacement.slot.version,
    )
