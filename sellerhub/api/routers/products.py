"""Product endpoints: creation, lookup and photo set management."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Path, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.api.deps import get_db_session, get_product_service
from sellerhub.core.config import Settings, get_settings
from sellerhub.modules.assets import AssetReference, UploadError, UploadSource
from sellerhub.modules.products import Product, ProductCreateInput, ProductNotFoundError, ProductService
from sellerhub.schemas import (
    AssetReferencePayload,
    ProductCreate,
    ProductPhotosUpdate,
    ProductResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    product = await service.create_product(
        ProductCreateInput(
            seller_id=payload.seller_id,
            name=payload.name,
            photos=[_to_reference(photo) for photo in payload.photos],
        )
    )
    await db.commit()
    return _to_product_response(product)


@router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(
    product_id: str = Path(..., description="Product ID"),
    service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    try:
        product = await service.get_product(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found") from exc
    return _to_product_response(product)


@router.put(
    "/{product_id}/photos",
    response_model=ProductResponse,
    summary="Replace the product photo set",
)
async def replace_product_photos(
    payload: ProductPhotosUpdate,
    product_id: str = Path(..., description="Product ID"),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    try:
        update = await service.apply_photo_update(
            product_id, [_to_reference(photo) for photo in payload.photos]
        )
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found") from exc
    await db.commit()

    # Cleanup results stay in the server log; the update already succeeded.
    await service.cleanup_removed(update)

    assert update.product is not None
    return _to_product_response(update.product)


@router.post(
    "/{product_id}/photos",
    response_model=ProductResponse,
    summary="Upload photos and append them to the product",
)
async def upload_product_photos(
    product_id: str = Path(..., description="Product ID"),
    files: list[UploadFile] = File(...),
    service: ProductService = Depends(get_product_service),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    sources = [
        await _read_image(upload, settings.uploads.product_image_max_bytes) for upload in files
    ]
    try:
        product = await service.upload_photos(product_id, sources)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found") from exc
    except UploadError as exc:
        logger.error("Photo upload for product %s failed: %s", product_id, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to upload images") from exc
    await db.commit()
    return _to_product_response(product)


@router.delete("/{product_id}", response_model=dict[str, bool], summary="Delete a product")
async def delete_product(
    product_id: str = Path(..., description="Product ID"),
    service: ProductService = Depends(get_product_service),
    db: AsyncSession = Depends(get_db_session),
) -> dict[str, bool]:
    try:
        update = await service.delete_product(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found") from exc
    await db.commit()
    await service.cleanup_removed(update)
    return {"success": True}


async def _read_image(upload: UploadFile, max_bytes: int) -> UploadSource:
    try:
        if not (upload.content_type or "").startswith("image/"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{upload.filename or 'file'} is not an image",
            )
        data = await upload.read(max_bytes + 1)
    finally:
        await upload.close()

    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")
    if len(data) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"{upload.filename or 'file'} exceeds {max_bytes} bytes",
        )
    return UploadSource(data=data, original_name=upload.filename, content_type=upload.content_type)


def _to_reference(payload: AssetReferencePayload) -> AssetReference:
    return AssetReference(url=payload.url, remote_id=payload.remote_id or None, path=payload.path)


def _to_product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        seller_id=product.seller_id,
        name=product.name,
        photos=[
            AssetReferencePayload(url=photo.url, remote_id=photo.remote_id, path=photo.path)
            for photo in product.photos
        ],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )
