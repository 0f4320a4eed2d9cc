"""Domain services for product photo management."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.core.config import Settings, get_settings
from sellerhub.modules.assets import (
    AssetHostClient,
    AssetReference,
    DeletionReport,
    PhotoReconciler,
    UploadedAsset,
    UploadError,
    UploadSource,
    iter_uploads,
)

from .exceptions import ProductNotFoundError
from .models import PhotoUpdate, Product, ProductCreateInput
from .repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:
    """Keeps a product's photo set and the hosted images behind it in step.

    Photo changes are persisted first and cleaned up on the host afterwards;
    the cleanup outcome never changes what was persisted.
    """

    def __init__(
        self,
        repository: ProductRepository,
        client: AssetHostClient,
        reconciler: PhotoReconciler,
        *,
        folder: str = "/products",
    ) -> None:
        self._repository = repository
        self._client = client
        self._reconciler = reconciler
        self._folder = folder

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        client: AssetHostClient,
        settings: Optional[Settings] = None,
    ) -> "ProductService":
        # Deferred import, the SQL repository imports this package.
        from sellerhub.infrastructure.database.repositories.product_repository import SqlProductRepository

        settings = settings or get_settings()
        reconciler = PhotoReconciler.for_client(
            client,
            endpoint=settings.asset_endpoint,
            page_size=settings.asset_host.list_limit,
        )
        return cls(
            SqlProductRepository(session),
            client,
            reconciler,
            folder=settings.asset_host.product_folder,
        )

    async def get_product(self, product_id: str) -> Product:
        product = await self._repository.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, payload: ProductCreateInput) -> Product:
        return await self._repository.create_product(
            seller_id=payload.seller_id,
            name=payload.name,
            photos=_adopt_known(_dedupe(payload.photos), ()),
        )

    async def apply_photo_update(self, product_id: str, desired: Sequence[AssetReference]) -> PhotoUpdate:
        current = await self.get_product(product_id)
        photos = _adopt_known(_dedupe(desired), current.photos)
        updated = await self._repository.replace_photos(product_id, photos)
        return PhotoUpdate(
            product_id=product_id,
            previous=current.photos,
            current=updated.photos,
            product=updated,
        )

    async def cleanup_removed(self, update: PhotoUpdate) -> DeletionReport:
        """Delete hosted images dropped by ``update``; call after committing it."""
        report = await self._reconciler.reconcile(update.previous, update.current)
        if report.failed or report.skipped_unresolved:
            logger.warning(
                "Product %s photo cleanup incomplete: %s",
                update.product_id,
                report.summary(),
            )
        return report

    async def upload_photos(self, product_id: str, sources: Iterable[UploadSource]) -> Product:
        product = await self.get_product(product_id)

        uploaded: list[UploadedAsset] = []
        try:
            async for asset in iter_uploads(
                self._client,
                sources,
                product.id,
                self._folder,
                tags=("product", product.id),
                start=len(product.photos),
            ):
                uploaded.append(asset)
        except UploadError:
            if uploaded:
                logger.warning(
                    "Upload for product %s failed after %d file(s); removing the partial batch",
                    product.id,
                    len(uploaded),
                )
                await self._reconciler.reconcile([asset.to_reference() for asset in uploaded], [])
            raise

        desired = list(product.photos) + [asset.to_reference() for asset in uploaded]
        return await self._repository.replace_photos(product.id, desired)

    async def delete_product(self, product_id: str) -> PhotoUpdate:
        product = await self.get_product(product_id)
        await self._repository.delete_product(product_id)
        return PhotoUpdate(product_id=product_id, previous=product.photos, current=())


def _dedupe(photos: Sequence[AssetReference]) -> list[AssetReference]:
    seen: set[str] = set()
    unique: list[AssetReference] = []
    for photo in photos:
        if photo.url in seen:
            continue
        seen.add(photo.url)
        unique.append(photo)
    return unique


def _adopt_known(photos: Sequence[AssetReference], stored: Sequence[AssetReference]) -> list[AssetReference]:
    """Keep stored ids for URLs already in the set; ids sent for new URLs are dropped."""
    known = {photo.url: photo for photo in stored}
    adopted: list[AssetReference] = []
    for photo in photos:
        existing = known.get(photo.url)
        if existing is not None:
            adopted.append(existing)
        else:
            adopted.append(AssetReference(url=photo.url, path=photo.path))
    return adopted
