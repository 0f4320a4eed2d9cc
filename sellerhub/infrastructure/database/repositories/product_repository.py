"""SQLAlchemy implementation of the product repository."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from sellerhub.db.models import Product as ProductModel
from sellerhub.db.models import ProductPhoto as ProductPhotoModel
from sellerhub.modules.assets.models import AssetReference
from sellerhub.modules.products.exceptions import ProductNotFoundError
from sellerhub.modules.products.models import Product
from sellerhub.modules.products.repository import ProductRepository


class SqlProductRepository(ProductRepository):
    """Product repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, product_id: str) -> Product | None:
        model = await self._get_model(product_id)
        return self._to_domain(model) if model else None

    async def create_product(
        self,
        *,
        seller_id: str,
        name: str,
        photos: Sequence[AssetReference],
    ) -> Product:
        model = ProductModel(
            seller_id=seller_id,
            name=name,
            photos=_to_photo_models(photos),
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def replace_photos(self, product_id: str, photos: Sequence[AssetReference]) -> Product:
        model = await self._get_model(product_id)
        if model is None:
            raise ProductNotFoundError(product_id)

        model.photos = _to_photo_models(photos)
        model.updated_at = datetime.now(timezone.utc)

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete_product(self, product_id: str) -> None:
        await self._session.execute(
            delete(ProductPhotoModel).where(ProductPhotoModel.product_id == product_id)
        )
        await self._session.execute(delete(ProductModel).where(ProductModel.id == product_id))

    async def _get_model(self, product_id: str) -> ProductModel | None:
        stmt = select(ProductModel).where(ProductModel.id == product_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: ProductModel) -> Product:
        return Product(
            id=str(model.id),
            seller_id=model.seller_id,
            name=model.name,
            photos=tuple(
                AssetReference(url=photo.url, remote_id=photo.remote_id, path=photo.path or "")
                for photo in model.photos
            ),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )


def _to_photo_models(photos: Sequence[AssetReference]) -> list[ProductPhotoModel]:
    return [
        ProductPhotoModel(position=position, url=photo.url, remote_id=photo.remote_id, path=photo.path)
        for position, photo in enumerate(photos)
    ]
