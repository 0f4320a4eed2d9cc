"""Repository protocol for products."""

from __future__ import annotations

from typing import Protocol, Sequence

from sellerhub.modules.assets.models import AssetReference

from .models import Product


class ProductRepository(Protocol):
    """Abstract repository interface for product persistence."""

    async def get_by_id(self, product_id: str) -> Product | None:
        ...

    async def create_product(
        self,
        *,
        seller_id: str,
        name: str,
        photos: Sequence[AssetReference],
    ) -> Product:
        ...

    async def replace_photos(self, product_id: str, photos: Sequence[AssetReference]) -> Product:
        ...

    async def delete_product(self, product_id: str) -> None:
        ...
