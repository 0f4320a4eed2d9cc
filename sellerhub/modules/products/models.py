"""Domain models for products."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sellerhub.modules.assets.models import AssetReference


@dataclass(slots=True)
class Product:
    id: str
    seller_id: str
    name: str
    photos: tuple[AssetReference, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class ProductCreateInput:
    seller_id: str
    name: str
    photos: list[AssetReference] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PhotoUpdate:
    """Persisted photo change waiting for remote cleanup."""

    product_id: str
    previous: tuple[AssetReference, ...]
    current: tuple[AssetReference, ...]
    product: Optional[Product] = None
