"""SQLAlchemy-backed repository implementations."""

from .logo_repository import SqlLogoRepository
from .product_repository import SqlProductRepository

__all__ = [
    "SqlLogoRepository",
    "SqlProductRepository",
]
