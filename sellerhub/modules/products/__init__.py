"""Product domain exports."""

from .exceptions import ProductError, ProductNotFoundError
from .models import PhotoUpdate, Product, ProductCreateInput
from .service import ProductService

__all__ = [
    "PhotoUpdate",
    "Product",
    "ProductCreateInput",
    "ProductError",
    "ProductNotFoundError",
    "ProductService",
]
