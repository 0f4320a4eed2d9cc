"""Domain modules and their public exports."""

from . import assets, logo, products

__all__ = [
    "assets",
    "logo",
    "products",
]
