"""ImageKit media host integration."""

from .client import ImageKitClient

__all__ = ["ImageKitClient"]
