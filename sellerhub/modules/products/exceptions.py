"""Product domain specific exceptions."""


class ProductError(Exception):
    """Base class for product domain errors."""


class ProductNotFoundError(ProductError):
    """Raised when the requested product cannot be found."""
