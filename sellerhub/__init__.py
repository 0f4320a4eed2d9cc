"""SellerHub backend: product catalog and hosted image asset management."""

__version__ = "0.3.0"
