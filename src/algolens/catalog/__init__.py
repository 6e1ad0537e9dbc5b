"""Catalog package."""

from .loader import CatalogError, CatalogLoader

__all__ = ["CatalogError", "CatalogLoader"]
