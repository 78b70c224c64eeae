"""
Format conversion between catalog files
"""

from .converter import CatalogConverter

__all__ = ["CatalogConverter"]
