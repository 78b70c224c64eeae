"""
Storage layer: canonical catalog persistence
"""

from .atomic_write import write_bytes_atomic
from .catalog_store import CatalogStore, ImportEntry, ImportLog

__all__ = ["CatalogStore", "ImportEntry", "ImportLog", "write_bytes_atomic"]
