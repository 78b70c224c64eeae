"""
Codec layer: one decode/encode pair per interchange format
"""

from .base import CatalogFormat, ChannelCodec
from .playlist_codec import PlaylistCodec
from .structured_codec import StructuredCodec
from .tabular_codec import TabularCodec


def get_codec(fmt: CatalogFormat, playlist_name_source: str = "display") -> ChannelCodec:
    """Return the codec registered for a format."""
    if fmt is CatalogFormat.STRUCTURED:
        return StructuredCodec()
    if fmt is CatalogFormat.TABULAR:
        return TabularCodec()
    if fmt is CatalogFormat.PLAYLIST:
        return PlaylistCodec(name_source=playlist_name_source)
    raise ValueError(f"No codec registered for {fmt!r}")


__all__ = [
    "CatalogFormat",
    "ChannelCodec",
    "PlaylistCodec",
    "StructuredCodec",
    "TabularCodec",
    "get_codec",
]
