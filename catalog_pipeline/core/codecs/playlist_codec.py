"""
Playlist Codec
Extended M3U playlist (#EXTM3U header, EXTINF + URL blocks)
"""

import logging
import re
from typing import Dict, List, Sequence, Tuple

from .base import (
    CatalogFormat,
    ChannelCodec,
    decode_text,
    format_optional,
    format_status,
    parse_status_text,
    parse_year_text,
    split_lines,
)
from ..errors import ParseError
from ..records import ChannelRecord

logger = logging.getLogger(__name__)

PLAYLIST_HEADER = "#EXTM3U"
EXTINF_PREFIX = "#EXTINF:"
ATTR_RE = re.compile(r'(\w[\w\-]*)="([^"]*)"')

NAME_SOURCES = ("display", "tvg-name")


def parse_extinf(extinf: str) -> Tuple[str, Dict[str, str]]:
    """
    Split an #EXTINF line into (display name, attributes).

    The display name is the text after the last comma, so a name that
    itself contains a comma keeps only its final segment.
    """
    head, sep, display = extinf.rpartition(",")
    if not sep:
        head, display = extinf, ""
    return display, dict(ATTR_RE.findall(head))


class PlaylistCodec(ChannelCodec):
    """
    Codec for extended M3U playlists.

    Responsibilities:
    - Emit attributes in a fixed order, omitting empty optional ones.
    - Derive tvg-id from the name on encode; ignore it on decode.
    - Re-type tvg-year and tvg-status from text.
    """

    format = CatalogFormat.PLAYLIST

    def __init__(self, name_source: str = "display"):
        """
        Args:
            name_source: 'display' reads the name after the last comma;
                'tvg-name' prefers the untruncated tvg-name attribute.
        """
        if name_source not in NAME_SOURCES:
            raise ValueError(f"name_source must be one of {NAME_SOURCES}, got {name_source!r}")
        self._name_source = name_source

    def decode(self, data: bytes) -> List[ChannelRecord]:
        lines = split_lines(decode_text(data))

        first = next((i for i, l in enumerate(lines) if l.strip()), None)
        if first is None or not lines[first].strip().startswith(PLAYLIST_HEADER):
            lineno = 1 if first is None else first + 1
            raise ParseError(f"Playlist must start with '{PLAYLIST_HEADER}'", lineno)

        records: List[ChannelRecord] = []
        i = first + 1
        while i < len(lines):
            if not lines[i].startswith(EXTINF_PREFIX):
                i += 1
                continue

            extinf_lineno = i + 1
            # The URL is not always right after EXTINF (#EXTVLCOPT and friends).
            j = i + 1
            while j < len(lines) and (not lines[j].strip() or lines[j].startswith("#")):
                if lines[j].startswith(EXTINF_PREFIX):
                    break
                j += 1
            if j >= len(lines) or lines[j].startswith("#"):
                raise ParseError("EXTINF entry has no stream URL", extinf_lineno)

            records.append(self._to_record(lines[i], lines[j], extinf_lineno))
            i = j + 1

        logger.debug(f"Decoded {len(records)} channels from playlist")
        return records

    def encode(self, records: Sequence[ChannelRecord]) -> bytes:
        out = [PLAYLIST_HEADER]
        for record in records:
            attrs = self._attributes(record)
            if any('"' in value for _, value in attrs):
                logger.warning(f"Channel '{record.name}' has a '\"' in an attribute; it will not decode cleanly")
            joined = " ".join(f'{key}="{value}"' for key, value in attrs)
            out.append(f"{EXTINF_PREFIX}-1 {joined},{format_optional(record.name)}")
            out.append(format_optional(record.url))
        return ("\n".join(out) + "\n").encode("utf-8")

    def _to_record(self, extinf: str, url: str, lineno: int) -> ChannelRecord:
        display, attrs = parse_extinf(extinf)
        name = display
        if self._name_source == "tvg-name" or not name:
            name = attrs.get("tvg-name", name)

        logo = attrs.get("tvg-logo", "")
        return ChannelRecord.from_dict({
            "name": name,
            "url": url,
            "logo": None if logo in ("", "null") else logo,
            "category": attrs.get("tvg-category", ""),
            "group": attrs.get("tvg-group", ""),
            "country": attrs.get("tvg-country", ""),
            "language": attrs.get("tvg-language", ""),
            "resolution": attrs.get("tvg-resolution", ""),
            "year": parse_year_text(attrs.get("tvg-year", ""), lineno),
            "status": parse_status_text(attrs.get("tvg-status", ""), lineno),
            "tags": attrs.get("tvg-tags", ""),
        })

    @staticmethod
    def _attributes(record: ChannelRecord) -> List[Tuple[str, str]]:
        attrs = [("tvg-id", record.tvg_id), ("tvg-name", record.name)]
        if record.logo:
            attrs.append(("tvg-logo", record.logo))
        attrs.append(("tvg-category", record.category))
        if record.group:
            attrs.append(("tvg-group", record.group))
        attrs.append(("tvg-country", record.country))
        attrs.append(("tvg-language", record.language))
        if record.resolution:
            attrs.append(("tvg-resolution", record.resolution))
        if record.year is not None:
            attrs.append(("tvg-year", str(record.year)))
        attrs.append(("tvg-status", format_status(record.status)))
        attrs.append(("tvg-tags", record.tags))
        return [(key, format_optional(value)) for key, value in attrs]

    def __repr__(self) -> str:
        return f"PlaylistCodec(name_source={self._name_source!r})"
