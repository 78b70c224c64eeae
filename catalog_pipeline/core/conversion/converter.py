"""
Catalog Converter Service
Decode with one codec, encode with another, write atomically
"""

import logging
from pathlib import Path
from typing import List, Tuple

from shared.storage import write_bytes_atomic

from ..codecs import CatalogFormat, get_codec
from ..errors import InputNotFound, UnsupportedConversion
from ..records import ChannelRecord, sort_records

logger = logging.getLogger(__name__)


class CatalogConverter:
    """
    Service responsible for converting channel files between formats.

    Responsibilities:
    - Resolve an (input, output) path pair to a pair of distinct formats.
    - Decode the whole input before anything is written.
    - Emit JSON output in canonical (group, name) order.
    - Replace the output file atomically.
    """

    def __init__(self, playlist_name_source: str = "display"):
        self._playlist_name_source = playlist_name_source

    @staticmethod
    def resolve_pair(input_path: Path, output_path: Path) -> Tuple[CatalogFormat, CatalogFormat]:
        """
        Map a path pair to (source, target) formats.

        Raises:
            UnsupportedConversion: For unknown extensions or a same-format pair.
        """
        source = CatalogFormat.from_path(input_path)
        target = CatalogFormat.from_path(output_path)
        if source is target:
            raise UnsupportedConversion(
                f"Input and output are both {source.value}; "
                "supported: json<->m3u, json<->csv, m3u<->csv"
            )
        return source, target

    def convert_records(self, records: List[ChannelRecord], target: CatalogFormat) -> bytes:
        if target is CatalogFormat.STRUCTURED:
            records = sort_records(records)
        return get_codec(target, self._playlist_name_source).encode(records)

    def convert_file(self, input_path: Path, output_path: Path) -> int:
        """
        Convert one file into another, dispatching on the file extensions.

        Returns:
            int: Number of channels written.

        Raises:
            InputNotFound: If the input file does not exist.
            UnsupportedConversion: If the extension pair has no codec pair.
            ParseError: If the input is malformed; the output is left untouched.
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        source, target = self.resolve_pair(input_path, output_path)

        if not input_path.is_file():
            raise InputNotFound(input_path)

        logger.info(f"Converting {input_path} ({source.value}) -> {output_path} ({target.value})")
        records = get_codec(source, self._playlist_name_source).decode(input_path.read_bytes())
        write_bytes_atomic(output_path, self.convert_records(records, target))

        logger.info(f"✓ Converted {len(records)} channels to {output_path}")
        return len(records)
