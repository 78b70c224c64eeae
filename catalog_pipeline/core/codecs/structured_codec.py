"""
Structured Codec
JSON array-of-objects, the canonical catalog format
"""

import json
import logging
from typing import List, Sequence

from .base import CatalogFormat, ChannelCodec, decode_text
from ..errors import ParseError
from ..records import ChannelRecord

logger = logging.getLogger(__name__)


class StructuredCodec(ChannelCodec):
    """
    Codec for the JSON catalog format.

    Values are taken as-is on decode (no coercion), so a catalog read and
    written back without changes is byte-identical.
    """

    format = CatalogFormat.STRUCTURED

    def __init__(self, indent: int = 2):
        self._indent = indent

    def decode(self, data: bytes) -> List[ChannelRecord]:
        text = decode_text(data)
        if not text.strip():
            raise ParseError("File is empty")

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON: {e.msg} (column {e.colno})", e.lineno)

        if not isinstance(payload, list):
            raise ParseError(
                f"JSON catalog must contain an array of channels, got {type(payload).__name__}"
            )

        records = []
        for index, item in enumerate(payload):
            if not isinstance(item, dict):
                raise ParseError(
                    f"Channel #{index} must be an object, got {type(item).__name__}"
                )
            try:
                records.append(ChannelRecord.from_dict(item))
            except ParseError as e:
                raise ParseError(f"Channel #{index}: {e}")

        logger.debug(f"Decoded {len(records)} channels from JSON")
        return records

    def encode(self, records: Sequence[ChannelRecord]) -> bytes:
        data = [r.to_dict() for r in records]
        text = json.dumps(data, indent=self._indent, ensure_ascii=False)
        return (text + "\n").encode("utf-8")
