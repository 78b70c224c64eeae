"""
Codec Interface
Format tags and the shared decode/encode contract
"""

import re
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import ParseError, UnsupportedConversion
from ..records import ChannelRecord

YEAR_TEXT_RE = re.compile(r"^-?\d+$")


class CatalogFormat(Enum):
    """Interchange formats understood by the pipeline."""
    STRUCTURED = "structured"
    TABULAR = "tabular"
    PLAYLIST = "playlist"

    @classmethod
    def from_path(cls, path) -> "CatalogFormat":
        """
        Map a file path to its format by extension.

        Raises:
            UnsupportedConversion: If the extension is not recognised.
        """
        suffix = Path(path).suffix.lower()
        try:
            return _EXTENSIONS[suffix]
        except KeyError:
            raise UnsupportedConversion(
                f"Unsupported file type '{suffix or path}'. "
                f"Supported: {', '.join(sorted(_EXTENSIONS))}"
            )


_EXTENSIONS = {
    ".json": CatalogFormat.STRUCTURED,
    ".csv": CatalogFormat.TABULAR,
    ".m3u": CatalogFormat.PLAYLIST,
    ".m3u8": CatalogFormat.PLAYLIST,
}


class ChannelCodec(ABC):
    """
    Paired decoder/encoder for exactly one interchange format.
    Codecs operate on bytes only; file handling lives with the callers.
    """

    format: CatalogFormat

    @abstractmethod
    def decode(self, data: bytes) -> List[ChannelRecord]:
        """Parse bytes into an ordered list of records."""

    @abstractmethod
    def encode(self, records: Sequence[ChannelRecord]) -> bytes:
        """Serialize records, preserving their order."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def decode_text(data: bytes) -> str:
    """Decode UTF-8 input, tolerating a byte-order mark."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"Input is not valid UTF-8: {e}")


def split_lines(text: str) -> List[str]:
    """Split on '\\n' only, dropping a trailing '\\r' from each line."""
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def parse_year_text(text: str, line: Optional[int] = None) -> Optional[int]:
    """Re-type a textual year; empty or 'null' means absent."""
    if text == "" or text == "null":
        return None
    if not YEAR_TEXT_RE.match(text):
        raise ParseError(f"Field 'year' must be numeric, got {text!r}", line)
    return int(text)


def parse_status_text(text: str, line: Optional[int] = None) -> bool:
    """Re-type a textual status; empty means the default (true)."""
    if text == "" or text == "true":
        return True
    if text == "false":
        return False
    raise ParseError(f"Field 'status' must be 'true' or 'false', got {text!r}", line)


def format_status(status) -> str:
    # null status falls back to the default
    return "false" if status is False or status == "false" else "true"


def format_optional(value) -> str:
    return "" if value is None else str(value)
