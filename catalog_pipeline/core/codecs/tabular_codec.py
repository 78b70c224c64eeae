"""
Tabular Codec
Pipe-delimited text with a fixed 11-column header
"""

import csv
import io
import logging
from typing import List, Sequence

import pandas as pd

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
from ..records import FIELD_ORDER, ChannelRecord

logger = logging.getLogger(__name__)

DELIMITER = "|"
HEADER = DELIMITER.join(FIELD_ORDER)


class TabularCodec(ChannelCodec):
    """
    Codec for the pipe-delimited format.

    There is no escaping: a literal '|' inside a value shifts the columns
    and is rejected on decode as a field-count mismatch.
    """

    format = CatalogFormat.TABULAR

    def decode(self, data: bytes) -> List[ChannelRecord]:
        lines = split_lines(decode_text(data))
        if not lines or lines[0] != HEADER:
            raise ParseError(f"Expected header '{HEADER}'", 1)

        # Keep the source line number of every data row for error reporting
        kept = [HEADER]
        line_numbers = []
        for lineno, line in enumerate(lines[1:], start=2):
            if line == "":
                continue
            field_count = line.count(DELIMITER) + 1
            if field_count != len(FIELD_ORDER):
                raise ParseError(
                    f"Expected {len(FIELD_ORDER)} fields, found {field_count}", lineno
                )
            kept.append(line)
            line_numbers.append(lineno)

        frame = pd.read_csv(
            io.StringIO("\n".join(kept)),
            sep=DELIMITER,
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            quoting=csv.QUOTE_NONE,
            skip_blank_lines=False,
        )

        records = []
        for lineno, row in zip(line_numbers, frame.to_dict(orient="records")):
            records.append(self._row_to_record(row, lineno))

        logger.debug(f"Decoded {len(records)} channels from tabular text")
        return records

    def encode(self, records: Sequence[ChannelRecord]) -> bytes:
        out = [HEADER]
        for record in records:
            fields = self._record_to_fields(record)
            if any(DELIMITER in f or "\n" in f or "\r" in f for f in fields):
                logger.warning(
                    f"Channel '{record.name}' contains a '{DELIMITER}' or line break; "
                    "tabular columns will not align"
                )
            out.append(DELIMITER.join(fields))
        return ("\n".join(out) + "\n").encode("utf-8")

    @staticmethod
    def _row_to_record(row: dict, lineno: int) -> ChannelRecord:
        logo = row["logo"]
        return ChannelRecord.from_dict({
            "name": row["name"],
            "url": row["url"],
            "logo": None if logo in ("", "null") else logo,
            "category": row["category"],
            "group": row["group"],
            "country": row["country"],
            "language": row["language"],
            "resolution": row["resolution"],
            "year": parse_year_text(row["year"], lineno),
            "status": parse_status_text(row["status"], lineno),
            "tags": row["tags"],
        })

    @staticmethod
    def _record_to_fields(record: ChannelRecord) -> List[str]:
        return [
            format_optional(record.name),
            format_optional(record.url),
            format_optional(record.logo),
            format_optional(record.category),
            format_optional(record.group),
            format_optional(record.country),
            format_optional(record.language),
            format_optional(record.resolution),
            format_optional(record.year),
            format_status(record.status),
            format_optional(record.tags),
        ]
