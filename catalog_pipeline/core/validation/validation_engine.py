"""
Validation Engine
Stateless rule pass over raw catalog input, producing a complete finding set
"""

import json
import logging
import re
from collections import Counter
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .finding import ERROR, WARNING, Finding, ValidationReport
from ..codecs import CatalogFormat, get_codec
from ..codecs.base import decode_text
from ..errors import ParseError
from ..records import ChannelRecord

logger = logging.getLogger(__name__)

# Keys that must exist and hold a non-empty value.
VALIDATED_KEYS = (
    "name",
    "url",
    "category",
    "group",
    "country",
    "language",
    "resolution",
    "status",
    "tags",
)

STRING_FIELDS = (
    "name",
    "url",
    "logo",
    "category",
    "group",
    "country",
    "language",
    "resolution",
    "tags",
)

URL_RE = re.compile(r"^https?://[^\s/?#]+\S*$", re.IGNORECASE)
RESOLUTION_RE = re.compile(r"^\d+[pi]$")
COUNTRY_RE = re.compile(r"^[A-Z]{2}$")

Pairs = List[Tuple[str, Any]]


class RawObject(list):
    """Key/value pairs of one JSON object, in source order, duplicates kept."""
    pass


def _json_type(value: Any) -> str:
    if isinstance(value, RawObject):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return "null" if value is None else type(value).__name__


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


class ValidationEngine:
    """
    Checks catalog input against the channel schema.

    Responsibilities:
    - Evaluate every rule category over the whole input in one pass.
    - Detect duplicate keys from the raw key list, before mapping collapse.
    - Never mutate the input and never stop at the first failure.
    """

    def __init__(self, playlist_name_source: str = "display"):
        self._playlist_name_source = playlist_name_source

    def validate_bytes(self, data: bytes, fmt: CatalogFormat = CatalogFormat.STRUCTURED) -> ValidationReport:
        """
        Validate raw file content of any supported format.

        Structured input is checked pre-decode. Tabular and playlist input is
        decoded first. Invalid UTF-8 or a decode failure becomes a single
        structural error.
        """
        try:
            if fmt is CatalogFormat.STRUCTURED:
                return self.validate_text(decode_text(data))
            records = get_codec(fmt, self._playlist_name_source).decode(data)
        except ParseError as e:
            return ValidationReport(findings=[Finding(ERROR, None, None, str(e))])
        return self.validate_records(records)

    def validate_text(self, text: str) -> ValidationReport:
        """Validate JSON text: a single object or an array of objects."""
        if not text.strip():
            return ValidationReport(findings=[Finding(ERROR, None, None, "File is empty")])

        try:
            payload = json.loads(text, object_pairs_hook=RawObject)
        except json.JSONDecodeError as e:
            return ValidationReport(findings=[
                Finding(ERROR, None, None, f"JSON syntax error: {e.msg} (line {e.lineno}, column {e.colno})")
            ])

        if isinstance(payload, RawObject):
            return self.validate_objects([payload])
        if isinstance(payload, list):
            return self.validate_objects(payload)
        return ValidationReport(findings=[
            Finding(ERROR, None, None, f"Expected an object or an array of objects, got {_json_type(payload)}")
        ])

    def validate_records(self, records: Iterable[ChannelRecord]) -> ValidationReport:
        """Validate already-decoded records through their dictionary form."""
        return self.validate_objects([RawObject(r.to_dict().items()) for r in records])

    def validate_objects(self, objects: Sequence[Any]) -> ValidationReport:
        """
        Run every rule over a sequence of raw objects (lists of key/value pairs).

        Args:
            objects: Raw records as RawObject pair lists; anything else is reported
                as a structural error at its index.

        Returns:
            ValidationReport: All findings, file order preserved per record.
        """
        findings: List[Finding] = []
        url_seen: Dict[str, int] = {}
        name_seen: Dict[str, int] = {}

        for index, obj in enumerate(objects):
            if not isinstance(obj, RawObject):
                findings.append(Finding(ERROR, index, None, f"Expected an object, got {_json_type(obj)}"))
                continue

            mapping = self._check_record(index, obj, findings)
            self._check_identity(index, mapping, url_seen, name_seen, findings)

        report = ValidationReport(findings=findings, record_count=len(objects))
        logger.info(
            f"Validation finished: {report.record_count} records, "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report

    def _check_record(self, index: int, pairs: Pairs, findings: List[Finding]) -> Dict[str, Any]:
        keys = [key for key, _ in pairs]
        counts = Counter(keys)
        for key in dict.fromkeys(keys):
            if counts[key] > 1:
                findings.append(Finding(ERROR, index, key, f"Duplicate key '{key}' ({counts[key]} occurrences)"))

        mapping = dict(pairs)

        for key in VALIDATED_KEYS:
            if key not in mapping:
                findings.append(Finding(ERROR, index, key, "Missing required field"))
            elif _is_blank(mapping[key]):
                findings.append(Finding(ERROR, index, key, "Field is null or empty"))

        for key in STRING_FIELDS:
            value = mapping.get(key)
            if _is_blank(value):
                continue
            if not isinstance(value, str):
                findings.append(Finding(ERROR, index, key, f"Must be a string, got {_json_type(value)}"))
                continue
            self._check_format(index, key, value.strip(), findings)

        self._check_status(index, mapping, findings)
        self._check_year(index, mapping, findings)

        for key, value in mapping.items():
            if isinstance(value, str) and value != value.strip():
                findings.append(Finding(WARNING, index, key, "Leading or trailing whitespace"))

        return mapping

    @staticmethod
    def _check_format(index: int, key: str, value: str, findings: List[Finding]) -> None:
        if key in ("url", "logo") and not URL_RE.match(value):
            findings.append(Finding(ERROR, index, key, f"Not an absolute http(s) URL: {value!r}"))
        elif key == "resolution" and not RESOLUTION_RE.match(value):
            findings.append(Finding(ERROR, index, key, f"Resolution must look like '720p' or '1080i', got {value!r}"))
        elif key == "country" and not COUNTRY_RE.match(value):
            findings.append(Finding(ERROR, index, key, f"Country must be two uppercase letters, got {value!r}"))
        elif key == "tags":
            tokens = value.split(",")
            if any(not token.strip() or token != token.strip() for token in tokens):
                findings.append(Finding(
                    WARNING, index, key,
                    f"Tags should be comma-separated tokens without empty entries or stray spaces, got {value!r}",
                ))

    @staticmethod
    def _check_status(index: int, mapping: Dict[str, Any], findings: List[Finding]) -> None:
        if _is_blank(mapping.get("status")):
            return
        status = mapping["status"]
        if isinstance(status, str):
            findings.append(Finding(ERROR, index, "status", f"Must be a boolean, not the string {status!r}"))
        elif not isinstance(status, bool):
            findings.append(Finding(ERROR, index, "status", f"Must be a boolean, got {_json_type(status)}"))

    @staticmethod
    def _check_year(index: int, mapping: Dict[str, Any], findings: List[Finding]) -> None:
        if mapping.get("year") is None:
            return
        year = mapping["year"]
        if isinstance(year, bool) or not isinstance(year, (int, float)):
            findings.append(Finding(ERROR, index, "year", f"Must be numeric or null, got {_json_type(year)}"))

    @staticmethod
    def _check_identity(
        index: int,
        mapping: Dict[str, Any],
        url_seen: Dict[str, int],
        name_seen: Dict[str, int],
        findings: List[Finding],
    ) -> None:
        url = mapping.get("url")
        if isinstance(url, str) and url:
            if url in url_seen:
                findings.append(Finding(ERROR, index, "url", f"Duplicate URL, first seen at record #{url_seen[url]}"))
            else:
                url_seen[url] = index

        name = mapping.get("name")
        if isinstance(name, str) and name:
            if name in name_seen:
                findings.append(Finding(WARNING, index, "name", f"Duplicate name, first seen at record #{name_seen[name]}"))
            else:
                name_seen[name] = index
