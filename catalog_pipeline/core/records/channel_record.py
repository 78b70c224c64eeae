"""
Channel Record Domain Model
Canonical channel schema, defaults and identity rules
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..errors import ParseError

# Column order shared by every interchange format.
FIELD_ORDER = (
    "name",
    "url",
    "logo",
    "category",
    "group",
    "country",
    "language",
    "resolution",
    "year",
    "status",
    "tags",
)

REQUIRED_FIELDS = ("name", "url", "category", "country", "language", "tags")

OPTIONAL_DEFAULTS: Dict[str, Any] = {
    "logo": None,
    "group": "",
    "resolution": "",
    "year": None,
    "status": True,
}

# Text fields; null is tolerated here and reported by validation.
TEXT_FIELDS = (
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


@dataclass(frozen=True)
class ChannelRecord:
    """
    Domain model representing a single channel descriptor.
    Immutable: a record is only ever replaced wholesale, never patched.
    """
    name: str
    url: str
    category: str
    country: str
    language: str
    tags: str
    logo: Optional[str] = None
    group: str = ""
    resolution: str = ""
    year: Optional[int] = None
    status: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChannelRecord":
        """
        Build a record from a loosely-typed attribute bag.

        Args:
            data: Mapping holding at least the required keys.

        Returns:
            ChannelRecord: Record with defaults applied to absent optional keys.

        Raises:
            ParseError: If a required key is missing or a text field holds
                a non-string value.
        """
        for key in REQUIRED_FIELDS:
            if key not in data:
                raise ParseError(f"Missing required field: '{key}'")

        values = {key: data[key] for key in REQUIRED_FIELDS}
        for key, default in OPTIONAL_DEFAULTS.items():
            values[key] = data.get(key, default)
        for key in TEXT_FIELDS:
            value = values[key]
            if value is not None and not isinstance(value, str):
                raise ParseError(f"Field '{key}' must be a string, got {type(value).__name__}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to an ordered dictionary with every key present."""
        raw = asdict(self)
        return {key: raw[key] for key in FIELD_ORDER}

    @property
    def identity(self) -> str:
        """Deduplication key: the stream url, compared verbatim."""
        return self.url

    @property
    def tvg_id(self) -> str:
        """Playlist identifier derived from the name."""
        return (self.name or "").lower().replace(" ", "")

    @property
    def sort_key(self) -> Tuple[str, str]:
        # null group/name sort first, as empty strings
        return (self.group or "", self.name or "")

    def __repr__(self) -> str:
        return f"ChannelRecord(name={self.name!r}, group={self.group!r}, url={self.url!r})"


def sort_records(records: Iterable[ChannelRecord]) -> List[ChannelRecord]:
    """Return records in canonical (group, name) order; ties keep input order."""
    return sorted(records, key=lambda r: r.sort_key)
