"""
Record model for the channel catalog
"""

from .channel_record import (
    FIELD_ORDER,
    OPTIONAL_DEFAULTS,
    REQUIRED_FIELDS,
    ChannelRecord,
    sort_records,
)

__all__ = ["ChannelRecord", "FIELD_ORDER", "OPTIONAL_DEFAULTS", "REQUIRED_FIELDS", "sort_records"]
