from __future__ import annotations

import pytest

from catalog_pipeline.core.errors import ParseError
from catalog_pipeline.core.records import FIELD_ORDER, ChannelRecord, sort_records


def test_from_dict_applies_optional_defaults() -> None:
    record = ChannelRecord.from_dict({
        "name": "News1",
        "url": "https://x/a",
        "category": "News",
        "country": "US",
        "language": "English",
        "tags": "news",
    })
    assert record.logo is None
    assert record.group == ""
    assert record.resolution == ""
    assert record.year is None
    assert record.status is True


def test_from_dict_requires_name_url_category_country_language_tags() -> None:
    bag = {"name": "A", "url": "https://a", "category": "C", "country": "US", "language": "English"}
    with pytest.raises(ParseError, match="tags"):
        ChannelRecord.from_dict(bag)


def test_to_dict_keeps_every_key_in_column_order(news_record: ChannelRecord) -> None:
    data = news_record.to_dict()
    assert tuple(data) == FIELD_ORDER
    assert data["logo"] is None
    assert data["year"] is None


def test_tvg_id_is_lowercase_name_without_spaces() -> None:
    record = ChannelRecord.from_dict({
        "name": "BBC One HD",
        "url": "https://x/bbc",
        "category": "General",
        "country": "GB",
        "language": "English",
        "tags": "uk",
    })
    assert record.tvg_id == "bbconehd"


def test_identity_is_the_verbatim_url(news_record: ChannelRecord) -> None:
    assert news_record.identity == "https://x/a"
    other = ChannelRecord.from_dict({**news_record.to_dict(), "url": "https://x/a/"})
    assert other.identity != news_record.identity


def test_sort_records_orders_by_group_then_name_and_is_stable(news_record: ChannelRecord) -> None:
    base = news_record.to_dict()
    first = ChannelRecord.from_dict({**base, "name": "Same", "group": "B", "url": "https://1", "status": False})
    second = ChannelRecord.from_dict({**base, "name": "Same", "group": "B", "url": "https://2", "status": True})
    early = ChannelRecord.from_dict({**base, "name": "Zed", "group": "A", "url": "https://3"})
    ungrouped = ChannelRecord.from_dict({**base, "name": "Alpha", "group": "", "url": "https://4"})

    ordered = sort_records([first, second, early, ungrouped])

    assert [r.url for r in ordered] == ["https://4", "https://3", "https://1", "https://2"]


def test_sort_uses_ordinal_comparison(news_record: ChannelRecord) -> None:
    base = news_record.to_dict()
    lower = ChannelRecord.from_dict({**base, "name": "alpha", "url": "https://l"})
    upper = ChannelRecord.from_dict({**base, "name": "Zulu", "url": "https://u"})
    assert [r.name for r in sort_records([lower, upper])] == ["Zulu", "alpha"]


@pytest.mark.parametrize("key, value", [("name", 5), ("group", 3), ("logo", ["x"]), ("tags", True)])
def test_from_dict_rejects_non_string_text_fields(news_record: ChannelRecord, key: str, value) -> None:
    with pytest.raises(ParseError, match=key):
        ChannelRecord.from_dict({**news_record.to_dict(), key: value})


def test_from_dict_tolerates_null_text_fields(news_record: ChannelRecord) -> None:
    record = ChannelRecord.from_dict({**news_record.to_dict(), "group": None, "name": None})
    assert record.sort_key == ("", "")
    assert record.tvg_id == ""
