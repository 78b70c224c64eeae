from __future__ import annotations

import json
from pathlib import Path

import pytest

from catalog_pipeline.core.records import ChannelRecord


@pytest.fixture
def news_record() -> ChannelRecord:
    return ChannelRecord(
        name="News1",
        url="https://x/a",
        logo=None,
        category="News",
        group="",
        country="US",
        language="English",
        resolution="720p",
        year=None,
        status=True,
        tags="news,24x7",
    )


@pytest.fixture
def sample_records() -> list[ChannelRecord]:
    return [
        ChannelRecord(
            name="Sports Live",
            url="https://cdn.example.com/sports.m3u8",
            logo="https://cdn.example.com/sports.png",
            category="Sports",
            group="Sports",
            country="GB",
            language="English",
            resolution="1080i",
            year=2015,
            status=False,
            tags="sports,live",
        ),
        ChannelRecord(
            name="Kids Zone",
            url="http://kids.example.org/stream?id=7",
            logo=None,
            category="Kids",
            group="",
            country="FR",
            language="French",
            resolution="",
            year=None,
            status=True,
            tags="kids",
        ),
        ChannelRecord(
            name="Música 24",
            url="https://musica.example.es/live",
            logo=None,
            category="Music",
            group="Music",
            country="ES",
            language="Spanish",
            resolution="480p",
            year=1999,
            status=True,
            tags="music,latin,24x7",
        ),
    ]


def valid_channel(**overrides) -> dict:
    """A channel dict that passes validation with no findings."""
    channel = {
        "name": "News1",
        "url": "https://x/a",
        "logo": None,
        "category": "News",
        "group": "General",
        "country": "US",
        "language": "English",
        "resolution": "720p",
        "year": None,
        "status": True,
        "tags": "news,24x7",
    }
    channel.update(overrides)
    return channel


@pytest.fixture
def write_catalog(tmp_path: Path):
    def _write(channels: list[dict], name: str = "channels.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(channels, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_channel():
    return valid_channel
