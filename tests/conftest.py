"""Shared fixtures for history engine and explorer tests."""

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from endsong.parsing.models import RawPlayRecord
from endsong.store import RecordStore

RawFactory = Callable[..., RawPlayRecord]


@pytest.fixture
def make_raw() -> RawFactory:
    """Build a RawPlayRecord from (artist, album, track, played_at, seconds)."""

    def _make(
        artist: str,
        album: str,
        track: str,
        played_at: datetime,
        seconds: float = 180,
        uri: str | None = None,
    ) -> RawPlayRecord:
        return RawPlayRecord(
            artist_name=artist,
            album_name=album,
            track_name=track,
            played_at=played_at,
            ms_played=int(seconds * 1000),
            spotify_track_uri=uri,
        )

    return _make


@pytest.fixture
def sabaton_raw(make_raw: RawFactory) -> list[RawPlayRecord]:
    """The same song played under three different capitalizations."""
    return [
        make_raw("Sabaton", "Coat of Arms", "The Final Solution", datetime(2021, 1, 1, tzinfo=UTC), 180),
        make_raw("Sabaton", "coat of arms", "The Final Solution", datetime(2021, 6, 1, tzinfo=UTC), 190),
        make_raw("Sabaton", "Coat of Arms", "the final solution", datetime(2021, 6, 15, tzinfo=UTC), 50),
    ]


@pytest.fixture
def sample_raw(make_raw: RawFactory) -> list[RawPlayRecord]:
    """Eight plays of two artists over five days, deliberately out of order."""
    return [
        make_raw("Alestorm", "Sunset on the Golden Age", "Drink", datetime(2023, 1, 5, 8, 5, tzinfo=UTC), 250),
        make_raw("Sabaton", "Coat of Arms", "Coat of Arms", datetime(2023, 1, 1, 10, 0, tzinfo=UTC), 200),
        make_raw("Sabaton", "Coat of Arms", "The Final Solution", datetime(2023, 1, 1, 10, 5, tzinfo=UTC), 180),
        make_raw("Sabaton", "Carolus Rex", "Carolus Rex", datetime(2023, 1, 2, 9, 0, tzinfo=UTC), 240),
        make_raw("Sabaton", "Coat of Arms", "Coat of Arms", datetime(2023, 1, 2, 9, 10, tzinfo=UTC), 200),
        make_raw("Alestorm", "Sunset on the Golden Age", "Drink", datetime(2023, 1, 3, 20, 0, tzinfo=UTC), 250),
        make_raw("Sabaton", "Carolus Rex", "Carolus Rex", datetime(2023, 1, 4, 20, 0, tzinfo=UTC), 240),
        make_raw("Sabaton", "Carolus Rex (Single)", "Carolus Rex", datetime(2023, 1, 5, 8, 0, tzinfo=UTC), 240),
    ]


@pytest.fixture
def sample_store(sample_raw: list[RawPlayRecord]) -> RecordStore:
    return RecordStore.build(sample_raw)
