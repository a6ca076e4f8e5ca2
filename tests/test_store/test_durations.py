"""Tests for canonical song duration inference."""

from datetime import UTC, datetime, timedelta

import pytest

from endsong.durations import canonical_duration, song_durations, song_length
from endsong.entities import Song
from endsong.records import PlayRecord


def _play(track: str, seconds: int, album: str = "Album") -> PlayRecord:
    return PlayRecord(datetime(2023, 1, 1, tzinfo=UTC), timedelta(seconds=seconds), track, album, "Artist")


def test_most_common_duration_wins() -> None:
    durations = [timedelta(seconds=s) for s in (200, 200, 410, 100)]
    assert canonical_duration(durations) == timedelta(seconds=200)


def test_tie_goes_to_longest() -> None:
    durations = [timedelta(seconds=s) for s in (180, 190, 50)]
    assert canonical_duration(durations) == timedelta(seconds=190)


def test_tie_between_repeated_durations_goes_to_longest() -> None:
    durations = [timedelta(seconds=s) for s in (120, 240, 120, 240, 300)]
    assert canonical_duration(durations) == timedelta(seconds=240)


def test_empty_durations_raise() -> None:
    with pytest.raises(ValueError):
        canonical_duration([])


def test_song_durations_one_entry_per_song() -> None:
    records = [_play("A", 100), _play("A", 100), _play("A", 30), _play("B", 250), _play("A", 90, album="Live")]
    durations = song_durations(records)
    assert durations == {
        Song.of("A", "Album", "Artist"): timedelta(seconds=100),
        Song.of("B", "Album", "Artist"): timedelta(seconds=250),
        Song.of("A", "Live", "Artist"): timedelta(seconds=90),
    }


def test_song_length_single_song() -> None:
    records = [_play("A", 100), _play("B", 250), _play("A", 100), _play("A", 10)]
    assert song_length(records, Song.of("A", "Album", "Artist")) == timedelta(seconds=100)


def test_song_length_unknown_song_raises() -> None:
    with pytest.raises(LookupError):
        song_length([_play("A", 100)], Song.of("Z", "Album", "Artist"))
