"""Tests for HistoryService."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from endsong.parsing.models import RawPlayRecord
from endsong.store import RecordStore
from endsong_api.history.service import HistoryService

RawFactory = Callable[..., RawPlayRecord]


def test_get_summary_of_empty_history() -> None:
    summary = HistoryService().get_summary(RecordStore([]))
    assert summary.total_plays == 0
    assert summary.total_ms_played == 0
    assert summary.first_play is None
    assert summary.last_play is None


def test_get_top_albums_open_ended_range(sample_store: RecordStore) -> None:
    svc = HistoryService()
    result = svc.get_top_albums(sample_store, start=datetime(2023, 1, 4, tzinfo=UTC))
    assert [(a.album_name, a.play_count) for a in result] == [
        ("Sunset on the Golden Age", 1),
        ("Carolus Rex", 1),
        ("Carolus Rex (Single)", 1),
    ]


def test_get_top_songs_limit(sample_store: RecordStore) -> None:
    result = HistoryService().get_top_songs(sample_store, limit=1)
    assert len(result) == 1
    assert result[0].song_name == "Carolus Rex"
    assert result[0].play_count == 3


def test_get_artist_summary_missing(sample_store: RecordStore) -> None:
    assert HistoryService().get_artist_summary(sample_store, "Nobody") is None


def test_get_song_summary_prefers_most_played_version(sample_store: RecordStore) -> None:
    summary = HistoryService().get_song_summary(sample_store, "Sabaton", "CAROLUS REX")
    assert summary is not None
    assert summary.versions[0].album_name == "Carolus Rex"
    assert summary.total_plays == sum(v.play_count for v in summary.versions)


def test_get_entries_defaults_to_one_day(sample_store: RecordStore) -> None:
    entries = HistoryService().get_entries(sample_store, datetime(2023, 1, 5, tzinfo=UTC))
    assert [e.artist_name for e in entries] == ["Sabaton", "Alestorm"]


def test_get_peak_window_whole_history(sample_store: RecordStore) -> None:
    peak = HistoryService().get_peak_window(sample_store, 7)
    assert peak.total_ms_played == 1_800_000
    assert peak.start == sample_store.first_timestamp()
    assert peak.end == sample_store.last_timestamp()


def test_get_entries_carry_track_uri(make_raw: RawFactory) -> None:
    played_at = datetime(2023, 1, 1, 12, tzinfo=UTC)
    store = RecordStore.build(
        [
            make_raw("Sabaton", "Coat of Arms", "Coat of Arms", played_at, uri="spotify:track:AAA"),
            make_raw("Sabaton", "Coat of Arms", "Uprising", played_at + timedelta(minutes=5)),
        ]
    )
    entries = HistoryService().get_entries(store, played_at)
    assert [e.spotify_track_uri for e in entries] == ["spotify:track:AAA", None]
