"""Tests for PlayRecord, StringPool and RecordView."""

from datetime import UTC, datetime, timedelta

import pytest

from endsong.records import PlayRecord, RecordView, StringPool


def _records(count: int) -> list[PlayRecord]:
    return [
        PlayRecord(
            timestamp=datetime(2023, 1, 1, tzinfo=UTC) + timedelta(hours=i),
            played_duration=timedelta(seconds=100 + i),
            track_name=f"Track {i}",
            album_name="Album",
            artist_name="Artist",
        )
        for i in range(count)
    ]


def test_record_equality_ignores_time_and_duration() -> None:
    first = PlayRecord(datetime(2023, 1, 1, tzinfo=UTC), timedelta(seconds=10), "T", "Al", "Ar")
    second = PlayRecord(datetime(2024, 5, 5, tzinfo=UTC), timedelta(seconds=99), "T", "Al", "Ar", "spotify:track:X")
    assert first == second
    assert hash(first) == hash(second)
    assert first.identity == ("Ar", "Al", "T")


def test_record_equality_is_case_sensitive() -> None:
    first = PlayRecord(datetime(2023, 1, 1, tzinfo=UTC), timedelta(), "T", "Al", "Ar")
    second = PlayRecord(datetime(2023, 1, 1, tzinfo=UTC), timedelta(), "t", "Al", "Ar")
    assert first != second


def test_string_pool_interns() -> None:
    pool = StringPool()
    first = pool("".join(["Sab", "aton"]))
    second = pool("".join(["Saba", "ton"]))
    assert first is second
    pool("Alestorm")
    assert len(pool) == 2


def test_view_covers_whole_sequence_by_default() -> None:
    records = _records(5)
    view = RecordView(records)
    assert len(view) == 5
    assert list(view) == records
    assert view.indices == (0, 5)


def test_view_indexing_is_relative() -> None:
    records = _records(5)
    view = RecordView(records, 1, 4)
    assert view[0] is records[1]
    assert view[-1] is records[3]
    with pytest.raises(IndexError):
        view[3]


def test_view_slice_returns_view() -> None:
    records = _records(6)
    view = RecordView(records, 1, 5)
    sub = view[1:3]
    assert isinstance(sub, RecordView)
    assert sub.indices == (2, 4)
    assert list(sub) == records[2:4]


def test_view_stepped_slice_returns_list() -> None:
    records = _records(6)
    assert RecordView(records)[::2] == [records[0], records[2], records[4]]


def test_view_reversed() -> None:
    records = _records(4)
    assert list(reversed(RecordView(records, 1, 3))) == [records[2], records[1]]


def test_view_rejects_out_of_range_bounds() -> None:
    with pytest.raises(IndexError):
        RecordView(_records(3), 0, 4)


def test_empty_view() -> None:
    view = RecordView(_records(3), 2, 2)
    assert len(view) == 0
    assert list(view) == []
