"""Analysis of Spotify extended streaming history (endsong) exports."""

from endsong.entities import Album, Artist, Entity, Song
from endsong.exceptions import (
    EmptyHistoryError,
    EndsongError,
    HistoryParseError,
    InvalidArgumentError,
)
from endsong.records import PlayRecord, RecordView
from endsong.store import RecordStore

__all__ = [
    "Album",
    "Artist",
    "EmptyHistoryError",
    "EndsongError",
    "Entity",
    "HistoryParseError",
    "InvalidArgumentError",
    "PlayRecord",
    "RecordStore",
    "RecordView",
    "Song",
]
