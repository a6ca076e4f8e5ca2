"""Artist, album and song entities projected from play records.

All three kinds share one capability set so the aggregation code can be
written once:

* ``from_record(record)`` projects a record onto the entity kind,
* ``matches(record)`` tests membership with exact capitalization,
* ``matches_lowercase(record)`` lowercases the record side only, so the
  entity must have been built from lowercased names,
* ``sort_key`` gives the ordering used to break ties in top-N listings.

Entities hold references to the record's interned strings; projecting one
never copies text.
"""

import functools
from dataclasses import dataclass
from typing import Self

from endsong.records import PlayRecord


class _Ordered:
    """Rich comparisons derived from ``sort_key`` between entities of the same kind."""

    __slots__ = ()

    @property
    def sort_key(self) -> tuple[str, ...]:
        raise NotImplementedError

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.sort_key < other.sort_key  # type: ignore[attr-defined]


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Artist(_Ordered):
    """An artist, ordered by name."""

    name: str

    @classmethod
    def from_record(cls, record: PlayRecord) -> Self:
        return cls(record.artist_name)

    @property
    def sort_key(self) -> tuple[str, ...]:
        return (self.name,)

    def matches(self, record: PlayRecord) -> bool:
        return record.artist_name == self.name

    def matches_lowercase(self, record: PlayRecord) -> bool:
        return record.artist_name.lower() == self.name

    def lowercase(self) -> "Artist":
        return Artist(self.name.lower())

    def __str__(self) -> str:
        return self.name


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Album(_Ordered):
    """An album of an artist, ordered by (artist, album name)."""

    name: str
    artist: Artist

    @classmethod
    def from_record(cls, record: PlayRecord) -> Self:
        return cls(record.album_name, Artist(record.artist_name))

    @classmethod
    def of(cls, album_name: str, artist_name: str) -> Self:
        return cls(album_name, Artist(artist_name))

    @property
    def sort_key(self) -> tuple[str, ...]:
        return (self.artist.name, self.name)

    def matches(self, record: PlayRecord) -> bool:
        return record.artist_name == self.artist.name and record.album_name == self.name

    def matches_lowercase(self, record: PlayRecord) -> bool:
        return record.artist_name.lower() == self.artist.name and record.album_name.lower() == self.name

    def lowercase(self) -> "Album":
        return Album(self.name.lower(), self.artist.lowercase())

    def __str__(self) -> str:
        return f"{self.artist.name} - {self.name}"


@functools.total_ordering
@dataclass(frozen=True, slots=True)
class Song(_Ordered):
    """A song on a specific album.

    Ordered by (artist, song name, album name): versions of the same song
    from different albums sort next to each other.
    """

    name: str
    album: Album

    @classmethod
    def from_record(cls, record: PlayRecord) -> Self:
        return cls(record.track_name, Album(record.album_name, Artist(record.artist_name)))

    @classmethod
    def of(cls, song_name: str, album_name: str, artist_name: str) -> Self:
        return cls(song_name, Album(album_name, Artist(artist_name)))

    @property
    def artist(self) -> Artist:
        return self.album.artist

    @property
    def sort_key(self) -> tuple[str, ...]:
        return (self.album.artist.name, self.name, self.album.name)

    def matches(self, record: PlayRecord) -> bool:
        return (
            record.artist_name == self.album.artist.name
            and record.album_name == self.album.name
            and record.track_name == self.name
        )

    def matches_lowercase(self, record: PlayRecord) -> bool:
        return (
            record.artist_name.lower() == self.album.artist.name
            and record.album_name.lower() == self.album.name
            and record.track_name.lower() == self.name
        )

    def lowercase(self) -> "Song":
        return Song(self.name.lower(), self.album.lowercase())

    def __str__(self) -> str:
        return f"{self.album.artist.name} - {self.name} ({self.album.name})"


Entity = Artist | Album | Song
# Entities that songs can be scoped to
SongParent = Artist | Album
