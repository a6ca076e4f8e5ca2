"""Case-insensitive lookup of artists, albums and songs.

Lookups return the capitalization found in the data (the first matching
record's), so user input like "sabaton" resolves to ``Artist("Sabaton")``.
A missing entity is ``None`` or an empty list, never an error.
"""

from collections.abc import Iterable

from endsong.entities import Album, Artist, Song, SongParent
from endsong.records import PlayRecord


def artist(records: Iterable[PlayRecord], artist_name: str) -> Artist | None:
    wanted = Artist(artist_name.lower())
    return next((Artist.from_record(r) for r in records if wanted.matches_lowercase(r)), None)


def album(records: Iterable[PlayRecord], album_name: str, artist_name: str) -> Album | None:
    wanted = Album.of(album_name.lower(), artist_name.lower())
    return next((Album.from_record(r) for r in records if wanted.matches_lowercase(r)), None)


def song_from_album(
    records: Iterable[PlayRecord],
    song_name: str,
    album_name: str,
    artist_name: str,
) -> Song | None:
    """Find a song on one specific album."""
    wanted = Song.of(song_name.lower(), album_name.lower(), artist_name.lower())
    return next((Song.from_record(r) for r in records if wanted.matches_lowercase(r)), None)


def song(records: Iterable[PlayRecord], song_name: str, artist_name: str) -> list[Song]:
    """Find every album version of a song, in order of first play."""
    song_name, artist_name = song_name.lower(), artist_name.lower()
    versions = (
        Song.from_record(r)
        for r in records
        if r.track_name.lower() == song_name and r.artist_name.lower() == artist_name
    )
    return list(dict.fromkeys(versions))


def songs_from_album(records: Iterable[PlayRecord], album: Album) -> list[Song]:
    return list(dict.fromkeys(Song.from_record(r) for r in records if album.matches(r)))


def artist_names(records: Iterable[PlayRecord]) -> list[str]:
    """Distinct artist names in order of first play."""
    return list(dict.fromkeys(r.artist_name for r in records))


def album_names(records: Iterable[PlayRecord], artist: Artist) -> list[str]:
    return list(dict.fromkeys(r.album_name for r in records if artist.matches(r)))


def song_names(records: Iterable[PlayRecord], parent: SongParent) -> list[str]:
    return list(dict.fromkeys(r.track_name for r in records if parent.matches(r)))
