"""Pydantic response models for history endpoints."""

from datetime import datetime

from pydantic import BaseModel


class ArtistCount(BaseModel):
    """Artist with play count."""

    artist_name: str
    play_count: int


class AlbumCount(BaseModel):
    """Album with its artist and play count."""

    album_name: str
    artist_name: str
    play_count: int


class SongCount(BaseModel):
    """Song with the album it was (mostly) played from and its play count."""

    song_name: str
    album_name: str
    artist_name: str
    play_count: int


class HistorySummary(BaseModel):
    """Totals over the whole loaded history."""

    total_plays: int
    unique_artists: int
    unique_albums: int
    unique_songs: int
    total_ms_played: int
    listening_hours: float
    first_play: datetime | None
    last_play: datetime | None
    files_used: list[str]


class ArtistSummary(BaseModel):
    """Everything about one artist."""

    artist_name: str
    play_count: int
    percentage_of_plays: float
    position: int  # 1-based rank among all artists by plays
    total_ms_played: int
    first_listen: datetime
    last_listen: datetime
    top_albums: list[AlbumCount]
    top_songs: list[SongCount]  # album versions summed


class AlbumSummary(BaseModel):
    """Everything about one album."""

    album_name: str
    artist_name: str
    play_count: int
    percentage_of_artist_plays: float
    total_ms_played: int
    first_listen: datetime
    last_listen: datetime
    songs: list[SongCount]


class SongSummary(BaseModel):
    """A song across every album it appears on."""

    song_name: str
    artist_name: str
    total_plays: int
    length_ms: int | None
    versions: list[SongCount]


class PlayEntry(BaseModel):
    """A single listening event."""

    played_at: datetime
    song_name: str
    album_name: str
    artist_name: str
    ms_played: int
    spotify_track_uri: str | None = None


class PeakWindow(BaseModel):
    """Period of a given length with the most listening time."""

    requested_days: int
    total_ms_played: int
    listening_hours: float
    start: datetime
    end: datetime
