"""History service: runs store queries and builds response models."""

from collections.abc import Sequence
from datetime import datetime, timedelta

from endsong import find, gather
from endsong.entities import Album, Song
from endsong.records import PlayRecord
from endsong.store import RecordStore
from endsong_api.history.schemas import (
    AlbumCount,
    AlbumSummary,
    ArtistCount,
    ArtistSummary,
    HistorySummary,
    PeakWindow,
    PlayEntry,
    SongCount,
    SongSummary,
)

_MS = timedelta(milliseconds=1)
_HOUR = timedelta(hours=1)


def _ms(duration: timedelta) -> int:
    return duration // _MS


def _hours(duration: timedelta) -> float:
    return round(duration / _HOUR, 1)


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def _album_count(album: Album, plays: int) -> AlbumCount:
    return AlbumCount(album_name=album.name, artist_name=album.artist.name, play_count=plays)


def _song_count(song: Song, plays: int) -> SongCount:
    return SongCount(
        song_name=song.name,
        album_name=song.album.name,
        artist_name=song.artist.name,
        play_count=plays,
    )


class HistoryService:
    """Stateless service that builds Pydantic models from store queries."""

    @staticmethod
    def _slice(store: RecordStore, start: datetime | None, end: datetime | None) -> Sequence[PlayRecord]:
        """Whole history, or the records in [start, end] when either bound is given.

        Naive bounds are interpreted in the history's time zone. Raises
        InvalidArgumentError if start is after end.
        """
        if (start is None and end is None) or not len(store):
            return store.records()
        tz = store.first_timestamp().tzinfo
        start = store.first_timestamp() if start is None else start
        end = store.last_timestamp() if end is None else end
        if start.tzinfo is None:
            start = start.replace(tzinfo=tz)
        if end.tzinfo is None:
            end = end.replace(tzinfo=tz)
        return store.between(start, end)

    def get_summary(self, store: RecordStore) -> HistorySummary:
        records = store.records()
        total = gather.listening_time(records)
        return HistorySummary(
            total_plays=gather.all_plays(records),
            unique_artists=len(gather.artists(records)),
            unique_albums=len(gather.albums(records)),
            unique_songs=len(store.durations),
            total_ms_played=_ms(total),
            listening_hours=_hours(total),
            first_play=store.first_timestamp() if len(store) else None,
            last_play=store.last_timestamp() if len(store) else None,
            files_used=list(store.files_used),
        )

    def get_top_artists(
        self,
        store: RecordStore,
        limit: int = 20,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[ArtistCount]:
        records = self._slice(store, start, end)
        return [
            ArtistCount(artist_name=artist.name, play_count=plays)
            for artist, plays in gather.top(gather.artists(records), limit)
        ]

    def get_top_albums(
        self,
        store: RecordStore,
        limit: int = 20,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[AlbumCount]:
        records = self._slice(store, start, end)
        return [_album_count(album, plays) for album, plays in gather.top(gather.albums(records), limit)]

    def get_top_songs(
        self,
        store: RecordStore,
        limit: int = 20,
        start: datetime | None = None,
        end: datetime | None = None,
        sum_across_albums: bool = True,
    ) -> list[SongCount]:
        records = self._slice(store, start, end)
        song_counts = gather.songs_summed_across_albums(records) if sum_across_albums else gather.songs(records)
        return [_song_count(song, plays) for song, plays in gather.top(song_counts, limit)]

    def get_artist_summary(self, store: RecordStore, artist_name: str, limit: int = 10) -> ArtistSummary | None:
        records = store.records()
        artist = find.artist(records, artist_name)
        if artist is None:
            return None

        ranking = gather.top(gather.artists(records))
        position = next(i for i, (ranked, _) in enumerate(ranking, start=1) if ranked == artist)
        plays = dict(ranking)[artist]

        return ArtistSummary(
            artist_name=artist.name,
            play_count=plays,
            percentage_of_plays=_percentage(plays, len(records)),
            position=position,
            total_ms_played=_ms(gather.listening_time_of(records, artist)),
            first_listen=gather.first_listen(records, artist),
            last_listen=gather.last_listen(records, artist),
            top_albums=[
                _album_count(album, n) for album, n in gather.top(gather.albums_from_artist(records, artist), limit)
            ],
            top_songs=[
                _song_count(song, n)
                for song, n in gather.top(gather.songs_from_artist_summed_across_albums(records, artist), limit)
            ],
        )

    def get_album_summary(self, store: RecordStore, artist_name: str, album_name: str) -> AlbumSummary | None:
        records = store.records()
        album = find.album(records, album_name, artist_name)
        if album is None:
            return None

        plays = gather.plays(records, album)
        return AlbumSummary(
            album_name=album.name,
            artist_name=album.artist.name,
            play_count=plays,
            percentage_of_artist_plays=_percentage(plays, gather.plays(records, album.artist)),
            total_ms_played=_ms(gather.listening_time_of(records, album)),
            first_listen=gather.first_listen(records, album),
            last_listen=gather.last_listen(records, album),
            songs=[_song_count(song, n) for song, n in gather.top(gather.songs_from(records, album))],
        )

    def get_song_summary(self, store: RecordStore, artist_name: str, song_name: str) -> SongSummary | None:
        records = store.records()
        versions = find.song(records, song_name, artist_name)
        if not versions:
            return None

        version_counts = {song: gather.plays(records, song) for song in versions}
        ranked = gather.top(version_counts)
        representative = ranked[0][0]
        length = store.song_duration(representative)
        return SongSummary(
            song_name=representative.name,
            artist_name=representative.artist.name,
            total_plays=sum(version_counts.values()),
            length_ms=_ms(length) if length is not None else None,
            versions=[_song_count(song, n) for song, n in ranked],
        )

    def get_entries(
        self,
        store: RecordStore,
        start: datetime,
        end: datetime | None = None,
        limit: int = 1000,
    ) -> list[PlayEntry]:
        """Plays between ``start`` and ``end``; without ``end`` the day starting at ``start``."""
        if end is None:
            end = start + timedelta(days=1)
        records = self._slice(store, start, end)
        return [
            PlayEntry(
                played_at=record.timestamp,
                song_name=record.track_name,
                album_name=record.album_name,
                artist_name=record.artist_name,
                ms_played=_ms(record.played_duration),
                spotify_track_uri=record.track_uri,
            )
            for record in records[:limit]
        ]

    def get_peak_window(self, store: RecordStore, days: int) -> PeakWindow:
        listened, start, end = store.peak_window(timedelta(days=days))
        return PeakWindow(
            requested_days=days,
            total_ms_played=_ms(listened),
            listening_hours=_hours(listened),
            start=start,
            end=end,
        )
