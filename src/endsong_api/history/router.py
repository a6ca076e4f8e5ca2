"""Class-based router for the history analysis endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from endsong.constants import DEFAULT_TOP_LIMIT
from endsong.store import RecordStore
from endsong_api.constants import MAX_ENTRIES, MAX_PEAK_DAYS, MAX_TOP_LIMIT
from endsong_api.dependencies import store_manager
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
from endsong_api.history.service import HistoryService

StoreDep = Annotated[RecordStore, Depends(store_manager.dependency)]


class HistoryRouter:
    """Class-based router for history analysis endpoints."""

    def __init__(self) -> None:
        self._service = HistoryService()
        self.router = APIRouter()
        self._register_routes()

    def _register_routes(self) -> None:
        r = self.router
        r.add_api_route("/summary", self.summary, methods=["GET"], response_model=HistorySummary)
        r.add_api_route("/top-artists", self.top_artists, methods=["GET"], response_model=list[ArtistCount])
        r.add_api_route("/top-albums", self.top_albums, methods=["GET"], response_model=list[AlbumCount])
        r.add_api_route("/top-songs", self.top_songs, methods=["GET"], response_model=list[SongCount])
        r.add_api_route(
            "/artists/{artist_name}",
            self.artist,
            methods=["GET"],
            response_model=ArtistSummary,
        )
        r.add_api_route(
            "/albums/{artist_name}/{album_name}",
            self.album,
            methods=["GET"],
            response_model=AlbumSummary,
        )
        r.add_api_route(
            "/songs/{artist_name}/{song_name}",
            self.song,
            methods=["GET"],
            response_model=SongSummary,
        )
        r.add_api_route("/entries", self.entries, methods=["GET"], response_model=list[PlayEntry])
        r.add_api_route("/peak", self.peak, methods=["GET"], response_model=PeakWindow)

    async def summary(self, store: StoreDep) -> HistorySummary:
        """Totals over the whole history."""
        return self._service.get_summary(store)

    async def top_artists(
        self,
        store: StoreDep,
        limit: int = Query(default=DEFAULT_TOP_LIMIT, ge=1, le=MAX_TOP_LIMIT),
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[ArtistCount]:
        """Top artists by play count, optionally within [start, end]."""
        return self._service.get_top_artists(store, limit, start, end)

    async def top_albums(
        self,
        store: StoreDep,
        limit: int = Query(default=DEFAULT_TOP_LIMIT, ge=1, le=MAX_TOP_LIMIT),
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[AlbumCount]:
        """Top albums by play count, optionally within [start, end]."""
        return self._service.get_top_albums(store, limit, start, end)

    async def top_songs(
        self,
        store: StoreDep,
        limit: int = Query(default=DEFAULT_TOP_LIMIT, ge=1, le=MAX_TOP_LIMIT),
        start: datetime | None = None,
        end: datetime | None = None,
        sum_across_albums: bool = True,
    ) -> list[SongCount]:
        """Top songs by play count; album versions are merged unless disabled."""
        return self._service.get_top_songs(store, limit, start, end, sum_across_albums)

    async def artist(
        self,
        artist_name: str,
        store: StoreDep,
        limit: int = Query(default=10, ge=1, le=MAX_TOP_LIMIT),
    ) -> ArtistSummary:
        """Artist page: plays, rank, first/last listen, top albums and songs."""
        summary = self._service.get_artist_summary(store, artist_name, limit)
        if summary is None:
            raise HTTPException(status_code=404, detail=f"Artist {artist_name!r} not found")
        return summary

    async def album(self, artist_name: str, album_name: str, store: StoreDep) -> AlbumSummary:
        """Album page with the plays of each of its songs."""
        summary = self._service.get_album_summary(store, artist_name, album_name)
        if summary is None:
            raise HTTPException(status_code=404, detail=f"Album {album_name!r} by {artist_name!r} not found")
        return summary

    async def song(self, artist_name: str, song_name: str, store: StoreDep) -> SongSummary:
        """Song page with plays per album version."""
        summary = self._service.get_song_summary(store, artist_name, song_name)
        if summary is None:
            raise HTTPException(status_code=404, detail=f"Song {song_name!r} by {artist_name!r} not found")
        return summary

    async def entries(
        self,
        store: StoreDep,
        start: datetime,
        end: datetime | None = None,
        limit: int = Query(default=1000, ge=1, le=MAX_ENTRIES),
    ) -> list[PlayEntry]:
        """Listening history between two dates (one day when end is omitted)."""
        return self._service.get_entries(store, start, end, limit)

    async def peak(self, store: StoreDep, days: int = Query(default=7, ge=1, le=MAX_PEAK_DAYS)) -> PeakWindow:
        """The days-long period with the most listening time."""
        return self._service.get_peak_window(store, days)


_instance = HistoryRouter()
router = _instance.router
