"""Data models for parsed streaming history entries."""

from datetime import datetime

from pydantic import BaseModel, Field


class RawPlayRecord(BaseModel):
    """A single song stream as read from an extended streaming history file.

    Podcast and other non-music entries never become a RawPlayRecord; the
    normalizer drops them because they carry no track, album or artist.
    """

    track_name: str
    album_name: str
    artist_name: str
    ms_played: int = Field(ge=0)
    played_at: datetime  # Aware, in the configured time zone
    spotify_track_uri: str | None = None

    model_config = {"frozen": True}
