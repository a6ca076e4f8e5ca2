"""Unify albums and songs whose names differ only in letter case.

Spotify occasionally re-releases an album or track with different casing
("Fixed" vs "FIXED"), which would otherwise split its plays across two
entities. Within each group of case-insensitively equal names, the casing
of the member whose last play is the most recent wins. Albums are unified
before songs because a song's identity includes its album.

The winner is picked by the position of its last record in the time-sorted
history, not by the order in which spellings were first seen, so a group
always takes the casing Spotify currently uses.
"""

import dataclasses
import logging
from collections import defaultdict
from collections.abc import Callable, Hashable, Sequence
from typing import TypeVar

from endsong.entities import Album, Song
from endsong.records import PlayRecord

logger = logging.getLogger(__name__)

E = TypeVar("E", Album, Song)


def _last_positions(records: Sequence[PlayRecord], project: Callable[[PlayRecord], E]) -> dict[E, int]:
    last_seen: dict[E, int] = {}
    for position, record in enumerate(records):
        last_seen[project(record)] = position
    return last_seen


def _canonical_names(last_seen: dict[E, int], group_key: Callable[[E], Hashable]) -> dict[E, str]:
    """Map every non-canonical member of a multi-casing group to the winning name."""
    groups: defaultdict[Hashable, list[E]] = defaultdict(list)
    for entity in last_seen:
        groups[group_key(entity)].append(entity)

    renames: dict[E, str] = {}
    for members in groups.values():
        if len(members) < 2:
            continue
        canonical = max(members, key=last_seen.__getitem__)
        for member in members:
            if member != canonical:
                renames[member] = canonical.name
    return renames


def album_renames(records: Sequence[PlayRecord]) -> dict[Album, str]:
    """Albums that must adopt another casing, grouped by (artist, lowercase name)."""
    last_seen = _last_positions(records, Album.from_record)
    return _canonical_names(last_seen, lambda album: (album.artist, album.name.lower()))


def song_renames(records: Sequence[PlayRecord]) -> dict[Song, str]:
    """Songs that must adopt another casing, grouped by (album, lowercase name)."""
    last_seen = _last_positions(records, Song.from_record)
    return _canonical_names(last_seen, lambda song: (song.album, song.name.lower()))


def normalize(records: Sequence[PlayRecord]) -> list[PlayRecord]:
    """Return ``records`` with album and song capitalization unified.

    Relative order is unchanged and running it again is a no-op.
    """
    albums = album_renames(records)
    if albums:
        records = [
            dataclasses.replace(record, album_name=name)
            if (name := albums.get(Album.from_record(record))) is not None
            else record
            for record in records
        ]

    songs = song_renames(records)
    if songs:
        records = [
            dataclasses.replace(record, track_name=name)
            if (name := songs.get(Song.from_record(record))) is not None
            else record
            for record in records
        ]

    logger.debug("Unified capitalization of %d albums and %d songs", len(albums), len(songs))
    return list(records)
