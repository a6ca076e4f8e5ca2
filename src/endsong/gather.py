"""Play counts and listening time gathered from record sequences.

Every function accepts any sequence of records: a whole store's
``records()``, a date-ranged view from ``RecordStore.between`` or a plain
list. Counting is written once and parameterized by entity kind.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timedelta
from typing import TypeVar

from endsong.entities import Album, Artist, Entity, Song, SongParent
from endsong.records import PlayRecord

E = TypeVar("E", Artist, Album, Song)


def plays(records: Iterable[PlayRecord], entity: Entity) -> int:
    """Count the plays of a single entity."""
    return sum(1 for record in records if entity.matches(record))


def plays_of_many(records: Iterable[PlayRecord], entities: Sequence[Entity]) -> int:
    """Count the records that belong to any of ``entities``."""
    return sum(1 for record in records if any(entity.matches(record) for entity in entities))


def all_plays(records: Sequence[PlayRecord]) -> int:
    return len(records)


def counts(records: Iterable[PlayRecord], kind: type[E]) -> dict[E, int]:
    """Map every distinct entity of ``kind`` in ``records`` to its play count."""
    return dict(Counter(kind.from_record(record) for record in records))


def counts_from(records: Iterable[PlayRecord], parent: Entity, kind: type[E]) -> dict[E, int]:
    """Like :func:`counts` but only over the records belonging to ``parent``."""
    return dict(Counter(kind.from_record(record) for record in records if parent.matches(record)))


def artists(records: Iterable[PlayRecord]) -> dict[Artist, int]:
    return counts(records, Artist)


def albums(records: Iterable[PlayRecord]) -> dict[Album, int]:
    return counts(records, Album)


def songs(records: Iterable[PlayRecord]) -> dict[Song, int]:
    return counts(records, Song)


def albums_from_artist(records: Iterable[PlayRecord], artist: Artist) -> dict[Album, int]:
    return counts_from(records, artist, Album)


def songs_from(records: Iterable[PlayRecord], parent: SongParent) -> dict[Song, int]:
    return counts_from(records, parent, Song)


def sum_across_albums(song_counts: Mapping[Song, int]) -> dict[Song, int]:
    """Merge versions of the same song released on different albums.

    Songs are grouped by (lowercase name, artist). Each group is reported
    once, under the album version with the most plays (ties go to the
    version that sorts first), carrying the summed plays of all versions.
    """
    versions: defaultdict[tuple[str, Artist], list[Song]] = defaultdict(list)
    for song in song_counts:
        versions[(song.name.lower(), song.artist)].append(song)

    summed: dict[Song, int] = {}
    for group in versions.values():
        representative = min(group, key=lambda song: (-song_counts[song], song.sort_key))
        summed[representative] = sum(song_counts[song] for song in group)
    return summed


def songs_summed_across_albums(records: Iterable[PlayRecord]) -> dict[Song, int]:
    """Song play counts with album versions merged, see :func:`sum_across_albums`."""
    return sum_across_albums(songs(records))


def songs_from_artist_summed_across_albums(records: Iterable[PlayRecord], artist: Artist) -> dict[Song, int]:
    return sum_across_albums(songs_from(records, artist))


def listening_time(records: Iterable[PlayRecord]) -> timedelta:
    """Total time played over ``records``."""
    return sum((record.played_duration for record in records), timedelta())


def listening_time_of(records: Iterable[PlayRecord], entity: Entity) -> timedelta:
    return listening_time(record for record in records if entity.matches(record))


def artists_with_duration(records: Iterable[PlayRecord]) -> dict[Artist, tuple[int, timedelta]]:
    """Map every artist to its (play count, total time played)."""
    totals: dict[Artist, tuple[int, timedelta]] = {}
    for record in records:
        artist = Artist.from_record(record)
        count, duration = totals.get(artist, (0, timedelta()))
        totals[artist] = (count + 1, duration + record.played_duration)
    return totals


def first_listen(records: Iterable[PlayRecord], entity: Entity) -> datetime | None:
    """Timestamp of the earliest play of ``entity``, or None if never played."""
    return next((record.timestamp for record in records if entity.matches(record)), None)


def last_listen(records: Sequence[PlayRecord], entity: Entity) -> datetime | None:
    """Timestamp of the latest play of ``entity``, or None if never played."""
    return next((record.timestamp for record in reversed(records) if entity.matches(record)), None)


def top(entity_counts: Mapping[E, int], limit: int | None = None) -> list[tuple[E, int]]:
    """Sort by descending count, then ascending entity order, and keep ``limit`` entries.

    The entity order is total, so the result is the same on every run.
    """
    ranked = sorted(entity_counts.items(), key=lambda item: (-item[1], item[0].sort_key))
    return ranked if limit is None else ranked[:limit]
