"""Time-ordered record store with range queries and preparation passes."""

import bisect
import logging
from collections.abc import Generator, Iterable, Iterator, Mapping, Sequence
from datetime import UTC, datetime, timedelta, tzinfo
from os import PathLike
from types import MappingProxyType

from endsong import capitalization, gather
from endsong.constants import (
    DEFAULT_ABSOLUTE_THRESHOLD,
    DEFAULT_PERCENT_THRESHOLD,
    MIN_WINDOW_SPAN,
    WINDOW_STEP,
)
from endsong.durations import song_durations
from endsong.entities import Song
from endsong.exceptions import EmptyHistoryError, InvalidArgumentError
from endsong.parsing import HistoryParser, RawPlayRecord
from endsong.records import PlayRecord, RecordView, StringPool

logger = logging.getLogger(__name__)


def _instant(record: PlayRecord) -> datetime:
    # Records share one zone, where comparison would be by wall-clock time
    return record.timestamp.astimezone(UTC)


class RecordStore:
    """The listening history: records sorted ascending by timestamp.

    A store never changes after construction. ``normalize_capitalization``
    and ``filter`` return new stores, so any view handed out earlier stays
    valid.
    """

    __slots__ = ("_records", "_durations", "_files_used")

    def __init__(
        self,
        records: Iterable[PlayRecord],
        durations: Mapping[Song, timedelta] | None = None,
        files_used: Sequence[str] = (),
    ) -> None:
        """Wrap ``records``, which must already be sorted by timestamp.

        ``durations`` is computed from the records when omitted.
        """
        self._records: tuple[PlayRecord, ...] = tuple(records)
        self._durations: Mapping[Song, timedelta] = MappingProxyType(
            dict(durations) if durations is not None else song_durations(self._records)
        )
        self._files_used = tuple(files_used)

    # --- construction ---

    @classmethod
    def build(cls, raw_records: Iterable[RawPlayRecord], files_used: Sequence[str] = ()) -> "RecordStore":
        """Create a store from parsed records.

        Names are interned so records share one string per distinct name.
        The sort is stable: records with equal timestamps keep input order.
        """
        pool = StringPool()
        records = [
            PlayRecord(
                timestamp=raw.played_at,
                played_duration=timedelta(milliseconds=raw.ms_played),
                track_name=pool(raw.track_name),
                album_name=pool(raw.album_name),
                artist_name=pool(raw.artist_name),
                track_uri=raw.spotify_track_uri,
            )
            for raw in raw_records
        ]
        records.sort(key=_instant)
        logger.info(
            "Built history of %d records (%d distinct names)",
            len(records),
            len(pool),
            extra={"records": len(records)},
        )
        return cls(records, files_used=files_used)

    @classmethod
    def from_paths(cls, paths: Iterable[str | PathLike[str]], tz: tzinfo = UTC) -> "RecordStore":
        """Parse history files and/or export ZIPs and build a store.

        Raises HistoryParseError if any source can't be read.
        """
        paths = [str(p) for p in paths]
        parser = HistoryParser(tz=tz)
        return cls.build(parser.iter_paths(paths), files_used=paths)

    # --- accessors ---

    def records(self) -> RecordView:
        """View over all records in time order."""
        return RecordView(self._records)

    @property
    def durations(self) -> Mapping[Song, timedelta]:
        """Read-only map of every song to its canonical duration."""
        return self._durations

    @property
    def files_used(self) -> tuple[str, ...]:
        return self._files_used

    def song_duration(self, song: Song) -> timedelta | None:
        return self._durations.get(song)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PlayRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)}, songs={len(self._durations)})"

    def first_timestamp(self) -> datetime:
        """Timestamp of the earliest record.

        Raises EmptyHistoryError if the store is empty.
        """
        if not self._records:
            raise EmptyHistoryError("first timestamp")
        return self._records[0].timestamp

    def last_timestamp(self) -> datetime:
        """Timestamp of the latest record.

        Raises EmptyHistoryError if the store is empty.
        """
        if not self._records:
            raise EmptyHistoryError("last timestamp")
        return self._records[-1].timestamp

    # --- range index ---

    def between(self, start: datetime, end: datetime) -> RecordView:
        """Records with timestamps in ``[start, end]``, found by binary search.

        Bounds are clamped so that a non-empty store always anchors the
        range to a record: a ``start`` after the last record begins at the
        last record, an ``end`` before the first record stops at the first
        one. If clamping leaves the begin past the stop (both bounds fall
        between the same two neighbouring records) the view is empty.

        Raises InvalidArgumentError if ``start`` is after ``end``.
        """
        if start.astimezone(UTC) > end.astimezone(UTC):
            raise InvalidArgumentError(f"Start date {start.isoformat()} is after end date {end.isoformat()}")

        records = self._records
        if not records:
            return RecordView(records)

        begin = bisect.bisect_left(records, start.astimezone(UTC), key=_instant)
        if begin == len(records):
            begin = len(records) - 1

        stop = bisect.bisect_right(records, end.astimezone(UTC), key=_instant) - 1
        if stop < 0:
            stop = 0

        if begin > stop:
            return RecordView(records, begin, begin)
        return RecordView(records, begin, stop + 1)

    # --- preparation passes ---

    def normalize_capitalization(self) -> "RecordStore":
        """Return a store where albums and songs differing only in case are unified.

        The duration map is recomputed from the rewritten records.
        """
        normalized = capitalization.normalize(self._records)
        return RecordStore(normalized, files_used=self._files_used)

    def filter(
        self,
        percent_threshold: float = DEFAULT_PERCENT_THRESHOLD,
        absolute_threshold: timedelta = DEFAULT_ABSOLUTE_THRESHOLD,
    ) -> "RecordStore":
        """Return a store without plays that were too short to count.

        A record survives if it played for at least ``percent_threshold``
        percent of its song's canonical duration and at least
        ``absolute_threshold``. Run after :meth:`normalize_capitalization`
        so canonical durations are computed over the unified songs.

        Raises InvalidArgumentError if ``percent_threshold`` is outside
        [0, 100] or ``absolute_threshold`` is negative.
        """
        if not 0 <= percent_threshold <= 100:
            raise InvalidArgumentError(f"Threshold has to be between 0 and 100, got {percent_threshold}")
        if absolute_threshold < timedelta():
            raise InvalidArgumentError(f"Absolute threshold can't be negative, got {absolute_threshold}")

        durations = self._durations
        kept = [
            record
            for record in self._records
            if record.played_duration >= durations[Song.from_record(record)] * percent_threshold / 100
            and record.played_duration >= absolute_threshold
        ]

        remaining = {Song.from_record(record) for record in kept}
        logger.info(
            "Filtered out %d of %d records (threshold %s%%, minimum %s)",
            len(self._records) - len(kept),
            len(self._records),
            percent_threshold,
            absolute_threshold,
        )
        return RecordStore(
            kept,
            durations={song: dur for song, dur in durations.items() if song in remaining},
            files_used=self._files_used,
        )

    # --- peak window ---

    def candidate_windows(self, span: timedelta) -> Generator[tuple[datetime, datetime]]:
        """Yield the day-aligned ``span``-wide windows scanned by :meth:`peak_window`.

        Windows start at the first timestamp and slide by 24 hours of
        elapsed time while the window end does not pass the last timestamp.
        Bounds are given in the zone of the records.
        """
        first = self.first_timestamp()
        zone = first.tzinfo
        start = first.astimezone(UTC)
        last = self.last_timestamp().astimezone(UTC)
        end = start + span
        while end <= last:
            yield start.astimezone(zone), end.astimezone(zone)
            start += WINDOW_STEP
            end += WINDOW_STEP

    def peak_window(self, span: timedelta) -> tuple[timedelta, datetime, datetime]:
        """Find the ``span``-long period with the most listening time.

        ``span`` is at least one day; a span covering the whole dataset
        returns the dataset total and its bounds. On ties the earliest
        window wins.

        Raises EmptyHistoryError if the store is empty.
        """
        first = self.first_timestamp()
        last = self.last_timestamp()

        span = max(span, MIN_WINDOW_SPAN)
        if span >= last.astimezone(UTC) - first.astimezone(UTC):
            return gather.listening_time(self._records), first, last

        highest = timedelta()
        best_start, best_end = first, (first.astimezone(UTC) + span).astimezone(first.tzinfo)
        for start, end in self.candidate_windows(span):
            current = gather.listening_time(self.between(start, end))
            if current > highest:
                highest = current
                best_start, best_end = start, end
        logger.debug("Peak %s window starts %s with %s listened", span, best_start, highest)
        return highest, best_start, best_end


# Module-level aliases for the functional interface
build = RecordStore.build
from_paths = RecordStore.from_paths


def normalize_capitalization(store: RecordStore) -> RecordStore:
    return store.normalize_capitalization()


def filter_records(
    store: RecordStore,
    percent_threshold: float = DEFAULT_PERCENT_THRESHOLD,
    absolute_threshold: timedelta = DEFAULT_ABSOLUTE_THRESHOLD,
) -> RecordStore:
    return store.filter(percent_threshold, absolute_threshold)


def range_of(store: RecordStore, start: datetime, end: datetime) -> RecordView:
    return store.between(start, end)


def first_timestamp(store: RecordStore) -> datetime:
    return store.first_timestamp()


def last_timestamp(store: RecordStore) -> datetime:
    return store.last_timestamp()


def peak_window(store: RecordStore, span: timedelta) -> tuple[timedelta, datetime, datetime]:
    return store.peak_window(span)
