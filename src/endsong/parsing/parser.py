"""Streaming parser for Spotify extended streaming history files and export ZIPs."""

import logging
import zipfile
from collections.abc import Generator, Iterable
from datetime import UTC, tzinfo
from os import PathLike
from pathlib import Path
from typing import IO

import ijson  # type: ignore[import-untyped]

from endsong.constants import EXTENDED_HISTORY_PATTERN
from endsong.exceptions import HistoryParseError
from endsong.parsing.models import RawPlayRecord
from endsong.parsing.normalizers import normalize_extended_record

logger = logging.getLogger(__name__)


class HistoryParser:
    """Reads endsong JSON arrays without loading whole files into memory.

    Accepts loose ``endsong_*.json`` / ``Streaming_History_Audio_*.json``
    files as well as the ZIP archive Spotify sends. Timestamps are
    converted into ``tz``.
    """

    def __init__(self, tz: tzinfo = UTC, max_records: int = 5_000_000) -> None:
        self._tz = tz
        self._max_records = max_records

    def detect_format(self, zip_path: Path) -> list[str]:
        """Return the extended history members of an export ZIP, sorted by name.

        Raises HistoryParseError if the ZIP can't be read or holds no such files.
        """
        try:
            with zipfile.ZipFile(zip_path, "r") as zf:
                names = zf.namelist()
        except (OSError, zipfile.BadZipFile) as exc:
            raise HistoryParseError(str(zip_path), str(exc)) from exc

        members = sorted(n for n in names if EXTENDED_HISTORY_PATTERN.search(n))
        if not members:
            raise HistoryParseError(
                str(zip_path),
                "no recognizable Spotify export files, expected endsong_*.json or Streaming_History_Audio_*.json",
            )
        return members

    def iter_file(self, path: Path) -> Generator[RawPlayRecord]:
        """Yield the song records of a single JSON history file."""
        try:
            with open(path, "rb") as f:
                yield from self._iter_stream(f, str(path))
        except OSError as exc:
            raise HistoryParseError(str(path), str(exc)) from exc

    def iter_zip(self, zip_path: Path) -> Generator[RawPlayRecord]:
        """Yield the song records of every extended history member of an export ZIP."""
        members = self.detect_format(zip_path)
        try:
            with zipfile.ZipFile(zip_path, "r") as zf:
                for member in members:
                    logger.info("Parsing ZIP entry: %s", member)
                    with zf.open(member) as f:
                        yield from self._iter_stream(f, f"{zip_path}:{member}")
        except (OSError, zipfile.BadZipFile) as exc:
            raise HistoryParseError(str(zip_path), str(exc)) from exc

    def iter_paths(self, paths: Iterable[str | PathLike[str]]) -> Generator[RawPlayRecord]:
        """Yield records from every path, dispatching on ``.zip`` vs JSON."""
        total = 0
        for raw_path in paths:
            path = Path(raw_path)
            source = self.iter_zip(path) if path.suffix.lower() == ".zip" else self.iter_file(path)
            for record in source:
                if total >= self._max_records:
                    logger.warning("Reached max records cap (%d), stopping", self._max_records)
                    return
                total += 1
                yield record

    def parse(self, paths: Iterable[str | PathLike[str]]) -> list[RawPlayRecord]:
        """Read all ``paths`` into a list of records in file order."""
        records = list(self.iter_paths(paths))
        logger.info("Parsed %d song records", len(records), extra={"records": len(records)})
        return records

    def _iter_stream(self, stream: IO[bytes], source: str) -> Generator[RawPlayRecord]:
        logger.info("Parsing history file: %s", source, extra={"source": source})
        skipped = 0
        try:
            for raw_record in ijson.items(stream, "item"):
                if not isinstance(raw_record, dict):
                    skipped += 1
                    continue
                record = normalize_extended_record(raw_record, self._tz)
                if record is None:
                    skipped += 1
                    continue
                yield record
        except ijson.JSONError as exc:
            raise HistoryParseError(source, str(exc)) from exc
        if skipped:
            logger.debug("Skipped %d non-song entries in %s", skipped, source, extra={"source": source})
