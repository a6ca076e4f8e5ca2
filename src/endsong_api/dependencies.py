"""Shared history store for request handlers."""

import logging
import threading

from fastapi import HTTPException

from endsong.store import RecordStore
from endsong_api.settings import ApiSettings

logger = logging.getLogger(__name__)


class HistoryStoreManager:
    """Owns the process-wide RecordStore.

    The store is built once (parse, normalize, filter) under a lock; after
    that handlers only read it, so no further synchronization is needed.
    """

    def __init__(self) -> None:
        self._store: RecordStore | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._store is not None

    def load(self, settings: ApiSettings) -> RecordStore:
        """Parse the configured history files and run the preparation passes.

        Raises HistoryParseError if a history file can't be read.
        """
        with self._lock:
            store = RecordStore.from_paths(settings.history_paths, tz=settings.tz)
            if settings.NORMALIZE_CAPITALIZATION:
                store = store.normalize_capitalization()
            if settings.APPLY_FILTER:
                store = store.filter(settings.PERCENT_THRESHOLD, settings.absolute_threshold)
            self._store = store
        logger.info("History loaded: %d records from %d files", len(store), len(store.files_used))
        return store

    def clear(self) -> None:
        with self._lock:
            self._store = None

    def dependency(self) -> RecordStore:
        """FastAPI dependency returning the loaded store."""
        if self._store is None:
            raise HTTPException(status_code=503, detail="No listening history loaded")
        return self._store


store_manager = HistoryStoreManager()
