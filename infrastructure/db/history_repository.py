"""
JSON-file implementation of HistoryRepository.

History entries live in `history.json`. `put_many` replaces several entries
in one atomic write, which keeps renumbering all-or-nothing.
"""
import logging
import pathlib
from typing import Dict, Iterable, List, Optional, Union

from pydantic import TypeAdapter

from application.exceptions import PersistenceError
from domain.models import WorkoutHistoryEntry
from infrastructure.db.json_store import JsonFileStore

logger = logging.getLogger(__name__)

HISTORY_FILE = "history.json"

_HISTORY_LIST = TypeAdapter(List[WorkoutHistoryEntry])


class JsonHistoryRepository:
    """JSON-file implementation of the HistoryRepository protocol."""

    def __init__(self, data_dir: Union[str, pathlib.Path]):
        self._store: JsonFileStore[List[WorkoutHistoryEntry]] = JsonFileStore(
            pathlib.Path(data_dir) / HISTORY_FILE, _HISTORY_LIST, default=list
        )

    def _read(self) -> List[WorkoutHistoryEntry]:
        return self._store.read()

    def _write(self, entries: List[WorkoutHistoryEntry]) -> None:
        self._store.write(sorted(entries, key=lambda e: e.completed_date))

    def get(self, entry_id: str) -> Optional[WorkoutHistoryEntry]:
        return next((e for e in self._read() if e.id == entry_id), None)

    def add(self, entry: WorkoutHistoryEntry) -> WorkoutHistoryEntry:
        entries = self._read()
        if any(e.id == entry.id for e in entries):
            raise PersistenceError(f"History entry {entry.id} already exists")
        self._write([*entries, entry])
        logger.debug("Added history entry %s", entry.id)
        return entry

    def put(self, entry: WorkoutHistoryEntry) -> WorkoutHistoryEntry:
        self.put_many([entry])
        return entry

    def put_many(self, entries: Iterable[WorkoutHistoryEntry]) -> int:
        by_id: Dict[str, WorkoutHistoryEntry] = {e.id: e for e in self._read()}
        count = 0
        for entry in entries:
            by_id[entry.id] = entry
            count += 1
        self._write(list(by_id.values()))
        return count

    def delete(self, entry_id: str) -> bool:
        entries = self._read()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self._write(remaining)
        return True

    def bulk_add(self, entries: Iterable[WorkoutHistoryEntry]) -> int:
        existing = self._read()
        new = list(entries)
        ids = {e.id for e in existing}
        for entry in new:
            if entry.id in ids:
                raise PersistenceError(f"History entry {entry.id} already exists")
            ids.add(entry.id)
        self._write([*existing, *new])
        return len(new)

    def clear(self) -> None:
        self._store.delete()

    def get_all(self) -> List[WorkoutHistoryEntry]:
        return self._read()

    def list_ordered(self, *, descending: bool = True) -> List[WorkoutHistoryEntry]:
        return sorted(self._read(), key=lambda e: e.completed_date, reverse=descending)
