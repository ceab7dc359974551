"""
History Repository Interface (Port).

This module defines the abstract interface for persisting workout history
entries. Used by completion, manual entry and history editing.
"""
from typing import Iterable, List, Optional, Protocol

from domain.models import WorkoutHistoryEntry


class HistoryRepository(Protocol):
    """
    Abstract interface for workout history persistence.

    Entries are keyed by `id` and ordered by `completed_date`.
    """

    def get(self, entry_id: str) -> Optional[WorkoutHistoryEntry]:
        """Get a history entry by ID, or None."""
        ...

    def add(self, entry: WorkoutHistoryEntry) -> WorkoutHistoryEntry:
        """
        Store a new history entry.

        Raises:
            PersistenceError: If the ID already exists or the write fails
        """
        ...

    def put(self, entry: WorkoutHistoryEntry) -> WorkoutHistoryEntry:
        """Insert or replace a history entry by ID."""
        ...

    def put_many(self, entries: Iterable[WorkoutHistoryEntry]) -> int:
        """
        Insert or replace several entries in a single write.

        Returns:
            Number of entries written
        """
        ...

    def delete(self, entry_id: str) -> bool:
        """
        Delete a history entry.

        Returns:
            True if deleted, False if not found
        """
        ...

    def bulk_add(self, entries: Iterable[WorkoutHistoryEntry]) -> int:
        """Store several new entries in one write."""
        ...

    def clear(self) -> None:
        """Delete every history entry."""
        ...

    def get_all(self) -> List[WorkoutHistoryEntry]:
        """Full table scan in storage order."""
        ...

    def list_ordered(self, *, descending: bool = True) -> List[WorkoutHistoryEntry]:
        """
        Get all entries ordered by completed_date.

        Args:
            descending: Newest first when True (default)
        """
        ...
