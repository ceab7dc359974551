"""
Workout Repository Interface (Port).

This module defines the abstract interface for persisting generated workouts.
Implementations may use local JSON files, in-memory storage, or other backends.
"""
from typing import Iterable, List, Optional, Protocol

from domain.models import Workout, WorkoutStatus


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout persistence operations.

    Workouts are keyed by `id`. Every write either fully succeeds or raises
    PersistenceError and leaves the stored data unchanged.
    """

    def get(self, workout_id: str) -> Optional[Workout]:
        """
        Get a single workout by ID.

        Returns:
            Workout or None if not found
        """
        ...

    def add(self, workout: Workout) -> Workout:
        """
        Store a new workout.

        Raises:
            PersistenceError: If a workout with the same ID exists or the
                write fails
        """
        ...

    def put(self, workout: Workout) -> Workout:
        """Insert or replace a workout by ID."""
        ...

    def delete(self, workout_id: str) -> bool:
        """
        Delete a workout.

        Returns:
            True if deleted, False if not found
        """
        ...

    def bulk_add(self, workouts: Iterable[Workout]) -> int:
        """
        Store several new workouts in one write.

        Returns:
            Number of workouts added
        """
        ...

    def clear(self) -> None:
        """Delete every workout."""
        ...

    def get_all(self) -> List[Workout]:
        """Full table scan, ordered by generated_date ascending."""
        ...

    def list_by_status(self, statuses: Iterable[WorkoutStatus]) -> List[Workout]:
        """
        Get workouts in any of the given statuses.

        Returns:
            Workouts ordered by generated_date descending (newest first)
        """
        ...

    def list_recent(self, limit: int) -> List[Workout]:
        """
        Get the most recently generated workouts.

        Returns:
            Up to `limit` workouts, newest first
        """
        ...

    def count(self) -> int:
        """Number of workouts ever stored (and not deleted)."""
        ...
