"""
CompleteWorkout Use Case.

Closes the adaptation loop: the finished workout becomes a history entry and
its performance is applied to the strength levels exactly once.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from application.exceptions import PersistenceError, WorkoutStateError
from application.ports import HistoryRepository, WorkoutRepository
from application.services.profile_service import ProfileService
from application.use_cases.workout_session import load_workout
from domain.models import UserProfile, Workout, WorkoutHistoryEntry, WorkoutStatus
from domain.models.timestamps import utcnow
from trainer.core.history import (
    HistorySummary,
    build_history_entry,
    completed_exercises_from_workout,
    summarize_history_entry,
)

logger = logging.getLogger(__name__)


@dataclass
class CompleteWorkoutResult:
    """Result of the CompleteWorkout use case execution."""

    workout: Workout
    history_entry: WorkoutHistoryEntry
    profile: UserProfile
    summary: HistorySummary


class CompleteWorkoutUseCase:
    """
    Use case for completing the in-progress workout.

    Orchestrates the following workflow:
    1. Store one history entry holding only the recorded sets
    2. Mark the workout completed with its actual duration
    3. Apply the workout's performance to strength levels

    A storage failure at any step undoes the earlier writes, so the workout
    stays in progress and completion can be retried. Sets that were skipped are absent from the history entry, never stored
    as zero.
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        history_repo: HistoryRepository,
        profile_service: ProfileService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._workout_repo = workout_repo
        self._history_repo = history_repo
        self._profile_service = profile_service
        self._clock = clock

    def execute(self, workout_id: Optional[str] = None) -> CompleteWorkoutResult:
        """
        Raises:
            ProfileNotFoundError: If no profile exists
            WorkoutNotFoundError: If there is no such workout
            WorkoutStateError: If the workout is not in progress
            PersistenceError: If a write fails; earlier writes are undone
        """
        self._profile_service.get_profile()
        workout = load_workout(self._workout_repo, workout_id)
        if not workout.can_transition_to(WorkoutStatus.COMPLETED):
            raise WorkoutStateError(
                f"Workout #{workout.workout_number} is {workout.status.value} and cannot be completed"
            )

        now = self._clock()
        entry = build_history_entry(workout, now)
        completed = workout.mark_completed(now, entry.total_duration)

        self._history_repo.add(entry)
        try:
            self._workout_repo.put(completed)
        except PersistenceError:
            self._undo_history_entry(entry)
            raise

        try:
            profile = self._profile_service.apply_performance(
                completed_exercises_from_workout(workout), now=now
            )
        except PersistenceError:
            self._undo_completion(workout, entry)
            raise

        summary = summarize_history_entry(entry)
        logger.info(
            "Completed workout #%d in %d min: %d sets",
            completed.workout_number,
            entry.total_duration,
            summary.total_sets,
        )
        return CompleteWorkoutResult(
            workout=completed,
            history_entry=entry,
            profile=profile,
            summary=summary,
        )

    # -------------------------------------------------------------------------
    # Rollback
    # -------------------------------------------------------------------------

    def _undo_history_entry(self, entry: WorkoutHistoryEntry) -> None:
        try:
            self._history_repo.delete(entry.id)
        except PersistenceError:
            logger.exception("Could not remove history entry %s after a failed completion", entry.id)

    def _undo_completion(self, workout: Workout, entry: WorkoutHistoryEntry) -> None:
        """Put the in-progress workout back and drop its history entry."""
        try:
            self._workout_repo.put(workout)
        except PersistenceError:
            logger.exception("Could not restore workout %s after a failed completion", workout.id)
        self._undo_history_entry(entry)
