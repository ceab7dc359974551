"""
History Use Cases.

Listing, manual entry, editing and deletion of workout history.

Adding or editing an entry renumbers the whole history (1..N in completion
order) and applies the entry's performance to strength levels on top of the
current levels. Deleting removes the entry only: numbers are left as they
are and strength is not reduced.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from application.exceptions import HistoryEntryNotFoundError, InvalidInputError
from application.ports import ExerciseCatalog, HistoryRepository
from application.services.profile_service import ProfileService
from domain.models import (
    CompletedExercise,
    CompletedSet,
    ExerciseType,
    UserProfile,
    WorkoutHistoryEntry,
    make_set_value,
)
from domain.models.timestamps import as_utc, utcnow
from trainer.core.history import (
    HistorySummary,
    build_completed_exercise,
    count_workouts_since,
    renumber_history,
    start_of_month,
    start_of_week,
    summarize_history_entry,
)

logger = logging.getLogger(__name__)


@dataclass
class ManualExercise:
    """User-entered exercise: a catalog ID and one value per set."""

    exercise_id: str
    values: List[int] = field(default_factory=list)


def _validate_duration(total_duration: int) -> None:
    if isinstance(total_duration, bool) or not isinstance(total_duration, int) or total_duration < 0:
        raise InvalidInputError(f"Duration must be a whole number of minutes, got {total_duration!r}")


def _snapshot_exercises(
    catalog: ExerciseCatalog,
    exercises: Sequence[ManualExercise],
    existing: Optional[WorkoutHistoryEntry] = None,
) -> List[CompletedExercise]:
    """
    Turn manual input into completed-exercise snapshots.

    Exercises removed from the catalog can still be edited when the entry
    being edited already holds a snapshot of them.

    Raises:
        InvalidInputError: Empty input, unknown exercise or bad set values
    """
    if not exercises:
        raise InvalidInputError("Add at least one exercise")

    snapshots = []
    errors = []
    for item in exercises:
        if not item.values:
            errors.append(f"{item.exercise_id}: at least one set is required")
            continue
        exercise = catalog.get_by_id(item.exercise_id)
        if exercise is not None:
            snapshots.append(build_completed_exercise(exercise, item.values))
            continue

        previous = existing.find_exercise(item.exercise_id) if existing else None
        if previous is None or not previous.completed_sets:
            errors.append(f"{item.exercise_id}: unknown exercise")
            continue
        logger.warning("Exercise %s no longer in catalog, keeping snapshot", item.exercise_id)
        exercise_type = ExerciseType(previous.completed_sets[0].actual.kind)
        if any(isinstance(v, bool) or not isinstance(v, int) or v <= 0 for v in item.values):
            errors.append(f"{item.exercise_id}: set values must be positive integers")
            continue
        snapshots.append(
            previous.model_copy(
                update={
                    "completed_sets": [
                        CompletedSet(set_number=n, actual=make_set_value(exercise_type, v))
                        for n, v in enumerate(item.values, start=1)
                    ]
                }
            )
        )

    if errors:
        logger.warning("Manual workout rejected: %s", errors)
        raise InvalidInputError("Invalid workout exercises", errors=errors)
    return snapshots


@dataclass
class ListHistoryResult:
    """History, newest first, with dashboard counters."""

    entries: List[WorkoutHistoryEntry] = field(default_factory=list)
    summaries: Dict[str, HistorySummary] = field(default_factory=dict)
    workouts_this_week: int = 0
    workouts_this_month: int = 0


class ListHistoryUseCase:
    """Use case for reading history with per-entry summaries."""

    def __init__(
        self,
        history_repo: HistoryRepository,
        catalog: ExerciseCatalog,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._history_repo = history_repo
        self._catalog = catalog
        self._clock = clock

    def execute(self) -> ListHistoryResult:
        entries = self._history_repo.list_ordered(descending=True)
        now = self._clock()
        return ListHistoryResult(
            entries=entries,
            summaries={e.id: summarize_history_entry(e, self._catalog) for e in entries},
            workouts_this_week=count_workouts_since(entries, start_of_week(now)),
            workouts_this_month=count_workouts_since(entries, start_of_month(now)),
        )


@dataclass
class HistoryChangeResult:
    """Result of adding or editing a history entry."""

    entry: WorkoutHistoryEntry
    profile: UserProfile
    renumbered: int = 0


class AddManualWorkoutUseCase:
    """
    Use case for logging a workout done outside the app.

    Usage:
        >>> result = use_case.execute(
        ...     completed_date=datetime(2024, 3, 1, 18, 30),
        ...     total_duration=25,
        ...     exercises=[ManualExercise("plank-001", [40, 40, 35])],
        ... )
        >>> result.entry.workout_number
        4
    """

    def __init__(
        self,
        history_repo: HistoryRepository,
        catalog: ExerciseCatalog,
        profile_service: ProfileService,
    ) -> None:
        self._history_repo = history_repo
        self._catalog = catalog
        self._profile_service = profile_service

    def execute(
        self,
        completed_date: datetime,
        total_duration: int,
        exercises: Sequence[ManualExercise],
    ) -> HistoryChangeResult:
        """
        Raises:
            InvalidInputError: Empty workout, unknown exercise or bad values
            ProfileNotFoundError: If no profile exists
        """
        _validate_duration(total_duration)
        snapshots = _snapshot_exercises(self._catalog, exercises)
        token = uuid.uuid4()
        entry = WorkoutHistoryEntry(
            id=f"manual-{token}",
            workout_id=f"manual-workout-{token}",
            completed_date=as_utc(completed_date),
            total_duration=total_duration,
            exercises=snapshots,
        )
        return self.add_entry(entry)

    def add_entry(self, entry: WorkoutHistoryEntry) -> HistoryChangeResult:
        """
        Insert a ready-made entry, renumber history and apply its performance.

        Raises:
            InvalidInputError: If the entry has no exercises or its ID exists
        """
        if not entry.exercises:
            raise InvalidInputError("Add at least one exercise")
        self._profile_service.get_profile()
        if self._history_repo.get(entry.id) is not None:
            raise InvalidInputError(f"History entry {entry.id} already exists")

        renumbered = renumber_history([*self._history_repo.get_all(), entry])
        self._history_repo.put_many(renumbered)
        added = next(e for e in renumbered if e.id == entry.id)

        profile = self._profile_service.apply_performance(added.exercises)
        logger.info("Added history entry %s as workout #%d", added.id, added.workout_number)
        return HistoryChangeResult(entry=added, profile=profile, renumbered=len(renumbered))


class UpdateHistoryEntryUseCase:
    """
    Use case for editing a history entry.

    The edited performance is applied to strength again, on top of what the
    original completion already contributed.
    """

    def __init__(
        self,
        history_repo: HistoryRepository,
        catalog: ExerciseCatalog,
        profile_service: ProfileService,
    ) -> None:
        self._history_repo = history_repo
        self._catalog = catalog
        self._profile_service = profile_service

    def execute(
        self,
        entry_id: str,
        *,
        exercises: Optional[Sequence[ManualExercise]] = None,
        completed_date: Optional[datetime] = None,
        total_duration: Optional[int] = None,
    ) -> HistoryChangeResult:
        """
        Args:
            entry_id: Entry to edit
            exercises: Replacement exercises (unchanged when omitted)
            completed_date: New completion date (unchanged when omitted)
            total_duration: New duration in minutes (unchanged when omitted)

        Raises:
            HistoryEntryNotFoundError: If the entry does not exist
            InvalidInputError: Bad replacement values
        """
        existing = self._history_repo.get(entry_id)
        if existing is None:
            raise HistoryEntryNotFoundError(f"History entry {entry_id} not found")

        update = {}
        if exercises is not None:
            update["exercises"] = _snapshot_exercises(self._catalog, exercises, existing)
        if completed_date is not None:
            update["completed_date"] = as_utc(completed_date)
        if total_duration is not None:
            _validate_duration(total_duration)
            update["total_duration"] = total_duration
        self._profile_service.get_profile()

        edited = existing.model_copy(update=update)
        others = [e for e in self._history_repo.get_all() if e.id != entry_id]
        renumbered = renumber_history([*others, edited])
        self._history_repo.put_many(renumbered)
        edited = next(e for e in renumbered if e.id == entry_id)

        profile = self._profile_service.apply_performance(edited.exercises)
        logger.info("Edited history entry %s (workout #%d)", entry_id, edited.workout_number)
        return HistoryChangeResult(entry=edited, profile=profile, renumbered=len(renumbered))


@dataclass
class DeleteHistoryEntryResult:
    entry_id: str
    deleted: bool = True


class DeleteHistoryEntryUseCase:
    """Use case for deleting a history entry. Strength and numbering are left unchanged."""

    def __init__(self, history_repo: HistoryRepository) -> None:
        self._history_repo = history_repo

    def execute(self, entry_id: str) -> DeleteHistoryEntryResult:
        """
        Raises:
            HistoryEntryNotFoundError: If the entry does not exist
        """
        if not self._history_repo.delete(entry_id):
            raise HistoryEntryNotFoundError(f"History entry {entry_id} not found")
        logger.info("Deleted history entry %s", entry_id)
        return DeleteHistoryEntryResult(entry_id=entry_id)
