"""
Workout history helpers.

Converts finished workouts into history entries, keeps workout numbers
dense, and provides the small editing and summary helpers used by manual
entry and the history views.
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Union

from application.exceptions import InvalidInputError
from application.ports.exercise_catalog import ExerciseCatalog
from domain.models import (
    CompletedExercise,
    CompletedSet,
    Exercise,
    Reps,
    Timed,
    Workout,
    WorkoutHistoryEntry,
    make_set_value,
)
from trainer.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


def total_duration_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two timestamps, halves rounded up, never negative."""
    return max(0, round_half_up((end - start).total_seconds() / 60))


def completed_exercises_from_workout(workout: Workout) -> List[CompletedExercise]:
    """
    Snapshot every exercise of a workout with only its recorded sets.

    A set counts when it is marked completed and has an actual value.
    Exercises without any recorded set are kept with an empty list.
    """
    return [
        CompletedExercise(
            exercise_id=exercise.exercise_id,
            exercise_name=exercise.exercise_name,
            muscle_groups=list(exercise.muscle_groups),
            completed_sets=[
                CompletedSet(set_number=s.set_number, actual=s.actual)
                for s in exercise.recorded_sets
            ],
        )
        for exercise in workout.exercises
    ]


def build_history_entry(
    workout: Workout,
    completed_date: datetime,
    entry_id: Optional[str] = None,
) -> WorkoutHistoryEntry:
    """
    Derive the history entry of a completed workout.

    Duration runs from the start of the workout (or its generation when it
    was never started) to `completed_date`.

    Args:
        workout: The workout being completed
        completed_date: Completion timestamp
        entry_id: Explicit entry ID (generated when omitted)

    Returns:
        WorkoutHistoryEntry carrying the workout's number
    """
    start = workout.started_date or workout.generated_date
    return WorkoutHistoryEntry(
        id=entry_id or f"history-{uuid.uuid4()}",
        workout_id=workout.id,
        workout_number=workout.workout_number,
        completed_date=completed_date,
        total_duration=total_duration_minutes(start, completed_date),
        exercises=completed_exercises_from_workout(workout),
    )


def renumber_history(entries: Iterable[WorkoutHistoryEntry]) -> List[WorkoutHistoryEntry]:
    """
    Reassign workout numbers 1..N in completion order.

    The sort is stable, so entries completed at the same instant keep their
    relative order.

    Returns:
        New entries ordered by completed_date ascending
    """
    ordered = sorted(entries, key=lambda e: e.completed_date)
    return [
        entry.model_copy(update={"workout_number": number})
        for number, entry in enumerate(ordered, start=1)
    ]


def is_first_time(exercise_id: str, history: Iterable[WorkoutHistoryEntry]) -> bool:
    """True if the exercise has never been completed with at least one set."""
    for entry in history:
        completed = entry.find_exercise(exercise_id)
        if completed is not None and completed.completed_sets:
            return False
    return True


# =============================================================================
# Manual entry editing
# =============================================================================


def build_completed_exercise(exercise: Exercise, values: Sequence[int]) -> CompletedExercise:
    """
    Snapshot a catalog exercise with the given per-set values.

    Raises:
        InvalidInputError: If a value is not a positive integer
    """
    bad = [v for v in values if isinstance(v, bool) or not isinstance(v, int) or v <= 0]
    if bad:
        raise InvalidInputError(
            f"Set values for '{exercise.id}' must be positive integers",
            errors=[f"invalid value: {v!r}" for v in bad],
        )
    return CompletedExercise(
        exercise_id=exercise.id,
        exercise_name=exercise.name,
        muscle_groups=list(exercise.muscle_groups),
        completed_sets=[
            CompletedSet(set_number=n, actual=make_set_value(exercise.type, v))
            for n, v in enumerate(values, start=1)
        ],
    )


def add_set(
    exercise: CompletedExercise,
    value: Optional[Union[Reps, Timed]] = None,
) -> CompletedExercise:
    """
    Append a set to a completed exercise.

    The new set copies the last set's value unless `value` is given.

    Raises:
        InvalidInputError: If there is no set to copy and no value
    """
    if value is None:
        if not exercise.completed_sets:
            raise InvalidInputError(f"No set to copy for '{exercise.exercise_id}', give a value")
        value = exercise.completed_sets[-1].actual
    new_set = CompletedSet(set_number=len(exercise.completed_sets) + 1, actual=value)
    return exercise.model_copy(update={"completed_sets": [*exercise.completed_sets, new_set]})


def delete_set(exercise: CompletedExercise, set_number: int) -> CompletedExercise:
    """
    Remove a set and renumber the remaining sets 1..N.

    Raises:
        InvalidInputError: If no set has that number
    """
    remaining = [s for s in exercise.completed_sets if s.set_number != set_number]
    if len(remaining) == len(exercise.completed_sets):
        raise InvalidInputError(f"Exercise '{exercise.exercise_id}' has no set {set_number}")
    renumbered = [
        s.model_copy(update={"set_number": n}) for n, s in enumerate(remaining, start=1)
    ]
    return exercise.model_copy(update={"completed_sets": renumbered})


# =============================================================================
# Summaries
# =============================================================================


@dataclass
class HistorySummary:
    """Totals for one history entry."""

    exercise_count: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_seconds: int = 0


def summarize_history_entry(
    entry: WorkoutHistoryEntry,
    catalog: Optional[ExerciseCatalog] = None,
) -> HistorySummary:
    """
    Count sets, reps and timed seconds of a history entry.

    When a catalog is given, exercises no longer in it are left out.
    """
    summary = HistorySummary()
    for exercise in entry.exercises:
        if catalog is not None and catalog.get_by_id(exercise.exercise_id) is None:
            logger.debug("Exercise %s not in catalog, left out of summary", exercise.exercise_id)
            continue
        summary.exercise_count += 1
        for completed_set in exercise.completed_sets:
            summary.total_sets += 1
            if isinstance(completed_set.actual, Reps):
                summary.total_reps += completed_set.actual.value
            else:
                summary.total_seconds += completed_set.actual.value
    return summary


def count_workouts_since(entries: Iterable[WorkoutHistoryEntry], since: datetime) -> int:
    """Number of entries completed at or after `since`."""
    return sum(1 for e in entries if e.completed_date >= since)


def start_of_week(now: datetime) -> datetime:
    """Midnight of the Sunday that starts the week containing `now`."""
    days_since_sunday = (now.weekday() + 1) % 7
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=days_since_sunday)


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
