"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the catalog and
repository interfaces for fast, isolated testing. No file system access.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeHistoryRepository, make_history_entry

    repo = FakeHistoryRepository()
    repo.seed([make_history_entry("h1", {"crunch-001": [20]})])
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from domain.models import (
    CompletedExercise,
    CompletedSet,
    EquipmentProfile,
    ExerciseType,
    MuscleGroup,
    Reps,
    StrengthLevels,
    Timed,
    UserProfile,
    Workout,
    WorkoutExercise,
    WorkoutHistoryEntry,
    WorkoutSet,
    WorkoutStatus,
    make_set_value,
)

# Import all fake implementations
from tests.fakes.exercise_catalog import FakeExerciseCatalog, default_exercises, make_exercise
from tests.fakes.history_repository import FakeHistoryRepository
from tests.fakes.profile_repository import FakeProfileRepository
from tests.fakes.workout_repository import FakeWorkoutRepository

BASE_TIME = datetime(2024, 3, 4, 18, 0, tzinfo=timezone.utc)


# =============================================================================
# Factory Functions
# =============================================================================


def create_profile(
    *,
    abs: int = 50,
    glutes: int = 50,
    lower_back: int = 50,
    calibrated: bool = True,
    has_elastic_bands: bool = False,
) -> UserProfile:
    """
    Create a profile with the given strength levels.

    Returns:
        UserProfile, calibrated unless told otherwise
    """
    return UserProfile(
        user_id="test_user",
        created_date=BASE_TIME,
        calibration_completed=calibrated,
        strength_levels=StrengthLevels(
            abs=abs, glutes=glutes, lower_back=lower_back, last_updated=BASE_TIME
        ),
        equipment=EquipmentProfile(has_elastic_bands=has_elastic_bands),
    )


def make_history_entry(
    entry_id: str,
    sets_by_exercise: Dict[str, List[int]],
    *,
    completed_date: Optional[datetime] = None,
    workout_number: int = 0,
    catalog: Optional[FakeExerciseCatalog] = None,
) -> WorkoutHistoryEntry:
    """
    Create a history entry from exercise IDs and per-set values.

    Names, muscle groups and value kinds are taken from the catalog
    (default test catalog when omitted).
    """
    catalog = catalog or FakeExerciseCatalog()
    exercises = []
    for exercise_id, values in sets_by_exercise.items():
        exercise = catalog.get_by_id(exercise_id)
        exercises.append(
            CompletedExercise(
                exercise_id=exercise_id,
                exercise_name=exercise.name,
                muscle_groups=list(exercise.muscle_groups),
                completed_sets=[
                    CompletedSet(set_number=n, actual=make_set_value(exercise.type, v))
                    for n, v in enumerate(values, start=1)
                ],
            )
        )
    return WorkoutHistoryEntry(
        id=entry_id,
        workout_id=f"workout-{entry_id}",
        workout_number=workout_number,
        completed_date=completed_date or BASE_TIME,
        total_duration=20,
        exercises=exercises,
    )


def make_workout(
    workout_id: str = "workout-1",
    *,
    status: WorkoutStatus = WorkoutStatus.IN_PROGRESS,
    workout_number: int = 1,
    generated_date: Optional[datetime] = None,
    crunch_target: int = 19,
    plank_target: int = 30,
) -> Workout:
    """
    Create a workout with three crunch sets and three plank sets.

    In-progress and completed workouts are started at BASE_TIME.
    """
    started = None if status == WorkoutStatus.PENDING else BASE_TIME
    return Workout(
        id=workout_id,
        workout_number=workout_number,
        generated_date=generated_date or BASE_TIME,
        started_date=started,
        status=status,
        estimated_duration=20,
        exercises=[
            WorkoutExercise(
                exercise_id="crunch-001",
                exercise_name="Crunch",
                muscle_groups=[MuscleGroup.ABS],
                exercise_type=ExerciseType.REPS,
                sets=[WorkoutSet(set_number=n, target=Reps(value=crunch_target)) for n in (1, 2, 3)],
                rest_time=45,
                base_target=25,
            ),
            WorkoutExercise(
                exercise_id="plank-001",
                exercise_name="Plank",
                muscle_groups=[MuscleGroup.ABS, MuscleGroup.LOWER_BACK],
                exercise_type=ExerciseType.TIMED,
                sets=[WorkoutSet(set_number=n, target=Timed(value=plank_target)) for n in (1, 2, 3)],
                rest_time=45,
                base_target=40,
            ),
        ],
    )


def days_after_base(days: float) -> datetime:
    return BASE_TIME + timedelta(days=days)


__all__ = [
    "FakeExerciseCatalog",
    "FakeHistoryRepository",
    "FakeProfileRepository",
    "FakeWorkoutRepository",
    "default_exercises",
    "make_exercise",
    "create_profile",
    "make_history_entry",
    "make_workout",
    "days_after_base",
    "BASE_TIME",
]
