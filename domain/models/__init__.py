"""
Domain models for the adaptive trainer.

This package contains pure domain models that are independent of
infrastructure concerns (storage, CLI, configuration).

These models represent the core business concepts:
- Exercise: A catalog exercise with heaviness scores per muscle group
- Reps / Timed: Tagged set values (never both on the same set)
- StrengthLevels: The 0-100 per-muscle-group fitness state
- UserProfile: Calibration, strength and equipment of the single user
- Workout: The active generated workout (aggregate root)
- WorkoutHistoryEntry: A finished workout, only completed sets kept

Usage:
    >>> from domain.models import Workout, Reps

    >>> # Serialize to JSON
    >>> json_str = workout.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> workout = Workout.model_validate_json(json_str)
"""

from domain.models.exercise import (
    ALL_MUSCLE_GROUPS,
    Equipment,
    Exercise,
    ExerciseType,
    MuscleGroup,
)
from domain.models.history import CompletedExercise, CompletedSet, WorkoutHistoryEntry
from domain.models.profile import (
    CalibrationData,
    CalibrationExercise,
    EquipmentProfile,
    StrengthLevels,
    UserProfile,
    clamp_strength,
)
from domain.models.set_value import Reps, SetValue, Timed, make_set_value
from domain.models.workout import (
    Workout,
    WorkoutExercise,
    WorkoutPhase,
    WorkoutSet,
    WorkoutStatus,
)

__all__ = [
    # Catalog
    "Exercise",
    "MuscleGroup",
    "ExerciseType",
    "Equipment",
    "ALL_MUSCLE_GROUPS",
    # Set values
    "Reps",
    "Timed",
    "SetValue",
    "make_set_value",
    # Profile
    "StrengthLevels",
    "CalibrationData",
    "CalibrationExercise",
    "EquipmentProfile",
    "UserProfile",
    "clamp_strength",
    # Workout
    "Workout",
    "WorkoutExercise",
    "WorkoutSet",
    "WorkoutStatus",
    "WorkoutPhase",
    # History
    "WorkoutHistoryEntry",
    "CompletedExercise",
    "CompletedSet",
]
