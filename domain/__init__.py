"""
Domain layer for the adaptive trainer.

This package contains pure domain models that are independent of
infrastructure concerns (storage, CLI, configuration).
"""

from domain.models import (
    Exercise,
    MuscleGroup,
    StrengthLevels,
    UserProfile,
    Workout,
    WorkoutHistoryEntry,
)

__all__ = [
    "Exercise",
    "MuscleGroup",
    "StrengthLevels",
    "UserProfile",
    "Workout",
    "WorkoutHistoryEntry",
]
