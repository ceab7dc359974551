"""
Repository Interfaces (Ports) for the adaptive trainer.

This package defines abstract interfaces that decouple the engine from
infrastructure (local files, in-memory fakes). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRepository, HistoryRepository

    class CompleteWorkoutUseCase:
        def __init__(self, workout_repo: WorkoutRepository, ...):
            self._workout_repo = workout_repo
"""

# Exercise catalog (read-only)
from application.ports.exercise_catalog import ExerciseCatalog

# Workout persistence
from application.ports.workout_repository import WorkoutRepository

# History persistence
from application.ports.history_repository import HistoryRepository

# Profile persistence
from application.ports.profile_repository import ProfileRepository

__all__ = [
    "ExerciseCatalog",
    "WorkoutRepository",
    "HistoryRepository",
    "ProfileRepository",
]
