"""
Infrastructure Database Layer.

This package provides JSON-file implementations of the repository interfaces
defined in application.ports. Each repository owns one file under the data
directory and can be injected into services and use cases.

Usage:
    from infrastructure.db import (
        JsonWorkoutRepository,
        JsonHistoryRepository,
        JsonProfileRepository,
    )

    workout_repo = JsonWorkoutRepository(settings.data_path)
    history_repo = JsonHistoryRepository(settings.data_path)
    profile_repo = JsonProfileRepository(settings.data_path)
"""

from infrastructure.db.history_repository import JsonHistoryRepository
from infrastructure.db.json_store import JsonFileStore
from infrastructure.db.profile_repository import JsonProfileRepository
from infrastructure.db.workout_repository import JsonWorkoutRepository

__all__ = [
    "JsonFileStore",
    "JsonWorkoutRepository",
    "JsonHistoryRepository",
    "JsonProfileRepository",
]
