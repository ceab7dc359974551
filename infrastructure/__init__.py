"""
Infrastructure Layer for the adaptive trainer.

This package contains concrete implementations of repository interfaces:
- db/: JSON-file repositories under the configured data directory
"""

from infrastructure.db import (
    JsonHistoryRepository,
    JsonProfileRepository,
    JsonWorkoutRepository,
)

__all__ = [
    "JsonWorkoutRepository",
    "JsonHistoryRepository",
    "JsonProfileRepository",
]
