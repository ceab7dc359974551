"""
Application-layer exceptions.

These exceptions are used across the application, core and infrastructure
layers. Every failure is local and recoverable by user action; the CLI turns
them into an error message and a non-zero exit status.
"""

from typing import List, Optional


class TrainerError(Exception):
    """Base class for all expected trainer failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# -----------------------------------------------------------------------------
# Missing prerequisite state
# -----------------------------------------------------------------------------


class ProfileNotFoundError(TrainerError):
    """No user profile exists yet. The user must be onboarded first."""


class CalibrationRequiredError(TrainerError):
    """The profile exists but calibration has not been completed."""


# -----------------------------------------------------------------------------
# Generation
# -----------------------------------------------------------------------------


class EmptyCandidatePoolError(TrainerError):
    """No eligible exercise exists for a required muscle group.

    Raised by the workout generator when equipment filtering leaves nothing
    to choose from. Distinct from the prerequisite errors above: the profile
    is fine, the catalog cannot produce a valid workout.
    """

    def __init__(self, muscle_group: str):
        super().__init__(f"No eligible exercises for muscle group '{muscle_group}'")
        self.muscle_group = muscle_group


# -----------------------------------------------------------------------------
# Input and state
# -----------------------------------------------------------------------------


class InvalidInputError(TrainerError):
    """User-supplied values were rejected. No state was changed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []


class WorkoutNotFoundError(TrainerError):
    """The requested workout does not exist."""


class HistoryEntryNotFoundError(TrainerError):
    """The requested history entry does not exist."""


class WorkoutStateError(TrainerError):
    """The workout is not in a status that allows the operation."""


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------


class PersistenceError(TrainerError):
    """Reading or writing the local store failed.

    The store is left as it was before the failed operation.
    """


class CatalogError(TrainerError):
    """The exercise catalog file is missing or malformed."""
