"""
Calibration Use Cases.

Calibration measures one fixed test exercise per muscle group and turns the
results into the initial strength levels. Resetting calibration forgets the
results and zeroes strength until the user calibrates again.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Mapping, Optional

from application.exceptions import InvalidInputError
from application.ports import ExerciseCatalog
from application.services.profile_service import ProfileService
from domain.models import (
    ALL_MUSCLE_GROUPS,
    CalibrationData,
    CalibrationExercise,
    MuscleGroup,
    UserProfile,
    make_set_value,
)
from domain.models.timestamps import utcnow

logger = logging.getLogger(__name__)

# Test exercise per muscle group
CALIBRATION_EXERCISES: Dict[MuscleGroup, str] = {
    MuscleGroup.ABS: "plank-001",
    MuscleGroup.GLUTES: "glute-bridge-001",
    MuscleGroup.LOWER_BACK: "bird-dog-001",
}


@dataclass
class CalibrationResult:
    """Result of the CompleteCalibration and ResetCalibration use cases."""

    profile: UserProfile
    calibration_data: Optional[CalibrationData] = None
    skipped: List[str] = field(default_factory=list)


class CompleteCalibrationUseCase:
    """
    Use case for recording calibration results.

    Orchestrates the following workflow:
    1. Validate one positive value per muscle group
    2. Build CalibrationData against the calibration exercises
    3. Store it and the computed strength levels via ProfileService

    Usage:
        >>> result = use_case.execute({
        ...     MuscleGroup.ABS: 45,          # seconds of plank
        ...     MuscleGroup.GLUTES: 20,       # glute bridge reps
        ...     MuscleGroup.LOWER_BACK: 12,   # bird dog reps
        ... })
        >>> result.profile.calibration_completed
        True
    """

    def __init__(
        self,
        profile_service: ProfileService,
        catalog: ExerciseCatalog,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._profile_service = profile_service
        self._catalog = catalog
        self._clock = clock

    def execute(self, results: Mapping[MuscleGroup, int]) -> CalibrationResult:
        """
        Args:
            results: Reps achieved or seconds held, per muscle group

        Raises:
            ProfileNotFoundError: If no profile exists
            InvalidInputError: If a muscle group is missing or a value is
                not a positive integer
        """
        self._profile_service.get_profile()

        errors = []
        for group in ALL_MUSCLE_GROUPS:
            value = results.get(group)
            if value is None:
                errors.append(f"{group.value}: missing")
            elif isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(f"{group.value}: must be a positive integer, got {value!r}")
        if errors:
            logger.warning("Calibration rejected: %s", errors)
            raise InvalidInputError("Invalid calibration results", errors=errors)

        now = self._clock()
        entries = []
        skipped = []
        for group in ALL_MUSCLE_GROUPS:
            exercise = self._catalog.get_by_id(CALIBRATION_EXERCISES[group])
            if exercise is None:
                logger.warning(
                    "Calibration exercise %s missing from catalog", CALIBRATION_EXERCISES[group]
                )
                skipped.append(group.value)
                continue
            entries.append(
                CalibrationExercise(
                    exercise_id=exercise.id,
                    muscle_group=group,
                    achieved=make_set_value(exercise.type, results[group]),
                )
            )

        calibration_data = CalibrationData(calibration_date=now, exercises=entries)
        profile = self._profile_service.apply_calibration(calibration_data, now=now)
        return CalibrationResult(
            profile=profile,
            calibration_data=calibration_data,
            skipped=skipped,
        )


class ResetCalibrationUseCase:
    """Use case for clearing calibration and zeroing strength levels."""

    def __init__(self, profile_service: ProfileService) -> None:
        self._profile_service = profile_service

    def execute(self) -> CalibrationResult:
        return CalibrationResult(profile=self._profile_service.reset_calibration())
