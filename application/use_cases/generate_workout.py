"""
GenerateWorkout Use Case.

Loads the profile, the two most recent workouts and the full history, then
asks the generator for the next workout and stores it as pending.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List

from application.exceptions import WorkoutStateError
from application.ports import HistoryRepository, WorkoutRepository
from application.services.profile_service import ProfileService
from domain.models import Workout, WorkoutStatus
from domain.models.timestamps import utcnow
from trainer.core.workout_generator import (
    RECENT_WORKOUT_WINDOW,
    WorkoutGenerator,
    get_recent_exercise_ids,
)

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (WorkoutStatus.PENDING, WorkoutStatus.IN_PROGRESS)


@dataclass
class GenerateWorkoutResult:
    """Result of the GenerateWorkout use case execution."""

    workout: Workout
    recent_exercise_ids: List[str] = field(default_factory=list)


class GenerateWorkoutUseCase:
    """
    Use case for generating the next workout.

    Orchestrates the following workflow:
    1. Require a calibrated profile
    2. Refuse when a pending or in-progress workout exists
    3. Collect recent exercise IDs and history for progression
    4. Generate and persist the new workout

    Usage:
        >>> use_case = GenerateWorkoutUseCase(
        ...     profile_service=profile_service,
        ...     workout_repo=workout_repo,
        ...     history_repo=history_repo,
        ...     generator=WorkoutGenerator(catalog),
        ... )
        >>> workout = use_case.execute().workout
    """

    def __init__(
        self,
        profile_service: ProfileService,
        workout_repo: WorkoutRepository,
        history_repo: HistoryRepository,
        generator: WorkoutGenerator,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._profile_service = profile_service
        self._workout_repo = workout_repo
        self._history_repo = history_repo
        self._generator = generator
        self._clock = clock

    def execute(self) -> GenerateWorkoutResult:
        """
        Raises:
            ProfileNotFoundError: If no profile exists
            CalibrationRequiredError: If calibration is pending
            WorkoutStateError: If an active workout exists
            EmptyCandidatePoolError: If a muscle group has no eligible exercise
        """
        profile = self._profile_service.require_calibrated()

        active = self._workout_repo.list_by_status(ACTIVE_STATUSES)
        if active:
            raise WorkoutStateError(
                f"Workout #{active[0].workout_number} is still {active[0].status.value}; "
                "complete it before generating a new one"
            )

        # list_recent is newest first, the generator wants chronological order
        recent_workouts = list(reversed(self._workout_repo.list_recent(RECENT_WORKOUT_WINDOW)))
        recent_ids = get_recent_exercise_ids(recent_workouts)
        history = self._history_repo.list_ordered(descending=True)

        workout = self._generator.generate_workout(
            workout_number=self._workout_repo.count() + 1,
            strength_levels=profile.strength_levels,
            recent_exercise_ids=recent_ids,
            workout_history=history,
            has_elastic_bands=profile.has_elastic_bands,
            now=self._clock(),
        )
        self._workout_repo.add(workout)

        logger.info("Stored workout %s (#%d)", workout.id, workout.workout_number)
        return GenerateWorkoutResult(workout=workout, recent_exercise_ids=recent_ids)
