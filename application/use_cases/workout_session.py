"""
Workout session use cases.

Everything that happens between generation and completion: finding the
active workout, starting it, recording sets and remembering where the user
left off. Each operation reads the stored workout, computes the new state
and writes it back before returning.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional

from application.exceptions import InvalidInputError, WorkoutNotFoundError, WorkoutStateError
from application.ports import WorkoutRepository
from domain.models import Workout, WorkoutPhase, WorkoutStatus, make_set_value
from domain.models.timestamps import utcnow

logger = logging.getLogger(__name__)

# Recording more than this multiple of the target raises the remaining sets
OVERPERFORMANCE_RATIO = 1.2


def parse_set_value(raw: Any) -> int:
    """
    Validate a user-reported reps count or duration.

    Accepts positive integers and strings holding one.

    Raises:
        InvalidInputError: If the value is non-numeric or not positive
    """
    if isinstance(raw, bool):
        raise InvalidInputError(f"Set value must be a positive whole number, got {raw!r}")
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError:
            raise InvalidInputError(f"Set value must be a positive whole number, got {raw!r}") from None
    if not isinstance(raw, int) or raw <= 0:
        raise InvalidInputError(f"Set value must be a positive whole number, got {raw!r}")
    return raw


def load_workout(workout_repo: WorkoutRepository, workout_id: Optional[str] = None) -> Workout:
    """
    Get a workout by ID, or the active one when no ID is given.

    Raises:
        WorkoutNotFoundError: If there is no such workout
    """
    if workout_id is not None:
        workout = workout_repo.get(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(f"Workout {workout_id} not found")
        return workout

    active = workout_repo.list_by_status([WorkoutStatus.PENDING, WorkoutStatus.IN_PROGRESS])
    if not active:
        raise WorkoutNotFoundError("No active workout. Generate one first.")
    return active[0]


@dataclass
class GetActiveWorkoutResult:
    workout: Optional[Workout] = None


class GetActiveWorkoutUseCase:
    """Use case for finding the most recent pending or in-progress workout."""

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        self._workout_repo = workout_repo

    def execute(self) -> GetActiveWorkoutResult:
        active = self._workout_repo.list_by_status([WorkoutStatus.PENDING, WorkoutStatus.IN_PROGRESS])
        return GetActiveWorkoutResult(workout=active[0] if active else None)


@dataclass
class StartWorkoutResult:
    workout: Workout


class StartWorkoutUseCase:
    """Use case for moving a pending workout to in-progress."""

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._workout_repo = workout_repo
        self._clock = clock

    def execute(self, workout_id: Optional[str] = None) -> StartWorkoutResult:
        """
        Raises:
            WorkoutNotFoundError: If the workout does not exist
            WorkoutStateError: If the workout is not pending
        """
        workout = load_workout(self._workout_repo, workout_id)
        if not workout.can_transition_to(WorkoutStatus.IN_PROGRESS):
            raise WorkoutStateError(
                f"Workout #{workout.workout_number} is {workout.status.value} and cannot be started"
            )
        started = workout.mark_started(self._clock())
        self._workout_repo.put(started)
        logger.info("Started workout %s", started.id)
        return StartWorkoutResult(workout=started)


@dataclass
class RecordSetResult:
    """Result of recording a set."""

    workout: Workout
    adjusted_set_numbers: List[int] = field(default_factory=list)


class RecordSetUseCase:
    """
    Use case for recording the actual value of one set.

    When the value falls short of the target, or beats it by more than 20%,
    every later uncompleted set of the same exercise takes the recorded
    value as its new target.

    Usage:
        >>> result = use_case.execute(exercise_index=0, set_index=1, value=12)
        >>> result.adjusted_set_numbers
        [3]
    """

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        self._workout_repo = workout_repo

    def execute(
        self,
        exercise_index: int,
        set_index: int,
        value: Any,
        *,
        workout_id: Optional[str] = None,
    ) -> RecordSetResult:
        """
        Args:
            exercise_index: 0-based exercise position
            set_index: 0-based set position within the exercise
            value: Reps or seconds achieved

        Raises:
            InvalidInputError: Bad value or unknown set position
            WorkoutNotFoundError: If there is no such workout
            WorkoutStateError: If the workout is not in progress
        """
        actual_value = parse_set_value(value)
        workout = load_workout(self._workout_repo, workout_id)
        if workout.status != WorkoutStatus.IN_PROGRESS:
            raise WorkoutStateError(
                f"Workout #{workout.workout_number} is {workout.status.value}; start it before recording sets"
            )
        if not 0 <= exercise_index < len(workout.exercises):
            raise InvalidInputError(f"No exercise at position {exercise_index + 1}")
        exercise = workout.exercises[exercise_index]
        if not 0 <= set_index < len(exercise.sets):
            raise InvalidInputError(
                f"{exercise.exercise_name} has no set {set_index + 1}"
            )

        recorded = workout.model_copy(deep=True)
        sets = recorded.exercises[exercise_index].sets
        target = sets[set_index].target.value
        actual = make_set_value(exercise.exercise_type, actual_value)
        sets[set_index] = sets[set_index].model_copy(update={"completed": True, "actual": actual})

        adjusted: List[int] = []
        if actual_value < target or actual_value > target * OVERPERFORMANCE_RATIO:
            for later in range(set_index + 1, len(sets)):
                if not sets[later].completed:
                    sets[later] = sets[later].model_copy(update={"target": actual})
                    adjusted.append(sets[later].set_number)

        self._workout_repo.put(recorded)
        logger.info(
            "Recorded %s for %s set %d (target %d)",
            actual,
            exercise.exercise_name,
            sets[set_index].set_number,
            target,
        )
        if adjusted:
            logger.info("Adjusted targets of sets %s to %s", adjusted, actual)
        return RecordSetResult(workout=recorded, adjusted_set_numbers=adjusted)


@dataclass
class UpdateWorkoutPositionResult:
    workout: Workout


class UpdateWorkoutPositionUseCase:
    """Use case for saving where the user is inside a workout, for resuming later."""

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        self._workout_repo = workout_repo

    def execute(
        self,
        exercise_index: int,
        set_index: int,
        phase: WorkoutPhase,
        *,
        workout_id: Optional[str] = None,
    ) -> UpdateWorkoutPositionResult:
        """
        Raises:
            InvalidInputError: If the position does not exist in the workout
            WorkoutNotFoundError: If there is no such workout
        """
        workout = load_workout(self._workout_repo, workout_id)
        if not 0 <= exercise_index < len(workout.exercises):
            raise InvalidInputError(f"No exercise at position {exercise_index + 1}")
        if not 0 <= set_index < len(workout.exercises[exercise_index].sets):
            raise InvalidInputError(f"No set at position {set_index + 1}")

        try:
            phase = WorkoutPhase(phase)
        except ValueError:
            raise InvalidInputError(f"Unknown workout phase {phase!r}") from None
        updated = workout.model_copy(
            update={
                "current_exercise_index": exercise_index,
                "current_set_index": set_index,
                "current_phase": phase,
            }
        )
        self._workout_repo.put(updated)
        logger.debug("Workout %s position: %d/%d %s", workout.id, exercise_index, set_index, phase.value)
        return UpdateWorkoutPositionResult(workout=updated)
