"""
Workout aggregate root - the active, generated workout.

A Workout is created pending by the generator, started, filled in set by set
and finally completed, at which point it becomes inert history and a
WorkoutHistoryEntry is derived from it.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.models.exercise import ExerciseType, MuscleGroup
from domain.models.set_value import SetValue
from domain.models.timestamps import as_utc


class WorkoutStatus(str, Enum):
    """Linear workout lifecycle: pending -> in-progress -> completed."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @property
    def is_active(self) -> bool:
        return self != WorkoutStatus.COMPLETED


_NEXT_STATUS = {
    WorkoutStatus.PENDING: WorkoutStatus.IN_PROGRESS,
    WorkoutStatus.IN_PROGRESS: WorkoutStatus.COMPLETED,
}


class WorkoutPhase(str, Enum):
    """Where the user is inside a running workout."""

    EXERCISE = "exercise"
    REST = "rest"
    EXERCISE_REST = "exercise-rest"


class WorkoutSet(BaseModel):
    """
    A single set of a workout exercise.

    `target` is what was prescribed; `actual` is what the user reported.
    Both must be of the same kind (reps or timed).
    """

    set_number: int = Field(..., ge=1, description="1-based position within the exercise")
    target: SetValue
    completed: bool = False
    actual: Optional[SetValue] = None

    @model_validator(mode="after")
    def validate_kinds(self) -> "WorkoutSet":
        if self.actual is not None and self.actual.kind != self.target.kind:
            raise ValueError(
                f"Set {self.set_number}: actual is {self.actual.kind} but target is {self.target.kind}"
            )
        return self

    @property
    def is_recorded(self) -> bool:
        """Completed with an actual value - the only sets that count."""
        return self.completed and self.actual is not None


class WorkoutExercise(BaseModel):
    """
    An exercise prescribed inside a workout.

    Name, muscle groups and type are snapshots of the catalog at generation
    time.
    """

    exercise_id: str = Field(..., min_length=1)
    exercise_name: str
    muscle_groups: List[MuscleGroup] = Field(..., min_length=1)
    exercise_type: ExerciseType
    sets: List[WorkoutSet] = Field(default_factory=list)
    rest_time: int = Field(..., ge=0, description="Rest between sets in seconds")
    base_target: Optional[int] = Field(
        default=None,
        ge=1,
        description="Single-set target before the sustainable reduction",
    )

    @model_validator(mode="after")
    def validate_set_kinds(self) -> "WorkoutExercise":
        for workout_set in self.sets:
            if workout_set.target.kind != self.exercise_type.value:
                raise ValueError(
                    f"Exercise '{self.exercise_id}' is {self.exercise_type.value} "
                    f"but set {workout_set.set_number} targets {workout_set.target.kind}"
                )
        return self

    @property
    def recorded_sets(self) -> List[WorkoutSet]:
        return [s for s in self.sets if s.is_recorded]


class Workout(BaseModel):
    """
    Aggregate root for a generated workout.

    Status transitions are linear; use `transition_to` (or `mark_started` /
    `mark_completed`) to move forward. The domain methods return new
    instances.

    Examples:
        >>> workout.status
        <WorkoutStatus.PENDING: 'pending'>
        >>> started = workout.mark_started(now)
        >>> started.status
        <WorkoutStatus.IN_PROGRESS: 'in-progress'>
    """

    # Identity
    id: str = Field(..., min_length=1)
    workout_number: int = Field(..., ge=1)

    # Lifecycle
    generated_date: datetime
    started_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    status: WorkoutStatus = WorkoutStatus.PENDING

    # Durations in minutes
    estimated_duration: int = Field(..., ge=0)
    total_duration: Optional[int] = Field(default=None, ge=0)

    exercises: List[WorkoutExercise] = Field(default_factory=list)

    # Resume position
    current_exercise_index: Optional[int] = Field(default=None, ge=0)
    current_set_index: Optional[int] = Field(default=None, ge=0)
    current_phase: Optional[WorkoutPhase] = None

    @field_validator("generated_date", "started_date", "completed_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def exercise_ids(self) -> List[str]:
        return [e.exercise_id for e in self.exercises]

    @property
    def total_sets(self) -> int:
        return sum(len(e.sets) for e in self.exercises)

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    # -------------------------------------------------------------------------
    # Domain Methods (return new instances)
    # -------------------------------------------------------------------------

    def can_transition_to(self, status: WorkoutStatus) -> bool:
        return _NEXT_STATUS.get(self.status) == status

    def transition_to(self, status: WorkoutStatus, **update) -> "Workout":
        """
        Return a copy moved to the next status.

        Raises:
            ValueError: If the transition is not the next step in the lifecycle.
        """
        if not self.can_transition_to(status):
            raise ValueError(
                f"Workout {self.id} cannot move from {self.status.value} to {status.value}"
            )
        return self.model_copy(update={"status": status, **update}, deep=True)

    def mark_started(self, now: datetime) -> "Workout":
        return self.transition_to(WorkoutStatus.IN_PROGRESS, started_date=now)

    def mark_completed(self, now: datetime, total_duration: int) -> "Workout":
        return self.transition_to(
            WorkoutStatus.COMPLETED,
            completed_date=now,
            total_duration=total_duration,
        )

    def __str__(self) -> str:
        return (
            f"Workout #{self.workout_number} ({self.status.value}, "
            f"{len(self.exercises)} exercises, ~{self.estimated_duration} min)"
        )
