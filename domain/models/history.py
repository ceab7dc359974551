"""
Workout history entries.

History only keeps what was actually done: skipped or incomplete sets are
dropped, never stored as zero.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from domain.models.exercise import ExerciseType, MuscleGroup
from domain.models.set_value import SetValue
from domain.models.timestamps import as_utc


class CompletedSet(BaseModel):
    """A set the user finished, with the value they reported."""

    set_number: int = Field(..., ge=1)
    actual: SetValue


class CompletedExercise(BaseModel):
    """Snapshot of an exercise as performed in a finished workout."""

    exercise_id: str = Field(..., min_length=1)
    exercise_name: str
    muscle_groups: List[MuscleGroup] = Field(..., min_length=1)
    completed_sets: List[CompletedSet] = Field(default_factory=list)

    def average_performance(self, exercise_type: Optional[ExerciseType] = None) -> Optional[float]:
        """
        Mean reps or seconds across completed sets, None when there are none.

        With `exercise_type`, a value of the other kind counts as 0.
        """
        if not self.completed_sets:
            return None
        values = [
            0 if exercise_type is not None and s.actual.kind != exercise_type.value else s.actual.value
            for s in self.completed_sets
        ]
        return sum(values) / len(values)


class WorkoutHistoryEntry(BaseModel):
    """
    A finished workout.

    `workout_number` is not a permanent identifier: it is reassigned whenever
    entries are added or edited so that numbers form a dense 1..N sequence in
    `completed_date` order.
    """

    id: str = Field(..., min_length=1)
    workout_id: str = Field(..., min_length=1)
    workout_number: int = Field(default=0, ge=0)
    completed_date: datetime
    total_duration: int = Field(..., ge=0, description="Actual minutes")
    exercises: List[CompletedExercise] = Field(default_factory=list)

    @field_validator("completed_date")
    @classmethod
    def normalize_completed_date(cls, value: datetime) -> datetime:
        return as_utc(value)

    def find_exercise(self, exercise_id: str) -> Optional[CompletedExercise]:
        return next((e for e in self.exercises if e.exercise_id == exercise_id), None)

    @property
    def exercise_ids(self) -> List[str]:
        return [e.exercise_id for e in self.exercises]
