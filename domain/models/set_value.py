"""
Tagged rep/duration values for sets.

A set is either measured in reps or in seconds, never both. Instead of two
optional fields, each value carries its kind:

    >>> Reps(value=12)
    Reps(kind='reps', value=12)
    >>> Timed(value=45).exercise_type
    <ExerciseType.TIMED: 'timed'>

`SetValue` is the discriminated union used by targets, actual results and
calibration results.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from domain.models.exercise import ExerciseType


class Reps(BaseModel):
    """A repetition count."""

    kind: Literal["reps"] = "reps"
    value: int = Field(..., gt=0, description="Number of repetitions")

    @property
    def exercise_type(self) -> ExerciseType:
        return ExerciseType.REPS

    def __str__(self) -> str:
        return f"{self.value} reps"

    model_config = {"frozen": True}


class Timed(BaseModel):
    """A hold duration in seconds."""

    kind: Literal["timed"] = "timed"
    value: int = Field(..., gt=0, description="Duration in seconds")

    @property
    def exercise_type(self) -> ExerciseType:
        return ExerciseType.TIMED

    def __str__(self) -> str:
        return f"{self.value}s"

    model_config = {"frozen": True}


SetValue = Annotated[Union[Reps, Timed], Field(discriminator="kind")]


def make_set_value(exercise_type: ExerciseType, value: int) -> Union[Reps, Timed]:
    """
    Build the variant matching an exercise type.

    Args:
        exercise_type: reps or timed
        value: Positive reps count or seconds

    Returns:
        Reps or Timed instance
    """
    if exercise_type == ExerciseType.REPS:
        return Reps(value=value)
    return Timed(value=value)
