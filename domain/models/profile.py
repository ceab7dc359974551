"""
User profile, calibration results and strength levels.

StrengthLevels is the persistent fitness state of the user: one 0-100 score
per muscle group. It is read by workout generation and written only through
the strength-model update functions.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.models.exercise import MuscleGroup
from domain.models.set_value import SetValue
from domain.models.timestamps import as_utc, utcnow as _utcnow

MIN_STRENGTH = 0
MAX_STRENGTH = 100

# Attribute holding each muscle group's score
_FIELD_BY_GROUP: Dict[MuscleGroup, str] = {
    MuscleGroup.ABS: "abs",
    MuscleGroup.GLUTES: "glutes",
    MuscleGroup.LOWER_BACK: "lower_back",
}


def clamp_strength(score: int) -> int:
    """Clamp a strength score into [0, 100]."""
    return max(MIN_STRENGTH, min(MAX_STRENGTH, score))


class StrengthLevels(BaseModel):
    """
    Per-muscle-group strength scores.

    Examples:
        >>> levels = StrengthLevels(abs=40, glutes=55, lower_back=30)
        >>> levels.for_group(MuscleGroup.GLUTES)
        55
        >>> levels.with_scores({MuscleGroup.ABS: 140}).abs
        100
    """

    abs: int = Field(default=0, ge=MIN_STRENGTH, le=MAX_STRENGTH)
    glutes: int = Field(default=0, ge=MIN_STRENGTH, le=MAX_STRENGTH)
    lower_back: int = Field(default=0, ge=MIN_STRENGTH, le=MAX_STRENGTH)
    last_updated: datetime = Field(default_factory=_utcnow)

    @field_validator("last_updated")
    @classmethod
    def normalize_last_updated(cls, value: datetime) -> datetime:
        return as_utc(value)

    def for_group(self, group: MuscleGroup) -> int:
        """Score for one muscle group."""
        return getattr(self, _FIELD_BY_GROUP[group])

    def as_dict(self) -> Dict[MuscleGroup, int]:
        return {group: self.for_group(group) for group in _FIELD_BY_GROUP}

    def with_scores(
        self,
        scores: Dict[MuscleGroup, int],
        now: Optional[datetime] = None,
    ) -> "StrengthLevels":
        """
        Return new levels with the given scores replaced.

        Scores are clamped into [0, 100]. Groups not in `scores` keep their
        current value. `last_updated` is always refreshed.
        """
        update = {
            _FIELD_BY_GROUP[group]: clamp_strength(int(score))
            for group, score in scores.items()
        }
        update["last_updated"] = now or _utcnow()
        return self.model_copy(update=update)

    @classmethod
    def zero(cls, now: Optional[datetime] = None) -> "StrengthLevels":
        return cls(last_updated=now or _utcnow())

    model_config = {"frozen": True}


class CalibrationExercise(BaseModel):
    """Result of one calibration test."""

    exercise_id: str = Field(..., min_length=1)
    muscle_group: MuscleGroup
    achieved: SetValue = Field(..., description="Reps achieved or seconds held")


class CalibrationData(BaseModel):
    """One round of calibration, one entry per muscle group."""

    calibration_date: datetime = Field(default_factory=_utcnow)
    exercises: List[CalibrationExercise] = Field(default_factory=list)

    @field_validator("calibration_date")
    @classmethod
    def normalize_calibration_date(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def validate_one_entry_per_group(self) -> "CalibrationData":
        groups = [e.muscle_group for e in self.exercises]
        if len(groups) != len(set(groups)):
            raise ValueError("Calibration must have at most one entry per muscle group")
        return self


class EquipmentProfile(BaseModel):
    """Equipment the user owns."""

    has_elastic_bands: bool = False


class UserProfile(BaseModel):
    """The single user profile of an installation."""

    user_id: str = Field(..., min_length=1)
    created_date: datetime = Field(default_factory=_utcnow)
    calibration_completed: bool = False
    calibration_data: Optional[CalibrationData] = None
    strength_levels: StrengthLevels = Field(default_factory=StrengthLevels)
    equipment: EquipmentProfile = Field(default_factory=EquipmentProfile)
    weight_kg: Optional[float] = Field(default=None, gt=0)
    height_cm: Optional[float] = Field(default=None, gt=0)

    @field_validator("created_date")
    @classmethod
    def normalize_created_date(cls, value: datetime) -> datetime:
        return as_utc(value)

    @property
    def has_elastic_bands(self) -> bool:
        return self.equipment.has_elastic_bands

    def with_strength_levels(self, levels: StrengthLevels) -> "UserProfile":
        """Return a new profile with replaced strength levels."""
        return self.model_copy(update={"strength_levels": levels})
