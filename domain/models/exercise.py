"""
Exercise catalog entries and their classification enums.

Exercises are read-only reference data owned by the catalog. Workouts and
history entries copy the fields they need (name, muscle groups, type) at
generation time, so later catalog edits never rewrite history.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class MuscleGroup(str, Enum):
    """The fixed classification dimension for exercises and strength."""

    ABS = "abs"
    GLUTES = "glutes"
    LOWER_BACK = "lowerBack"


# Generation order for the three required exercise slots
ALL_MUSCLE_GROUPS: List[MuscleGroup] = [
    MuscleGroup.ABS,
    MuscleGroup.GLUTES,
    MuscleGroup.LOWER_BACK,
]


class ExerciseType(str, Enum):
    """How an exercise is measured."""

    REPS = "reps"
    TIMED = "timed"


class Equipment(str, Enum):
    """Equipment an exercise requires."""

    NONE = "none"
    ELASTIC_BAND = "elastic-band"


class Exercise(BaseModel):
    """
    Value object representing a catalog exercise.

    `muscle_groups` is ordered: the first entry is the primary muscle group
    used for capacity estimation and rest-time calculation.

    `heaviness_score` rates the difficulty (1-10) of the exercise for each
    muscle group it targets.

    Examples:
        >>> plank = Exercise(
        ...     id="plank-001",
        ...     name="Plank",
        ...     muscle_groups=[MuscleGroup.ABS],
        ...     type=ExerciseType.TIMED,
        ...     heaviness_score={MuscleGroup.ABS: 5},
        ... )
        >>> plank.primary_muscle_group
        <MuscleGroup.ABS: 'abs'>
    """

    # Identity
    id: str = Field(..., min_length=1, description="Unique catalog identifier")
    name: str = Field(..., min_length=1, description="Display name")

    # Classification
    muscle_groups: List[MuscleGroup] = Field(
        ..., min_length=1, description="Targeted muscle groups, primary first"
    )
    type: ExerciseType = Field(..., description="reps or timed")
    heaviness_score: Dict[MuscleGroup, int] = Field(
        ..., description="Difficulty per targeted muscle group (1-10)"
    )
    equipment: Equipment = Field(
        default=Equipment.NONE, description="Required equipment"
    )

    # Defaults used when logging a manual workout
    default_reps: Optional[int] = Field(default=None, ge=1)
    default_duration: Optional[int] = Field(
        default=None, ge=1, description="Default hold duration in seconds"
    )

    # Presentation only
    description: str = Field(default="")
    source: str = Field(default="")
    video_url: Optional[str] = Field(default=None)
    image_url: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def validate_heaviness(self) -> "Exercise":
        """Every targeted muscle group needs a heaviness score in 1-10."""
        missing = [g.value for g in self.muscle_groups if g not in self.heaviness_score]
        if missing:
            raise ValueError(
                f"Exercise '{self.id}' has no heaviness score for: {', '.join(missing)}"
            )
        for group, score in self.heaviness_score.items():
            if not 1 <= score <= 10:
                raise ValueError(
                    f"Exercise '{self.id}' heaviness for {group.value} must be 1-10, got {score}"
                )
        return self

    @property
    def primary_muscle_group(self) -> MuscleGroup:
        """The first-listed muscle group."""
        return self.muscle_groups[0]

    @property
    def requires_equipment(self) -> bool:
        return self.equipment != Equipment.NONE

    def heaviness_for(self, group: MuscleGroup) -> Optional[int]:
        """Heaviness for a muscle group, or None when not rated."""
        return self.heaviness_score.get(group)

    def targets(self, group: MuscleGroup) -> bool:
        return group in self.muscle_groups

    def __str__(self) -> str:
        groups = "/".join(g.value for g in self.muscle_groups)
        return f"{self.name} ({self.type.value}, {groups})"

    model_config = {
        "frozen": True,  # Catalog data is immutable
        "json_schema_extra": {
            "examples": [
                {
                    "id": "glute-bridge-001",
                    "name": "Glute Bridge",
                    "muscle_groups": ["glutes", "lowerBack"],
                    "type": "reps",
                    "heaviness_score": {"glutes": 4, "lowerBack": 2},
                    "default_reps": 15,
                },
            ]
        },
    }
