"""
Fake ExerciseCatalog for testing.

This module provides an in-memory fake implementation of ExerciseCatalog
with a small, fixed default catalog so tests do not depend on the bundled
YAML file.
"""
import random
from random import Random
from typing import Iterable, List, Optional

from domain.models import Equipment, Exercise, ExerciseType, MuscleGroup

ABS = MuscleGroup.ABS
GLUTES = MuscleGroup.GLUTES
LOWER_BACK = MuscleGroup.LOWER_BACK


def make_exercise(
    exercise_id: str,
    muscle_groups: List[MuscleGroup],
    heaviness: List[int],
    exercise_type: ExerciseType = ExerciseType.REPS,
    equipment: Equipment = Equipment.NONE,
    name: Optional[str] = None,
) -> Exercise:
    """Build an exercise with heaviness listed in muscle-group order."""
    return Exercise(
        id=exercise_id,
        name=name or exercise_id.rsplit("-", 1)[0].replace("-", " ").title(),
        muscle_groups=muscle_groups,
        type=exercise_type,
        heaviness_score=dict(zip(muscle_groups, heaviness)),
        equipment=equipment,
    )


def default_exercises() -> List[Exercise]:
    """Three exercises per muscle group, one of each needing an elastic band."""
    return [
        # Abs
        make_exercise("plank-001", [ABS, LOWER_BACK], [5, 2], ExerciseType.TIMED),
        make_exercise("crunch-001", [ABS], [5]),
        make_exercise("banded-crunch-001", [ABS], [4], equipment=Equipment.ELASTIC_BAND),
        # Glutes
        make_exercise("glute-bridge-001", [GLUTES, LOWER_BACK], [5, 2]),
        make_exercise("squat-001", [GLUTES], [4]),
        make_exercise("banded-clamshell-001", [GLUTES], [4], equipment=Equipment.ELASTIC_BAND),
        # Lower back
        make_exercise("bird-dog-001", [LOWER_BACK, ABS, GLUTES], [3, 2, 2]),
        make_exercise("superman-001", [LOWER_BACK], [5]),
        make_exercise(
            "banded-good-morning-001", [LOWER_BACK, GLUTES], [5, 4], equipment=Equipment.ELASTIC_BAND
        ),
    ]


class FakeExerciseCatalog:
    """
    In-memory fake implementation of ExerciseCatalog for testing.

    Pre-populated with default_exercises() unless a list is given.

    Usage:
        catalog = FakeExerciseCatalog()
        catalog.seed([make_exercise("wall-sit-001", [GLUTES], [5], ExerciseType.TIMED)])
    """

    def __init__(self, exercises: Optional[List[Exercise]] = None):
        """
        Args:
            exercises: Custom exercise list, or None for default test data
        """
        self._exercises: List[Exercise] = []
        if exercises is None:
            self.seed_default_exercises()
        else:
            self.seed(exercises)

    def reset(self) -> None:
        """Remove every exercise."""
        self._exercises.clear()

    def seed(self, exercises: Iterable[Exercise]) -> None:
        """Add exercises, replacing any with the same ID."""
        for exercise in exercises:
            self._exercises = [e for e in self._exercises if e.id != exercise.id]
            self._exercises.append(exercise)

    def seed_default_exercises(self) -> None:
        self.seed(default_exercises())

    def remove(self, exercise_id: str) -> None:
        """Drop an exercise, as if it was removed from the catalog."""
        self._exercises = [e for e in self._exercises if e.id != exercise_id]

    # =========================================================================
    # ExerciseCatalog Protocol Methods
    # =========================================================================

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return next((e for e in self._exercises if e.id == exercise_id), None)

    def get_by_muscle_group(self, muscle_group: MuscleGroup) -> List[Exercise]:
        return [e for e in self._exercises if muscle_group in e.muscle_groups]

    def get_by_muscle_groups(self, muscle_groups: Iterable[MuscleGroup]) -> List[Exercise]:
        wanted = set(muscle_groups)
        return [e for e in self._exercises if wanted.intersection(e.muscle_groups)]

    def get_all(self) -> List[Exercise]:
        return list(self._exercises)

    def get_random(
        self,
        muscle_group: MuscleGroup,
        exclude: Iterable[str] = (),
        rng: Optional[Random] = None,
    ) -> Optional[Exercise]:
        excluded = set(exclude)
        candidates = [e for e in self.get_by_muscle_group(muscle_group) if e.id not in excluded]
        return (rng or random).choice(candidates) if candidates else None
