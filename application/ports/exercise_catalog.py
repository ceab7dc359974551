"""
Exercise Catalog Interface (Port).

This module defines the read-only contract for exercise lookups. The catalog
is loaded once at startup from a static collection and never mutated.
"""
from random import Random
from typing import Iterable, List, Optional, Protocol

from domain.models import Exercise, MuscleGroup


class ExerciseCatalog(Protocol):
    """
    Abstract interface for exercise catalog access.

    Exercises are reference data used during workout generation, strength
    updates and manual workout entry.
    """

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        """
        Get an exercise by its ID.

        Args:
            exercise_id: Catalog identifier (e.g., "plank-001")

        Returns:
            Exercise if found, None otherwise
        """
        ...

    def get_by_muscle_group(self, muscle_group: MuscleGroup) -> List[Exercise]:
        """
        Get exercises targeting a muscle group (primary or not).

        Args:
            muscle_group: Muscle group to match

        Returns:
            Matching exercises in catalog order
        """
        ...

    def get_by_muscle_groups(self, muscle_groups: Iterable[MuscleGroup]) -> List[Exercise]:
        """
        Get exercises targeting any of the given muscle groups.

        Args:
            muscle_groups: Muscle groups to match

        Returns:
            Matching exercises in catalog order
        """
        ...

    def get_all(self) -> List[Exercise]:
        """Get every exercise in catalog order."""
        ...

    def get_random(
        self,
        muscle_group: MuscleGroup,
        exclude: Iterable[str] = (),
        rng: Optional[Random] = None,
    ) -> Optional[Exercise]:
        """
        Pick a random exercise for a muscle group.

        Args:
            muscle_group: Muscle group to match
            exclude: Exercise IDs that must not be returned
            rng: Random source (module-level random when omitted)

        Returns:
            A random matching exercise, or None if none remain
        """
        ...
