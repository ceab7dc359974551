"""
Static exercise catalog.

The catalog is a YAML list of exercises shipped with the package
(`trainer/data/exercises.yaml`). It is loaded once and never mutated.
"""
import logging
import pathlib
import random
from random import Random
from typing import Dict, Iterable, List, Optional, Union

import yaml
from pydantic import ValidationError

from application.exceptions import CatalogError
from domain.models import Exercise, MuscleGroup

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = pathlib.Path(__file__).resolve().parents[1] / "data" / "exercises.yaml"


def load_exercises(path: Optional[Union[str, pathlib.Path]] = None) -> List[Exercise]:
    """
    Read and validate exercises from a YAML file.

    Args:
        path: Catalog file (bundled catalog when omitted)

    Returns:
        Exercises in file order

    Raises:
        CatalogError: If the file cannot be read, is not a list, holds an
            invalid entry or repeats an ID
    """
    path = pathlib.Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or []
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Could not load exercise catalog {path}: {e}") from e
    if not isinstance(raw, list):
        raise CatalogError(f"Exercise catalog {path} must be a list of exercises")

    exercises: List[Exercise] = []
    seen = set()
    for index, item in enumerate(raw):
        try:
            exercise = Exercise.model_validate(item)
        except ValidationError as e:
            raise CatalogError(f"Invalid exercise at position {index} in {path}: {e}") from e
        if exercise.id in seen:
            raise CatalogError(f"Duplicate exercise id '{exercise.id}' in {path}")
        seen.add(exercise.id)
        exercises.append(exercise)

    logger.debug("Loaded %d exercises from %s", len(exercises), path)
    return exercises


class StaticExerciseCatalog:
    """
    In-memory catalog over a fixed list of exercises.

    Implements the ExerciseCatalog port.
    """

    def __init__(self, exercises: Iterable[Exercise]):
        self._exercises: List[Exercise] = list(exercises)
        self._by_id: Dict[str, Exercise] = {e.id: e for e in self._exercises}

    @classmethod
    def from_yaml(cls, path: Optional[Union[str, pathlib.Path]] = None) -> "StaticExerciseCatalog":
        return cls(load_exercises(path))

    def get_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return self._by_id.get(exercise_id)

    def get_by_muscle_group(self, muscle_group: MuscleGroup) -> List[Exercise]:
        return [e for e in self._exercises if e.targets(muscle_group)]

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
        if not candidates:
            return None
        return (rng or random).choice(candidates)

    def __len__(self) -> int:
        return len(self._exercises)
