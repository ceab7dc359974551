"""
JSON-file implementation of WorkoutRepository.

All workouts live in a single `workouts.json` document. Every mutating call
reads the document, applies the change in memory and writes the whole
document back atomically.
"""
import logging
import pathlib
from typing import Iterable, List, Optional, Union

from pydantic import TypeAdapter

from application.exceptions import PersistenceError
from domain.models import Workout, WorkoutStatus
from infrastructure.db.json_store import JsonFileStore

logger = logging.getLogger(__name__)

WORKOUTS_FILE = "workouts.json"

_WORKOUT_LIST = TypeAdapter(List[Workout])


class JsonWorkoutRepository:
    """
    JSON-file implementation of the WorkoutRepository protocol.

    Workouts are kept in generated_date order on disk.
    """

    def __init__(self, data_dir: Union[str, pathlib.Path]):
        """
        Args:
            data_dir: Directory holding workouts.json
        """
        self._store: JsonFileStore[List[Workout]] = JsonFileStore(
            pathlib.Path(data_dir) / WORKOUTS_FILE, _WORKOUT_LIST, default=list
        )

    def _read(self) -> List[Workout]:
        return self._store.read()

    def _write(self, workouts: List[Workout]) -> None:
        self._store.write(sorted(workouts, key=lambda w: w.generated_date))

    def get(self, workout_id: str) -> Optional[Workout]:
        return next((w for w in self._read() if w.id == workout_id), None)

    def add(self, workout: Workout) -> Workout:
        workouts = self._read()
        if any(w.id == workout.id for w in workouts):
            raise PersistenceError(f"Workout {workout.id} already exists")
        self._write([*workouts, workout])
        logger.debug("Added workout %s", workout.id)
        return workout

    def put(self, workout: Workout) -> Workout:
        others = [w for w in self._read() if w.id != workout.id]
        self._write([*others, workout])
        return workout

    def delete(self, workout_id: str) -> bool:
        workouts = self._read()
        remaining = [w for w in workouts if w.id != workout_id]
        if len(remaining) == len(workouts):
            return False
        self._write(remaining)
        return True

    def bulk_add(self, workouts: Iterable[Workout]) -> int:
        existing = self._read()
        new = list(workouts)
        ids = {w.id for w in existing}
        for workout in new:
            if workout.id in ids:
                raise PersistenceError(f"Workout {workout.id} already exists")
            ids.add(workout.id)
        self._write([*existing, *new])
        return len(new)

    def clear(self) -> None:
        self._store.delete()

    def get_all(self) -> List[Workout]:
        return sorted(self._read(), key=lambda w: w.generated_date)

    def list_by_status(self, statuses: Iterable[WorkoutStatus]) -> List[Workout]:
        wanted = set(statuses)
        matching = [w for w in self._read() if w.status in wanted]
        return sorted(matching, key=lambda w: w.generated_date, reverse=True)

    def list_recent(self, limit: int) -> List[Workout]:
        return sorted(self._read(), key=lambda w: w.generated_date, reverse=True)[:limit]

    def count(self) -> int:
        return len(self._read())
