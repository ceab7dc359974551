"""
JSON file storage shared by the local repositories.

Each table is one JSON document. Reads validate the whole document through a
pydantic TypeAdapter; writes go to a temporary file in the same directory
and are moved into place with os.replace, so a failed write never leaves a
partial file behind.
"""
import json
import logging
import os
import pathlib
import tempfile
from typing import Any, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from application.exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonFileStore(Generic[T]):
    """
    One JSON document on disk, typed by a pydantic TypeAdapter.

    Usage:
        >>> store = JsonFileStore(path, TypeAdapter(List[Workout]), default=list)
        >>> workouts = store.read()
        >>> store.write(workouts + [workout])
    """

    def __init__(
        self,
        path: Union[str, pathlib.Path],
        adapter: TypeAdapter,
        default: Any = None,
    ):
        """
        Args:
            path: JSON file location (created on first write)
            adapter: Validates and serializes the document
            default: Callable producing the value returned while no file exists
        """
        self.path = pathlib.Path(path)
        self._adapter = adapter
        self._default = default

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> T:
        """
        Load and validate the document.

        Raises:
            PersistenceError: If the file cannot be read or does not validate
        """
        if not self.path.exists():
            return self._default() if callable(self._default) else self._default
        try:
            return self._adapter.validate_json(self.path.read_bytes())
        except (OSError, ValidationError, ValueError) as e:
            logger.exception("Failed to read %s", self.path)
            raise PersistenceError(f"Could not read {self.path.name}: {e}") from e

    def write(self, value: T) -> None:
        """
        Atomically replace the document.

        Raises:
            PersistenceError: If serialization or the write fails. The
                previous file is left untouched.
        """
        tmp_name = None
        try:
            payload = self._adapter.dump_python(value, mode="json")
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Failed to write %s", self.path)
            raise PersistenceError(f"Could not write {self.path.name}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def delete(self) -> None:
        """Remove the file if present."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.exception("Failed to delete %s", self.path)
            raise PersistenceError(f"Could not delete {self.path.name}: {e}") from e
