"""
JSON-file implementation of ProfileRepository.

The single user profile is stored in `profile.json`.
"""
import logging
import pathlib
from typing import Optional, Union

from pydantic import TypeAdapter

from domain.models import UserProfile
from infrastructure.db.json_store import JsonFileStore

logger = logging.getLogger(__name__)

PROFILE_FILE = "profile.json"


class JsonProfileRepository:
    """JSON-file implementation of the ProfileRepository protocol."""

    def __init__(self, data_dir: Union[str, pathlib.Path]):
        self._store: JsonFileStore[Optional[UserProfile]] = JsonFileStore(
            pathlib.Path(data_dir) / PROFILE_FILE, TypeAdapter(UserProfile), default=None
        )

    def load(self) -> Optional[UserProfile]:
        return self._store.read()

    def save(self, profile: UserProfile) -> UserProfile:
        self._store.write(profile)
        logger.debug("Saved profile %s", profile.user_id)
        return profile

    def clear(self) -> None:
        self._store.delete()
