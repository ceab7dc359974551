"""
User Profile Repository Interface (Port).

Single-record storage for the user profile. No versioning beyond
whole-record replace.
"""
from typing import Optional, Protocol

from domain.models import UserProfile


class ProfileRepository(Protocol):
    """Abstract interface for loading and saving the single user profile."""

    def load(self) -> Optional[UserProfile]:
        """
        Load the stored profile.

        Returns:
            UserProfile or None if no profile has been saved yet
        """
        ...

    def save(self, profile: UserProfile) -> UserProfile:
        """
        Replace the stored profile.

        Raises:
            PersistenceError: If the write fails (stored profile unchanged)
        """
        ...

    def clear(self) -> None:
        """Delete the stored profile."""
        ...
