"""
InitializeProfile Use Case.

Creates the single user profile on first use: zero strength, no
calibration, no equipment.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from application.ports import ProfileRepository
from domain.models import StrengthLevels, UserProfile
from domain.models.timestamps import utcnow

logger = logging.getLogger(__name__)


@dataclass
class InitializeProfileResult:
    """Result of the InitializeProfile use case execution."""

    profile: UserProfile
    created: bool


class InitializeProfileUseCase:
    """
    Use case for creating the user profile if it does not exist yet.

    Running it again is harmless: the existing profile is returned unchanged.

    Usage:
        >>> result = InitializeProfileUseCase(profile_repo).execute()
        >>> result.created
        True
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._profile_repo = profile_repo
        self._clock = clock

    def execute(
        self,
        *,
        weight_kg: Optional[float] = None,
        height_cm: Optional[float] = None,
    ) -> InitializeProfileResult:
        existing = self._profile_repo.load()
        if existing is not None:
            logger.debug("Profile %s already exists", existing.user_id)
            return InitializeProfileResult(profile=existing, created=False)

        now = self._clock()
        profile = UserProfile(
            user_id=f"user-{uuid.uuid4()}",
            created_date=now,
            strength_levels=StrengthLevels.zero(now),
            weight_kg=weight_kg,
            height_cm=height_cm,
        )
        self._profile_repo.save(profile)
        logger.info("Created profile %s", profile.user_id)
        return InitializeProfileResult(profile=profile, created=True)
