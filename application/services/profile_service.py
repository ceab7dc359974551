"""
Profile Service.

Owns every write to the user profile. In particular, `apply_performance` is
the only path through which completed, edited or manually added workouts
change strength levels, so all callers share one ordering and one
persistence step.
"""
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional

from application.exceptions import CalibrationRequiredError, ProfileNotFoundError
from application.ports import ExerciseCatalog, ProfileRepository
from domain.models import CalibrationData, CompletedExercise, StrengthLevels, UserProfile
from domain.models.timestamps import utcnow
from trainer.core.strength_model import (
    calculate_strength_from_calibration,
    update_strength_levels_from_workout,
)

logger = logging.getLogger(__name__)


class ProfileService:
    """
    Load, check and update the single user profile.

    Usage:
        >>> service = ProfileService(profile_repo, catalog)
        >>> profile = service.require_calibrated()
        >>> profile = service.apply_performance(entry.exercises)
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        catalog: ExerciseCatalog,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._profile_repo = profile_repo
        self._catalog = catalog
        self._clock = clock

    def get_profile(self) -> UserProfile:
        """
        Raises:
            ProfileNotFoundError: If no profile has been created
        """
        profile = self._profile_repo.load()
        if profile is None:
            raise ProfileNotFoundError("No user profile found. Run 'init' first.")
        return profile

    def require_calibrated(self) -> UserProfile:
        """
        Get the profile, insisting that calibration was completed.

        Raises:
            ProfileNotFoundError: If no profile has been created
            CalibrationRequiredError: If calibration is still pending
        """
        profile = self.get_profile()
        if not profile.calibration_completed:
            raise CalibrationRequiredError("Calibration is required before generating workouts.")
        return profile

    def apply_calibration(
        self,
        calibration_data: CalibrationData,
        now: Optional[datetime] = None,
    ) -> UserProfile:
        """Store calibration results and replace strength levels with the calibrated ones."""
        profile = self.get_profile()
        now = now or self._clock()
        levels = calculate_strength_from_calibration(calibration_data, self._catalog, now=now)
        updated = profile.model_copy(
            update={
                "calibration_completed": True,
                "calibration_data": calibration_data,
                "strength_levels": levels,
            }
        )
        self._profile_repo.save(updated)
        logger.info(
            "Calibration complete: abs=%d glutes=%d lowerBack=%d",
            levels.abs,
            levels.glutes,
            levels.lower_back,
        )
        return updated

    def reset_calibration(self, now: Optional[datetime] = None) -> UserProfile:
        """Forget calibration results and zero all strength levels."""
        profile = self.get_profile()
        updated = profile.model_copy(
            update={
                "calibration_completed": False,
                "calibration_data": None,
                "strength_levels": StrengthLevels.zero(now or self._clock()),
            }
        )
        self._profile_repo.save(updated)
        logger.info("Calibration reset for user %s", profile.user_id)
        return updated

    def set_elastic_bands(self, has_elastic_bands: bool) -> UserProfile:
        profile = self.get_profile()
        equipment = profile.equipment.model_copy(update={"has_elastic_bands": has_elastic_bands})
        updated = profile.model_copy(update={"equipment": equipment})
        self._profile_repo.save(updated)
        logger.info("Elastic bands %s", "enabled" if has_elastic_bands else "disabled")
        return updated

    def apply_performance(
        self,
        completed_exercises: Iterable[CompletedExercise],
        now: Optional[datetime] = None,
    ) -> UserProfile:
        """
        Add the strength gain of one workout to the stored levels.

        Not idempotent: every call adds on top of the current levels.

        Args:
            completed_exercises: Exercises with only their completed sets
            now: Timestamp for last_updated

        Returns:
            The saved profile
        """
        profile = self.get_profile()
        before = profile.strength_levels
        after = update_strength_levels_from_workout(
            before,
            completed_exercises,
            self._catalog,
            now=now or self._clock(),
        )
        updated = profile.with_strength_levels(after)
        self._profile_repo.save(updated)
        logger.info(
            "Strength updated: abs %d->%d, glutes %d->%d, lowerBack %d->%d",
            before.abs,
            after.abs,
            before.glutes,
            after.glutes,
            before.lower_back,
            after.lower_back,
        )
        return updated
