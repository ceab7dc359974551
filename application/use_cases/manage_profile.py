"""
Profile maintenance use cases: equipment and clearing all data.
"""

import logging
from dataclasses import dataclass

from application.ports import HistoryRepository, ProfileRepository, WorkoutRepository
from application.services.profile_service import ProfileService
from domain.models import UserProfile

logger = logging.getLogger(__name__)


@dataclass
class UpdateEquipmentResult:
    profile: UserProfile


class UpdateEquipmentUseCase:
    """
    Use case for toggling owned equipment.

    Only future workouts are affected; existing workouts keep their
    exercises.
    """

    def __init__(self, profile_service: ProfileService) -> None:
        self._profile_service = profile_service

    def execute(self, *, has_elastic_bands: bool) -> UpdateEquipmentResult:
        return UpdateEquipmentResult(
            profile=self._profile_service.set_elastic_bands(has_elastic_bands)
        )


@dataclass
class ClearAllDataResult:
    """Counts of what was removed."""

    workouts_deleted: int
    history_deleted: int
    profile_deleted: bool


class ClearAllDataUseCase:
    """
    Use case for wiping every stored record.

    Workouts, history and the profile are removed. The catalog is static and
    is not touched.
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        workout_repo: WorkoutRepository,
        history_repo: HistoryRepository,
    ) -> None:
        self._profile_repo = profile_repo
        self._workout_repo = workout_repo
        self._history_repo = history_repo

    def execute(self) -> ClearAllDataResult:
        workouts = self._workout_repo.count()
        history = len(self._history_repo.get_all())
        had_profile = self._profile_repo.load() is not None

        self._workout_repo.clear()
        self._history_repo.clear()
        self._profile_repo.clear()

        logger.info("Cleared %d workouts, %d history entries and the profile", workouts, history)
        return ClearAllDataResult(
            workouts_deleted=workouts,
            history_deleted=history,
            profile_deleted=had_profile,
        )
