"""
Dependency providers for the adaptive trainer.

Builds the concrete catalog, repositories and services from Settings and
hands out use cases wired with them. Providers return interface types
(Protocols) so tests can substitute in-memory fakes.

Usage:
    from trainer.deps import Dependencies

    deps = Dependencies(get_settings())
    workout = deps.generate_workout().execute().workout

Testing:
    deps = Dependencies(
        settings,
        catalog=FakeExerciseCatalog(),
        profile_repo=FakeProfileRepository(),
        workout_repo=FakeWorkoutRepository(),
        history_repo=FakeHistoryRepository(),
    )
"""

import random
from datetime import datetime
from functools import cached_property
from typing import Callable, Optional

# Protocol types (interfaces)
from application.ports import (
    ExerciseCatalog,
    HistoryRepository,
    ProfileRepository,
    WorkoutRepository,
)
from application.services import ProfileService
from application.use_cases import (
    AddManualWorkoutUseCase,
    ClearAllDataUseCase,
    CompleteCalibrationUseCase,
    CompleteWorkoutUseCase,
    DeleteHistoryEntryUseCase,
    GenerateWorkoutUseCase,
    GetActiveWorkoutUseCase,
    InitializeProfileUseCase,
    ListHistoryUseCase,
    RecordSetUseCase,
    ResetCalibrationUseCase,
    StartWorkoutUseCase,
    UpdateEquipmentUseCase,
    UpdateHistoryEntryUseCase,
    UpdateWorkoutPositionUseCase,
)
from domain.models.timestamps import utcnow

# Concrete implementations
from infrastructure import JsonHistoryRepository, JsonProfileRepository, JsonWorkoutRepository
from trainer.core.catalog import StaticExerciseCatalog
from trainer.core.workout_generator import WorkoutGenerator
from trainer.settings import Settings


class Dependencies:
    """
    Lazily built object graph for one process.

    Anything passed to the constructor replaces the default implementation.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        catalog: Optional[ExerciseCatalog] = None,
        profile_repo: Optional[ProfileRepository] = None,
        workout_repo: Optional[WorkoutRepository] = None,
        history_repo: Optional[HistoryRepository] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.settings = settings
        self.clock = clock
        self._catalog = catalog
        self._profile_repo = profile_repo
        self._workout_repo = workout_repo
        self._history_repo = history_repo
        self._rng = rng

    # -------------------------------------------------------------------------
    # Catalog and repositories
    # -------------------------------------------------------------------------

    @cached_property
    def catalog(self) -> ExerciseCatalog:
        if self._catalog is not None:
            return self._catalog
        return StaticExerciseCatalog.from_yaml(self.settings.catalog_path)

    @cached_property
    def profile_repo(self) -> ProfileRepository:
        return self._profile_repo or JsonProfileRepository(self.settings.data_path)

    @cached_property
    def workout_repo(self) -> WorkoutRepository:
        return self._workout_repo or JsonWorkoutRepository(self.settings.data_path)

    @cached_property
    def history_repo(self) -> HistoryRepository:
        return self._history_repo or JsonHistoryRepository(self.settings.data_path)

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @cached_property
    def profile_service(self) -> ProfileService:
        return ProfileService(self.profile_repo, self.catalog, clock=self.clock)

    @cached_property
    def generator(self) -> WorkoutGenerator:
        rng = self._rng or random.Random(self.settings.random_seed)
        return WorkoutGenerator(
            self.catalog,
            rng=rng,
            extra_exercise_probability=self.settings.extra_exercise_probability,
        )

    # -------------------------------------------------------------------------
    # Use cases
    # -------------------------------------------------------------------------

    def initialize_profile(self) -> InitializeProfileUseCase:
        return InitializeProfileUseCase(self.profile_repo, clock=self.clock)

    def complete_calibration(self) -> CompleteCalibrationUseCase:
        return CompleteCalibrationUseCase(self.profile_service, self.catalog, clock=self.clock)

    def reset_calibration(self) -> ResetCalibrationUseCase:
        return ResetCalibrationUseCase(self.profile_service)

    def update_equipment(self) -> UpdateEquipmentUseCase:
        return UpdateEquipmentUseCase(self.profile_service)

    def clear_all_data(self) -> ClearAllDataUseCase:
        return ClearAllDataUseCase(self.profile_repo, self.workout_repo, self.history_repo)

    def generate_workout(self) -> GenerateWorkoutUseCase:
        return GenerateWorkoutUseCase(
            profile_service=self.profile_service,
            workout_repo=self.workout_repo,
            history_repo=self.history_repo,
            generator=self.generator,
            clock=self.clock,
        )

    def get_active_workout(self) -> GetActiveWorkoutUseCase:
        return GetActiveWorkoutUseCase(self.workout_repo)

    def start_workout(self) -> StartWorkoutUseCase:
        return StartWorkoutUseCase(self.workout_repo, clock=self.clock)

    def record_set(self) -> RecordSetUseCase:
        return RecordSetUseCase(self.workout_repo)

    def update_workout_position(self) -> UpdateWorkoutPositionUseCase:
        return UpdateWorkoutPositionUseCase(self.workout_repo)

    def complete_workout(self) -> CompleteWorkoutUseCase:
        return CompleteWorkoutUseCase(
            self.workout_repo,
            self.history_repo,
            self.profile_service,
            clock=self.clock,
        )

    def list_history(self) -> ListHistoryUseCase:
        return ListHistoryUseCase(self.history_repo, self.catalog, clock=self.clock)

    def add_manual_workout(self) -> AddManualWorkoutUseCase:
        return AddManualWorkoutUseCase(self.history_repo, self.catalog, self.profile_service)

    def update_history_entry(self) -> UpdateHistoryEntryUseCase:
        return UpdateHistoryEntryUseCase(self.history_repo, self.catalog, self.profile_service)

    def delete_history_entry(self) -> DeleteHistoryEntryUseCase:
        return DeleteHistoryEntryUseCase(self.history_repo)
