"""
Application Use Cases for the adaptive trainer.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses holding domain models
- Expected failures are raised as TrainerError subclasses

Usage:
    from application.use_cases import GenerateWorkoutUseCase, RecordSetUseCase

    generate = GenerateWorkoutUseCase(
        profile_service=profile_service,
        workout_repo=workout_repo,
        history_repo=history_repo,
        generator=WorkoutGenerator(catalog),
    )
    workout = generate.execute().workout

    record = RecordSetUseCase(workout_repo=workout_repo)
    record.execute(exercise_index=0, set_index=0, value=15)
"""

from application.use_cases.calibration import (
    CALIBRATION_EXERCISES,
    CalibrationResult,
    CompleteCalibrationUseCase,
    ResetCalibrationUseCase,
)
from application.use_cases.complete_workout import CompleteWorkoutResult, CompleteWorkoutUseCase
from application.use_cases.generate_workout import GenerateWorkoutResult, GenerateWorkoutUseCase
from application.use_cases.initialize_profile import (
    InitializeProfileResult,
    InitializeProfileUseCase,
)
from application.use_cases.manage_history import (
    AddManualWorkoutUseCase,
    DeleteHistoryEntryResult,
    DeleteHistoryEntryUseCase,
    HistoryChangeResult,
    ListHistoryResult,
    ListHistoryUseCase,
    ManualExercise,
    UpdateHistoryEntryUseCase,
)
from application.use_cases.manage_profile import (
    ClearAllDataResult,
    ClearAllDataUseCase,
    UpdateEquipmentResult,
    UpdateEquipmentUseCase,
)
from application.use_cases.workout_session import (
    GetActiveWorkoutResult,
    GetActiveWorkoutUseCase,
    RecordSetResult,
    RecordSetUseCase,
    StartWorkoutResult,
    StartWorkoutUseCase,
    UpdateWorkoutPositionResult,
    UpdateWorkoutPositionUseCase,
    parse_set_value,
)

__all__ = [
    # Profile
    "InitializeProfileUseCase",
    "InitializeProfileResult",
    "UpdateEquipmentUseCase",
    "UpdateEquipmentResult",
    "ClearAllDataUseCase",
    "ClearAllDataResult",
    # Calibration
    "CompleteCalibrationUseCase",
    "ResetCalibrationUseCase",
    "CalibrationResult",
    "CALIBRATION_EXERCISES",
    # Workout session
    "GenerateWorkoutUseCase",
    "GenerateWorkoutResult",
    "GetActiveWorkoutUseCase",
    "GetActiveWorkoutResult",
    "StartWorkoutUseCase",
    "StartWorkoutResult",
    "RecordSetUseCase",
    "RecordSetResult",
    "UpdateWorkoutPositionUseCase",
    "UpdateWorkoutPositionResult",
    "CompleteWorkoutUseCase",
    "CompleteWorkoutResult",
    "parse_set_value",
    # History
    "ListHistoryUseCase",
    "ListHistoryResult",
    "AddManualWorkoutUseCase",
    "UpdateHistoryEntryUseCase",
    "DeleteHistoryEntryUseCase",
    "DeleteHistoryEntryResult",
    "HistoryChangeResult",
    "ManualExercise",
]
