"""
Strength Model Calculator.

Turns calibration results into initial strength levels, and completed
workouts into incremental strength gains. Scores are per muscle group,
0-100.

Formulas (heaviness is the exercise's 1-10 rating for the muscle group):
- Calibration, reps:   achieved / heaviness * 10
- Calibration, timed:  achieved / heaviness / 6
- Workout gain, reps:  average / heaviness * 0.5
- Workout gain, timed: average / heaviness / 12
"""
import logging
from datetime import datetime
from typing import Dict, Iterable, Optional, Union

from application.ports.exercise_catalog import ExerciseCatalog
from domain.models import (
    ALL_MUSCLE_GROUPS,
    CalibrationData,
    CompletedExercise,
    ExerciseType,
    MuscleGroup,
    Reps,
    StrengthLevels,
    Timed,
    clamp_strength,
)
from trainer.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

CALIBRATION_REPS_FACTOR = 10
CALIBRATION_SECONDS_DIVISOR = 6
WORKOUT_REPS_FACTOR = 0.5
WORKOUT_SECONDS_DIVISOR = 12


def _value_for(value: Union[Reps, Timed], exercise_type: ExerciseType) -> int:
    """The value when its kind matches the exercise type, else 0."""
    if value.kind != exercise_type.value:
        return 0
    return value.value


def calculate_strength_from_calibration(
    calibration_data: CalibrationData,
    catalog: ExerciseCatalog,
    now: Optional[datetime] = None,
) -> StrengthLevels:
    """
    Compute initial strength levels from calibration results.

    Muscle groups without a calibration entry stay at 0. Entries referring
    to an exercise missing from the catalog are skipped.

    Args:
        calibration_data: One result per calibrated muscle group
        catalog: Exercise lookup for type and heaviness
        now: Timestamp for last_updated

    Returns:
        New StrengthLevels, each score clamped to 0-100
    """
    scores: Dict[MuscleGroup, int] = {group: 0 for group in ALL_MUSCLE_GROUPS}

    for entry in calibration_data.exercises:
        exercise = catalog.get_by_id(entry.exercise_id)
        if exercise is None:
            logger.warning(
                "Calibration exercise %s not in catalog, skipping %s",
                entry.exercise_id,
                entry.muscle_group.value,
            )
            continue
        heaviness = exercise.heaviness_for(entry.muscle_group)
        if not heaviness:
            logger.warning(
                "Exercise %s has no heaviness for %s, skipping",
                exercise.id,
                entry.muscle_group.value,
            )
            continue

        achieved = _value_for(entry.achieved, exercise.type)
        if exercise.type == ExerciseType.REPS:
            raw = achieved / heaviness * CALIBRATION_REPS_FACTOR
        else:
            raw = achieved / heaviness / CALIBRATION_SECONDS_DIVISOR
        scores[entry.muscle_group] = clamp_strength(round_half_up(raw))

    return StrengthLevels.zero(now).with_scores(scores, now)


def update_strength_levels_from_workout(
    current_levels: StrengthLevels,
    completed_exercises: Iterable[CompletedExercise],
    catalog: ExerciseCatalog,
    now: Optional[datetime] = None,
) -> StrengthLevels:
    """
    Apply the strength gain of one workout.

    Gains are cumulative: each exercise builds on the scores left by the
    previous one, and every call adds on top of `current_levels`. Callers
    must apply a given workout exactly once.

    Args:
        current_levels: Levels before the workout
        completed_exercises: Exercises with their completed sets
        catalog: Exercise lookup for type and heaviness
        now: Timestamp for last_updated

    Returns:
        New StrengthLevels, each score clamped to 0-100
    """
    scores = current_levels.as_dict()

    for completed in completed_exercises:
        if not completed.completed_sets:
            continue
        exercise = catalog.get_by_id(completed.exercise_id)
        if exercise is None:
            logger.warning("Exercise %s not in catalog, no strength gain applied", completed.exercise_id)
            continue

        average = completed.average_performance(exercise.type)

        for group in completed.muscle_groups:
            heaviness = exercise.heaviness_for(group)
            if not heaviness:
                continue
            if exercise.type == ExerciseType.REPS:
                increase = average / heaviness * WORKOUT_REPS_FACTOR
            else:
                increase = average / heaviness / WORKOUT_SECONDS_DIVISOR
            scores[group] = clamp_strength(round_half_up(scores[group] + increase))

    return current_levels.with_scores(scores, now)
