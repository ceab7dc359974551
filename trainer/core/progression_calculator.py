"""
Capacity estimation and progressive overload.

Targets are always whole reps or whole seconds. Timed targets are kept on a
5-second grid.
"""
import math

from domain.models import ExerciseType
from trainer.utils.rounding import ceil_to_multiple_of_5, round_half_up, round_to_nearest_5

MIN_REPS = 5
MIN_DURATION_SECONDS = 10

# Seconds of hold per strength/heaviness unit
SECONDS_PER_UNIT = 6

PROGRESSION_RATE = 1.075
MIN_REPS_INCREASE = 1
MIN_DURATION_INCREASE = 5


def estimate_exercise_capacity(
    strength_level: float,
    heaviness_score: float,
    exercise_type: ExerciseType,
) -> int:
    """
    Estimate a first-time single-set target.

    Used when the user has never completed the exercise.

    Args:
        strength_level: Strength score (0-100) of the primary muscle group
        heaviness_score: Exercise heaviness (1-10) for that muscle group
        exercise_type: reps or timed

    Returns:
        Reps (at least 5) or seconds (at least 10, multiple of 5)

    Examples:
        >>> estimate_exercise_capacity(50, 5, ExerciseType.REPS)
        25
        >>> estimate_exercise_capacity(0, 5, ExerciseType.TIMED)
        10
    """
    units = strength_level / 10 * heaviness_score
    if exercise_type == ExerciseType.REPS:
        return max(MIN_REPS, round_half_up(units))
    return max(MIN_DURATION_SECONDS, round_to_nearest_5(units * SECONDS_PER_UNIT))


def calculate_progression(last_performance: float, exercise_type: ExerciseType) -> int:
    """
    Next single-set target from the last recorded performance.

    Applies a 7.5% increase with a floor of +1 rep or +5 seconds.

    Args:
        last_performance: Average reps or seconds of the last session
        exercise_type: reps or timed

    Returns:
        Next target; reps are at least `last + 1`, durations are a multiple
        of 5 and at least `last + 5`

    Examples:
        >>> calculate_progression(20, ExerciseType.REPS)
        22
        >>> calculate_progression(10, ExerciseType.REPS)
        11
        >>> calculate_progression(30, ExerciseType.TIMED)
        35
    """
    increased = last_performance * PROGRESSION_RATE
    if exercise_type == ExerciseType.REPS:
        return max(int(math.ceil(last_performance + MIN_REPS_INCREASE)), round_half_up(increased))
    return max(
        round_to_nearest_5(increased),
        ceil_to_multiple_of_5(last_performance + MIN_DURATION_INCREASE),
    )
