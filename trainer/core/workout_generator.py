"""
Workout Generator.

Builds a pending workout covering abs, glutes and lower back:

1. One exercise per muscle group, drawn at random from the first non-empty
   candidate tier (see CANDIDATE_TIERS), plus an optional fourth exercise.
2. Per exercise: a single-set target from the last performance (progressive
   overload) or from the strength-based capacity estimate, reduced to a
   sustainable per-set value.
3. A duration estimate with a 15% buffer.
"""
import logging
import random
import uuid
from datetime import datetime
from random import Random
from typing import Callable, Collection, Iterable, List, Optional, Sequence, Set, Tuple

from application.exceptions import EmptyCandidatePoolError
from application.ports.exercise_catalog import ExerciseCatalog
from domain.models import (
    ALL_MUSCLE_GROUPS,
    Equipment,
    Exercise,
    ExerciseType,
    MuscleGroup,
    StrengthLevels,
    Workout,
    WorkoutExercise,
    WorkoutHistoryEntry,
    WorkoutSet,
    WorkoutStatus,
    make_set_value,
)
from domain.models.timestamps import utcnow
from trainer.core.progression_calculator import calculate_progression, estimate_exercise_capacity
from trainer.utils.rounding import ceil_div, round_half_up

logger = logging.getLogger(__name__)

SUSTAINABLE_FACTOR = 0.75
STRONG_THRESHOLD = 50
SETS_WHEN_STRONG = 4
SETS_DEFAULT = 3

# Rest between sets: 30s plus up to 30s more for the heaviest exercises
BASE_REST_SECONDS = 30
MAX_EXTRA_REST_SECONDS = 30

# Duration estimate, all in seconds
EXERCISE_SETUP_SECONDS = 10
SET_SETUP_SECONDS = 5
SECONDS_PER_REP = 3
TRANSITION_SECONDS = 45
DURATION_BUFFER_PERCENT = 115

RECENT_WORKOUT_WINDOW = 2

# (exercise, recent ids, already chosen ids) -> keep?
CandidateFilter = Callable[[Exercise, Collection[str], Collection[str]], bool]

CANDIDATE_TIERS: Tuple[Tuple[str, CandidateFilter], ...] = (
    ("fresh", lambda e, recent, chosen: e.id not in recent and e.id not in chosen),
    ("not-chosen", lambda e, recent, chosen: e.id not in chosen),
    ("any", lambda e, recent, chosen: True),
)


def is_equipment_available(exercise: Exercise, has_elastic_bands: bool) -> bool:
    """True when the user owns what the exercise needs."""
    if exercise.equipment == Equipment.NONE:
        return True
    return exercise.equipment == Equipment.ELASTIC_BAND and has_elastic_bands


def select_candidate_pool(
    pool: Sequence[Exercise],
    recent_ids: Collection[str],
    chosen_ids: Collection[str],
) -> Tuple[str, List[Exercise]]:
    """
    Apply the relaxation tiers in order.

    Returns:
        (tier name, candidates) for the first tier with any candidates, or
        ("any", []) when the pool itself is empty
    """
    for name, keep in CANDIDATE_TIERS:
        candidates = [e for e in pool if keep(e, recent_ids, chosen_ids)]
        if candidates:
            return name, candidates
    return CANDIDATE_TIERS[-1][0], []


def find_last_performance(
    exercise_id: str,
    workout_history: Iterable[WorkoutHistoryEntry],
    exercise_type: Optional[ExerciseType] = None,
) -> Optional[float]:
    """
    Average performance from the most recent session of an exercise.

    Only history entries where the exercise has at least one completed set
    count. With `exercise_type`, values of the other kind count as 0.

    Returns:
        Average reps or seconds, or None if never completed
    """
    newest_first = sorted(workout_history, key=lambda h: h.completed_date, reverse=True)
    for entry in newest_first:
        completed = entry.find_exercise(exercise_id)
        if completed is not None and completed.completed_sets:
            return completed.average_performance(exercise_type)
    return None


def calculate_rest_time(heaviness_score: float) -> int:
    """Seconds of rest between sets, 30-60 depending on heaviness."""
    return round_half_up(BASE_REST_SECONDS + heaviness_score / 10 * MAX_EXTRA_REST_SECONDS)


def calculate_estimated_duration(exercises: Sequence[WorkoutExercise]) -> int:
    """
    Estimated workout length in whole minutes (rounded up).

    Per exercise: a setup, then each set with its own setup, work and rest,
    minus the rest after the last set. Exercises are separated by a
    transition and the total gets a 15% buffer.
    """
    if not exercises:
        return 0

    total_seconds = 0
    for exercise in exercises:
        exercise_seconds = EXERCISE_SETUP_SECONDS
        for workout_set in exercise.sets:
            if exercise.exercise_type == ExerciseType.REPS:
                work = workout_set.target.value * SECONDS_PER_REP
            else:
                work = workout_set.target.value
            exercise_seconds += SET_SETUP_SECONDS + work + exercise.rest_time
        if exercise.sets:
            exercise_seconds -= exercise.rest_time
        total_seconds += exercise_seconds
    total_seconds += TRANSITION_SECONDS * (len(exercises) - 1)

    return ceil_div(total_seconds * DURATION_BUFFER_PERCENT, 100 * 60)


def get_recent_exercise_ids(recent_workouts: Sequence[Workout]) -> List[str]:
    """
    Exercise IDs used by the last two workouts.

    Args:
        recent_workouts: Workouts in chronological order (oldest first)

    Returns:
        Sorted, de-duplicated exercise IDs
    """
    ids: Set[str] = set()
    for workout in list(recent_workouts)[-RECENT_WORKOUT_WINDOW:]:
        ids.update(workout.exercise_ids)
    return sorted(ids)


class WorkoutGenerator:
    """
    Generates adapted workouts from strength levels and history.

    Randomness comes from the injected `rng` so that generation can be made
    reproducible.

    Usage:
        >>> generator = WorkoutGenerator(catalog, rng=random.Random(7))
        >>> workout = generator.generate_workout(1, profile.strength_levels)
    """

    def __init__(
        self,
        catalog: ExerciseCatalog,
        rng: Optional[Random] = None,
        extra_exercise_probability: float = 0.5,
    ):
        self._catalog = catalog
        self._rng = rng or random.Random()
        self._extra_exercise_probability = extra_exercise_probability

    def generate_workout(
        self,
        workout_number: int,
        strength_levels: StrengthLevels,
        recent_exercise_ids: Iterable[str] = (),
        workout_history: Iterable[WorkoutHistoryEntry] = (),
        has_elastic_bands: bool = False,
        now: Optional[datetime] = None,
    ) -> Workout:
        """
        Generate a new pending workout.

        Args:
            workout_number: Sequence number for the new workout
            strength_levels: Current strength per muscle group
            recent_exercise_ids: Exercises to avoid for variety
            workout_history: Completed workouts used for progression
            has_elastic_bands: Whether elastic-band exercises are allowed
            now: Generation timestamp

        Returns:
            Workout with status pending

        Raises:
            EmptyCandidatePoolError: If a muscle group has no eligible exercise
        """
        recent = set(recent_exercise_ids)
        history = list(workout_history)

        selected = self._select_exercises(recent, has_elastic_bands)
        exercises = [self._build_exercise(e, strength_levels, history) for e in selected]

        workout = Workout(
            id=f"workout-{uuid.uuid4()}",
            workout_number=workout_number,
            generated_date=now or utcnow(),
            status=WorkoutStatus.PENDING,
            estimated_duration=calculate_estimated_duration(exercises),
            exercises=exercises,
        )
        logger.info(
            "Generated workout #%d with %d exercises (~%d min)",
            workout.workout_number,
            len(workout.exercises),
            workout.estimated_duration,
        )
        return workout

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def _eligible_pool(self, muscle_group: MuscleGroup, has_elastic_bands: bool) -> List[Exercise]:
        return [
            e
            for e in self._catalog.get_by_muscle_group(muscle_group)
            if is_equipment_available(e, has_elastic_bands)
        ]

    def _select_exercises(self, recent: Set[str], has_elastic_bands: bool) -> List[Exercise]:
        selected: List[Exercise] = []
        chosen: Set[str] = set()

        for group in ALL_MUSCLE_GROUPS:
            pool = self._eligible_pool(group, has_elastic_bands)
            if not pool:
                raise EmptyCandidatePoolError(group.value)
            tier, candidates = select_candidate_pool(pool, recent, chosen)
            if tier != CANDIDATE_TIERS[0][0]:
                logger.debug("Relaxed selection for %s to tier '%s'", group.value, tier)
            exercise = self._rng.choice(candidates)
            selected.append(exercise)
            chosen.add(exercise.id)

        if len(selected) == len(ALL_MUSCLE_GROUPS) and self._rng.random() < self._extra_exercise_probability:
            group = self._rng.choice(ALL_MUSCLE_GROUPS)
            extras = [
                e
                for e in self._eligible_pool(group, has_elastic_bands)
                if e.id not in chosen and e.id not in recent
            ]
            if extras:
                selected.append(self._rng.choice(extras))

        return selected

    # -------------------------------------------------------------------------
    # Targets
    # -------------------------------------------------------------------------

    def _build_exercise(
        self,
        exercise: Exercise,
        strength_levels: StrengthLevels,
        history: List[WorkoutHistoryEntry],
    ) -> WorkoutExercise:
        primary = exercise.primary_muscle_group
        strength = strength_levels.for_group(primary)
        heaviness = exercise.heaviness_for(primary)

        last_performance = find_last_performance(exercise.id, history, exercise.type)
        if last_performance is not None:
            target = calculate_progression(last_performance, exercise.type)
        else:
            target = estimate_exercise_capacity(strength, heaviness, exercise.type)

        num_sets = SETS_WHEN_STRONG if strength > STRONG_THRESHOLD else SETS_DEFAULT
        sustainable = max(1, round_half_up(target * SUSTAINABLE_FACTOR))

        return WorkoutExercise(
            exercise_id=exercise.id,
            exercise_name=exercise.name,
            muscle_groups=list(exercise.muscle_groups),
            exercise_type=exercise.type,
            sets=[
                WorkoutSet(set_number=n, target=make_set_value(exercise.type, sustainable))
                for n in range(1, num_sets + 1)
            ],
            rest_time=calculate_rest_time(heaviness),
            base_target=target,
        )
