"""
Unit tests for the workout session use cases: start, record sets, resume
position.
"""
import pytest

from application.exceptions import InvalidInputError, WorkoutNotFoundError, WorkoutStateError
from application.use_cases import (
    GetActiveWorkoutUseCase,
    RecordSetUseCase,
    StartWorkoutUseCase,
    UpdateWorkoutPositionUseCase,
    parse_set_value,
)
from domain.models import Reps, Timed, WorkoutPhase, WorkoutStatus
from tests.fakes import BASE_TIME, days_after_base, make_workout

pytestmark = pytest.mark.unit


def targets(workout, exercise_index=0):
    return [s.target.value for s in workout.exercises[exercise_index].sets]


# =============================================================================
# Value parsing
# =============================================================================


class TestParseSetValue:
    @pytest.mark.parametrize("raw,expected", [(12, 12), ("12", 12), (" 7 ", 7), (1, 1)])
    def test_accepts_positive_integers(self, raw, expected):
        assert parse_set_value(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "2.5", 0, -3, "-3", True, None, 4.0])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidInputError):
            parse_set_value(raw)


# =============================================================================
# Active workout and start
# =============================================================================


class TestGetActiveWorkout:
    def test_none_when_empty(self, workout_repo):
        assert GetActiveWorkoutUseCase(workout_repo).execute().workout is None

    def test_ignores_completed(self, workout_repo):
        workout_repo.seed([make_workout("w1", status=WorkoutStatus.COMPLETED)])
        assert GetActiveWorkoutUseCase(workout_repo).execute().workout is None

    def test_returns_active(self, workout_repo):
        workout_repo.seed(
            [
                make_workout("w1", status=WorkoutStatus.COMPLETED),
                make_workout("w2", status=WorkoutStatus.PENDING, generated_date=days_after_base(1)),
            ]
        )
        assert GetActiveWorkoutUseCase(workout_repo).execute().workout.id == "w2"


class TestStartWorkout:
    def test_pending_becomes_in_progress(self, workout_repo, clock):
        workout_repo.seed([make_workout(status=WorkoutStatus.PENDING)])
        clock.advance(minutes=3)

        result = StartWorkoutUseCase(workout_repo, clock=clock).execute()

        assert result.workout.status == WorkoutStatus.IN_PROGRESS
        assert result.workout.started_date == clock.now
        assert workout_repo.get("workout-1").status == WorkoutStatus.IN_PROGRESS

    def test_cannot_start_twice(self, workout_repo, clock):
        workout_repo.seed([make_workout(status=WorkoutStatus.IN_PROGRESS)])
        with pytest.raises(WorkoutStateError):
            StartWorkoutUseCase(workout_repo, clock=clock).execute()

    def test_cannot_start_completed(self, workout_repo, clock):
        workout_repo.seed([make_workout(status=WorkoutStatus.COMPLETED)])
        with pytest.raises(WorkoutStateError):
            StartWorkoutUseCase(workout_repo, clock=clock).execute(workout_id="workout-1")

    def test_no_active_workout(self, workout_repo, clock):
        with pytest.raises(WorkoutNotFoundError):
            StartWorkoutUseCase(workout_repo, clock=clock).execute()

    def test_unknown_id(self, workout_repo, clock):
        with pytest.raises(WorkoutNotFoundError):
            StartWorkoutUseCase(workout_repo, clock=clock).execute(workout_id="missing")


# =============================================================================
# Recording sets
# =============================================================================


class TestRecordSet:
    @pytest.fixture
    def use_case(self, workout_repo):
        workout_repo.seed([make_workout()])
        return RecordSetUseCase(workout_repo)

    def test_records_actual_value(self, use_case, workout_repo):
        result = use_case.execute(0, 0, 19)

        recorded = result.workout.exercises[0].sets[0]
        assert recorded.completed is True
        assert recorded.actual == Reps(value=19)
        assert workout_repo.get("workout-1").exercises[0].sets[0].actual == Reps(value=19)
        assert result.adjusted_set_numbers == []

    def test_timed_exercise_records_seconds(self, use_case):
        result = use_case.execute(1, 2, "35")
        assert result.workout.exercises[1].sets[2].actual == Timed(value=35)

    def test_underperformance_lowers_later_targets(self, use_case):
        result = use_case.execute(0, 0, 15)
        assert targets(result.workout) == [19, 15, 15]
        assert result.adjusted_set_numbers == [2, 3]

    def test_within_twenty_percent_keeps_targets(self, use_case):
        # 19 * 1.2 = 22.8
        result = use_case.execute(0, 0, 22)
        assert targets(result.workout) == [19, 19, 19]
        assert result.adjusted_set_numbers == []

    def test_overperformance_raises_later_targets(self, use_case):
        result = use_case.execute(0, 0, 23)
        assert targets(result.workout) == [19, 23, 23]
        assert result.adjusted_set_numbers == [2, 3]

    def test_completed_sets_are_not_adjusted(self, use_case):
        use_case.execute(0, 2, 19)
        result = use_case.execute(0, 0, 10)
        assert targets(result.workout) == [19, 10, 19]
        assert result.adjusted_set_numbers == [2]

    def test_earlier_sets_are_not_adjusted(self, use_case):
        result = use_case.execute(0, 1, 10)
        assert targets(result.workout) == [19, 19, 10]

    def test_other_exercises_are_not_adjusted(self, use_case):
        result = use_case.execute(0, 0, 5)
        assert targets(result.workout, 1) == [30, 30, 30]

    def test_rerecording_a_set_replaces_value(self, use_case):
        use_case.execute(0, 0, 19)
        result = use_case.execute(0, 0, 20)
        assert result.workout.exercises[0].sets[0].actual == Reps(value=20)

    @pytest.mark.parametrize("value", ["abc", 0, -3, ""])
    def test_invalid_value_changes_nothing(self, use_case, workout_repo, value):
        before = workout_repo.get("workout-1")
        with pytest.raises(InvalidInputError):
            use_case.execute(0, 0, value)
        assert workout_repo.get("workout-1") == before

    @pytest.mark.parametrize("exercise_index,set_index", [(2, 0), (0, 3), (-1, 0), (0, -1)])
    def test_unknown_position(self, use_case, exercise_index, set_index):
        with pytest.raises(InvalidInputError):
            use_case.execute(exercise_index, set_index, 10)

    def test_pending_workout_must_be_started(self, workout_repo):
        workout_repo.seed([make_workout(status=WorkoutStatus.PENDING)])
        with pytest.raises(WorkoutStateError):
            RecordSetUseCase(workout_repo).execute(0, 0, 10)

    def test_storage_failure_propagates(self, use_case, workout_repo):
        from application.exceptions import PersistenceError

        workout_repo.fail_writes = True
        with pytest.raises(PersistenceError):
            use_case.execute(0, 0, 10)
        assert workout_repo.get("workout-1").exercises[0].sets[0].completed is False


# =============================================================================
# Resume position
# =============================================================================


class TestUpdateWorkoutPosition:
    def test_stores_position(self, workout_repo):
        workout_repo.seed([make_workout()])
        result = UpdateWorkoutPositionUseCase(workout_repo).execute(1, 2, "rest")

        assert result.workout.current_exercise_index == 1
        assert result.workout.current_set_index == 2
        assert result.workout.current_phase == WorkoutPhase.REST
        stored = workout_repo.get("workout-1")
        assert (stored.current_exercise_index, stored.current_set_index) == (1, 2)

    def test_accepts_phase_enum(self, workout_repo):
        workout_repo.seed([make_workout()])
        result = UpdateWorkoutPositionUseCase(workout_repo).execute(0, 0, WorkoutPhase.EXERCISE_REST)
        assert result.workout.current_phase == WorkoutPhase.EXERCISE_REST

    def test_unknown_phase(self, workout_repo):
        workout_repo.seed([make_workout()])
        with pytest.raises(InvalidInputError):
            UpdateWorkoutPositionUseCase(workout_repo).execute(0, 0, "stretching")

    def test_unknown_position(self, workout_repo):
        workout_repo.seed([make_workout()])
        with pytest.raises(InvalidInputError):
            UpdateWorkoutPositionUseCase(workout_repo).execute(5, 0, "exercise")

    def test_leaves_status_and_dates_alone(self, workout_repo):
        workout_repo.seed([make_workout()])
        result = UpdateWorkoutPositionUseCase(workout_repo).execute(0, 1, "exercise")
        assert result.workout.status == WorkoutStatus.IN_PROGRESS
        assert result.workout.started_date == BASE_TIME
