"""
Unit tests for generating and completing workouts through the use cases.

Covers the generate -> start -> record -> complete loop, including how one
workout's results feed the next workout's targets.
"""
import random
from datetime import timedelta

import pytest

from application.exceptions import (
    CalibrationRequiredError,
    EmptyCandidatePoolError,
    PersistenceError,
    ProfileNotFoundError,
    WorkoutNotFoundError,
    WorkoutStateError,
)
from application.services import ProfileService
from application.use_cases import (
    CompleteWorkoutUseCase,
    GenerateWorkoutUseCase,
    RecordSetUseCase,
    StartWorkoutUseCase,
)
from domain.models import MuscleGroup, WorkoutStatus
from tests.fakes import (
    BASE_TIME,
    FakeExerciseCatalog,
    FakeProfileRepository,
    create_profile,
    days_after_base,
    make_exercise,
    make_workout,
)
from trainer.core.workout_generator import WorkoutGenerator

pytestmark = pytest.mark.unit


@pytest.fixture
def generate(profile_service, workout_repo, history_repo, generator, clock):
    return GenerateWorkoutUseCase(
        profile_service=profile_service,
        workout_repo=workout_repo,
        history_repo=history_repo,
        generator=generator,
        clock=clock,
    )


@pytest.fixture
def complete(workout_repo, history_repo, profile_service, clock):
    return CompleteWorkoutUseCase(workout_repo, history_repo, profile_service, clock=clock)


# =============================================================================
# Generate
# =============================================================================


class TestGenerateWorkout:
    def test_stores_pending_workout(self, generate, workout_repo, clock):
        result = generate.execute()

        assert result.workout.status == WorkoutStatus.PENDING
        assert result.workout.workout_number == 1
        assert result.workout.generated_date == clock.now
        assert workout_repo.get(result.workout.id) == result.workout

    def test_requires_profile(self, workout_repo, history_repo, catalog, generator, clock):
        service = ProfileService(FakeProfileRepository(), catalog, clock=clock)
        use_case = GenerateWorkoutUseCase(service, workout_repo, history_repo, generator, clock=clock)
        with pytest.raises(ProfileNotFoundError):
            use_case.execute()

    def test_requires_calibration(self, workout_repo, history_repo, catalog, generator, clock):
        service = ProfileService(FakeProfileRepository(create_profile(calibrated=False)), catalog, clock=clock)
        use_case = GenerateWorkoutUseCase(service, workout_repo, history_repo, generator, clock=clock)
        with pytest.raises(CalibrationRequiredError):
            use_case.execute()
        assert workout_repo.count() == 0

    def test_refuses_while_a_workout_is_active(self, generate, workout_repo):
        workout_repo.seed([make_workout(status=WorkoutStatus.PENDING)])
        with pytest.raises(WorkoutStateError):
            generate.execute()
        assert workout_repo.count() == 1

    def test_number_follows_stored_workouts(self, generate, workout_repo):
        workout_repo.seed(
            [
                make_workout("w1", status=WorkoutStatus.COMPLETED, generated_date=days_after_base(-2)),
                make_workout("w2", status=WorkoutStatus.COMPLETED, generated_date=days_after_base(-1)),
            ]
        )
        assert generate.execute().workout.workout_number == 3

    def test_avoids_exercises_of_recent_workouts(self, generate, workout_repo):
        # Both recent workouts used crunch and plank
        workout_repo.seed(
            [
                make_workout("w1", status=WorkoutStatus.COMPLETED, generated_date=days_after_base(-2)),
                make_workout("w2", status=WorkoutStatus.COMPLETED, generated_date=days_after_base(-1)),
            ]
        )
        result = generate.execute()
        assert result.recent_exercise_ids == ["crunch-001", "plank-001"]
        assert result.workout.exercises[0].exercise_id == "bird-dog-001"

    def test_empty_pool_stores_nothing(self, calibrated_profile_repo, workout_repo, history_repo, clock):
        catalog = FakeExerciseCatalog([make_exercise("crunch-001", [MuscleGroup.ABS], [5])])
        service = ProfileService(calibrated_profile_repo, catalog, clock=clock)
        use_case = GenerateWorkoutUseCase(
            service, workout_repo, history_repo, WorkoutGenerator(catalog), clock=clock
        )
        with pytest.raises(EmptyCandidatePoolError):
            use_case.execute()
        assert workout_repo.count() == 0


# =============================================================================
# Complete
# =============================================================================


class TestCompleteWorkout:
    def test_completes_and_records_history(self, complete, workout_repo, history_repo, clock):
        workout_repo.seed([make_workout()])
        record = RecordSetUseCase(workout_repo)
        record.execute(0, 0, 20)
        record.execute(0, 1, 20)
        record.execute(1, 0, 60)
        clock.advance(minutes=30)

        result = complete.execute()

        assert result.workout.status == WorkoutStatus.COMPLETED
        assert result.workout.completed_date == clock.now
        assert result.workout.total_duration == 30
        assert workout_repo.get("workout-1").status == WorkoutStatus.COMPLETED

        entries = history_repo.get_all()
        assert entries == [result.history_entry]
        crunch, plank = result.history_entry.exercises
        assert [s.actual.value for s in crunch.completed_sets] == [20, 20]
        assert [s.actual.value for s in plank.completed_sets] == [60]
        assert result.history_entry.total_duration == 30
        assert result.summary.total_sets == 3
        assert result.summary.total_reps == 40
        assert result.summary.total_seconds == 60

    def test_applies_strength_update_once(self, complete, workout_repo, calibrated_profile_repo):
        workout_repo.seed([make_workout()])
        RecordSetUseCase(workout_repo).execute(0, 0, 20)
        saves_before = calibrated_profile_repo.save_count

        result = complete.execute()

        # crunch average 20 on heaviness 5: +2 abs
        assert result.profile.strength_levels.abs == 52
        assert result.profile.strength_levels.glutes == 50
        assert calibrated_profile_repo.load().strength_levels.abs == 52
        assert calibrated_profile_repo.save_count == saves_before + 1

    def test_nothing_recorded_changes_no_strength(self, complete, workout_repo):
        workout_repo.seed([make_workout()])
        result = complete.execute()
        assert result.summary.total_sets == 0
        assert result.profile.strength_levels.abs == 50

    def test_pending_workout_cannot_be_completed(self, complete, workout_repo, history_repo):
        workout_repo.seed([make_workout(status=WorkoutStatus.PENDING)])
        with pytest.raises(WorkoutStateError):
            complete.execute()
        assert history_repo.get_all() == []

    def test_completed_workout_cannot_be_completed_again(self, complete, workout_repo):
        workout_repo.seed([make_workout(status=WorkoutStatus.COMPLETED)])
        with pytest.raises(WorkoutStateError):
            complete.execute(workout_id="workout-1")

    def test_no_active_workout(self, complete):
        with pytest.raises(WorkoutNotFoundError):
            complete.execute()

    def test_storage_failure_propagates(self, complete, workout_repo, history_repo):
        workout_repo.seed([make_workout()])
        workout_repo.fail_writes = True
        with pytest.raises(PersistenceError):
            complete.execute()
        assert history_repo.get_all() == []

    def test_history_write_failure_keeps_workout_in_progress(
        self, complete, workout_repo, history_repo, calibrated_profile_repo
    ):
        workout_repo.seed([make_workout()])
        RecordSetUseCase(workout_repo).execute(0, 0, 20)
        history_repo.fail_writes = True

        with pytest.raises(PersistenceError):
            complete.execute()

        assert workout_repo.get("workout-1").status == WorkoutStatus.IN_PROGRESS
        assert history_repo.get_all() == []
        assert calibrated_profile_repo.load().strength_levels.abs == 50

        history_repo.fail_writes = False
        result = complete.execute()
        assert result.workout.status == WorkoutStatus.COMPLETED
        assert len(history_repo.get_all()) == 1
        assert calibrated_profile_repo.load().strength_levels.abs == 52

    def test_profile_write_failure_undoes_completion(
        self, complete, workout_repo, history_repo, calibrated_profile_repo
    ):
        workout_repo.seed([make_workout()])
        RecordSetUseCase(workout_repo).execute(0, 0, 20)
        calibrated_profile_repo.fail_writes = True

        with pytest.raises(PersistenceError):
            complete.execute()

        stored = workout_repo.get("workout-1")
        assert stored.status == WorkoutStatus.IN_PROGRESS
        assert stored.completed_date is None
        assert history_repo.get_all() == []

        calibrated_profile_repo.fail_writes = False
        result = complete.execute()
        assert result.profile.strength_levels.abs == 52
        assert len(history_repo.get_all()) == 1


# =============================================================================
# Full loop
# =============================================================================


class TestAdaptationLoop:
    @pytest.fixture
    def loop(self, calibrated_profile_repo, workout_repo, history_repo, clock):
        """One exercise per muscle group so every workout repeats them."""
        catalog = FakeExerciseCatalog(
            [
                make_exercise("crunch-001", [MuscleGroup.ABS], [5]),
                make_exercise("bridge-001", [MuscleGroup.GLUTES], [5]),
                make_exercise("superman-001", [MuscleGroup.LOWER_BACK], [5]),
            ]
        )
        service = ProfileService(calibrated_profile_repo, catalog, clock=clock)
        generator = WorkoutGenerator(catalog, rng=random.Random(5), extra_exercise_probability=0.0)
        return {
            "generate": GenerateWorkoutUseCase(service, workout_repo, history_repo, generator, clock=clock),
            "start": StartWorkoutUseCase(workout_repo, clock=clock),
            "record": RecordSetUseCase(workout_repo),
            "complete": CompleteWorkoutUseCase(workout_repo, history_repo, service, clock=clock),
        }

    def run_at_target(self, loop, clock):
        workout = loop["generate"].execute().workout
        loop["start"].execute()
        for e, exercise in enumerate(workout.exercises):
            for s, workout_set in enumerate(exercise.sets):
                loop["record"].execute(e, s, workout_set.target.value)
        clock.advance(minutes=20)
        loop["complete"].execute()
        clock.advance(days=1)
        return workout

    def test_hitting_every_target_never_lowers_the_next_target(self, loop, clock):
        previous = self.run_at_target(loop, clock)
        for _ in range(4):
            current = self.run_at_target(loop, clock)
            for before, after in zip(previous.exercises, current.exercises):
                assert after.exercise_id == before.exercise_id
                assert after.base_target >= before.sets[0].target.value
            previous = current

    def test_progression_from_first_workout(self, loop, clock):
        """Strength 50: 3 sets of 19. Average 19 -> 20.4 -> 20 reps, 15 per set."""
        first = self.run_at_target(loop, clock)
        second = self.run_at_target(loop, clock)

        assert [e.base_target for e in first.exercises] == [25, 25, 25]
        assert [e.base_target for e in second.exercises] == [20, 20, 20]
        assert [e.sets[0].target.value for e in second.exercises] == [15, 15, 15]
        assert second.workout_number == 2

    def test_history_numbers_follow_workouts(self, loop, clock, history_repo):
        self.run_at_target(loop, clock)
        self.run_at_target(loop, clock)
        numbers = [e.workout_number for e in history_repo.list_ordered(descending=False)]
        assert numbers == [1, 2]
        assert history_repo.list_ordered(descending=False)[0].completed_date == BASE_TIME + timedelta(minutes=20)
