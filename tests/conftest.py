"""
Shared fixtures: in-memory repositories, a fixed clock and a seeded RNG.
"""
import random
from datetime import datetime, timedelta

import pytest

from application.services import ProfileService
from tests.fakes import (
    BASE_TIME,
    FakeExerciseCatalog,
    FakeHistoryRepository,
    FakeProfileRepository,
    FakeWorkoutRepository,
    create_profile,
)
from trainer.core.workout_generator import WorkoutGenerator
from trainer.deps import Dependencies
from trainer.settings import Settings


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = BASE_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def catalog():
    return FakeExerciseCatalog()


@pytest.fixture
def profile_repo():
    return FakeProfileRepository()


@pytest.fixture
def calibrated_profile_repo():
    return FakeProfileRepository(create_profile())


@pytest.fixture
def workout_repo():
    return FakeWorkoutRepository()


@pytest.fixture
def history_repo():
    return FakeHistoryRepository()


@pytest.fixture
def profile_service(calibrated_profile_repo, catalog, clock):
    return ProfileService(calibrated_profile_repo, catalog, clock=clock)


@pytest.fixture
def generator(catalog, rng):
    return WorkoutGenerator(catalog, rng=rng)


@pytest.fixture
def test_settings(tmp_path):
    return Settings(environment="test", data_dir=str(tmp_path / "data"))


@pytest.fixture
def deps(test_settings, catalog, calibrated_profile_repo, workout_repo, history_repo, rng, clock):
    """Dependencies wired to in-memory fakes with a calibrated profile."""
    return Dependencies(
        test_settings,
        catalog=catalog,
        profile_repo=calibrated_profile_repo,
        workout_repo=workout_repo,
        history_repo=history_repo,
        rng=rng,
        clock=clock,
    )
