"""
Unit tests for the exercise catalog: the bundled YAML file and the loader.
"""
import random

import pytest

from application.exceptions import CatalogError
from application.use_cases import CALIBRATION_EXERCISES
from domain.models import ALL_MUSCLE_GROUPS, Equipment, ExerciseType, MuscleGroup
from trainer.core.catalog import StaticExerciseCatalog, load_exercises

pytestmark = pytest.mark.unit


@pytest.fixture(scope="module")
def bundled():
    return StaticExerciseCatalog.from_yaml()


class TestBundledCatalog:
    def test_loads(self, bundled):
        assert len(bundled) >= 15

    def test_ids_unique(self, bundled):
        ids = [e.id for e in bundled.get_all()]
        assert len(ids) == len(set(ids))

    def test_every_group_has_unequipped_exercises(self, bundled):
        for group in ALL_MUSCLE_GROUPS:
            unequipped = [e for e in bundled.get_by_muscle_group(group) if e.equipment == Equipment.NONE]
            assert len(unequipped) >= 3, group

    def test_every_group_has_band_exercises(self, bundled):
        for group in ALL_MUSCLE_GROUPS:
            assert any(e.equipment == Equipment.ELASTIC_BAND for e in bundled.get_by_muscle_group(group))

    def test_calibration_exercises_present(self, bundled):
        plank = bundled.get_by_id(CALIBRATION_EXERCISES[MuscleGroup.ABS])
        bridge = bundled.get_by_id(CALIBRATION_EXERCISES[MuscleGroup.GLUTES])
        bird_dog = bundled.get_by_id(CALIBRATION_EXERCISES[MuscleGroup.LOWER_BACK])

        assert plank.type == ExerciseType.TIMED
        assert bridge.type == ExerciseType.REPS
        assert bird_dog.type == ExerciseType.REPS
        assert plank.heaviness_for(MuscleGroup.ABS) is not None
        assert bridge.heaviness_for(MuscleGroup.GLUTES) is not None
        assert bird_dog.heaviness_for(MuscleGroup.LOWER_BACK) is not None

    def test_heaviness_for_every_listed_group(self, bundled):
        for exercise in bundled.get_all():
            for group in exercise.muscle_groups:
                assert 1 <= exercise.heaviness_for(group) <= 10


class TestStaticExerciseCatalog:
    def test_lookup(self, bundled):
        assert bundled.get_by_id("plank-001").name == "Plank"
        assert bundled.get_by_id("missing") is None

    def test_muscle_group_query_includes_secondary_groups(self, bundled):
        abs_ids = {e.id for e in bundled.get_by_muscle_group(MuscleGroup.ABS)}
        assert "bird-dog-001" in abs_ids
        assert "glute-bridge-001" not in abs_ids

    def test_multiple_groups(self, bundled):
        result = bundled.get_by_muscle_groups([MuscleGroup.ABS, MuscleGroup.GLUTES])
        assert all(
            MuscleGroup.ABS in e.muscle_groups or MuscleGroup.GLUTES in e.muscle_groups for e in result
        )

    def test_random_respects_exclusions(self, bundled):
        rng = random.Random(0)
        pool = [e.id for e in bundled.get_by_muscle_group(MuscleGroup.GLUTES)]
        keep = pool[0]
        for _ in range(20):
            assert bundled.get_random(MuscleGroup.GLUTES, exclude=pool[1:], rng=rng).id == keep
        assert bundled.get_random(MuscleGroup.GLUTES, exclude=pool, rng=rng) is None


class TestLoadExercises:
    def test_custom_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "- id: wall-sit-001\n"
            "  name: Wall Sit\n"
            "  muscle_groups: [glutes]\n"
            "  type: timed\n"
            "  heaviness_score: {glutes: 5}\n"
        )
        exercises = load_exercises(path)
        assert [e.id for e in exercises] == ["wall-sit-001"]
        assert exercises[0].equipment == Equipment.NONE

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_exercises(tmp_path / "nope.yaml")

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("id: plank-001\n")
        with pytest.raises(CatalogError):
            load_exercises(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("- id: [unclosed\n")
        with pytest.raises(CatalogError):
            load_exercises(path)

    def test_missing_heaviness(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "- id: crunch-001\n"
            "  name: Crunch\n"
            "  muscle_groups: [abs, lowerBack]\n"
            "  type: reps\n"
            "  heaviness_score: {abs: 3}\n"
        )
        with pytest.raises(CatalogError):
            load_exercises(path)

    def test_duplicate_ids(self, tmp_path):
        entry = (
            "- id: crunch-001\n"
            "  name: Crunch\n"
            "  muscle_groups: [abs]\n"
            "  type: reps\n"
            "  heaviness_score: {abs: 3}\n"
        )
        path = tmp_path / "catalog.yaml"
        path.write_text(entry + entry)
        with pytest.raises(CatalogError):
            load_exercises(path)
