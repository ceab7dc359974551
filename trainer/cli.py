import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError

from application.exceptions import InvalidInputError, TrainerError
from application.use_cases import ManualExercise, parse_set_value
from domain.models import MuscleGroup, WorkoutPhase
from domain.models.timestamps import utcnow
from trainer.deps import Dependencies
from trainer.schemas.manual_workout import ManualWorkoutInput
from trainer.settings import get_settings

logger = logging.getLogger(__name__)


def _print_json(value: Any) -> None:
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json")
    print(json.dumps(value, indent=2))


def _load_manual_input(path: str) -> ManualWorkoutInput:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return ManualWorkoutInput.model_validate(json.load(f))
    except FileNotFoundError:
        raise InvalidInputError(f"File not found: {path}") from None
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid JSON in {path}: {e}") from None
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid workout file {path}",
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        ) from None


def _manual_exercises(data: ManualWorkoutInput) -> Optional[List[ManualExercise]]:
    if data.exercises is None:
        return None
    return [ManualExercise(exercise_id=e.exercise_id, values=list(e.sets)) for e in data.exercises]


def _position(value: str, label: str) -> int:
    """1-based CLI position to 0-based index."""
    try:
        number = int(value)
    except ValueError:
        raise InvalidInputError(f"{label} must be a number, got {value!r}") from None
    if number < 1:
        raise InvalidInputError(f"{label} must be 1 or more, got {number}")
    return number - 1


# =============================================================================
# Commands
# =============================================================================


def cmd_init(deps: Dependencies, args: argparse.Namespace) -> None:
    result = deps.initialize_profile().execute(weight_kg=args.weight_kg, height_cm=args.height_cm)
    if not result.created:
        print("Profile already exists.", file=sys.stderr)
    _print_json(result.profile)


def cmd_calibrate(deps: Dependencies, args: argparse.Namespace) -> None:
    results = {
        MuscleGroup.ABS: parse_set_value(args.abs),
        MuscleGroup.GLUTES: parse_set_value(args.glutes),
        MuscleGroup.LOWER_BACK: parse_set_value(args.lower_back),
    }
    result = deps.complete_calibration().execute(results)
    _print_json(result.profile.strength_levels)


def cmd_reset_calibration(deps: Dependencies, args: argparse.Namespace) -> None:
    _print_json(deps.reset_calibration().execute().profile)


def cmd_equipment(deps: Dependencies, args: argparse.Namespace) -> None:
    result = deps.update_equipment().execute(has_elastic_bands=args.elastic_bands)
    _print_json(result.profile.equipment)


def cmd_profile(deps: Dependencies, args: argparse.Namespace) -> None:
    _print_json(deps.profile_service.get_profile())


def cmd_generate(deps: Dependencies, args: argparse.Namespace) -> None:
    _print_json(deps.generate_workout().execute().workout)


def cmd_show(deps: Dependencies, args: argparse.Namespace) -> None:
    workout = deps.get_active_workout().execute().workout
    if workout is None:
        print("No active workout.", file=sys.stderr)
        return
    _print_json(workout)


def cmd_start(deps: Dependencies, args: argparse.Namespace) -> None:
    _print_json(deps.start_workout().execute().workout)


def cmd_log_set(deps: Dependencies, args: argparse.Namespace) -> None:
    result = deps.record_set().execute(
        _position(args.exercise, "Exercise"),
        _position(args.set, "Set"),
        args.value,
    )
    exercise = result.workout.exercises[_position(args.exercise, "Exercise")]
    _print_json(
        {
            "exercise": exercise.model_dump(mode="json"),
            "adjusted_sets": result.adjusted_set_numbers,
        }
    )


def cmd_position(deps: Dependencies, args: argparse.Namespace) -> None:
    result = deps.update_workout_position().execute(
        _position(args.exercise, "Exercise"),
        _position(args.set, "Set"),
        args.phase,
    )
    workout = result.workout
    _print_json(
        {
            "current_exercise_index": workout.current_exercise_index,
            "current_set_index": workout.current_set_index,
            "current_phase": workout.current_phase.value,
        }
    )


def cmd_complete(deps: Dependencies, args: argparse.Namespace) -> None:
    result = deps.complete_workout().execute()
    _print_json(
        {
            "history_entry": result.history_entry.model_dump(mode="json"),
            "total_sets": result.summary.total_sets,
            "total_reps": result.summary.total_reps,
            "total_seconds": result.summary.total_seconds,
            "strength_levels": result.profile.strength_levels.model_dump(mode="json"),
        }
    )


def cmd_history(deps: Dependencies, args: argparse.Namespace) -> None:
    result = deps.list_history().execute()
    _print_json(
        {
            "workouts_this_week": result.workouts_this_week,
            "workouts_this_month": result.workouts_this_month,
            "entries": [
                {
                    **entry.model_dump(mode="json"),
                    "total_sets": result.summaries[entry.id].total_sets,
                }
                for entry in result.entries
            ],
        }
    )


def cmd_add_manual(deps: Dependencies, args: argparse.Namespace) -> None:
    data = _load_manual_input(args.file)
    if data.total_duration is None:
        raise InvalidInputError("total_duration is required")
    result = deps.add_manual_workout().execute(
        completed_date=data.completed_date or deps.clock(),
        total_duration=data.total_duration,
        exercises=_manual_exercises(data) or [],
    )
    _print_json(result.entry)


def cmd_edit_history(deps: Dependencies, args: argparse.Namespace) -> None:
    data = _load_manual_input(args.file)
    result = deps.update_history_entry().execute(
        args.entry_id,
        exercises=_manual_exercises(data),
        completed_date=data.completed_date,
        total_duration=data.total_duration,
    )
    _print_json(result.entry)


def cmd_delete_history(deps: Dependencies, args: argparse.Namespace) -> None:
    deps.delete_history_entry().execute(args.entry_id)
    print(f"Deleted {args.entry_id}")


def cmd_clear_all(deps: Dependencies, args: argparse.Namespace) -> None:
    if not args.yes:
        raise InvalidInputError("Refusing to delete all data without --yes")
    result = deps.clear_all_data().execute()
    _print_json(
        {
            "workouts_deleted": result.workouts_deleted,
            "history_deleted": result.history_deleted,
            "profile_deleted": result.profile_deleted,
        }
    )


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trainer",
        description="Adaptive bodyweight workouts for abs, glutes and lower back",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="Create the user profile")
    p.add_argument("--weight-kg", type=float)
    p.add_argument("--height-cm", type=float)
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("calibrate", help="Record calibration results")
    p.add_argument("--abs", required=True, help="Plank hold in seconds")
    p.add_argument("--glutes", required=True, help="Glute bridge reps")
    p.add_argument("--lower-back", required=True, help="Bird dog reps")
    p.set_defaults(func=cmd_calibrate)

    p = sub.add_parser("reset-calibration", help="Forget calibration and zero strength")
    p.set_defaults(func=cmd_reset_calibration)

    p = sub.add_parser("equipment", help="Set owned equipment")
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--elastic-bands", dest="elastic_bands", action="store_true")
    group.add_argument("--no-elastic-bands", dest="elastic_bands", action="store_false")
    p.set_defaults(func=cmd_equipment)

    sub.add_parser("profile", help="Show the profile").set_defaults(func=cmd_profile)
    sub.add_parser("generate", help="Generate the next workout").set_defaults(func=cmd_generate)
    sub.add_parser("show", help="Show the active workout").set_defaults(func=cmd_show)
    sub.add_parser("start", help="Start the active workout").set_defaults(func=cmd_start)

    p = sub.add_parser("log-set", help="Record a set of the active workout")
    p.add_argument("exercise", help="Exercise number (1-based)")
    p.add_argument("set", help="Set number (1-based)")
    p.add_argument("value", help="Reps or seconds achieved")
    p.set_defaults(func=cmd_log_set)

    p = sub.add_parser("position", help="Save the resume position")
    p.add_argument("exercise", help="Exercise number (1-based)")
    p.add_argument("set", help="Set number (1-based)")
    p.add_argument("phase", choices=[phase.value for phase in WorkoutPhase])
    p.set_defaults(func=cmd_position)

    sub.add_parser("complete", help="Complete the active workout").set_defaults(func=cmd_complete)
    sub.add_parser("history", help="List workout history").set_defaults(func=cmd_history)

    p = sub.add_parser("add-manual", help="Log a workout from a JSON file")
    p.add_argument("file")
    p.set_defaults(func=cmd_add_manual)

    p = sub.add_parser("edit-history", help="Edit a history entry from a JSON file")
    p.add_argument("entry_id")
    p.add_argument("file")
    p.set_defaults(func=cmd_edit_history)

    p = sub.add_parser("delete-history", help="Delete a history entry")
    p.add_argument("entry_id")
    p.set_defaults(func=cmd_delete_history)

    p = sub.add_parser("clear-all", help="Delete the profile, workouts and history")
    p.add_argument("--yes", action="store_true", help="Confirm deletion")
    p.set_defaults(func=cmd_clear_all)

    return parser


def main(argv: Optional[List[str]] = None, deps: Optional[Dependencies] = None) -> int:
    args = build_parser().parse_args(argv)

    if deps is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            print(f"Error: invalid settings: {e}", file=sys.stderr)
            return 1
        logging.basicConfig(
            level=settings.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        deps = Dependencies(settings, clock=utcnow)

    try:
        args.func(deps, args)
    except TrainerError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        for detail in getattr(e, "errors", []):
            print(f"  - {detail}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
