"""
Converter: completed Workout to performed exercises.

Flattens the workout-shaped completion input (a resolved Workout plus
the sets the user logged per exercise id) into the PerformedExercise
list the completion use case works on.

- Exercises without a library link are dropped; they cannot be keyed
  for 1RM or history.
- Logged sets without numeric reps or weight are filtered out, keeping
  the planned set that belongs to each remaining one.
"""

import logging
from typing import Dict, List

from backend.core.set_parser import has_actual_data
from domain.models import CompletedWorkoutInput, PerformedExercise, PerformedSet, SetSpec

logger = logging.getLogger(__name__)


def _pair_sets(
    performed: List[PerformedSet],
    planned: List[SetSpec],
) -> tuple[List[PerformedSet], List[SetSpec]]:
    kept_sets: List[PerformedSet] = []
    kept_planned: List[SetSpec] = []
    for index, performed_set in enumerate(performed):
        if not has_actual_data(performed_set):
            continue
        kept_sets.append(performed_set)
        kept_planned.append(planned[index] if index < len(planned) else SetSpec())
    return kept_sets, kept_planned


def convert_workout_to_session(completion: CompletedWorkoutInput) -> List[PerformedExercise]:
    """
    Convert a workout completion to performed exercises.

    Args:
        completion: Workout completion input

    Returns:
        PerformedExercise list in workout order. Exercises with no logged
        data are kept with an empty ``sets`` list so history still shows
        they were part of the session.
    """
    performed_by_id: Dict[str, List[PerformedSet]] = completion.performed
    exercises: List[PerformedExercise] = []

    for exercise in completion.workout.exercises:
        entry = exercise.primary_entry
        if entry is None:
            logger.debug("Dropping exercise %s without library link", exercise.id)
            continue

        library_id, exercise_name = entry
        sets, planned = _pair_sets(performed_by_id.get(exercise.id, []), exercise.sets)

        exercises.append(
            PerformedExercise(
                exercise_id=exercise.id,
                exercise_name=exercise_name,
                library_id=library_id,
                sets=sets,
                planned_sets=planned,
                muscle_activation=exercise.muscle_activation or None,
            )
        )

    return exercises
