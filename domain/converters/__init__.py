"""
Domain converters.

- convert_workout_to_session: CompletedWorkoutInput -> PerformedExercise list

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import convert_workout_to_session
    >>> exercises = convert_workout_to_session(completion)
"""

from domain.converters.workout_to_session import convert_workout_to_session

__all__ = [
    "convert_workout_to_session",
]
