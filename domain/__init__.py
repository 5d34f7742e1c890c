"""
Domain layer for the training engine.

This package contains pure domain models that are independent of
infrastructure concerns (document store, API, external services).
"""

from domain.models import (
    CompletionInput,
    ExerciseKey,
    PerformedExercise,
    Progress,
    Session,
    Workout,
)

__all__ = [
    "CompletionInput",
    "ExerciseKey",
    "PerformedExercise",
    "Progress",
    "Session",
    "Workout",
]
