"""
Domain models for the training progression engine.

This package contains pure domain models that are independent of
infrastructure concerns (document store, API, external services).

These models represent the core business concepts:
- Session / ExerciseRef / SetSpec: read-only course templates
- Workout / ResolvedExercise: a session joined with the exercise library
- PerformedExercise / PerformedSet: what the user actually did
- Progress / WeeklyStreak: where a user stands in a course
- OneRepMaxEstimate / ExerciseKey: strength estimates per exercise

Usage:
    >>> from domain.models import Session, ExerciseRef, SetSpec

    >>> session = Session(
    ...     id="s1",
    ...     title="Lower A",
    ...     exercises=[
    ...         ExerciseRef(
    ...             id="e1",
    ...             primary={"lib1": "Back Squat"},
    ...             sets=[SetSpec(reps="8-12", intensity="8/10")],
    ...         )
    ...     ],
    ... )
"""

from domain.models.one_rep_max import (
    ExerciseKey,
    OneRepMaxEstimate,
    OneRepMaxHistoryEntry,
)
from domain.models.performance import (
    AchievedWith,
    CompletedWorkoutInput,
    CompletionInput,
    PerformedExercise,
    PerformedSessionInput,
    PerformedSet,
    PersonalRecord,
    SkippedSessionInput,
)
from domain.models.progress import Progress, WeeklyStreak
from domain.models.session import ExerciseRef, Session, SetSpec
from domain.models.workout import ResolvedExercise, Workout

__all__ = [
    # Templates
    "Session",
    "ExerciseRef",
    "SetSpec",
    # Resolved
    "Workout",
    "ResolvedExercise",
    # Completion
    "PerformedSet",
    "PerformedExercise",
    "PersonalRecord",
    "AchievedWith",
    "CompletionInput",
    "PerformedSessionInput",
    "CompletedWorkoutInput",
    "SkippedSessionInput",
    # Progress
    "Progress",
    "WeeklyStreak",
    # 1RM
    "ExerciseKey",
    "OneRepMaxEstimate",
    "OneRepMaxHistoryEntry",
]
