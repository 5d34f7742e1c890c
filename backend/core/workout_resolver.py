"""
Workout resolution.

Joins a Session's exercise references with the exercise library. Lookups
run concurrently; a failed lookup never fails the workout, the exercise
is returned as a placeholder named after its id instead.
"""
import asyncio
import logging
from typing import Dict, List, Optional

from application.ports.exercise_library import ExerciseLibrary, ExerciseLibraryEntry
from backend.core.muscle_volume import sanitize_activation
from domain.models import ExerciseRef, PerformedExercise, ResolvedExercise, Session, Workout

logger = logging.getLogger(__name__)

_REF_FIELDS = set(ExerciseRef.model_fields)


def _placeholder(exercise: ExerciseRef) -> ResolvedExercise:
    return ResolvedExercise(
        **exercise.model_dump(include=_REF_FIELDS),
        name=exercise.id,
        description="",
        media_ref=None,
        muscle_activation={},
        resolved=False,
    )


class WorkoutResolver:
    """Builds Workouts from Sessions using the exercise library."""

    def __init__(self, library: ExerciseLibrary):
        """
        Initialize the resolver.

        Args:
            library: Exercise library (injected)
        """
        self.library = library

    async def _lookup(self, library_id: Optional[str], exercise_name: Optional[str]) -> ExerciseLibraryEntry:
        if not library_id or not exercise_name:
            raise ValueError("exercise has no library reference")
        return await self.library.resolve_exercise(library_id, exercise_name)

    async def resolve_exercise(self, exercise: ExerciseRef) -> ResolvedExercise:
        entry = exercise.primary_entry or (None, None)
        try:
            library_entry = await self._lookup(*entry)
        except Exception:
            logger.warning("Could not resolve exercise %s, using placeholder", exercise.id, exc_info=True)
            return _placeholder(exercise)

        return ResolvedExercise(
            **exercise.model_dump(include=_REF_FIELDS),
            name=library_entry.name or entry[1],
            description=library_entry.description or "",
            media_ref=library_entry.media_ref,
            muscle_activation=sanitize_activation(library_entry.muscle_activation),
        )

    async def build_workout(self, session: Session) -> Workout:
        """
        Resolve every exercise of a session.

        Args:
            session: Session template

        Returns:
            Workout with exercises in session order
        """
        exercises: List[ResolvedExercise] = []
        if session.exercises:
            exercises = list(
                await asyncio.gather(*(self.resolve_exercise(e) for e in session.exercises))
            )

        return Workout(
            id=f"workout-{session.id}",
            session_id=session.id,
            title=session.title,
            description=session.description,
            module_id=session.module_id,
            media_ref=session.media_ref,
            exercises=exercises,
        )

    async def resolve_muscle_activation(
        self,
        exercises: List[PerformedExercise],
    ) -> Dict[str, Dict[str, float]]:
        """
        Look up activation tables for exercises that lack one.

        Returns:
            Exercise id -> activation table. Failed lookups map to ``{}``.
        """
        missing = [e for e in exercises if not e.muscle_activation]
        if not missing:
            return {}

        results = await asyncio.gather(
            *(self._lookup(e.library_id, e.exercise_name) for e in missing),
            return_exceptions=True,
        )

        activations: Dict[str, Dict[str, float]] = {}
        for exercise, result in zip(missing, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "No activation table for %s: %s", exercise.exercise_id, result
                )
                activations[exercise.exercise_id] = {}
                continue
            activations[exercise.exercise_id] = sanitize_activation(result.muscle_activation)
        return activations
