"""
CompleteSession Use Case.

Orchestrates everything that happens when a user finishes (or skips) a
session:

1. Advance and persist course progress (must succeed)
2. Append session and per-exercise history (must succeed)
3. Update 1RM estimates and report personal records (best effort)
4. Add effective-set volume to the weekly muscle buckets (best effort)
5. Advance the weekly streak (best effort)
6. Invalidate cached session state and progress

Steps 2-5 only run for actual completions: a skip, or a completion with
no exercises, just moves progress forward. Steps 3-5 run concurrently and
their failures are logged and swallowed.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from application.exceptions import HistoryPersistenceError, ProgressPersistenceError
from application.ports.course_catalog import CourseCatalog
from application.ports.document_store import DocumentStore
from backend.core.muscle_volume import MuscleVolumeService, calculate_session_volume
from backend.core.one_rep_max import OneRepMaxService
from backend.core.set_parser import has_actual_data, parse_number
from backend.core.streak import DEFAULT_MINIMUM_SESSIONS_PER_WEEK, advance_weekly_streak
from backend.core.user_progress import UserProgressService
from backend.core.week_calculation import current_week_key
from backend.core.workout_resolver import WorkoutResolver
from domain.converters import convert_workout_to_session
from domain.models import (
    CompletedWorkoutInput,
    CompletionInput,
    ExerciseKey,
    PerformedExercise,
    PersonalRecord,
    Progress,
    SkippedSessionInput,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Result DTOs
# =============================================================================


@dataclass
class SessionStats:
    """Totals of a completed session. Only sets with reps and weight count."""
    total_exercises: int = 0
    total_sets: int = 0
    total_reps: float = 0.0
    total_weight: float = 0.0
    duration_minutes: Optional[int] = None


@dataclass
class CompletionResult:
    """Result of the CompleteSession use case execution."""
    session_id: str
    progress: Progress
    is_skip: bool = False
    personal_records: List[PersonalRecord] = field(default_factory=list)
    session_muscle_volumes: Dict[str, float] = field(default_factory=dict)
    stats: SessionStats = field(default_factory=SessionStats)


def calculate_stats(
    exercises: List[PerformedExercise],
    duration_minutes: Optional[int] = None,
) -> SessionStats:
    """Compute session totals; total_weight is the sum of weight x reps."""
    stats = SessionStats(total_exercises=len(exercises), duration_minutes=duration_minutes)
    for exercise in exercises:
        for performed_set in exercise.sets:
            reps = parse_number(performed_set.reps)
            weight = parse_number(performed_set.weight)
            if reps is None or weight is None:
                continue
            stats.total_sets += 1
            stats.total_reps += reps
            stats.total_weight += weight * reps
    return stats


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CompleteSessionUseCase:
    """
    Use case for marking a session complete.

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = CompleteSessionUseCase(
        ...     store=store,
        ...     catalog=catalog,
        ...     progress_service=progress_service,
        ...     one_rep_max_service=one_rep_max_service,
        ...     volume_service=volume_service,
        ...     resolver=resolver,
        ... )
        >>> result = await use_case.execute("user-1", "course-1", completion)
        >>> result.personal_records
    """

    def __init__(
        self,
        store: DocumentStore,
        catalog: CourseCatalog,
        progress_service: UserProgressService,
        one_rep_max_service: OneRepMaxService,
        volume_service: MuscleVolumeService,
        resolver: WorkoutResolver,
        *,
        default_minimum_sessions_per_week: int = DEFAULT_MINIMUM_SESSIONS_PER_WEEK,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            store: Document store for history records
            catalog: Course catalog (minimum sessions per week)
            progress_service: Cached progress access
            one_rep_max_service: 1RM estimates
            volume_service: Weekly muscle volume
            resolver: Activation table lookups for exercises missing one
            default_minimum_sessions_per_week: Streak threshold when the
                course does not define one
            clock: Time source
        """
        self._store = store
        self._catalog = catalog
        self._progress = progress_service
        self._one_rep_max = one_rep_max_service
        self._volume = volume_service
        self._resolver = resolver
        self._default_minimum_sessions = default_minimum_sessions_per_week
        self._clock = clock

    async def execute(
        self,
        user_id: str,
        course_id: str,
        completion: CompletionInput,
    ) -> CompletionResult:
        """
        Execute the completion workflow.

        Args:
            user_id: User ID
            course_id: Course ID
            completion: Tagged completion input

        Returns:
            CompletionResult with updated progress and analytics

        Raises:
            ProgressPersistenceError: If progress could not be saved
            HistoryPersistenceError: If history could not be appended
        """
        now = self._clock()
        is_skip = isinstance(completion, SkippedSessionInput)
        exercises = self._performed_exercises(completion)
        duration = getattr(completion, "duration_minutes", None)
        is_actual = not is_skip and bool(exercises)

        # Step 1: progress (fresh read, never from cache)
        try:
            progress = await self._progress.get_progress(user_id, course_id, fresh=True)
            progress = progress.record_completion(
                completion.session_id, completed_at=now, mark_completed=is_actual
            )
            await self._progress.save_progress(user_id, course_id, progress)
        except Exception as e:
            logger.exception("Failed to save progress for user %s course %s", user_id, course_id)
            raise ProgressPersistenceError(
                f"Could not save progress for course {course_id}",
                {"session_id": completion.session_id},
            ) from e

        stats = calculate_stats(exercises, duration)
        result = CompletionResult(
            session_id=completion.session_id,
            progress=progress,
            is_skip=is_skip,
            stats=stats,
        )

        try:
            if not is_actual:
                logger.info("Session %s advanced without data for user %s", completion.session_id, user_id)
                return result

            # Step 2: history
            try:
                await self._append_history(user_id, course_id, completion, exercises, stats, now)
            except Exception as e:
                logger.exception("Failed to append history for user %s", user_id)
                raise HistoryPersistenceError(
                    f"Could not append history for session {completion.session_id}",
                    {"session_id": completion.session_id},
                ) from e

            # Steps 3-5: analytics, concurrently and best effort
            # Volume and streak share one week key
            week_key = current_week_key(now.date())
            records, volumes, streak_progress = await asyncio.gather(
                self._update_one_rep_max(user_id, exercises),
                self._update_volume(user_id, exercises, week_key),
                self._update_streak(user_id, course_id, now, week_key),
            )
            result.personal_records = records
            result.session_muscle_volumes = volumes
            if streak_progress is not None:
                result.progress = streak_progress
            return result
        finally:
            # Step 6
            self._progress.clear_cache(user_id, course_id)

    # -------------------------------------------------------------------------
    # Input normalisation
    # -------------------------------------------------------------------------

    @staticmethod
    def _performed_exercises(completion) -> List[PerformedExercise]:
        if isinstance(completion, SkippedSessionInput):
            return []
        if isinstance(completion, CompletedWorkoutInput):
            return convert_workout_to_session(completion)
        return list(completion.exercises)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    async def _append_history(
        self,
        user_id: str,
        course_id: str,
        completion,
        exercises: List[PerformedExercise],
        stats: SessionStats,
        now: datetime,
    ) -> None:
        title = completion.workout.title if isinstance(completion, CompletedWorkoutInput) else completion.title
        session_record = {
            "session_id": completion.session_id,
            "course_id": course_id,
            "title": title,
            "completed_at": now.isoformat(),
            "duration_minutes": stats.duration_minutes,
            "exercises": [self._exercise_record(e) for e in exercises],
            "stats": {
                "total_exercises": stats.total_exercises,
                "total_sets": stats.total_sets,
                "total_reps": stats.total_reps,
                "total_weight": stats.total_weight,
            },
        }
        await self._store.append_to_subcollection(f"users/{user_id}/session_history", session_record)

        for exercise in exercises:
            if not exercise.library_id:
                continue
            record = self._exercise_record(exercise)
            if not record["sets"]:
                continue
            key = ExerciseKey(exercise.library_id, exercise.exercise_name)
            record.update({
                "session_id": completion.session_id,
                "course_id": course_id,
                "date": now.isoformat(),
            })
            await self._store.append_to_subcollection(
                f"users/{user_id}/exercise_history/{key.storage_key}/sessions", record
            )

    @staticmethod
    def _exercise_record(exercise: PerformedExercise) -> dict:
        sets = []
        planned = []
        for index, performed_set in enumerate(exercise.sets):
            if not has_actual_data(performed_set):
                continue
            sets.append(performed_set.model_dump(mode="json"))
            planned_set = exercise.planned_set_at(index)
            planned.append(planned_set.model_dump(mode="json") if planned_set else None)
        return {
            "exercise_id": exercise.exercise_id,
            "exercise_name": exercise.exercise_name,
            "library_id": exercise.library_id,
            "sets": sets,
            "planned_sets": planned,
        }

    # -------------------------------------------------------------------------
    # Best-effort analytics
    # -------------------------------------------------------------------------

    async def _update_one_rep_max(self, user_id: str, exercises: List[PerformedExercise]) -> List[PersonalRecord]:
        try:
            return await self._one_rep_max.record_session(user_id, exercises)
        except Exception:
            logger.exception("1RM update failed for user %s", user_id)
            return []

    async def _update_volume(
        self,
        user_id: str,
        exercises: List[PerformedExercise],
        week_key: str,
    ) -> Dict[str, float]:
        try:
            activations = await self._resolver.resolve_muscle_activation(exercises)
            enriched = [
                e.model_copy(update={"muscle_activation": activations[e.exercise_id]})
                if e.exercise_id in activations else e
                for e in exercises
            ]
            volumes = calculate_session_volume(enriched)
            await self._volume.merge_weekly(user_id, volumes, week_key=week_key)
            return volumes
        except Exception:
            logger.exception("Muscle volume update failed for user %s", user_id)
            return {}

    async def _update_streak(
        self,
        user_id: str,
        course_id: str,
        now: datetime,
        week_key: str,
    ) -> Optional[Progress]:
        try:
            course = await self._catalog.get_course_info(course_id)
            minimum = course.minimum_sessions_per_week or self._default_minimum_sessions
            progress = await self._progress.get_progress(user_id, course_id, fresh=True)
            streak = advance_weekly_streak(
                progress.weekly_streak,
                week_key,
                now,
                minimum_sessions=minimum,
            )
            updated = progress.model_copy(update={"weekly_streak": streak})
            await self._progress.save_progress(user_id, course_id, updated)
            return updated
        except Exception:
            logger.exception("Weekly streak update failed for user %s course %s", user_id, course_id)
            return None
