"""
Muscle volume accounting.

Training volume is counted in effective sets: a set counts when it has
logged reps or weight and was performed at intensity 7/10 or higher.
Each exercise distributes its effective sets over muscles according to
the library's activation table (percent per muscle), so 3 effective sets
of an exercise with {"quads": 100, "glutes": 50} give 3.0 quads and 1.5
glutes.

Per-session volumes are merged into weekly buckets stored on the user
document under ``weekly_muscle_volume.{week_key}.{muscle}``.
"""
import logging
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from application.ports.document_store import DocumentStore, field_path
from backend.core.one_rep_max import round_half_up
from backend.core.set_parser import has_actual_data, parse_intensity, parse_number
from backend.core.week_calculation import current_week_key, get_monday_week
from domain.models import PerformedExercise, PerformedSet

logger = logging.getLogger(__name__)

EFFECTIVE_INTENSITY_THRESHOLD = 7
WEEKLY_VOLUME_FIELD = "weekly_muscle_volume"
DEFAULT_HISTORY_WEEKS = 8


def is_effective_set(performed_set: PerformedSet) -> bool:
    """
    Check whether a set counts toward volume.

    Only the intensity the user logged counts; a set without one is not
    effective whatever the plan said.
    """
    if not has_actual_data(performed_set):
        return False

    intensity = parse_intensity(performed_set.intensity)
    return intensity is not None and intensity >= EFFECTIVE_INTENSITY_THRESHOLD


def count_effective_sets(exercise: PerformedExercise) -> int:
    return sum(1 for performed_set in exercise.sets if is_effective_set(performed_set))


def sanitize_activation(activation: Optional[Dict[str, object]]) -> Dict[str, float]:
    """Drop muscles whose percent is not numeric."""
    clean: Dict[str, float] = {}
    for muscle, percent in (activation or {}).items():
        value = parse_number(percent)
        if value is None:
            logger.debug("Skipping non-numeric activation %r for %s", percent, muscle)
            continue
        clean[muscle] = value
    return clean


def calculate_session_volume(exercises: Iterable[PerformedExercise]) -> Dict[str, float]:
    """
    Compute effective-set volume per muscle for one session.

    Args:
        exercises: Performed exercises with activation tables

    Returns:
        Muscle -> volume, rounded to 1 decimal. Exercises with no effective
        set or no activation table contribute nothing.
    """
    totals: Dict[str, float] = {}
    for exercise in exercises:
        effective = count_effective_sets(exercise)
        if effective == 0:
            continue

        activation = sanitize_activation(exercise.muscle_activation)
        if not activation:
            logger.debug("No activation table for %s", exercise.exercise_name)
            continue

        for muscle, percent in activation.items():
            totals[muscle] = totals.get(muscle, 0.0) + effective * percent / 100

    return {muscle: round_half_up(value) for muscle, value in totals.items()}


def merge_volumes(existing: Optional[Dict[str, float]], addition: Dict[str, float]) -> Dict[str, float]:
    """Add ``addition`` into ``existing`` without dropping any muscle."""
    merged = dict(existing or {})
    for muscle, value in addition.items():
        previous = parse_number(merged.get(muscle)) or 0.0
        merged[muscle] = round_half_up(previous + value)
    return merged


class MuscleVolumeService:
    """Reads and merges weekly muscle volume for a user."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def _weekly_buckets(self, user_id: str) -> Dict[str, Dict[str, float]]:
        document = await self.store.get_document(f"users/{user_id}") or {}
        return document.get(WEEKLY_VOLUME_FIELD) or {}

    async def merge_weekly(
        self,
        user_id: str,
        session_volumes: Dict[str, float],
        week_key: Optional[str] = None,
    ) -> Dict[str, float]:
        """
        Add session volumes into a week bucket.

        Args:
            user_id: User ID
            session_volumes: Output of calculate_session_volume
            week_key: Target week; defaults to the current week

        Returns:
            The merged bucket for that week
        """
        week_key = week_key or current_week_key()
        buckets = await self._weekly_buckets(user_id)
        merged = merge_volumes(buckets.get(week_key), session_volumes)
        if not session_volumes:
            return merged

        updates = {
            field_path(WEEKLY_VOLUME_FIELD, week_key, muscle): merged[muscle]
            for muscle in session_volumes
        }
        await self.store.update_document(f"users/{user_id}", updates)
        logger.debug("Merged volume for user %s into %s: %s", user_id, week_key, session_volumes)
        return merged

    async def get_weekly_volume(self, user_id: str, week_key: Optional[str] = None) -> Dict[str, float]:
        buckets = await self._weekly_buckets(user_id)
        return dict(buckets.get(week_key or current_week_key()) or {})

    async def get_volume_history(
        self,
        user_id: str,
        weeks: int = DEFAULT_HISTORY_WEEKS,
        today: Optional[date] = None,
    ) -> List[Dict[str, object]]:
        """
        Get the last ``weeks`` weekly buckets, oldest first.

        Weeks without data are returned with an empty volume map.
        """
        today = today or date.today()
        buckets = await self._weekly_buckets(user_id)
        history: List[Dict[str, object]] = []
        for offset in range(weeks - 1, -1, -1):
            week_key = get_monday_week(today - timedelta(weeks=offset))
            history.append({"week": week_key, "volumes": dict(buckets.get(week_key) or {})})
        return history
