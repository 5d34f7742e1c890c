"""
One-Rep-Max estimation.

This module provides the strength-estimation side of the analytics:
- 1RM estimate from weight, reps and intensity (RPE-adjusted Epley variant)
- Weight suggestion for a planned set from a stored estimate
- Per-user estimate storage with monotonic updates and PR detection

Formula:
    1RM = weight * (1 + 0.0333 * reps) / (1 - 0.025 * (10 - intensity))

A PersonalRecord is only reported when a previous estimate existed; the
first estimate for an exercise is stored silently.
"""
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from application.ports.document_store import DocumentStore, field_path
from backend.core.set_parser import parse_intensity, parse_number, parse_reps
from domain.models import (
    AchievedWith,
    ExerciseKey,
    OneRepMaxEstimate,
    OneRepMaxHistoryEntry,
    PerformedExercise,
    PersonalRecord,
    SetSpec,
)

logger = logging.getLogger(__name__)

REPS_COEFFICIENT = 0.0333
INTENSITY_COEFFICIENT = 0.025
MAX_INTENSITY = 10
DEFAULT_HISTORY_LIMIT = 20

ESTIMATES_FIELD = "one_rep_max_estimates"


# =============================================================================
# Formulas
# =============================================================================


def round_half_up(value: float, decimals: int = 1) -> float:
    """Round half away from zero for positive values (2.25 -> 2.3)."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def round_up_to_5(value: float) -> float:
    """Round up to the next multiple of 5 (101 -> 105, 100 -> 100)."""
    return float(math.ceil(value / 5) * 5)


def estimate_1rm(weight: float, reps: float, intensity: int) -> float:
    """
    Estimate a one-rep max.

    Args:
        weight: Weight lifted
        reps: Reps completed
        intensity: Perceived intensity, 1-10

    Returns:
        Estimated 1RM, rounded to 1 decimal place
    """
    numerator = weight * (1 + REPS_COEFFICIENT * reps)
    denominator = 1 - INTENSITY_COEFFICIENT * (MAX_INTENSITY - intensity)
    return round_half_up(numerator / denominator)


def suggest_weight(one_rm: float, target_reps: float, target_intensity: int) -> float:
    """
    Suggest a working weight for a planned set.

    Inverse of estimate_1rm, rounded up to the next multiple of 5.
    """
    numerator = one_rm * (1 - INTENSITY_COEFFICIENT * (MAX_INTENSITY - target_intensity))
    denominator = 1 + REPS_COEFFICIENT * target_reps
    return round_up_to_5(numerator / denominator)


# =============================================================================
# DTOs
# =============================================================================


@dataclass
class SetEstimate:
    """1RM estimate of a single valid set."""
    set_number: int
    weight: float
    reps: float
    estimate: float


def best_set_estimate(exercise: PerformedExercise) -> Optional[SetEstimate]:
    """
    Find the set with the highest 1RM estimate.

    A set is valid with logged weight > 0 and reps > 0 and an N/10
    objective intensity on the planned set at the same index. The
    intensity the user logged is not used here. Ties keep the earliest set.
    """
    best: Optional[SetEstimate] = None
    for index, performed_set in enumerate(exercise.sets):
        weight = parse_number(performed_set.weight)
        reps = parse_number(performed_set.reps)
        if weight is None or reps is None or weight <= 0 or reps <= 0:
            continue

        planned = exercise.planned_set_at(index)
        intensity = parse_intensity(planned.intensity) if planned else None
        if intensity is None:
            continue

        estimate = estimate_1rm(weight, reps, intensity)
        if best is None or estimate > best.estimate:
            best = SetEstimate(set_number=index + 1, weight=weight, reps=reps, estimate=estimate)
    return best


def _history_path(user_id: str, key: ExerciseKey) -> str:
    return f"users/{user_id}/one_rep_max_history/{key.storage_key}/records"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Service
# =============================================================================


class OneRepMaxService:
    """
    Stores and updates 1RM estimates for a user.

    Estimates live in the user document under ``one_rep_max_estimates``
    keyed by ExerciseKey.storage_key; improvements are appended to a
    per-exercise history subcollection.
    """

    def __init__(self, store: DocumentStore, clock: Callable[[], datetime] = _utcnow):
        """
        Initialize the service.

        Args:
            store: Document store (injected)
            clock: Time source for last_updated and history dates
        """
        self.store = store
        self._clock = clock

    async def get_estimates(self, user_id: str) -> Dict[ExerciseKey, OneRepMaxEstimate]:
        """Get every stored estimate of a user."""
        document = await self.store.get_document(f"users/{user_id}") or {}
        raw = document.get(ESTIMATES_FIELD) or {}
        estimates: Dict[ExerciseKey, OneRepMaxEstimate] = {}
        for storage_key, data in raw.items():
            try:
                estimate = OneRepMaxEstimate.model_validate(data)
            except ValueError:
                logger.warning("Ignoring malformed 1RM estimate %s for user %s", storage_key, user_id)
                continue
            estimates[estimate.key] = estimate
        return estimates

    async def get_estimate(self, user_id: str, key: ExerciseKey) -> Optional[OneRepMaxEstimate]:
        estimates = await self.get_estimates(user_id)
        return estimates.get(key)

    async def record_session(
        self,
        user_id: str,
        exercises: List[PerformedExercise],
    ) -> List[PersonalRecord]:
        """
        Update estimates from a completed session.

        Args:
            user_id: User ID
            exercises: Performed exercises of the session

        Returns:
            Personal records beaten in this session (first-ever estimates
            are stored but not reported)
        """
        current = await self.get_estimates(user_id)
        now = self._clock()
        updates: Dict[str, dict] = {}
        improved: List[tuple[ExerciseKey, float]] = []
        records: List[PersonalRecord] = []

        for exercise in exercises:
            if not exercise.library_id or not exercise.exercise_name:
                logger.warning(
                    "Skipping 1RM update for exercise %s: missing library id or name",
                    exercise.exercise_id,
                )
                continue

            best = best_set_estimate(exercise)
            if best is None:
                logger.debug("No valid sets for %s", exercise.exercise_name)
                continue

            key = ExerciseKey(exercise.library_id, exercise.exercise_name)
            previous = current.get(key)
            if previous is not None and best.estimate <= previous.current:
                continue

            achieved_with = AchievedWith(weight=best.weight, reps=best.reps, set_number=best.set_number)
            estimate = OneRepMaxEstimate(
                library_id=key.library_id,
                exercise_name=key.exercise_name,
                current=best.estimate,
                last_updated=now,
                achieved_with=achieved_with,
            )
            updates[field_path(ESTIMATES_FIELD, key.storage_key)] = estimate.model_dump(mode="json")
            improved.append((key, best.estimate))
            current[key] = estimate

            if previous is not None:
                records.append(
                    PersonalRecord(
                        exercise_name=key.exercise_name,
                        library_id=key.library_id,
                        achieved_with=achieved_with,
                        estimate=best.estimate,
                        previous=previous.current,
                    )
                )
                logger.info(
                    "New 1RM PR for user %s on %s: %.1f -> %.1f",
                    user_id, key, previous.current, best.estimate,
                )

        if updates:
            await self.store.update_document(f"users/{user_id}", updates)
            for key, value in improved:
                entry = OneRepMaxHistoryEntry(estimate=value, date=now)
                await self.store.append_to_subcollection(
                    _history_path(user_id, key), entry.model_dump(mode="json")
                )

        return records

    async def get_history(
        self,
        user_id: str,
        key: ExerciseKey,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> List[OneRepMaxHistoryEntry]:
        """Get estimate history of one exercise, oldest first."""
        records = await self.store.list_subcollection(_history_path(user_id, key), limit=limit)
        entries = [OneRepMaxHistoryEntry.model_validate(r) for r in records]
        return sorted(entries, key=lambda e: e.date)

    async def reset_estimate(self, user_id: str, key: ExerciseKey) -> None:
        """Forget the current estimate. History is kept."""
        await self.store.delete_field(f"users/{user_id}", field_path(ESTIMATES_FIELD, key.storage_key))
        logger.info("Reset 1RM estimate for user %s on %s", user_id, key)

    async def suggest_for_set(
        self,
        user_id: str,
        key: ExerciseKey,
        set_spec: SetSpec,
    ) -> Optional[float]:
        """
        Suggest a weight for a planned set.

        Returns:
            Suggested weight, or None when there is no estimate or the
            planned intensity is not N/10
        """
        intensity = parse_intensity(set_spec.intensity)
        if intensity is None:
            return None
        estimate = await self.get_estimate(user_id, key)
        if estimate is None:
            return None
        return suggest_weight(estimate.current, parse_reps(set_spec.reps), intensity)
