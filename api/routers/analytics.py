"""
Analytics router for strength and volume data.

This router provides endpoints for:
- Current 1RM estimates and their history
- Weight suggestions for a planned set
- Resetting an estimate
- Weekly muscle volume and its history

Exercises are identified by (library_id, exercise_name) query parameters.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_current_user, get_muscle_volume_service, get_one_rep_max_service
from api.schemas import (
    OneRepMaxHistoryItem,
    OneRepMaxHistoryResponse,
    OneRepMaxItem,
    OneRepMaxListResponse,
    VolumeHistoryResponse,
    WeeklyVolumeResponse,
    WeightSuggestionResponse,
)
from backend.core.muscle_volume import MuscleVolumeService
from backend.core.one_rep_max import DEFAULT_HISTORY_LIMIT, OneRepMaxService
from backend.core.week_calculation import current_week_key, format_week_display, parse_week_key
from domain.models import ExerciseKey, SetSpec

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"],
)


def _validate_week(week: str) -> None:
    """Validate week key format."""
    try:
        parse_week_key(week)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail="Invalid week format. Use YYYY-Www, e.g. 2026-W41.",
        )


# =============================================================================
# One-Rep-Max Endpoints
# =============================================================================


@router.get(
    "/one-rep-max",
    response_model=OneRepMaxListResponse,
    summary="List 1RM estimates",
)
async def list_one_rep_max(
    user_id: str = Depends(get_current_user),
    service: OneRepMaxService = Depends(get_one_rep_max_service),
) -> OneRepMaxListResponse:
    """Get every current 1RM estimate of the user, sorted by exercise name."""
    estimates = await service.get_estimates(user_id)
    items = [
        OneRepMaxItem(
            library_id=e.library_id,
            exercise_name=e.exercise_name,
            current=e.current,
            last_updated=e.last_updated,
            achieved_with=e.achieved_with.model_dump() if e.achieved_with else None,
        )
        for e in sorted(estimates.values(), key=lambda e: (e.exercise_name, e.library_id))
    ]
    return OneRepMaxListResponse(estimates=items, total=len(items))


@router.get(
    "/one-rep-max/history",
    response_model=OneRepMaxHistoryResponse,
    summary="Get 1RM history of an exercise",
)
async def get_one_rep_max_history(
    library_id: str = Query(..., min_length=1),
    exercise_name: str = Query(..., min_length=1),
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=100),
    user_id: str = Depends(get_current_user),
    service: OneRepMaxService = Depends(get_one_rep_max_service),
) -> OneRepMaxHistoryResponse:
    """Get estimate improvements, oldest first."""
    key = ExerciseKey(library_id, exercise_name)
    history = await service.get_history(user_id, key, limit=limit)
    return OneRepMaxHistoryResponse(
        library_id=library_id,
        exercise_name=exercise_name,
        history=[OneRepMaxHistoryItem(estimate=h.estimate, date=h.date) for h in history],
    )


@router.get(
    "/one-rep-max/suggestion",
    response_model=WeightSuggestionResponse,
    summary="Suggest a weight for a planned set",
)
async def get_weight_suggestion(
    library_id: str = Query(..., min_length=1),
    exercise_name: str = Query(..., min_length=1),
    reps: Optional[str] = Query(None, description="Planned reps, e.g. '8' or '8-12'"),
    intensity: str = Query(..., description="Planned intensity, e.g. '8/10'"),
    user_id: str = Depends(get_current_user),
    service: OneRepMaxService = Depends(get_one_rep_max_service),
) -> WeightSuggestionResponse:
    """
    Suggest a working weight from the stored estimate.

    ``suggested_weight`` is null when there is no estimate yet or the
    intensity is not of the form N/10.
    """
    key = ExerciseKey(library_id, exercise_name)
    suggestion = await service.suggest_for_set(user_id, key, SetSpec(reps=reps, intensity=intensity))
    return WeightSuggestionResponse(
        library_id=library_id,
        exercise_name=exercise_name,
        reps=reps,
        intensity=intensity,
        suggested_weight=suggestion,
    )


@router.delete(
    "/one-rep-max",
    status_code=204,
    summary="Reset a 1RM estimate",
)
async def reset_one_rep_max(
    library_id: str = Query(..., min_length=1),
    exercise_name: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user),
    service: OneRepMaxService = Depends(get_one_rep_max_service),
) -> None:
    """Forget the current estimate of an exercise. History is kept."""
    await service.reset_estimate(user_id, ExerciseKey(library_id, exercise_name))


# =============================================================================
# Muscle Volume Endpoints
# =============================================================================


@router.get(
    "/muscle-volume",
    response_model=WeeklyVolumeResponse,
    summary="Get weekly muscle volume",
)
async def get_weekly_volume(
    week: Optional[str] = Query(None, description="Week key (YYYY-Www), defaults to the current week"),
    user_id: str = Depends(get_current_user),
    service: MuscleVolumeService = Depends(get_muscle_volume_service),
) -> WeeklyVolumeResponse:
    """Get effective sets per muscle for one week."""
    week = week or current_week_key()
    _validate_week(week)
    volumes = await service.get_weekly_volume(user_id, week)
    return WeeklyVolumeResponse(week=week, display=format_week_display(week), volumes=volumes)


@router.get(
    "/muscle-volume/history",
    response_model=VolumeHistoryResponse,
    summary="Get muscle volume history",
)
async def get_volume_history(
    weeks: int = Query(8, ge=1, le=52, description="Number of weeks, ending with the current one"),
    user_id: str = Depends(get_current_user),
    service: MuscleVolumeService = Depends(get_muscle_volume_service),
) -> VolumeHistoryResponse:
    """Get weekly volumes, oldest first. Weeks without training are empty."""
    history = await service.get_volume_history(user_id, weeks=weeks)
    return VolumeHistoryResponse(
        weeks=[
            WeeklyVolumeResponse(
                week=item["week"],
                display=format_week_display(item["week"]),
                volumes=item["volumes"],
            )
            for item in history
        ]
    )
