"""
Progression router for session selection.

This router provides endpoints for:
- The session a user should do next in a course
- Manual selection of another session
- Starting a new cycle
- Going back one session
"""
import logging

from fastapi import APIRouter, Depends, Path, Query

from api.deps import get_current_user, get_progression_service
from api.errors import to_http_exception
from api.schemas import GoBackRequest, ProgressResponse, SelectSessionRequest, SessionStateResponse
from application.exceptions import TrainingEngineError
from backend.core.progression_service import ProgressionService, SessionState

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/progression",
    tags=["Progression"],
)


def _to_response(state: SessionState) -> SessionStateResponse:
    return SessionStateResponse(
        mode=state.mode.value,
        empty_reason=state.empty_reason,
        is_manual=state.is_manual,
        index=state.index,
        session=state.session,
        workout=state.workout,
        already_completed=state.already_completed,
        cycle_complete=state.cycle_complete,
        total_sessions=len(state.all_sessions),
        progress=state.progress,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/courses/{course_id}/session",
    response_model=SessionStateResponse,
    summary="Get the current session",
)
async def get_current_session(
    course_id: str = Path(..., min_length=1),
    force_refresh: bool = Query(False, description="Bypass the cached state"),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> SessionStateResponse:
    """
    Get the session the user should do next.

    One-on-one courses can return no session, with ``empty_reason`` set to
    ``no_planning_this_week`` or ``no_session_today``.
    """
    try:
        state = await service.get_current_session(user_id, course_id, force_refresh=force_refresh)
    except TrainingEngineError as e:
        raise to_http_exception(e)
    return _to_response(state)


@router.post(
    "/courses/{course_id}/session/select",
    response_model=SessionStateResponse,
    summary="Select a session manually",
)
async def select_session(
    request: SelectSessionRequest,
    course_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> SessionStateResponse:
    """
    Show a specific session instead of the automatic one.

    ``session_index`` disambiguates sessions repeated within a course.
    Progress is not changed.
    """
    try:
        state = await service.select_session(
            user_id, course_id, request.session_id, request.session_index
        )
    except TrainingEngineError as e:
        raise to_http_exception(e)
    return _to_response(state)


@router.post(
    "/courses/{course_id}/cycles",
    response_model=ProgressResponse,
    summary="Start a new cycle",
)
async def start_new_cycle(
    course_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> ProgressResponse:
    """Restart the course from its first session."""
    try:
        progress = await service.start_new_cycle(user_id, course_id)
    except TrainingEngineError as e:
        raise to_http_exception(e)
    return ProgressResponse(course_id=course_id, progress=progress)


@router.post(
    "/courses/{course_id}/session/back",
    response_model=ProgressResponse,
    summary="Go back one session",
)
async def go_back_session(
    request: GoBackRequest,
    course_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> ProgressResponse:
    """Move progress back so the previous session becomes current."""
    try:
        progress = await service.go_back_session(user_id, course_id, request.current_session_id)
    except TrainingEngineError as e:
        raise to_http_exception(e)
    return ProgressResponse(course_id=course_id, progress=progress)
