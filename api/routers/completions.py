"""
Completions router.

Marks sessions complete (or skipped) and returns the analytics produced
by the completion: personal records, session muscle volume and stats.
"""
import logging
from dataclasses import asdict
from typing import Annotated, Union

from fastapi import APIRouter, Body, Depends, Path

from api.deps import get_complete_session_use_case, get_current_user
from api.errors import to_http_exception
from api.schemas import CompletionResponse, SessionStatsResponse
from application.exceptions import TrainingEngineError
from application.use_cases import CompleteSessionUseCase
from domain.models import CompletedWorkoutInput, PerformedSessionInput, SkippedSessionInput

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/completions",
    tags=["Completions"],
)


@router.post(
    "/courses/{course_id}",
    response_model=CompletionResponse,
    summary="Complete or skip a session",
)
async def complete_session(
    completion: Annotated[
        Union[PerformedSessionInput, CompletedWorkoutInput, SkippedSessionInput],
        Body(discriminator="kind"),
    ],
    course_id: str = Path(..., min_length=1),
    user_id: str = Depends(get_current_user),
    use_case: CompleteSessionUseCase = Depends(get_complete_session_use_case),
) -> CompletionResponse:
    """
    Complete a session.

    ``kind`` selects the input shape:
    - ``performed_session``: exercises with performed and planned sets
    - ``workout``: the displayed workout plus performed sets per exercise id
    - ``skip``: advance past the session without data
    """
    try:
        result = await use_case.execute(user_id, course_id, completion)
    except TrainingEngineError as e:
        raise to_http_exception(e)

    return CompletionResponse(
        session_id=result.session_id,
        is_skip=result.is_skip,
        progress=result.progress,
        personal_records=result.personal_records,
        session_muscle_volumes=result.session_muscle_volumes,
        stats=SessionStatsResponse(**asdict(result.stats)),
    )
