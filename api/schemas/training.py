"""
Pydantic models for the training API.

Request and response models for:
- Current session / manual selection / cycles
- Session completion
- 1RM and muscle volume analytics
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models import PersonalRecord, Progress, Session, Workout


# =============================================================================
# Progression
# =============================================================================


class SelectSessionRequest(BaseModel):
    """Manual session selection."""
    session_id: str
    session_index: Optional[int] = Field(default=None, ge=0)


class GoBackRequest(BaseModel):
    """Move back from the session currently shown."""
    current_session_id: str


class SessionStateResponse(BaseModel):
    """Current session for a course."""
    mode: str
    empty_reason: Optional[str] = None
    is_manual: bool = False
    index: int = 0
    session: Optional[Session] = None
    workout: Optional[Workout] = None
    already_completed: bool = False
    cycle_complete: bool = False
    total_sessions: int = 0
    progress: Progress


class ProgressResponse(BaseModel):
    """Progress after a cycle or go-back operation."""
    course_id: str
    progress: Progress


# =============================================================================
# Completion
# =============================================================================


class SessionStatsResponse(BaseModel):
    total_exercises: int
    total_sets: int
    total_reps: float
    total_weight: float
    duration_minutes: Optional[int] = None


class CompletionResponse(BaseModel):
    """Outcome of a completion."""
    session_id: str
    is_skip: bool
    progress: Progress
    personal_records: List[PersonalRecord] = Field(default_factory=list)
    session_muscle_volumes: Dict[str, float] = Field(default_factory=dict)
    stats: SessionStatsResponse


# =============================================================================
# Analytics
# =============================================================================


class OneRepMaxItem(BaseModel):
    library_id: str
    exercise_name: str
    current: float
    last_updated: datetime
    achieved_with: Optional[dict] = None


class OneRepMaxListResponse(BaseModel):
    estimates: List[OneRepMaxItem]
    total: int


class OneRepMaxHistoryItem(BaseModel):
    estimate: float
    date: datetime


class OneRepMaxHistoryResponse(BaseModel):
    library_id: str
    exercise_name: str
    history: List[OneRepMaxHistoryItem]


class WeightSuggestionResponse(BaseModel):
    library_id: str
    exercise_name: str
    reps: Optional[str] = None
    intensity: Optional[str] = None
    suggested_weight: Optional[float] = None


class WeeklyVolumeResponse(BaseModel):
    week: str
    display: str
    volumes: Dict[str, float]


class VolumeHistoryResponse(BaseModel):
    weeks: List[WeeklyVolumeResponse]
