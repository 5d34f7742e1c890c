"""
Per-user, per-course progress.

``total_sessions_completed`` is an independent counter that keeps growing
across cycles. Starting a new cycle only clears ``last_session_completed``;
``all_sessions_completed`` is kept.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class WeeklyStreak(BaseModel):
    """Consecutive weeks meeting the course's minimum session count."""

    current_streak: int = 0
    sessions_completed_this_week: int = 0
    week_start: Optional[str] = Field(default=None, description="Week key, e.g. 2026-W41")
    last_workout_date: Optional[datetime] = None


class Progress(BaseModel):
    """Progress of one user through one course."""

    last_session_completed: Optional[str] = None
    all_sessions_completed: List[str] = Field(default_factory=list)
    total_sessions_completed: int = 0
    cycles_completed: int = 0
    last_activity: Optional[datetime] = None
    current_cycle_start: Optional[datetime] = None
    weekly_streak: Optional[WeeklyStreak] = None

    @field_validator("all_sessions_completed")
    @classmethod
    def dedupe_completed(cls, v: List[str]) -> List[str]:
        """Keep first occurrence order, drop duplicates."""
        return list(dict.fromkeys(v))

    def has_completed(self, session_id: str) -> bool:
        return session_id in self.all_sessions_completed

    def record_completion(
        self,
        session_id: str,
        *,
        completed_at: datetime,
        mark_completed: bool,
    ) -> "Progress":
        """
        Return a copy advanced past ``session_id``.

        Args:
            session_id: The session just finished
            completed_at: Timestamp stored as last_activity
            mark_completed: Whether to add the id to all_sessions_completed
                (False for skips)

        Returns:
            New Progress instance
        """
        completed = list(self.all_sessions_completed)
        if mark_completed and session_id not in completed:
            completed.append(session_id)
        return self.model_copy(
            update={
                "last_session_completed": session_id,
                "all_sessions_completed": completed,
                "total_sessions_completed": self.total_sessions_completed + 1,
                "last_activity": completed_at,
            }
        )
