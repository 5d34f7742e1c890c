"""
Weekly training streak.

A streak counts consecutive weeks in which the user completed at least
the course's minimum number of sessions. It is evaluated lazily: when the
first workout of a new week is recorded, the previous week decides
whether the streak grows or resets.
"""
from datetime import datetime
from typing import Optional

from domain.models import WeeklyStreak

DEFAULT_MINIMUM_SESSIONS_PER_WEEK = 3


def advance_weekly_streak(
    streak: Optional[WeeklyStreak],
    current_week: str,
    now: datetime,
    minimum_sessions: int = DEFAULT_MINIMUM_SESSIONS_PER_WEEK,
) -> WeeklyStreak:
    """
    Record one workout in the streak.

    Args:
        streak: Stored streak, or None for a first workout
        current_week: Week key of the workout
        now: Workout timestamp
        minimum_sessions: Sessions needed for a week to count

    Returns:
        Updated streak
    """
    if streak is None or streak.week_start is None:
        return WeeklyStreak(
            current_streak=1,
            sessions_completed_this_week=1,
            week_start=current_week,
            last_workout_date=now,
        )

    if streak.week_start != current_week:
        met_minimum = streak.sessions_completed_this_week >= minimum_sessions
        return WeeklyStreak(
            current_streak=streak.current_streak + 1 if met_minimum else 0,
            sessions_completed_this_week=1,
            week_start=current_week,
            last_workout_date=now,
        )

    return streak.model_copy(
        update={
            "sessions_completed_this_week": streak.sessions_completed_this_week + 1,
            "last_workout_date": now,
        }
    )
