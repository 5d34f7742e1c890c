"""
Monday-anchored week keys.

Weekly volume buckets and streaks are keyed by ``YYYY-Www`` where:

- the week of a date is the Monday-Sunday span containing it
- the year is the year of that Monday
- week 1 starts on the first Monday on or after January 1 of that year

This is NOT ISO-8601: a Monday that falls before the year's first Monday
(e.g. Monday 30 Dec 2024 is in 2024, Monday 6 Jan 2025 is 2025-W01) always
belongs to its own calendar year, and days of a year before its first
Monday belong to the last week of the previous year.
"""
import re
from datetime import date, timedelta
from typing import List, Optional, Tuple

WEEK_KEY_PATTERN = re.compile(r"^(\d{4})-W(\d{2})$")


def _monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _first_monday(year: int) -> date:
    jan1 = date(year, 1, 1)
    return jan1 + timedelta(days=(7 - jan1.weekday()) % 7)


def get_monday_week(day: Optional[date] = None) -> str:
    """
    Get the week key of a date.

    Args:
        day: Any date; defaults to today

    Returns:
        Week key such as "2026-W41"
    """
    day = day or date.today()
    monday = _monday_of(day)
    # Every Monday of a year is on or after that year's first Monday
    first_monday = _first_monday(monday.year)
    week = (monday - first_monday).days // 7 + 1
    return f"{monday.year}-W{week:02d}"


def current_week_key(today: Optional[date] = None) -> str:
    """Week key for today. Shared clock for volume buckets and streaks."""
    return get_monday_week(today)


def parse_week_key(week_key: str) -> Tuple[int, int]:
    match = WEEK_KEY_PATTERN.match(week_key or "")
    if not match:
        raise ValueError(f"Invalid week key: {week_key!r}")
    year, week = int(match.group(1)), int(match.group(2))
    if week < 1 or week > 53:
        raise ValueError(f"Invalid week number in key: {week_key!r}")
    return year, week


def get_week_dates(week_key: str) -> Tuple[date, date]:
    """
    Get the Monday and Sunday of a week.

    Raises:
        ValueError: If the key is malformed
    """
    year, week = parse_week_key(week_key)
    monday = _first_monday(year) + timedelta(weeks=week - 1)
    return monday, monday + timedelta(days=6)


def is_date_in_week(day: date, week_key: str) -> bool:
    monday, sunday = get_week_dates(week_key)
    return monday <= day <= sunday


def get_weeks_between(start: date, end: date) -> List[str]:
    """Week keys from ``start`` to ``end`` inclusive, oldest first."""
    if end < start:
        return []
    weeks: List[str] = []
    monday = _monday_of(start)
    while monday <= end:
        weeks.append(get_monday_week(monday))
        monday += timedelta(weeks=1)
    return weeks


def format_week_display(week_key: str) -> str:
    """
    Human readable label, e.g. "Week of 13-19 Oct" or "Week of 29 Sep-5 Oct".
    """
    monday, sunday = get_week_dates(week_key)
    if monday.month == sunday.month:
        return f"Week of {monday.day}-{sunday.day} {sunday:%b}"
    return f"Week of {monday.day} {monday:%b}-{sunday.day} {sunday:%b}"
