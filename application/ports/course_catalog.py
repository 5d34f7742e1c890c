"""
Course Catalog Interface (Port).

Read-only access to course templates and, for one-on-one courses, to the
sessions a coach planned for a specific user.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from domain.models import ExerciseRef, Session


@dataclass
class CourseInfo:
    """Course-level settings the engine needs."""
    course_id: str
    title: str = ""
    is_one_on_one: bool = False
    minimum_sessions_per_week: Optional[int] = None


@dataclass
class SlotContent:
    """Content a coach attached to a one-on-one planned slot."""
    slot_id: str
    title: Optional[str] = None
    description: Optional[str] = None
    exercises: List[ExerciseRef] = field(default_factory=list)


class CourseCatalog(Protocol):
    """Abstract interface for course template access."""

    async def get_course_info(self, course_id: str) -> CourseInfo:
        """
        Get course settings.

        Raises:
            CourseNotFoundError: If the course does not exist
        """
        ...

    async def get_flattened_sessions(self, course_id: str) -> List[Session]:
        """
        Get every session of a course in order, modules flattened.

        Raises:
            CourseNotFoundError: If the course does not exist
        """
        ...

    async def get_planned_session_for_today(self, user_id: str, course_id: str) -> Optional[str]:
        """Get the session/slot id a coach planned for today, if any."""
        ...

    async def get_slot_content(
        self,
        user_id: str,
        course_id: str,
        slot_id: str,
    ) -> Optional[SlotContent]:
        """Get the content of a one-on-one slot, or None if empty."""
        ...
