"""
Document-backed Course Catalog.

Course documents live at ``courses/{course_id}``. Sessions are grouped in
modules (``modules[].sessions[]``); older courses keep a flat top-level
``sessions[]`` list instead. Both are flattened into one ordered list.

One-on-one planning is stored per user:
- ``users/{user}/planned_sessions/{course}`` with ``by_date.{YYYY-MM-DD}``
  holding the slot id planned for that day
- ``users/{user}/planned_session_content/{slot}`` holding the slot content
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from application.exceptions import CourseNotFoundError
from application.ports.course_catalog import CourseInfo, SlotContent
from application.ports.document_store import DocumentStore, field_path, get_field
from domain.models import ExerciseRef, Session

logger = logging.getLogger(__name__)


def _order_key(item: Dict[str, Any]) -> Any:
    order = item.get("order")
    return order if isinstance(order, (int, float)) else float("inf")


def flatten_sessions(course: Dict[str, Any]) -> List[Session]:
    """
    Flatten modules into one ordered session list.

    Modules and sessions are sorted by ``order``; items without one keep
    their position after the ordered ones.
    """
    sessions: List[Session] = []
    modules = course.get("modules")
    if isinstance(modules, list):
        for module in sorted(modules, key=_order_key):
            for raw in sorted(module.get("sessions") or [], key=_order_key):
                sessions.append(
                    Session.model_validate({
                        **raw,
                        "module_id": raw.get("module_id") or module.get("id"),
                        "module_title": raw.get("module_title") or module.get("title"),
                    })
                )
        return sessions

    for raw in sorted(course.get("sessions") or [], key=_order_key):
        sessions.append(Session.model_validate(raw))
    return sessions


class DocumentCourseCatalog:
    """CourseCatalog implementation reading course documents."""

    def __init__(self, store: DocumentStore, today: Callable[[], date] = date.today):
        """
        Initialize the catalog.

        Args:
            store: Document store (injected)
            today: Date source for "planned for today" lookups
        """
        self._store = store
        self._today = today

    async def _get_course(self, course_id: str) -> Dict[str, Any]:
        course = await self._store.get_document(f"courses/{course_id}")
        if course is None:
            raise CourseNotFoundError(course_id)
        return course

    async def get_course_info(self, course_id: str) -> CourseInfo:
        course = await self._get_course(course_id)
        return CourseInfo(
            course_id=course_id,
            title=course.get("title") or "",
            is_one_on_one=bool(course.get("is_one_on_one")),
            minimum_sessions_per_week=course.get("minimum_sessions_per_week"),
        )

    async def get_flattened_sessions(self, course_id: str) -> List[Session]:
        course = await self._get_course(course_id)
        sessions = flatten_sessions(course)
        logger.debug("Course %s has %d sessions", course_id, len(sessions))
        return sessions

    async def get_planned_session_for_today(self, user_id: str, course_id: str) -> Optional[str]:
        planning = await self._store.get_document(f"users/{user_id}/planned_sessions/{course_id}")
        return get_field(planning, field_path("by_date", self._today().isoformat()))

    async def get_slot_content(
        self,
        user_id: str,
        course_id: str,
        slot_id: str,
    ) -> Optional[SlotContent]:
        content = await self._store.get_document(f"users/{user_id}/planned_session_content/{slot_id}")
        if not content:
            return None
        if content.get("course_id") not in (None, course_id):
            logger.warning("Slot %s belongs to course %s, not %s", slot_id, content.get("course_id"), course_id)
            return None
        return SlotContent(
            slot_id=slot_id,
            title=content.get("title"),
            description=content.get("description"),
            exercises=[ExerciseRef.model_validate(e) for e in content.get("exercises") or []],
        )
