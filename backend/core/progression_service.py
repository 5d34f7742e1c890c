"""
Session Progression Service.

Decides which session of a course a user should see next:
- Automatic: the session after the last completed one, wrapping to the
  first session at the end of a cycle
- Manual: a session the user picked, identified by id and list index
  (the same session id can appear more than once in a course)
- One-on-one: only sessions planned for the current week, showing the one
  planned for today if any

Reading the current session never changes stored progress. Progress only
moves forward through the completion use case, and through the explicit
cycle and go-back operations here.
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Callable, List, Optional, Tuple

from application.exceptions import NoSessionsAvailableError, SessionNotFoundError
from application.ports.course_catalog import CourseCatalog
from backend.core.cache import TTLCache, session_state_key
from backend.core.user_progress import UserProgressService
from backend.core.week_calculation import current_week_key, is_date_in_week
from backend.core.workout_resolver import WorkoutResolver
from domain.models import Progress, Session, Workout

logger = logging.getLogger(__name__)

DEFAULT_SESSION_STATE_TTL_SECONDS = 5 * 60


class SelectionMode(str, Enum):
    """How the current session was chosen."""
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    PLANNED_TODAY = "planned_today"
    NO_PLANNING_THIS_WEEK = "no_planning_this_week"
    NO_SESSION_TODAY = "no_session_today"


EMPTY_MODES = {SelectionMode.NO_PLANNING_THIS_WEEK, SelectionMode.NO_SESSION_TODAY}


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class ManualSelection:
    """A session the user picked from the course list."""
    session_id: str
    session_index: Optional[int] = None


@dataclass
class SessionState:
    """What the user should see for a course right now."""
    mode: SelectionMode
    progress: Progress
    session: Optional[Session] = None
    workout: Optional[Workout] = None
    index: int = 0
    all_sessions: List[Session] = field(default_factory=list)
    already_completed: bool = False
    cycle_complete: bool = False

    @property
    def is_manual(self) -> bool:
        return self.mode == SelectionMode.MANUAL

    @property
    def empty_reason(self) -> Optional[str]:
        """Reason shown instead of a session card, None when a session is set."""
        return self.mode.value if self.mode in EMPTY_MODES else None


# =============================================================================
# Selection Rules
# =============================================================================


def find_session_index(sessions: List[Session], session_id: Optional[str]) -> int:
    """Index of the first session with ``session_id``, or -1."""
    if session_id is None:
        return -1
    for index, session in enumerate(sessions):
        if session.id == session_id:
            return index
    return -1


def select_automatic(sessions: List[Session], last_completed: Optional[str]) -> Tuple[int, bool]:
    """
    Pick the session after the last completed one.

    Args:
        sessions: Flattened course sessions (non-empty)
        last_completed: Progress.last_session_completed

    Returns:
        (index, wrapped) where ``wrapped`` is True when the last completed
        session was the final one and selection restarted at index 0
    """
    last_index = find_session_index(sessions, last_completed)
    if last_index < 0:
        return 0, False
    if last_index + 1 >= len(sessions):
        return 0, True
    return last_index + 1, False


def select_manual(sessions: List[Session], session_id: str, session_index: Optional[int] = None) -> int:
    """
    Resolve a manual selection.

    The index wins when it points at a session with the same id, so the
    second occurrence of a repeated session can be selected.

    Raises:
        SessionNotFoundError: If no session has ``session_id``
    """
    if session_index is not None and 0 <= session_index < len(sessions):
        if sessions[session_index].id == session_id:
            return session_index

    index = find_session_index(sessions, session_id)
    if index < 0:
        raise SessionNotFoundError(session_id)
    return index


def filter_sessions_for_week(sessions: List[Session], week_key: str) -> List[Session]:
    """Keep sessions planned in ``week_key``; undated sessions always pass."""
    return [
        s for s in sessions
        if s.planned_date is None or is_date_in_week(s.planned_date, week_key)
    ]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Service
# =============================================================================


class ProgressionService:
    """
    Service for session selection and cycle management.

    Uses dependency injection for the course catalog, workout resolver,
    progress access and cache.
    """

    def __init__(
        self,
        catalog: CourseCatalog,
        resolver: WorkoutResolver,
        progress_service: UserProgressService,
        cache: TTLCache,
        session_ttl_seconds: float = DEFAULT_SESSION_STATE_TTL_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the service.

        Args:
            catalog: Course templates (injected)
            resolver: Exercise library join (injected)
            progress_service: Cached progress access (injected)
            cache: Shared TTL cache (injected)
            session_ttl_seconds: TTL of cached SessionState
            clock: Time source for progress timestamps
            today: Date source for week filtering
        """
        self.catalog = catalog
        self.resolver = resolver
        self.progress_service = progress_service
        self.cache = cache
        self.session_ttl_seconds = session_ttl_seconds
        self._clock = clock
        self._today = today

    async def get_current_session(
        self,
        user_id: str,
        course_id: str,
        *,
        force_refresh: bool = False,
        manual: Optional[ManualSelection] = None,
    ) -> SessionState:
        """
        Get the session a user should do next.

        Args:
            user_id: User ID
            course_id: Course ID
            force_refresh: Ignore the cached state
            manual: Explicit user selection, bypasses automatic rules

        Returns:
            SessionState. One-on-one courses may return an empty state
            (mode NO_PLANNING_THIS_WEEK or NO_SESSION_TODAY).

        Raises:
            CourseNotFoundError: If the course does not exist
            NoSessionsAvailableError: If a regular course has no sessions
            SessionNotFoundError: If a manual selection id is unknown
        """
        cache_key = session_state_key(user_id, course_id)
        if not force_refresh and manual is None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                return cached

        state = await self._build_state(user_id, course_id, manual)
        self.cache.set(cache_key, state, self.session_ttl_seconds)
        return state

    async def _build_state(
        self,
        user_id: str,
        course_id: str,
        manual: Optional[ManualSelection],
    ) -> SessionState:
        course = await self.catalog.get_course_info(course_id)
        sessions = await self.catalog.get_flattened_sessions(course_id)

        if course.is_one_on_one:
            sessions = filter_sessions_for_week(sessions, current_week_key(self._today()))
            if not sessions:
                progress = await self.progress_service.get_progress(user_id, course_id)
                return SessionState(mode=SelectionMode.NO_PLANNING_THIS_WEEK, progress=progress)
        elif not sessions:
            raise NoSessionsAvailableError(course_id)

        progress = await self.progress_service.get_progress(user_id, course_id)
        cycle_complete = False

        if manual is not None:
            index = select_manual(sessions, manual.session_id, manual.session_index)
            mode = SelectionMode.MANUAL
        elif course.is_one_on_one:
            planned_id = await self.catalog.get_planned_session_for_today(user_id, course_id)
            index = find_session_index(sessions, planned_id)
            if index < 0:
                logger.debug("No session planned today for user %s in %s", user_id, course_id)
                return SessionState(
                    mode=SelectionMode.NO_SESSION_TODAY,
                    progress=progress,
                    all_sessions=sessions,
                )
            mode = SelectionMode.PLANNED_TODAY
        else:
            index, cycle_complete = select_automatic(sessions, progress.last_session_completed)
            mode = SelectionMode.AUTOMATIC

        session = sessions[index]
        if course.is_one_on_one and not session.exercises:
            session = await self._with_slot_content(user_id, course_id, session)

        workout = await self.resolver.build_workout(session)
        return SessionState(
            mode=mode,
            progress=progress,
            session=session,
            workout=workout,
            index=index,
            all_sessions=sessions,
            already_completed=progress.has_completed(session.id),
            cycle_complete=cycle_complete,
        )

    async def _with_slot_content(self, user_id: str, course_id: str, session: Session) -> Session:
        slot = await self.catalog.get_slot_content(user_id, course_id, session.id)
        if slot is None:
            return session
        return session.model_copy(
            update={
                "exercises": slot.exercises,
                "title": slot.title or session.title,
                "description": slot.description or session.description,
            }
        )

    async def select_session(
        self,
        user_id: str,
        course_id: str,
        session_id: str,
        session_index: Optional[int] = None,
    ) -> SessionState:
        """Select a session manually. Does not change stored progress."""
        self.progress_service.clear_cache(user_id, course_id)
        return await self.get_current_session(
            user_id,
            course_id,
            manual=ManualSelection(session_id=session_id, session_index=session_index),
        )

    async def start_new_cycle(self, user_id: str, course_id: str) -> Progress:
        """
        Restart a course from its first session.

        Only ``last_session_completed`` is reset. ``total_sessions_completed``
        and ``all_sessions_completed`` carry over, so sessions done in an
        earlier cycle still show as already completed.
        """
        progress = await self.progress_service.get_progress(user_id, course_id, fresh=True)
        updated = progress.model_copy(
            update={
                "last_session_completed": None,
                "cycles_completed": progress.cycles_completed + 1,
                "current_cycle_start": self._clock(),
            }
        )
        await self.progress_service.save_progress(user_id, course_id, updated)
        self.progress_service.clear_cache(user_id, course_id)
        logger.info("User %s started cycle %d of %s", user_id, updated.cycles_completed + 1, course_id)
        return updated

    async def go_back_session(self, user_id: str, course_id: str, current_session_id: str) -> Progress:
        """
        Move back one session.

        Sets last_session_completed to the session two before the current
        one, so automatic selection lands on the previous session. Unknown
        ids and the first session are a no-op.
        """
        sessions = await self.catalog.get_flattened_sessions(course_id)
        progress = await self.progress_service.get_progress(user_id, course_id, fresh=True)

        current_index = find_session_index(sessions, current_session_id)
        if current_index <= 0:
            logger.debug("Go back ignored for session %s at index %d", current_session_id, current_index)
            return progress

        new_last = sessions[current_index - 2].id if current_index > 1 else None
        updated = progress.model_copy(
            update={
                "last_session_completed": new_last,
                "total_sessions_completed": max(0, progress.total_sessions_completed - 1),
            }
        )
        await self.progress_service.save_progress(user_id, course_id, updated)
        self.progress_service.clear_cache(user_id, course_id)
        return updated
