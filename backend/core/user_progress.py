"""
Cached access to per-course progress.

Progress is stored on the user document under ``course_progress.{course_id}``
and cached for a long TTL. Writes go straight to the store and refresh the
cache entry; callers that need a fresh read (the completion flow) bypass
the cache with ``fresh=True``.
"""
import logging
from typing import Optional

from application.ports.document_store import DocumentStore, field_path, get_field
from backend.core.cache import TTLCache, progress_key, session_state_key
from domain.models import Progress

logger = logging.getLogger(__name__)

PROGRESS_FIELD = "course_progress"
DEFAULT_PROGRESS_TTL_SECONDS = 24 * 60 * 60


class UserProgressService:
    """Reads and writes Progress documents through the shared cache."""

    def __init__(
        self,
        store: DocumentStore,
        cache: TTLCache,
        ttl_seconds: float = DEFAULT_PROGRESS_TTL_SECONDS,
    ):
        self.store = store
        self.cache = cache
        self.ttl_seconds = ttl_seconds

    async def get_progress(self, user_id: str, course_id: str, *, fresh: bool = False) -> Progress:
        """
        Get progress for a course, defaulting to an empty Progress.

        Args:
            user_id: User ID
            course_id: Course ID
            fresh: Skip the cache and read from the store
        """
        key = progress_key(user_id, course_id)
        if not fresh:
            cached = self.cache.get(key)
            if cached is not None:
                return cached.model_copy(deep=True)

        document = await self.store.get_document(f"users/{user_id}")
        raw = get_field(document, field_path(PROGRESS_FIELD, course_id))
        progress = Progress.model_validate(raw) if raw else Progress()
        self.cache.set(key, progress.model_copy(deep=True), self.ttl_seconds)
        return progress

    async def save_progress(self, user_id: str, course_id: str, progress: Progress) -> None:
        """Persist progress and refresh its cache entry."""
        await self.store.update_document(
            f"users/{user_id}",
            {field_path(PROGRESS_FIELD, course_id): progress.model_dump(mode="json")},
        )
        self.cache.set(progress_key(user_id, course_id), progress.model_copy(deep=True), self.ttl_seconds)

    def clear_cache(self, user_id: str, course_id: Optional[str] = None) -> None:
        """
        Drop cached session state and progress.

        Args:
            user_id: User ID
            course_id: Course to clear; all of the user's courses when None
        """
        if course_id is None:
            self.cache.invalidate_prefix(session_state_key(user_id, ""))
            self.cache.invalidate_prefix(progress_key(user_id, ""))
        else:
            self.cache.invalidate(session_state_key(user_id, course_id))
            self.cache.invalidate(progress_key(user_id, course_id))
        logger.debug("Cleared cache for user %s course %s", user_id, course_id or "*")
