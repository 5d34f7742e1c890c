"""
Document-backed Exercise Library.

Library documents live at ``exercises_library/{library_id}`` and hold one
entry per exercise name:

    {
        "Back Squat": {
            "description": "...",
            "media_ref": "...",
            "muscle_activation": {"quads": 100, "glutes": 60}
        }
    }

Lookups are cached in the shared TTL cache.
"""
import logging
from typing import Any, Dict, Optional

from application.exceptions import ExerciseNotFoundError
from application.ports.document_store import DocumentStore
from application.ports.exercise_library import ExerciseLibraryEntry
from backend.core.cache import TTLCache, library_entry_key

logger = logging.getLogger(__name__)

LIBRARY_COLLECTION = "exercises_library"
DEFAULT_LIBRARY_TTL_SECONDS = 5 * 60


def _entry_from_document(library_id: str, name: str, data: Dict[str, Any]) -> ExerciseLibraryEntry:
    return ExerciseLibraryEntry(
        library_id=library_id,
        name=data.get("name") or name,
        description=data.get("description") or "",
        media_ref=data.get("media_ref"),
        muscle_activation=dict(data.get("muscle_activation") or {}),
    )


class DocumentExerciseLibrary:
    """ExerciseLibrary implementation reading library documents."""

    def __init__(
        self,
        store: DocumentStore,
        cache: Optional[TTLCache] = None,
        ttl_seconds: float = DEFAULT_LIBRARY_TTL_SECONDS,
    ):
        """
        Initialize the library.

        Args:
            store: Document store (injected)
            cache: Shared cache; lookups are not cached when None
            ttl_seconds: TTL of cached entries
        """
        self._store = store
        self._cache = cache
        self._ttl = ttl_seconds

    async def resolve_exercise(self, library_id: str, exercise_name: str) -> ExerciseLibraryEntry:
        key = library_entry_key(library_id, exercise_name)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        document = await self._store.get_document(f"{LIBRARY_COLLECTION}/{library_id}")
        data = (document or {}).get(exercise_name)
        if not isinstance(data, dict):
            logger.warning("Exercise %s not found in library %s", exercise_name, library_id)
            raise ExerciseNotFoundError(library_id, exercise_name)

        entry = _entry_from_document(library_id, exercise_name, data)
        if self._cache is not None:
            self._cache.set(key, entry, self._ttl)
        return entry
