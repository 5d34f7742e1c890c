"""
Fake Exercise Library for Testing.

In-memory implementation of ExerciseLibrary.
"""
from typing import Dict, Optional, Set, Tuple

from application.exceptions import ExerciseNotFoundError
from application.ports.exercise_library import ExerciseLibraryEntry


class FakeExerciseLibrary:
    """
    In-memory fake implementation of ExerciseLibrary.

    Entries are keyed by (library_id, exercise_name). Lookups are counted
    so tests can assert on caching and concurrency.
    """

    def __init__(self, entries: Optional[Dict[Tuple[str, str], ExerciseLibraryEntry]] = None):
        self._entries: Dict[Tuple[str, str], ExerciseLibraryEntry] = dict(entries or {})
        self._broken: Set[Tuple[str, str]] = set()
        self.lookups = 0

    def reset(self) -> None:
        self._entries.clear()
        self._broken.clear()
        self.lookups = 0

    def seed(
        self,
        library_id: str,
        name: str,
        *,
        description: str = "",
        media_ref: Optional[str] = None,
        muscle_activation: Optional[Dict[str, float]] = None,
    ) -> ExerciseLibraryEntry:
        """Add one exercise."""
        entry = ExerciseLibraryEntry(
            library_id=library_id,
            name=name,
            description=description,
            media_ref=media_ref,
            muscle_activation=dict(muscle_activation or {}),
        )
        self._entries[(library_id, name)] = entry
        return entry

    def break_lookup(self, library_id: str, name: str) -> None:
        """Make one lookup raise a generic error."""
        self._broken.add((library_id, name))

    async def resolve_exercise(self, library_id: str, exercise_name: str) -> ExerciseLibraryEntry:
        self.lookups += 1
        if (library_id, exercise_name) in self._broken:
            raise RuntimeError("library backend unavailable")
        entry = self._entries.get((library_id, exercise_name))
        if entry is None:
            raise ExerciseNotFoundError(library_id, exercise_name)
        return entry
