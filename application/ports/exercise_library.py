"""
Exercise Library Interface (Port).

Resolves ``(library_id, exercise_name)`` references to the display data and
muscle activation table of a library exercise.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Protocol


@dataclass
class ExerciseLibraryEntry:
    """An exercise as stored in a library document."""
    library_id: str
    name: str
    description: str = ""
    media_ref: Optional[str] = None
    muscle_activation: Dict[str, float] = field(default_factory=dict)


class ExerciseLibrary(Protocol):
    """Abstract interface for exercise library lookups."""

    async def resolve_exercise(self, library_id: str, exercise_name: str) -> ExerciseLibraryEntry:
        """
        Look up one exercise.

        Args:
            library_id: Library document id
            exercise_name: Exercise name within that library

        Returns:
            ExerciseLibraryEntry

        Raises:
            ExerciseNotFoundError: If the library or the exercise does not exist
        """
        ...
