"""
Session template models.

A Session is read-only course data: an ordered list of exercise references,
each pointing into the exercise library by ``{library_id: exercise_name}``
and carrying the planned sets (objectives) for that exercise.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class SetSpec(BaseModel):
    """
    A planned set objective.

    Both values are free text as authored by the coach, e.g. ``"8-12"``
    reps at ``"8/10"`` intensity. Parsing happens in backend.core.set_parser.
    """

    reps: Optional[str] = Field(default=None, description="Target reps, e.g. '8' or '8-12'")
    intensity: Optional[str] = Field(default=None, description="Target intensity, e.g. '8/10'")

    @field_validator("reps", "intensity", mode="before")
    @classmethod
    def coerce_to_text(cls, v):
        """Accept numbers authored without quotes."""
        if v is None or isinstance(v, str):
            return v
        return str(v)


class ExerciseRef(BaseModel):
    """
    Reference from a session to an exercise library entry.

    ``primary`` maps a library id to the exercise name within that library.
    Only the first entry is used.
    """

    id: str
    primary: Dict[str, str] = Field(default_factory=dict)
    sets: List[SetSpec] = Field(default_factory=list)
    order: int = 0

    @property
    def primary_entry(self) -> Optional[Tuple[str, str]]:
        """Return ``(library_id, exercise_name)`` or None when not linked."""
        for library_id, exercise_name in self.primary.items():
            if library_id and exercise_name:
                return library_id, exercise_name
            return None
        return None


class Session(BaseModel):
    """A course session template."""

    id: str
    title: str = ""
    module_id: Optional[str] = None
    module_title: Optional[str] = None
    order: int = 0
    exercises: List[ExerciseRef] = Field(default_factory=list)
    planned_date: Optional[date] = None
    description: Optional[str] = None
    media_ref: Optional[str] = None
