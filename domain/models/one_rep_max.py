"""
One-rep-max estimate models and the composite exercise key.

Estimates are keyed by (library_id, exercise_name). The same display name
can exist in several libraries, so the name alone is not an identity.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from urllib.parse import quote, unquote

from pydantic import BaseModel

from domain.models.performance import AchievedWith


STORAGE_KEY_SEPARATOR = "_"


def _escape(value: str) -> str:
    # Separator and path delimiter must never appear raw inside a segment
    return quote(value, safe="").replace("_", "%5F").replace(".", "%2E")


@dataclass(frozen=True)
class ExerciseKey:
    """Identity of an exercise across libraries."""

    library_id: str
    exercise_name: str

    @classmethod
    def from_primary(cls, primary: dict) -> Optional["ExerciseKey"]:
        """Build a key from an ExerciseRef ``primary`` mapping."""
        for library_id, exercise_name in (primary or {}).items():
            if library_id and exercise_name:
                return cls(library_id, exercise_name)
            return None
        return None

    @property
    def storage_key(self) -> str:
        """Reversible key safe to use as a single document field name."""
        return f"{_escape(self.library_id)}{STORAGE_KEY_SEPARATOR}{_escape(self.exercise_name)}"

    @classmethod
    def from_storage_key(cls, storage_key: str) -> "ExerciseKey":
        library_part, sep, name_part = storage_key.partition(STORAGE_KEY_SEPARATOR)
        if not sep:
            raise ValueError(f"Invalid exercise storage key: {storage_key!r}")
        return cls(unquote(library_part), unquote(name_part))

    def __str__(self) -> str:
        return f"{self.library_id}/{self.exercise_name}"


class OneRepMaxEstimate(BaseModel):
    """Current best estimate for one exercise. Only ever increases."""

    library_id: str
    exercise_name: str
    current: float
    last_updated: datetime
    achieved_with: Optional[AchievedWith] = None

    @property
    def key(self) -> ExerciseKey:
        return ExerciseKey(self.library_id, self.exercise_name)


class OneRepMaxHistoryEntry(BaseModel):
    """Append-only record of an estimate improvement."""

    estimate: float
    date: datetime
