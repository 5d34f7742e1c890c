"""
Resolved workout models.

A Workout is a Session whose exercise references have been joined with the
exercise library: display name, description, media and the muscle
activation table used for volume accounting.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models.session import ExerciseRef


class ResolvedExercise(ExerciseRef):
    """
    An ExerciseRef enriched with library data.

    When the library lookup fails the exercise is still returned as a
    placeholder: ``name`` is the exercise id and the activation table is empty.
    """

    name: str
    description: str = ""
    media_ref: Optional[str] = None
    muscle_activation: Dict[str, float] = Field(
        default_factory=dict,
        description="Muscle name -> activation percent (0-100)",
    )
    resolved: bool = Field(
        default=True,
        description="False when the library entry could not be loaded",
    )


class Workout(BaseModel):
    """A session ready to be displayed and performed."""

    id: str
    session_id: str
    title: str = ""
    description: Optional[str] = None
    module_id: Optional[str] = None
    media_ref: Optional[str] = None
    exercises: List[ResolvedExercise] = Field(default_factory=list)

    @property
    def exercise_count(self) -> int:
        return len(self.exercises)
