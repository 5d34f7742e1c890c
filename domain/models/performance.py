"""
Completion-side models.

What the user actually did in a session, and the tagged input accepted by
the completion use case. The ``kind`` discriminator selects one of three
shapes:

- ``performed_session``: exercises already in PerformedExercise form
- ``workout``: a resolved Workout plus performed sets keyed by exercise id
- ``skip``: the session is marked done without any data
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from domain.models.session import SetSpec
from domain.models.workout import Workout


Number = Union[int, float]


class PerformedSet(BaseModel):
    """A set as logged by the user. Any field may be empty."""

    reps: Optional[Union[Number, str]] = None
    weight: Optional[Union[Number, str]] = None
    intensity: Optional[str] = None


class PerformedExercise(BaseModel):
    """
    One exercise of a completed session.

    ``planned_sets[i]`` is the objective matching ``sets[i]``. Its intensity
    drives the 1RM estimate; muscle volume uses the logged intensity only.
    """

    exercise_id: str
    exercise_name: str
    library_id: Optional[str] = None
    sets: List[PerformedSet] = Field(default_factory=list)
    planned_sets: List[SetSpec] = Field(default_factory=list)
    muscle_activation: Optional[Dict[str, float]] = None

    def planned_set_at(self, index: int) -> Optional[SetSpec]:
        if 0 <= index < len(self.planned_sets):
            return self.planned_sets[index]
        return None


class AchievedWith(BaseModel):
    """The set that produced an estimate."""

    weight: float
    reps: float
    set_number: Optional[int] = None


class PersonalRecord(BaseModel):
    """A new best 1RM estimate beating a previously stored one."""

    exercise_name: str
    library_id: str
    achieved_with: AchievedWith
    estimate: float
    previous: float


# =============================================================================
# Completion Input (tagged union)
# =============================================================================


class PerformedSessionInput(BaseModel):
    """Completion submitted with exercises already flattened."""

    kind: Literal["performed_session"] = "performed_session"
    session_id: str
    title: Optional[str] = None
    duration_minutes: Optional[int] = None
    exercises: List[PerformedExercise] = Field(default_factory=list)


class CompletedWorkoutInput(BaseModel):
    """Completion submitted as the displayed workout plus what was logged."""

    kind: Literal["workout"] = "workout"
    workout: Workout
    performed: Dict[str, List[PerformedSet]] = Field(
        default_factory=dict,
        description="Exercise id -> performed sets",
    )
    duration_minutes: Optional[int] = None

    @property
    def session_id(self) -> str:
        return self.workout.session_id


class SkippedSessionInput(BaseModel):
    """Session marked complete without performing it."""

    kind: Literal["skip"] = "skip"
    session_id: str


CompletionInput = Annotated[
    Union[PerformedSessionInput, CompletedWorkoutInput, SkippedSessionInput],
    Field(discriminator="kind"),
]
