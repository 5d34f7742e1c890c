"""
Unit tests for WorkoutResolver.

Tests cover:
- Library join of exercise references
- Placeholders for failed or missing lookups
- Activation lookup for performed exercises
"""
import pytest

from domain.models import PerformedExercise
from tests.fakes import make_exercise, make_session


@pytest.mark.unit
class TestBuildWorkout:
    """Tests for build_workout."""

    @pytest.mark.asyncio
    async def test_resolves_library_data(self, resolver, library):
        library.seed(
            "lib1", "Squat",
            description="Barbell back squat",
            media_ref="media/squat.mp4",
            muscle_activation={"quads": 100, "glutes": 60},
        )
        session = make_session(
            "s1", title="Leg Day", exercises=[make_exercise("e1", name="Squat")]
        )

        workout = await resolver.build_workout(session)

        assert workout.id == "workout-s1"
        assert workout.session_id == "s1"
        assert workout.title == "Leg Day"
        exercise = workout.exercises[0]
        assert exercise.name == "Squat"
        assert exercise.description == "Barbell back squat"
        assert exercise.media_ref == "media/squat.mp4"
        assert exercise.muscle_activation == {"quads": 100.0, "glutes": 60.0}
        assert exercise.resolved is True
        assert exercise.sets[0].reps == "8"

    @pytest.mark.asyncio
    async def test_keeps_session_order(self, resolver, library):
        library.seed("lib1", "A")
        library.seed("lib1", "B")
        session = make_session("s1", exercises=[
            make_exercise("e1", name="A", order=0),
            make_exercise("e2", name="B", order=1),
        ])

        workout = await resolver.build_workout(session)

        assert [e.id for e in workout.exercises] == ["e1", "e2"]

    @pytest.mark.asyncio
    async def test_missing_entry_becomes_placeholder(self, resolver, library):
        library.seed("lib1", "Squat")
        session = make_session("s1", exercises=[
            make_exercise("e1", name="Squat"),
            make_exercise("e2", name="Unknown"),
        ])

        workout = await resolver.build_workout(session)

        placeholder = workout.exercises[1]
        assert placeholder.resolved is False
        assert placeholder.name == "e2"
        assert placeholder.muscle_activation == {}
        assert workout.exercises[0].resolved is True

    @pytest.mark.asyncio
    async def test_library_error_becomes_placeholder(self, resolver, library):
        library.seed("lib1", "Squat")
        library.break_lookup("lib1", "Squat")

        workout = await resolver.build_workout(
            make_session("s1", exercises=[make_exercise("e1", name="Squat")])
        )

        assert workout.exercises[0].resolved is False

    @pytest.mark.asyncio
    async def test_unlinked_exercise_is_not_looked_up(self, resolver, library):
        session = make_session("s1", exercises=[make_exercise("e1", library_id="", name="x")])

        workout = await resolver.build_workout(session)

        assert workout.exercises[0].resolved is False
        assert library.lookups == 0

    @pytest.mark.asyncio
    async def test_empty_session(self, resolver):
        workout = await resolver.build_workout(make_session("s1"))
        assert workout.exercises == []


@pytest.mark.unit
class TestResolveMuscleActivation:
    """Tests for resolve_muscle_activation."""

    @pytest.mark.asyncio
    async def test_only_missing_tables_are_looked_up(self, resolver, library):
        library.seed("lib1", "Squat", muscle_activation={"quads": 100})
        exercises = [
            PerformedExercise(exercise_id="e1", exercise_name="Squat", library_id="lib1"),
            PerformedExercise(
                exercise_id="e2", exercise_name="Row", library_id="lib1",
                muscle_activation={"lats": 80},
            ),
        ]

        activations = await resolver.resolve_muscle_activation(exercises)

        assert activations == {"e1": {"quads": 100.0}}
        assert library.lookups == 1

    @pytest.mark.asyncio
    async def test_failures_map_to_empty(self, resolver, library):
        library.break_lookup("lib1", "Squat")
        exercises = [
            PerformedExercise(exercise_id="e1", exercise_name="Squat", library_id="lib1"),
            PerformedExercise(exercise_id="e2", exercise_name="Nope", library_id="lib1"),
        ]

        activations = await resolver.resolve_muscle_activation(exercises)

        assert activations == {"e1": {}, "e2": {}}

    @pytest.mark.asyncio
    async def test_nothing_missing(self, resolver, library):
        exercises = [
            PerformedExercise(
                exercise_id="e1", exercise_name="Squat", library_id="lib1",
                muscle_activation={"quads": 100},
            ),
        ]
        assert await resolver.resolve_muscle_activation(exercises) == {}
        assert library.lookups == 0
