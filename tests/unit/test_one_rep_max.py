"""
Unit tests for One-Rep-Max estimation.

Tests cover:
- 1RM and weight suggestion formulas
- Best-set selection on the objective intensity
- OneRepMaxService storage, monotonic updates and PR detection
"""
import pytest

from backend.core.one_rep_max import (
    best_set_estimate,
    estimate_1rm,
    round_half_up,
    round_up_to_5,
    suggest_weight,
)
from domain.models import (
    ExerciseKey,
    PerformedExercise,
    PerformedSet,
    SetSpec,
)
from tests.fakes.clock import NOW


def squat(sets, planned=None, library_id="lib1", name="Back Squat"):
    """
    Build a performed squat.

    Without ``planned`` each set's intensity is also prescribed as the
    objective for that set.
    """
    if planned is None:
        planned = [{"reps": str(s.get("reps")), "intensity": s.get("intensity")} for s in sets]
    return PerformedExercise(
        exercise_id="e1",
        exercise_name=name,
        library_id=library_id,
        sets=[PerformedSet(**s) for s in sets],
        planned_sets=[SetSpec(**p) for p in planned],
    )


# =============================================================================
# Formula Tests
# =============================================================================


@pytest.mark.unit
class TestEstimate1RM:
    """Tests for the 1RM formula."""

    def test_intensity_eight(self):
        # 100 * 1.1665 / 0.95
        assert estimate_1rm(100, 5, 8) == 122.8

    def test_intensity_ten(self):
        assert estimate_1rm(100, 5, 10) == pytest.approx(116.6, abs=0.1)

    def test_lower_intensity_raises_estimate(self):
        assert estimate_1rm(100, 5, 6) > estimate_1rm(100, 5, 8)

    def test_rounded_to_one_decimal(self):
        result = estimate_1rm(87.5, 7, 9)
        assert result == round(result, 1)

    def test_round_half_up(self):
        assert round_half_up(2.25) == 2.3
        assert round_half_up(2.24) == 2.2


@pytest.mark.unit
class TestSuggestWeight:
    """Tests for the weight suggestion formula."""

    def test_rounds_up_to_multiple_of_five(self):
        # 100 / 1.333 = 75.02
        assert suggest_weight(100, 10, 10) == 80

    def test_result_is_multiple_of_five(self):
        assert suggest_weight(142.3, 6, 8) % 5 == 0

    def test_round_up_to_5(self):
        assert round_up_to_5(101) == 105
        assert round_up_to_5(100) == 100
        assert round_up_to_5(0.1) == 5


@pytest.mark.unit
class TestBestSetEstimate:
    """Tests for picking the best set of an exercise."""

    def test_picks_highest_estimate(self):
        exercise = squat([
            {"weight": 100, "reps": 5, "intensity": "8/10"},
            {"weight": 110, "reps": 3, "intensity": "9/10"},
        ])
        best = best_set_estimate(exercise)
        assert best.set_number == 2
        assert best.estimate == estimate_1rm(110, 3, 9)

    def test_uses_objective_intensity(self):
        exercise = squat(
            [{"weight": "100", "reps": "5"}],
            planned=[{"reps": "5", "intensity": "8/10"}],
        )
        assert best_set_estimate(exercise).estimate == 122.8

    def test_objective_intensity_wins_over_logged(self):
        exercise = squat(
            [{"weight": 100, "reps": 5, "intensity": "10/10"}],
            planned=[{"reps": "5", "intensity": "8/10"}],
        )
        assert best_set_estimate(exercise).estimate == 122.8

    def test_logged_intensity_without_objective_is_skipped(self):
        exercise = squat([{"weight": 100, "reps": 5, "intensity": "8/10"}], planned=[])
        assert best_set_estimate(exercise) is None

    def test_invalid_objective_intensity_is_skipped(self):
        exercise = squat(
            [{"weight": 100, "reps": 5, "intensity": "8/10"}],
            planned=[{"reps": "5", "intensity": "hard"}],
        )
        assert best_set_estimate(exercise) is None

    def test_skips_sets_without_intensity(self):
        exercise = squat([{"weight": 100, "reps": 5}])
        assert best_set_estimate(exercise) is None

    def test_skips_zero_weight(self):
        exercise = squat([{"weight": 0, "reps": 5, "intensity": "8/10"}])
        assert best_set_estimate(exercise) is None

    def test_skips_missing_reps(self):
        exercise = squat([{"weight": 100, "reps": "", "intensity": "8/10"}])
        assert best_set_estimate(exercise) is None


# =============================================================================
# Service Tests
# =============================================================================


@pytest.mark.unit
class TestOneRepMaxService:
    """Tests for OneRepMaxService with a fake store."""

    @pytest.mark.asyncio
    async def test_first_estimate_is_stored_silently(self, one_rep_max_service):
        records = await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}])]
        )

        assert records == []
        estimate = await one_rep_max_service.get_estimate("u1", ExerciseKey("lib1", "Back Squat"))
        assert estimate.current == 122.8
        assert estimate.achieved_with.weight == 100
        assert estimate.last_updated == NOW

    @pytest.mark.asyncio
    async def test_improvement_reports_pr(self, one_rep_max_service):
        await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}])]
        )
        records = await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 105, "reps": 5, "intensity": "8/10"}])]
        )

        assert len(records) == 1
        assert records[0].previous == 122.8
        assert records[0].estimate == estimate_1rm(105, 5, 8)
        assert records[0].achieved_with.set_number == 1

    @pytest.mark.asyncio
    async def test_estimate_never_decreases(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}])]
        )
        records = await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 80, "reps": 5, "intensity": "8/10"}])]
        )

        assert records == []
        assert (await one_rep_max_service.get_estimate("u1", key)).current == 122.8
        assert len(await one_rep_max_service.get_history("u1", key)) == 1

    @pytest.mark.asyncio
    async def test_equal_estimate_is_not_a_pr(self, one_rep_max_service):
        sets = [{"weight": 100, "reps": 5, "intensity": "8/10"}]
        await one_rep_max_service.record_session("u1", [squat(sets)])
        assert await one_rep_max_service.record_session("u1", [squat(sets)]) == []

    @pytest.mark.asyncio
    async def test_same_name_in_two_libraries_is_tracked_separately(self, one_rep_max_service):
        await one_rep_max_service.record_session("u1", [
            squat([{"weight": 100, "reps": 5, "intensity": "8/10"}], library_id="lib1"),
            squat([{"weight": 60, "reps": 5, "intensity": "8/10"}], library_id="lib2"),
        ])

        estimates = await one_rep_max_service.get_estimates("u1")
        assert estimates[ExerciseKey("lib1", "Back Squat")].current == 122.8
        assert estimates[ExerciseKey("lib2", "Back Squat")].current == estimate_1rm(60, 5, 8)

    @pytest.mark.asyncio
    async def test_names_with_dots_and_underscores(self, one_rep_max_service, store):
        name = "D.B. Press_incline"
        await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 30, "reps": 10, "intensity": "9/10"}], name=name)]
        )

        estimates = await one_rep_max_service.get_estimates("u1")
        assert ExerciseKey("lib1", name) in estimates
        stored = store.document("users/u1")["one_rep_max_estimates"]
        assert list(stored) == [ExerciseKey("lib1", name).storage_key]

    @pytest.mark.asyncio
    async def test_sets_without_objective_intensity_store_nothing(self, one_rep_max_service, store):
        records = await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}], planned=[{"reps": "5"}])]
        )

        assert records == []
        assert await one_rep_max_service.get_estimates("u1") == {}
        assert store.document("users/u1") is None

    @pytest.mark.asyncio
    async def test_malformed_exercise_is_skipped(self, one_rep_max_service):
        broken = squat([{"weight": 100, "reps": 5, "intensity": "8/10"}], library_id=None)
        ok = squat([{"weight": 100, "reps": 5, "intensity": "8/10"}], name="Deadlift")

        records = await one_rep_max_service.record_session("u1", [broken, ok])

        assert records == []
        assert list(await one_rep_max_service.get_estimates("u1")) == [ExerciseKey("lib1", "Deadlift")]

    @pytest.mark.asyncio
    async def test_history_is_ascending(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        for weight in (100, 105, 110):
            await one_rep_max_service.record_session(
                "u1", [squat([{"weight": weight, "reps": 5, "intensity": "8/10"}])]
            )

        history = await one_rep_max_service.get_history("u1", key)
        assert [h.estimate for h in history] == [
            estimate_1rm(100, 5, 8),
            estimate_1rm(105, 5, 8),
            estimate_1rm(110, 5, 8),
        ]

    @pytest.mark.asyncio
    async def test_history_limit(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        for weight in range(100, 130, 5):
            await one_rep_max_service.record_session(
                "u1", [squat([{"weight": weight, "reps": 5, "intensity": "8/10"}])]
            )

        history = await one_rep_max_service.get_history("u1", key, limit=2)
        assert [h.estimate for h in history] == [estimate_1rm(120, 5, 8), estimate_1rm(125, 5, 8)]

    @pytest.mark.asyncio
    async def test_reset_estimate(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}])]
        )

        await one_rep_max_service.reset_estimate("u1", key)

        assert await one_rep_max_service.get_estimate("u1", key) is None
        assert len(await one_rep_max_service.get_history("u1", key)) == 1

    @pytest.mark.asyncio
    async def test_suggest_for_set(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}])]
        )

        suggestion = await one_rep_max_service.suggest_for_set(
            "u1", key, SetSpec(reps="8-12", intensity="7/10")
        )
        assert suggestion == suggest_weight(122.8, 10, 7)

    @pytest.mark.asyncio
    async def test_suggest_without_estimate(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        assert await one_rep_max_service.suggest_for_set("u1", key, SetSpec(reps="5", intensity="8/10")) is None

    @pytest.mark.asyncio
    async def test_suggest_with_invalid_intensity(self, one_rep_max_service):
        key = ExerciseKey("lib1", "Back Squat")
        await one_rep_max_service.record_session(
            "u1", [squat([{"weight": 100, "reps": 5, "intensity": "8/10"}])]
        )
        assert await one_rep_max_service.suggest_for_set("u1", key, SetSpec(reps="5", intensity="hard")) is None
