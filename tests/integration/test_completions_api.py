"""
Integration tests for the Completions API endpoint.

Tests cover:
- The three completion input kinds
- Personal records across completions
- Validation and persistence errors
"""
from datetime import datetime, timezone

import pytest

from backend.core.week_calculation import get_monday_week
from tests.integration.payloads import COURSE, TEST_USER, squat_completion

pytestmark = pytest.mark.integration

URL = f"/completions/courses/{COURSE}"


class TestCompleteSession:
    """Tests for POST /completions/courses/{course_id}."""

    def test_performed_session(self, client, api_store):
        response = client.post(URL, json=squat_completion())

        assert response.status_code == 200
        data = response.json()
        assert data["session_id"] == "s1"
        assert data["is_skip"] is False
        assert data["progress"]["all_sessions_completed"] == ["s1"]
        assert data["progress"]["weekly_streak"]["current_streak"] == 1
        assert data["personal_records"] == []
        assert data["session_muscle_volumes"] == {"quads": 3.0, "glutes": 1.5}
        assert data["stats"] == {
            "total_exercises": 1,
            "total_sets": 3,
            "total_reps": 15.0,
            "total_weight": 1500.0,
            "duration_minutes": 40,
        }
        assert len(api_store.records(f"users/{TEST_USER}/session_history")) == 1

    def test_personal_record_on_improvement(self, client):
        client.post(URL, json=squat_completion(weight=100))

        data = client.post(URL, json=squat_completion(weight=110)).json()

        assert len(data["personal_records"]) == 1
        record = data["personal_records"][0]
        assert record["exercise_name"] == "Back Squat"
        assert record["library_id"] == "lib1"
        assert record["previous"] == 122.8
        assert record["estimate"] > record["previous"]

    def test_volume_lands_in_current_week(self, client):
        client.post(URL, json=squat_completion())
        week = get_monday_week(datetime.now(timezone.utc).date())

        data = client.get("/analytics/muscle-volume", params={"week": week}).json()

        assert data["volumes"] == {"quads": 3.0, "glutes": 1.5}

    def test_workout_kind(self, client):
        session = client.get(f"/progression/courses/{COURSE}/session").json()

        response = client.post(URL, json={
            "kind": "workout",
            "workout": session["workout"],
            "performed": {"e1": [
                {"reps": 5, "weight": 100, "intensity": "8/10"},
                {"reps": 5, "weight": 100, "intensity": "8/10"},
            ]},
            "duration_minutes": 35,
        })

        assert response.status_code == 200
        data = response.json()
        assert data["session_id"] == "s1"
        assert data["progress"]["all_sessions_completed"] == ["s1"]
        assert data["session_muscle_volumes"] == {"quads": 2.0, "glutes": 1.0}

    def test_workout_kind_without_logged_intensity(self, client):
        session = client.get(f"/progression/courses/{COURSE}/session").json()

        response = client.post(URL, json={
            "kind": "workout",
            "workout": session["workout"],
            "performed": {"e1": [{"reps": 5, "weight": 100}, {"reps": 5, "weight": 100}]},
        })

        data = response.json()
        assert data["session_muscle_volumes"] == {}
        assert data["progress"]["all_sessions_completed"] == ["s1"]

    def test_skip(self, client, api_store):
        response = client.post(URL, json={"kind": "skip", "session_id": "s1"})

        assert response.status_code == 200
        data = response.json()
        assert data["is_skip"] is True
        assert data["progress"]["last_session_completed"] == "s1"
        assert data["progress"]["all_sessions_completed"] == []
        assert data["personal_records"] == []
        assert api_store.subcollection_paths() == []

    def test_unknown_kind_rejected(self, client):
        response = client.post(URL, json={"kind": "teleport", "session_id": "s1"})
        assert response.status_code == 422

    def test_missing_session_id_rejected(self, client):
        response = client.post(URL, json={"kind": "skip"})
        assert response.status_code == 422

    def test_progress_failure_is_503(self, client, api_store):
        api_store.fail("update_document", f"users/{TEST_USER}")

        response = client.post(URL, json=squat_completion())

        assert response.status_code == 503

    def test_history_failure_is_503(self, client, api_store):
        api_store.fail("append_to_subcollection", f"users/{TEST_USER}/session_history")

        response = client.post(URL, json=squat_completion())

        assert response.status_code == 503
        progress = api_store.document(f"users/{TEST_USER}")["course_progress"][COURSE]
        assert progress["last_session_completed"] == "s1"

    def test_analytics_failure_does_not_fail_request(self, client, api_store):
        api_store.fail("append_to_subcollection", f"users/{TEST_USER}/one_rep_max_history")

        response = client.post(URL, json=squat_completion())

        assert response.status_code == 200
        assert response.json()["session_muscle_volumes"] == {"quads": 3.0, "glutes": 1.5}
