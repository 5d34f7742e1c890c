"""
Fixtures for API integration tests.

The app is created with test settings and its ports are overridden with
in-memory fakes; services, use cases and routers run for real.
"""
import pytest
from fastapi.testclient import TestClient

from api.deps import (
    get_course_catalog,
    get_current_user,
    get_document_store,
    get_exercise_library,
)
from backend.main import create_app
from backend.settings import Settings
from tests.integration.payloads import COURSE, TEST_USER
from tests.fakes import (
    FakeCourseCatalog,
    FakeDocumentStore,
    FakeExerciseLibrary,
    make_exercise,
    make_session,
)


@pytest.fixture
def api_store():
    return FakeDocumentStore()


@pytest.fixture
def api_library():
    library = FakeExerciseLibrary()
    library.seed("lib1", "Back Squat", muscle_activation={"quads": 100, "glutes": 50})
    library.seed("lib1", "Bench Press", muscle_activation={"chest": 100, "triceps": 40})
    return library


@pytest.fixture
def api_catalog():
    catalog = FakeCourseCatalog()
    catalog.seed_course(COURSE, [
        make_session("s1", title="Lower", order=1, exercises=[
            make_exercise("e1", name="Back Squat", sets=[{"reps": "5", "intensity": "8/10"}] * 3),
        ]),
        make_session("s2", title="Upper", order=2, exercises=[
            make_exercise("e2", name="Bench Press"),
        ]),
        make_session("s3", title="Full", order=3, exercises=[
            make_exercise("e3", name="Back Squat"),
            make_exercise("e4", name="Bench Press"),
        ]),
    ])
    return catalog


@pytest.fixture
def app(api_store, api_library, api_catalog):
    """App with fake ports and a fixed caller."""
    app = create_app(Settings(environment="test", _env_file=None))
    app.dependency_overrides[get_document_store] = lambda: api_store
    app.dependency_overrides[get_exercise_library] = lambda: api_library
    app.dependency_overrides[get_course_catalog] = lambda: api_catalog
    app.dependency_overrides[get_current_user] = lambda: TEST_USER
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)
