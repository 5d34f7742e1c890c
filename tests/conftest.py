"""
Shared pytest fixtures.

Provides fresh fakes for every port, a cache with a controllable clock,
and the services wired on top of them.
"""
import pytest

from backend.core.cache import TTLCache
from backend.core.muscle_volume import MuscleVolumeService
from backend.core.one_rep_max import OneRepMaxService
from backend.core.progression_service import ProgressionService
from backend.core.user_progress import UserProgressService
from backend.core.workout_resolver import WorkoutResolver
from tests.fakes import FakeCourseCatalog, FakeDocumentStore, FakeExerciseLibrary
from tests.fakes.clock import NOW, TODAY, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> TTLCache:
    return TTLCache(default_ttl_seconds=300, max_entries=100, clock=clock)


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def library() -> FakeExerciseLibrary:
    return FakeExerciseLibrary()


@pytest.fixture
def catalog() -> FakeCourseCatalog:
    return FakeCourseCatalog()


@pytest.fixture
def progress_service(store, cache) -> UserProgressService:
    return UserProgressService(store, cache)


@pytest.fixture
def resolver(library) -> WorkoutResolver:
    return WorkoutResolver(library)


@pytest.fixture
def progression_service(catalog, resolver, progress_service, cache) -> ProgressionService:
    return ProgressionService(
        catalog=catalog,
        resolver=resolver,
        progress_service=progress_service,
        cache=cache,
        clock=lambda: NOW,
        today=lambda: TODAY,
    )


@pytest.fixture
def one_rep_max_service(store) -> OneRepMaxService:
    return OneRepMaxService(store, clock=lambda: NOW)


@pytest.fixture
def volume_service(store) -> MuscleVolumeService:
    return MuscleVolumeService(store)
