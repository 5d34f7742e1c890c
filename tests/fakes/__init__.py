"""
Fake Port Implementations for Testing.

This package provides in-memory fake implementations of the application
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeDocumentStore, make_session, create_course_catalog

    store = FakeDocumentStore()
    store.seed_document("users/u1", {"course_progress": {}})

    catalog = create_course_catalog("course-1", num_sessions=4)
"""
from typing import Dict, List, Optional

from domain.models import ExerciseRef, Session, SetSpec

from tests.fakes.course_catalog import FakeCourseCatalog
from tests.fakes.document_store import FakeDocumentStore
from tests.fakes.exercise_library import FakeExerciseLibrary


# =============================================================================
# Factory Functions
# =============================================================================


def make_exercise(
    exercise_id: str,
    library_id: str = "lib1",
    name: Optional[str] = None,
    sets: Optional[List[Dict[str, str]]] = None,
    order: int = 0,
) -> ExerciseRef:
    """Build an ExerciseRef with ``sets`` given as {"reps", "intensity"} dicts."""
    return ExerciseRef(
        id=exercise_id,
        primary={library_id: name or exercise_id},
        sets=[SetSpec(**s) for s in (sets or [{"reps": "8", "intensity": "8/10"}])],
        order=order,
    )


def make_session(
    session_id: str,
    *,
    exercises: Optional[List[ExerciseRef]] = None,
    order: int = 0,
    **kwargs,
) -> Session:
    return Session(
        id=session_id,
        title=kwargs.pop("title", f"Session {session_id}"),
        order=order,
        exercises=exercises or [],
        **kwargs,
    )


def create_course_catalog(
    course_id: str = "course-1",
    num_sessions: int = 3,
    **course_kwargs,
) -> FakeCourseCatalog:
    """
    Create a catalog with one course of ``num_sessions`` sessions.

    Sessions are named s1..sN and each has one exercise.
    """
    catalog = FakeCourseCatalog()
    sessions = [
        make_session(f"s{i}", order=i, exercises=[make_exercise(f"e{i}", name=f"Exercise {i}")])
        for i in range(1, num_sessions + 1)
    ]
    catalog.seed_course(course_id, sessions, **course_kwargs)
    return catalog


__all__ = [
    "FakeCourseCatalog",
    "FakeDocumentStore",
    "FakeExerciseLibrary",
    "make_exercise",
    "make_session",
    "create_course_catalog",
]
