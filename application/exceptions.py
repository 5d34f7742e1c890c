"""
Application-level exceptions for the training engine.

Fatal-to-caller errors propagate out of the services and use cases and
are mapped to HTTP status codes by the routers. Analytics failures during
completion are logged and swallowed instead of raised.
"""

from typing import Optional


class TrainingEngineError(Exception):
    """Base exception for training engine errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CourseNotFoundError(TrainingEngineError):
    """Raised when a course does not exist."""

    def __init__(self, course_id: str):
        super().__init__(f"Course not found: {course_id}", {"course_id": course_id})
        self.course_id = course_id


class NoSessionsAvailableError(TrainingEngineError):
    """Raised when a regular course has no sessions at all."""

    def __init__(self, course_id: str):
        super().__init__(
            f"No sessions available for course: {course_id}",
            {"course_id": course_id},
        )
        self.course_id = course_id


class SessionNotFoundError(TrainingEngineError):
    """Raised when a manually selected session id is not in the course."""

    def __init__(self, session_id: str, course_id: Optional[str] = None):
        super().__init__(
            f"Session not found: {session_id}",
            {"session_id": session_id, "course_id": course_id},
        )
        self.session_id = session_id


class ExerciseNotFoundError(TrainingEngineError):
    """Raised when a library or an exercise inside it does not exist."""

    def __init__(self, library_id: str, exercise_name: str):
        super().__init__(
            f"Exercise not found: {exercise_name} in library {library_id}",
            {"library_id": library_id, "exercise_name": exercise_name},
        )
        self.library_id = library_id
        self.exercise_name = exercise_name


class PersistenceError(TrainingEngineError):
    """Base class for store failures that must reach the caller."""


class ProgressPersistenceError(PersistenceError):
    """Raised when progress could not be saved."""


class HistoryPersistenceError(PersistenceError):
    """Raised when session or exercise history could not be appended."""
