"""
Mapping of training engine errors to HTTP errors.
"""
import logging

from fastapi import HTTPException

from application.exceptions import (
    CourseNotFoundError,
    NoSessionsAvailableError,
    PersistenceError,
    SessionNotFoundError,
    TrainingEngineError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (CourseNotFoundError, 404),
    (SessionNotFoundError, 404),
    (NoSessionsAvailableError, 404),
    (PersistenceError, 503),
)


def to_http_exception(error: TrainingEngineError) -> HTTPException:
    """Build the HTTPException for an engine error (500 when unmapped)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    logger.error("Unmapped training engine error: %s", error)
    return HTTPException(status_code=500, detail=error.message)
