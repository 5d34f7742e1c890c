"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- training: Progression, completion and analytics models
"""

from api.schemas.training import (
    CompletionResponse,
    GoBackRequest,
    OneRepMaxHistoryItem,
    OneRepMaxHistoryResponse,
    OneRepMaxItem,
    OneRepMaxListResponse,
    ProgressResponse,
    SelectSessionRequest,
    SessionStateResponse,
    SessionStatsResponse,
    VolumeHistoryResponse,
    WeeklyVolumeResponse,
    WeightSuggestionResponse,
)

__all__ = [
    "CompletionResponse",
    "GoBackRequest",
    "OneRepMaxHistoryItem",
    "OneRepMaxHistoryResponse",
    "OneRepMaxItem",
    "OneRepMaxListResponse",
    "ProgressResponse",
    "SelectSessionRequest",
    "SessionStateResponse",
    "SessionStatsResponse",
    "VolumeHistoryResponse",
    "WeeklyVolumeResponse",
    "WeightSuggestionResponse",
]
