"""
Application Use Cases for the training engine.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations that span several services.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate services and ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import CompleteSessionUseCase, CompletionResult

    use_case = CompleteSessionUseCase(
        store=store,
        catalog=catalog,
        progress_service=progress_service,
        one_rep_max_service=one_rep_max_service,
        volume_service=volume_service,
        resolver=resolver,
    )
    result = await use_case.execute("user-123", "course-1", completion)
"""

from application.use_cases.complete_session import (
    CompleteSessionUseCase,
    CompletionResult,
    SessionStats,
    calculate_stats,
)

__all__ = [
    "CompleteSessionUseCase",
    "CompletionResult",
    "SessionStats",
    "calculate_stats",
]
