"""
FastAPI Dependency Providers for the training API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) or services built on them. This enables clean
separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- The TTL cache is owned by the app (app.state.cache)
- Adapters and services are created per-request around those

Usage in routers:
    from api.deps import get_current_user, get_progression_service

    @router.get("/courses/{course_id}/session")
    async def current_session(
        course_id: str,
        user_id: str = Depends(get_current_user),
        service: ProgressionService = Depends(get_progression_service),
    ):
        return await service.get_current_session(user_id, course_id)

Testing:
    # Override the ports in tests; services are built on top of them
    app.dependency_overrides[get_document_store] = lambda: FakeDocumentStore()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import CourseCatalog, DocumentStore, ExerciseLibrary
from application.use_cases import CompleteSessionUseCase

# Concrete implementations
from infrastructure import (
    DocumentCourseCatalog,
    DocumentExerciseLibrary,
    SupabaseDocumentStore,
)

# Services
from backend.core.cache import TTLCache
from backend.core.muscle_volume import MuscleVolumeService
from backend.core.one_rep_max import OneRepMaxService
from backend.core.progression_service import ProgressionService
from backend.core.user_progress import UserProgressService
from backend.core.workout_resolver import WorkoutResolver
from backend.settings import Settings, get_settings as _get_settings

# Auth (single source of truth)
from backend.auth import get_current_user as _get_current_user


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Cache Provider
# =============================================================================


def get_cache(request: Request) -> TTLCache:
    """
    Get the application-wide TTL cache.

    Returns:
        TTLCache: The cache created by create_app()
    """
    return request.app.state.cache


# =============================================================================
# Port Providers
# =============================================================================


def get_document_store(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> DocumentStore:
    """
    Get DocumentStore implementation.

    Returns a SupabaseDocumentStore instance with injected client.
    The return type is the Protocol to enable easy mocking.

    Args:
        client: Supabase client (injected)
        settings: Settings (injected)

    Returns:
        DocumentStore: Document persistence
    """
    return SupabaseDocumentStore(client, table=settings.documents_table)


def get_exercise_library(
    store: DocumentStore = Depends(get_document_store),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> ExerciseLibrary:
    """Get ExerciseLibrary implementation backed by the document store."""
    return DocumentExerciseLibrary(
        store,
        cache=cache,
        ttl_seconds=settings.exercise_library_cache_ttl_seconds,
    )


def get_course_catalog(
    store: DocumentStore = Depends(get_document_store),
) -> CourseCatalog:
    """Get CourseCatalog implementation backed by the document store."""
    return DocumentCourseCatalog(store)


# =============================================================================
# Service Providers
# =============================================================================


def get_progress_service(
    store: DocumentStore = Depends(get_document_store),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> UserProgressService:
    return UserProgressService(store, cache, ttl_seconds=settings.progress_cache_ttl_seconds)


def get_workout_resolver(
    library: ExerciseLibrary = Depends(get_exercise_library),
) -> WorkoutResolver:
    return WorkoutResolver(library)


def get_progression_service(
    catalog: CourseCatalog = Depends(get_course_catalog),
    resolver: WorkoutResolver = Depends(get_workout_resolver),
    progress_service: UserProgressService = Depends(get_progress_service),
    cache: TTLCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> ProgressionService:
    """
    Get ProgressionService with injected collaborators.

    Returns:
        ProgressionService: Session selection and cycle management
    """
    return ProgressionService(
        catalog=catalog,
        resolver=resolver,
        progress_service=progress_service,
        cache=cache,
        session_ttl_seconds=settings.session_cache_ttl_seconds,
    )


def get_one_rep_max_service(
    store: DocumentStore = Depends(get_document_store),
) -> OneRepMaxService:
    return OneRepMaxService(store)


def get_muscle_volume_service(
    store: DocumentStore = Depends(get_document_store),
) -> MuscleVolumeService:
    return MuscleVolumeService(store)


def get_complete_session_use_case(
    store: DocumentStore = Depends(get_document_store),
    catalog: CourseCatalog = Depends(get_course_catalog),
    progress_service: UserProgressService = Depends(get_progress_service),
    one_rep_max_service: OneRepMaxService = Depends(get_one_rep_max_service),
    volume_service: MuscleVolumeService = Depends(get_muscle_volume_service),
    resolver: WorkoutResolver = Depends(get_workout_resolver),
    settings: Settings = Depends(get_settings),
) -> CompleteSessionUseCase:
    """
    Get CompleteSessionUseCase with injected collaborators.

    Returns:
        CompleteSessionUseCase: Completion orchestration
    """
    return CompleteSessionUseCase(
        store=store,
        catalog=catalog,
        progress_service=progress_service,
        one_rep_max_service=one_rep_max_service,
        volume_service=volume_service,
        resolver=resolver,
        default_minimum_sessions_per_week=settings.default_minimum_sessions_per_week,
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    user_id: str = Depends(_get_current_user),
) -> str:
    """
    Get the current user ID.

    Wraps backend.auth.get_current_user for dependency injection.

    Returns:
        str: User ID forwarded by the gateway

    Raises:
        HTTPException: 401 if the identity header is missing
    """
    return user_id


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Cache
    "get_cache",
    # Ports
    "get_document_store",
    "get_exercise_library",
    "get_course_catalog",
    # Services
    "get_progress_service",
    "get_workout_resolver",
    "get_progression_service",
    "get_one_rep_max_service",
    "get_muscle_volume_service",
    "get_complete_session_use_case",
    # Authentication
    "get_current_user",
]
