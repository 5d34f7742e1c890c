"""
API package for the training API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: Engine error to HTTP status mapping
- routers/: API route handlers
- schemas/: Request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_cache,
    get_document_store,
    get_exercise_library,
    get_course_catalog,
    get_progression_service,
    get_complete_session_use_case,
    get_current_user,
)

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
    "get_progression_service",
    "get_complete_session_use_case",
    # Authentication
    "get_current_user",
]
