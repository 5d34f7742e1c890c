"""
Infrastructure Database Layer.

This package provides implementations of the collaborator interfaces
defined in application.ports. These implementations can be injected into
services and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseDocumentStore,
        DocumentExerciseLibrary,
        DocumentCourseCatalog,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate adapters with injected client
    store = SupabaseDocumentStore(client)
    library = DocumentExerciseLibrary(store, cache=cache)
    catalog = DocumentCourseCatalog(store)
"""

from infrastructure.db.document_store import SupabaseDocumentStore
from infrastructure.db.exercise_library import DocumentExerciseLibrary
from infrastructure.db.course_catalog import DocumentCourseCatalog

__all__ = [
    "SupabaseDocumentStore",
    "DocumentExerciseLibrary",
    "DocumentCourseCatalog",
]
