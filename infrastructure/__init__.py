"""
Infrastructure Layer for the training engine.

This package contains concrete implementations of the application ports:
- db/: Supabase document store and the document-backed library and catalog
"""

# Re-export database adapters for convenient access
from infrastructure.db import (
    SupabaseDocumentStore,
    DocumentExerciseLibrary,
    DocumentCourseCatalog,
)

__all__ = [
    "SupabaseDocumentStore",
    "DocumentExerciseLibrary",
    "DocumentCourseCatalog",
]
